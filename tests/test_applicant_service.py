"""
Integration tests for ApplicantService against an in-memory database.

Covers:
- Row loading with outer-joined scores and 404 for unknown jobs
- Search + facets + sort + pagination through list_applicants()
- Single and bulk status updates
"""

import pytest

from applicant_service import ApplicantService, ApplicantServiceError, build_applicant_row
from search.facets import ApplicantFilters


@pytest.fixture
def service(db_session):
    return ApplicantService(session=db_session)


def listed_names(result):
    return [row['full_name'] for row in result['applicants']]


class TestLoadRows:
    """Tests for ApplicantService.load_rows()"""

    def test_unknown_job_is_404(self, service):
        with pytest.raises(ApplicantServiceError) as exc_info:
            service.load_rows('no-such-job')
        assert exc_info.value.status_code == 404

    def test_rows_include_unscored_applications(self, service, seeded_job):
        """Applications without a ScoringResult are still listed."""
        rows = {row['full_name']: row for row in service.load_rows(seeded_job['job_id'])}
        assert len(rows) == 4
        unscored = rows['Senior Junior Engineer']
        assert unscored['overall_score'] is None
        assert unscored['score_percentage'] is None
        assert unscored['decision'] is None

    def test_row_fields(self, service, seeded_job):
        rows = {row['full_name']: row for row in service.load_rows(seeded_job['job_id'])}
        jane = rows['Jane Doe']
        assert jane['education_level'] == 'Master'
        assert jane['application_status'] == 'Shortlisted'
        assert jane['score_percentage'] == 92
        assert jane['has_referral'] is True
        assert jane['referral_dept'] == 'Engineering'
        assert rows['Senior Junior Engineer']['has_referral'] is False


class TestBuildApplicantRow:

    def test_without_scoring(self, db_session):
        from models import Candidate, JobApplication

        candidate = Candidate(id='c1', full_name='Ada', email='ada@example.com', education=None)
        application = JobApplication(id='a1', job_id='j1', candidate_id='c1', status='Pending')
        row = build_applicant_row(application, candidate, None)
        assert row['education_level'] is None
        assert row['overall_score'] is None
        assert row['has_referral'] is False


class TestListApplicants:
    """Tests for ApplicantService.list_applicants()"""

    def test_default_order_and_rank(self, service, seeded_job):
        result = service.list_applicants(seeded_job['job_id'], ApplicantFilters())
        assert listed_names(result) == [
            'Jane Doe', 'John Smith Developer', 'Marco Intern', 'Senior Junior Engineer',
        ]
        assert [row['rank'] for row in result['applicants']] == [1, 2, 3, 4]
        assert result['pagination']['total'] == 4
        assert result['total'] == 4
        assert result['query']['mode'] == 'match_all'

    def test_boolean_query(self, service, seeded_job):
        result = service.list_applicants(
            seeded_job['job_id'], ApplicantFilters(query='"Senior" NOT "Junior"'))
        assert listed_names(result) == []

        result = service.list_applicants(
            seeded_job['job_id'], ApplicantFilters(query='"Bachelor" OR "Master"'))
        assert set(listed_names(result)) == {'Jane Doe', 'John Smith Developer', 'Senior Junior Engineer'}

    def test_query_matches_referral_fields(self, service, seeded_job):
        result = service.list_applicants(seeded_job['job_id'], ApplicantFilters(query='tom.baker@'))
        assert listed_names(result) == ['Jane Doe']

    def test_query_matches_status_and_decision(self, service, seeded_job):
        result = service.list_applicants(
            seeded_job['job_id'], ApplicantFilters(query='"Consider" OR "Rejected"'))
        assert set(listed_names(result)) == {'John Smith Developer', 'Marco Intern'}

    def test_invalid_query_returns_nothing(self, service, seeded_job):
        result = service.list_applicants(seeded_job['job_id'], ApplicantFilters(query='"Jane" AND'))
        assert result['applicants'] == []
        assert result['query']['valid'] is False
        assert result['query']['error']

    def test_facets_then_query(self, service, seeded_job):
        """The query only sees rows that passed the facets."""
        filters = ApplicantFilters(query='"Jane" OR "John"', referral='without-referral')
        result = service.list_applicants(seeded_job['job_id'], filters)
        assert listed_names(result) == ['John Smith Developer']
        assert result['total'] == 1

    def test_pagination(self, service, seeded_job):
        filters = ApplicantFilters(sort='full_name', descending=False, page=2, per_page=3)
        result = service.list_applicants(seeded_job['job_id'], filters)
        assert listed_names(result) == ['Senior Junior Engineer']
        assert result['applicants'][0]['rank'] == 4
        assert result['pagination']['pages'] == 2
        assert result['pagination']['has_prev'] is True

    def test_dates_are_serialized(self, service, seeded_job):
        """UTC ISO timestamp plus the local rendering (EDT after March 9th 2025)."""
        result = service.list_applicants(seeded_job['job_id'], ApplicantFilters(query='Jane Doe'))
        jane = result['applicants'][0]
        assert jane['application_date'] == '2025-03-10T15:00:00+00:00'
        assert jane['application_date_local'] == '2025-03-10 11:00 AM EDT'


class TestUpdateStatus:
    """Tests for ApplicantService.update_status()"""

    def test_updates_and_persists(self, service, seeded_job, db_session):
        from models import JobApplication

        application_id = seeded_job['applications']['Marco Intern']
        result = service.update_status(application_id, 'On Hold')
        assert result == {'id': application_id, 'status': 'On Hold'}

        db_session.expire_all()
        assert db_session.get(JobApplication, application_id).status == 'On Hold'

    @pytest.mark.parametrize('status, message', [
        (None, 'Status is required'),
        ('', 'Status is required'),
        ('Archived', 'Invalid status value'),
        ('hired', 'Invalid status value'),
    ])
    def test_bad_status(self, service, seeded_job, status, message):
        application_id = seeded_job['applications']['Jane Doe']
        with pytest.raises(ApplicantServiceError) as exc_info:
            service.update_status(application_id, status)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == message

    def test_unknown_application(self, service, seeded_job):
        with pytest.raises(ApplicantServiceError) as exc_info:
            service.update_status('missing-id', 'Hired')
        assert exc_info.value.status_code == 404


class TestBulkUpdateStatus:
    """Tests for ApplicantService.bulk_update_status()"""

    def test_partial_failure(self, service, seeded_job):
        ids = seeded_job['applications']
        result = service.bulk_update_status(
            [ids['Jane Doe'], 'missing-id', ids['John Smith Developer'], ids['Jane Doe']], 'Interviewing')
        assert result['status'] == 'Interviewing'
        assert result['updated'] == [ids['Jane Doe'], ids['John Smith Developer']]
        assert result['failed'] == [{'id': 'missing-id', 'error': 'Application not found'}]

    def test_statuses_are_saved(self, service, seeded_job):
        ids = list(seeded_job['applications'].values())
        service.bulk_update_status(ids, 'Withdrawn')
        result = service.list_applicants(seeded_job['job_id'], ApplicantFilters(status='Withdrawn'))
        assert result['pagination']['total'] == 4

    @pytest.mark.parametrize('ids', [None, [], 'abc', [1, 2], [['nested']]])
    def test_bad_id_list(self, service, seeded_job, ids):
        with pytest.raises(ApplicantServiceError) as exc_info:
            service.bulk_update_status(ids, 'Hired')
        assert exc_info.value.status_code == 400

    def test_bad_status_checked_first(self, service, seeded_job):
        with pytest.raises(ApplicantServiceError) as exc_info:
            service.bulk_update_status(['x'], 'Promoted')
        assert exc_info.value.message == 'Invalid status value'
