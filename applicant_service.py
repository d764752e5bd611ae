"""
Applicant Service
Loads the applicants of a job, runs the applicant-table filters over them
and applies application status changes.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import APPLICATION_STATUSES, Candidate, Job, JobApplication, ScoringResult
from search import SearchableRecord, compile_query
from search.facets import ApplicantFilters, apply_facets, has_referral, paginate, score_percentage, sort_rows
from timezone_utils import ensure_utc, get_app_timezone, utc_to_local

logger = logging.getLogger(__name__)


class ApplicantServiceError(Exception):
    """Error with an HTTP status code attached (400 invalid input, 404 missing)"""

    def __init__(self, message, status_code=400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def build_applicant_row(application: JobApplication, candidate: Candidate,
                        scoring: Optional[ScoringResult]) -> Dict[str, Any]:
    """Flatten one application into the row shape the applicant table uses"""
    overall_score = scoring.overall_score if scoring is not None else None
    row = {
        'application_id': application.id,
        'candidate_id': candidate.id,
        'full_name': candidate.full_name,
        'email': candidate.email,
        'phone': candidate.phone,
        'education_level': candidate.education_level,
        'application_status': application.status,
        'application_date': application.created_at,
        'decision': scoring.decision if scoring is not None else None,
        'overall_score': overall_score,
        'score_percentage': score_percentage(overall_score),
        'referral_name': application.referral_name,
        'referral_email': application.referral_email,
        'referral_position': application.referral_position,
        'referral_dept': application.referral_dept,
    }
    row['has_referral'] = has_referral(row)
    return row


class ApplicantService:
    """Read and update applicants for the recruiter's applicant table"""

    def __init__(self, session=None, timezone=None):
        self.session = session or db.session
        self.timezone = timezone or get_app_timezone()

    def load_rows(self, job_id: str) -> List[Dict[str, Any]]:
        """
        Fetch every application for a job with its candidate and score.

        Raises:
            ApplicantServiceError: 404 if the job does not exist
        """
        if self.session.get(Job, job_id) is None:
            raise ApplicantServiceError(f"Job {job_id} not found", 404)

        results = (
            self.session.query(JobApplication, Candidate, ScoringResult)
            .join(Candidate, JobApplication.candidate_id == Candidate.id)
            .outerjoin(ScoringResult, ScoringResult.application_id == JobApplication.id)
            .filter(JobApplication.job_id == job_id)
            .all()
        )
        return [build_applicant_row(application, candidate, scoring)
                for application, candidate, scoring in results]

    def serialize_row(self, row: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(row)
        applied = row.get('application_date')
        data['application_date'] = ensure_utc(applied).isoformat() if applied else None
        data['application_date_local'] = (
            utc_to_local(applied, self.timezone).strftime('%Y-%m-%d %I:%M %p %Z') if applied else None
        )
        return data

    def list_applicants(self, job_id: str, filters: ApplicantFilters) -> Dict[str, Any]:
        """
        Filter, search, sort and page the applicants of a job.

        Args:
            job_id: Job vacancy id
            filters: Validated ApplicantFilters

        Returns:
            dict with 'applicants', 'pagination', 'total' and 'query' keys
        """
        rows = apply_facets(self.load_rows(job_id), filters, self.timezone)

        compiled = compile_query(filters.query)
        rows = [row for row in rows if compiled.matches(SearchableRecord.from_mapping(row))]
        if not compiled.is_valid:
            logger.info(f"Applicant search for job {job_id} used an invalid query: {compiled.error}")

        rows = sort_rows(rows, filters.sort, filters.descending)
        page_rows, pagination = paginate(rows, filters.page, filters.per_page)

        return {
            'applicants': [self.serialize_row(row) for row in page_rows],
            'pagination': pagination,
            'total': pagination['total'],
            'query': compiled.describe(),
        }

    def _validate_status(self, status):
        if not status:
            raise ApplicantServiceError("Status is required", 400)
        if status not in APPLICATION_STATUSES:
            raise ApplicantServiceError("Invalid status value", 400)

    def update_status(self, application_id: str, status: str) -> Dict[str, str]:
        """
        Set the status of one application.

        Raises:
            ApplicantServiceError: 400 for a missing/unknown status, 404 for an unknown id
        """
        self._validate_status(status)

        application = self.session.get(JobApplication, application_id)
        if application is None:
            raise ApplicantServiceError("Application not found", 404)

        previous = application.status
        application.status = status
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        logger.info(f"Application {application_id} status changed: {previous} -> {status}")
        return {'id': application.id, 'status': application.status}

    def bulk_update_status(self, application_ids: Iterable[str], status: str) -> Dict[str, Any]:
        """
        Set the same status on several applications in one transaction.

        Unknown ids are reported under 'failed' and do not stop the others.

        Raises:
            ApplicantServiceError: 400 for a missing/unknown status or an empty id list
        """
        self._validate_status(status)

        if not isinstance(application_ids, (list, tuple)) or not application_ids:
            raise ApplicantServiceError("application_ids must be a non-empty list", 400)
        if not all(isinstance(application_id, str) for application_id in application_ids):
            raise ApplicantServiceError("application_ids must contain only strings", 400)

        updated = []
        failed = []
        for application_id in dict.fromkeys(application_ids):
            application = self.session.get(JobApplication, application_id)
            if application is None:
                failed.append({'id': application_id, 'error': 'Application not found'})
                continue
            application.status = status
            updated.append(application.id)

        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        logger.info(f"Bulk status update to {status}: {len(updated)} updated, {len(failed)} failed")
        return {'status': status, 'updated': updated, 'failed': failed}
