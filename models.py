from datetime import datetime
import uuid

from extensions import db


APPLICATION_STATUSES = (
    'Pending',
    'Reviewed',
    'Interviewing',
    'Shortlisted',
    'Offered',
    'Rejected',
    'Hired',
    'Withdrawn',
    'On Hold',
    'Onboard',
    'Auto-Assessed',
)


def _new_id():
    return str(uuid.uuid4())


class Job(db.Model):
    """A job vacancy applicants can apply to"""
    __tablename__ = 'job_vacancies'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='draft')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    applications = db.relationship('JobApplication', backref='job', lazy='dynamic')

    def __repr__(self):
        return f'<Job {self.title}>'


class Candidate(db.Model):
    """A person who applied to one or more jobs"""
    __tablename__ = 'candidates'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(50), nullable=True)
    education = db.Column(db.JSON, nullable=True)  # [{level, institution, major}, ...]
    summary = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    applications = db.relationship('JobApplication', backref='candidate', lazy='dynamic')

    def __repr__(self):
        return f'<Candidate {self.full_name}>'

    @property
    def education_level(self):
        """Level of the first education entry, the one shown in the applicant table"""
        if not self.education:
            return None
        first = self.education[0]
        if isinstance(first, dict):
            return first.get('level')
        return None


class JobApplication(db.Model):
    """Links a candidate to a job and tracks the application's status"""
    __tablename__ = 'job_applications'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    job_id = db.Column(db.String(36), db.ForeignKey('job_vacancies.id'), nullable=False, index=True)
    candidate_id = db.Column(db.String(36), db.ForeignKey('candidates.id'), nullable=False, index=True)
    status = db.Column(db.String(30), nullable=False, default='Pending')

    # Referral details entered on the application form
    referral_name = db.Column(db.String(255), nullable=True)
    referral_email = db.Column(db.String(255), nullable=True)
    referral_position = db.Column(db.String(255), nullable=True)
    referral_dept = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    scoring = db.relationship('ScoringResult', uselist=False, backref='application')

    def __repr__(self):
        return f'<JobApplication {self.id} - {self.status}>'


class ScoringResult(db.Model):
    """Assessment outcome for one application (score out of 5)"""
    __tablename__ = 'scoring_results'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    application_id = db.Column(db.String(36), db.ForeignKey('job_applications.id'),
                               nullable=False, unique=True)
    overall_score = db.Column(db.Float, nullable=True)
    decision = db.Column(db.String(20), nullable=True)  # Accept / Reject / Consider
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<ScoringResult {self.application_id}: {self.overall_score}>'
