"""
Database Seeding Script for HireDesk

Creates a demo job with a handful of applicants so the applicant table and
its search box have something to show in development.

Usage:
    - Run manually: python seed_database.py
    - Safe to run multiple times (idempotent: keyed on the demo job title)

Environment Variables:
    - DATABASE_URL: Target database (SQLite fallback when unset)
    - SEED_JOB_TITLE: Title of the demo job (default: Senior Frontend Engineer)
"""

import os
import logging
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

DEFAULT_JOB_TITLE = 'Senior Frontend Engineer'

DEMO_APPLICANTS = [
    {
        'full_name': 'Jane Doe',
        'email': 'jane.doe@example.com',
        'education': [{'level': 'Master', 'institution': 'State University', 'major': 'Computer Science'}],
        'status': 'Shortlisted',
        'score': 4.6,
        'decision': 'Accept',
        'referral': ('Tom Baker', 'tom.baker@example.com', 'Engineering Manager', 'Engineering'),
        'days_ago': 2,
    },
    {
        'full_name': 'John Smith',
        'email': 'john.smith@example.com',
        'education': [{'level': 'Bachelor', 'institution': 'City College', 'major': 'Information Systems'}],
        'status': 'Reviewed',
        'score': 3.4,
        'decision': 'Consider',
        'referral': None,
        'days_ago': 5,
    },
    {
        'full_name': 'Priya Raman',
        'email': 'priya.raman@example.com',
        'education': [{'level': 'Bachelor', 'institution': 'Tech Institute', 'major': 'Software Engineering'}],
        'status': 'Pending',
        'score': None,
        'decision': None,
        'referral': ('Ana Lopez', 'ana.lopez@example.com', 'Backend Developer', 'Platform'),
        'days_ago': 0,
    },
    {
        'full_name': 'Marco Rossi',
        'email': 'marco.rossi@example.com',
        'education': [{'level': 'Diploma', 'institution': 'Design School', 'major': 'Interaction Design'}],
        'status': 'Rejected',
        'score': 2.1,
        'decision': 'Reject',
        'referral': None,
        'days_ago': 12,
    },
]


def seed_demo_job(session, title=None):
    """
    Create the demo job and its applicants unless the job already exists

    Args:
        session: SQLAlchemy session
        title: Job title (defaults to SEED_JOB_TITLE or DEFAULT_JOB_TITLE)

    Returns:
        tuple: (job, created) where created is False when the job was already there
    """
    from models import Candidate, Job, JobApplication, ScoringResult

    title = title or os.environ.get('SEED_JOB_TITLE', DEFAULT_JOB_TITLE)
    job = session.query(Job).filter_by(title=title).first()
    if job is not None:
        logger.info(f"Demo job '{title}' already exists ({job.id}), skipping")
        return job, False

    job = Job(title=title, description='Demo vacancy created by seed_database.py', status='open')
    session.add(job)
    session.flush()

    now = datetime.utcnow()
    for spec in DEMO_APPLICANTS:
        candidate = Candidate(full_name=spec['full_name'], email=spec['email'], education=spec['education'])
        session.add(candidate)
        session.flush()

        application = JobApplication(
            job_id=job.id,
            candidate_id=candidate.id,
            status=spec['status'],
            created_at=now - timedelta(days=spec['days_ago']),
        )
        if spec['referral']:
            (application.referral_name, application.referral_email,
             application.referral_position, application.referral_dept) = spec['referral']
        session.add(application)
        session.flush()

        if spec['score'] is not None or spec['decision']:
            session.add(ScoringResult(application_id=application.id,
                                      overall_score=spec['score'],
                                      decision=spec['decision']))

    session.commit()
    logger.info(f"Seeded demo job '{title}' ({job.id}) with {len(DEMO_APPLICANTS)} applicants")
    return job, True


if __name__ == '__main__':
    from app import app
    from extensions import db

    with app.app_context():
        job, created = seed_demo_job(db.session)
        print(f"{'Created' if created else 'Found'} job {job.id}: /api/jobs/{job.id}/applicants")
