"""
Pytest fixtures for HireDesk tests.

Provides Flask app, test client, and database fixtures for integration testing.
"""

import os
import sys
import pytest
from datetime import datetime

# Ensure the project root is in the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(scope='session')
def app():
    """
    Create and configure a Flask application instance for testing.

    Uses an in-memory SQLite database so no real data is touched.
    """
    # Must be set before app.py is imported: the engine is built in create_app()
    os.environ['APP_ENV'] = 'testing'
    os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
    os.environ['APP_TIMEZONE'] = 'America/New_York'
    os.environ.pop('SENTRY_DSN', None)

    from app import app as flask_app, db

    flask_app.config.update({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key-for-pytest',
        'APPLICANTS_PAGE_SIZE': 20,
    })

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Test client for the Flask application."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """
    Provide a clean database session for each test.

    Tables are emptied before the test so fixtures see only their own rows.
    """
    from extensions import db

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.create_all()
        yield db.session
        db.session.rollback()
        db.session.remove()


@pytest.fixture(scope='function')
def seeded_job(db_session):
    """
    One job with four applicants covering referral, score, decision and date facets.

    Returns a dict of ids so tests do not hold ORM objects across sessions.
    """
    from models import Candidate, Job, JobApplication, ScoringResult

    job = Job(title='Frontend Developer', status='open')
    db_session.add(job)
    db_session.flush()

    applicants = [
        # name, education, status, score, decision, referral name, created_at (UTC)
        ('Jane Doe', 'Master', 'Shortlisted', 4.6, 'Accept', 'Tom Baker', datetime(2025, 3, 10, 15, 0)),
        ('John Smith Developer', 'Bachelor', 'Reviewed', 3.4, 'Consider', None, datetime(2025, 3, 5, 12, 0)),
        ('Senior Junior Engineer', 'Bachelor', 'Pending', None, None, '  ', datetime(2025, 3, 1, 3, 30)),
        ('Marco Intern', 'Diploma', 'Rejected', 2.1, 'Reject', None, datetime(2025, 2, 20, 9, 0)),
    ]

    ids = {'job_id': job.id, 'applications': {}}
    for name, level, status, score, decision, referral, created_at in applicants:
        candidate = Candidate(full_name=name, email=f"{name.split()[0].lower()}@example.com",
                              education=[{'level': level, 'institution': 'Uni', 'major': 'CS'}])
        db_session.add(candidate)
        db_session.flush()

        application = JobApplication(job_id=job.id, candidate_id=candidate.id, status=status,
                                     referral_name=referral, created_at=created_at)
        if referral and referral.strip():
            application.referral_email = 'tom.baker@example.com'
            application.referral_position = 'Engineering Manager'
            application.referral_dept = 'Engineering'
        db_session.add(application)
        db_session.flush()

        if score is not None or decision:
            db_session.add(ScoringResult(application_id=application.id,
                                         overall_score=score, decision=decision))
        ids['applications'][name] = application.id

    db_session.commit()
    return ids
