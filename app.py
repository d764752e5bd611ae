import logging

from flask import jsonify

from extensions import create_app, db
from routes import error_response, register_blueprints

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# Suppress verbose logging from external libraries
logging.getLogger('urllib3').setLevel(logging.WARNING)
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Create the app
app = create_app()
register_blueprints(app)

with app.app_context():
    import models  # noqa: F401  registers tables on db.metadata
    db.create_all()


@app.route('/')
def root():
    """Service banner listing the API entry points"""
    return jsonify({
        'service': 'hiredesk',
        'endpoints': {
            'applicants': '/api/jobs/<job_id>/applicants',
            'status': '/api/applications/<application_id>/status',
            'bulk_status': '/api/applications/bulk-status',
            'health': '/health',
        }
    })


@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors"""
    return error_response('Not found', 404)


@app.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors"""
    return error_response('Method not allowed', 405)


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors"""
    logger.error(f"Internal server error: {str(error)}")
    db.session.rollback()
    return error_response('Internal server error', 500)
