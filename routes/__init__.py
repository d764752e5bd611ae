# Routes module for HireDesk
# Flask blueprints organized by feature area

from flask import jsonify


def error_response(message, status_code=400):
    """JSON error body shared by every API blueprint."""
    return jsonify({'success': False, 'error': message}), status_code


def register_blueprints(app):
    """Attach all blueprints to the app. Call after init_sentry()."""
    from routes.applicants import applicants_bp
    from routes.applications import applications_bp
    from routes.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(applicants_bp)
    app.register_blueprint(applications_bp)
