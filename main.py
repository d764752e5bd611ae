#!/usr/bin/env python3
"""
Main entry point for the HireDesk Flask application.
Provides deployment-ready configuration with a startup health check.
"""
import os
import sys
import logging

# Configure logging before importing the app
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler('app.log', mode='a')
    ]
)

logger = logging.getLogger(__name__)


def check_environment():
    """Warn about missing configuration and fill in a session secret if needed"""
    missing_vars = [var for var in ('SESSION_SECRET', 'DATABASE_URL') if not os.environ.get(var)]

    if missing_vars:
        logger.warning(f"Missing environment variables: {missing_vars}")
        if 'SESSION_SECRET' in missing_vars:
            os.environ['SESSION_SECRET'] = os.urandom(24).hex()
            logger.info("Generated fallback SESSION_SECRET for deployment")

    return not missing_vars


def initialize_app():
    """Import the application and run a health check against it"""
    logger.info("Starting application initialization...")
    check_environment()

    from app import app

    with app.test_client() as client:
        response = client.get('/health')
        if response.status_code == 200:
            logger.info(f"Health check passed during startup: {response.get_json().get('status')}")
        else:
            logger.warning(f"Health check returned status {response.status_code}")

    return app


app = initialize_app()

if __name__ == '__main__':
    # Development server - use a WSGI server in production
    logger.info("Starting development server...")
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
