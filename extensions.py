import os
import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import DeclarativeBase
from werkzeug.middleware.proxy_fix import ProxyFix

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


db = SQLAlchemy(model_class=Base)

DEFAULT_DATABASE_URL = 'sqlite:///hiredesk.db'
DEFAULT_PAGE_SIZE = 20


def create_app():
    app = Flask(__name__)

    env = (os.environ.get('APP_ENV') or os.environ.get('ENVIRONMENT') or 'production').lower()
    app.config['ENVIRONMENT'] = env
    logger.info(f"App environment set to: {env}")

    app.secret_key = os.environ.get("SESSION_SECRET") or os.urandom(24).hex()
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        logger.warning("DATABASE_URL not set, using default SQLite for development")
        database_url = DEFAULT_DATABASE_URL
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    if not database_url.startswith("sqlite"):
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_recycle": 300,
            "pool_pre_ping": True,
            "pool_size": 20,
            "max_overflow": 30
        }

    try:
        page_size = int(os.environ.get('APPLICANTS_PAGE_SIZE') or DEFAULT_PAGE_SIZE)
    except ValueError:
        logger.warning("APPLICANTS_PAGE_SIZE is not an integer, using default")
        page_size = DEFAULT_PAGE_SIZE
    app.config['APPLICANTS_PAGE_SIZE'] = page_size
    app.config['APP_TIMEZONE'] = os.environ.get('APP_TIMEZONE') or 'America/New_York'

    db.init_app(app)

    from sentry_config import init_sentry
    init_sentry(app)

    return app
