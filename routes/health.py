"""
Health check routes for HireDesk.

Liveness and readiness endpoints for deployment monitoring.
"""

import time
from datetime import datetime
from flask import Blueprint, jsonify, current_app
from sqlalchemy import text

health_bp = Blueprint('health', __name__)

DB_STATUS_CACHE_SECONDS = 10


def _database_status():
    """Run SELECT 1, caching the answer on the app for a few seconds"""
    from extensions import db

    checked_at = getattr(current_app, 'db_health_cache_time', 0)
    if time.time() - checked_at < DB_STATUS_CACHE_SECONDS:
        return getattr(current_app, 'db_health_cache', 'unknown')

    try:
        with db.engine.connect() as conn:
            conn.execute(text('SELECT 1'))
        status = 'connected'
    except Exception as e:
        current_app.logger.warning(f"Database check failed during health check: {type(e).__name__}")
        status = 'disconnected'

    current_app.db_health_cache = status
    current_app.db_health_cache_time = time.time()
    return status


@health_bp.route('/health')
def health_check():
    """Health check with cached database status"""
    start_time = time.time()
    db_status = _database_status()

    return jsonify({
        'status': 'healthy' if db_status == 'connected' else 'degraded',
        'timestamp': datetime.utcnow().isoformat(),
        'database': db_status,
        'environment': current_app.config.get('ENVIRONMENT'),
        'response_time_ms': round((time.time() - start_time) * 1000, 2)
    }), 200


@health_bp.route('/ready')
def readiness_check():
    """Fast readiness check without database query"""
    return "OK", 200


@health_bp.route('/alive')
def liveness_check():
    """Simple liveness check for deployment systems"""
    return "OK", 200


@health_bp.route('/ping')
def ping():
    """Ultra-fast health check for deployment monitoring"""
    return jsonify({
        'status': 'ok',
        'service': 'hiredesk',
        'timestamp': datetime.utcnow().isoformat()
    }), 200
