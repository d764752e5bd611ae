"""
Application status routes for HireDesk.

Single and bulk status changes issued from the applicant table.
"""

import logging
from flask import Blueprint, jsonify, request

from routes import error_response

logger = logging.getLogger(__name__)
applications_bp = Blueprint('applications', __name__)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


@applications_bp.route('/api/applications/<application_id>/status', methods=['PATCH'])
def update_application_status(application_id):
    """Change one application's status. Body: {"status": "..."}"""
    from applicant_service import ApplicantService, ApplicantServiceError

    data = _json_body()
    if data is None:
        return error_response('Request body must be a JSON object', 400)

    try:
        application = ApplicantService().update_status(application_id, data.get('status'))
    except ApplicantServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Failed to update status of application {application_id}: {str(e)}")
        return error_response('Failed to update status', 500)

    return jsonify({
        'success': True,
        'message': 'Application status updated successfully',
        'application': application
    })


@applications_bp.route('/api/applications/bulk-status', methods=['POST'])
def bulk_update_application_status():
    """Change several applications at once.

    Body: {"application_ids": [...], "status": "..."}
    """
    from applicant_service import ApplicantService, ApplicantServiceError

    data = _json_body()
    if data is None:
        return error_response('Request body must be a JSON object', 400)

    try:
        result = ApplicantService().bulk_update_status(data.get('application_ids'), data.get('status'))
    except ApplicantServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Bulk status update failed: {str(e)}")
        return error_response('Failed to update statuses', 500)

    result['success'] = not result['failed']
    return jsonify(result)
