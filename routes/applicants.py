"""
Applicant table routes for HireDesk.

Lists the applicants of a job with facet filters, boolean free-text search,
sorting and pagination.
"""

import logging
from flask import Blueprint, current_app, jsonify, request

from routes import error_response

logger = logging.getLogger(__name__)
applicants_bp = Blueprint('applicants', __name__)


@applicants_bp.route('/api/jobs/<job_id>/applicants')
def list_job_applicants(job_id):
    """Applicants for one job.

    Query params: q, referral, status, score, decision, date_from, date_to,
    sort, order, page, per_page.
    """
    from applicant_service import ApplicantService, ApplicantServiceError
    from search.facets import FacetError, parse_filters
    from timezone_utils import get_app_timezone

    try:
        filters = parse_filters(request.args, current_app.config.get('APPLICANTS_PAGE_SIZE', 20))
    except FacetError as e:
        return error_response(e.message, 400)

    try:
        service = ApplicantService(timezone=get_app_timezone(current_app.config.get('APP_TIMEZONE')))
        result = service.list_applicants(job_id, filters)
    except ApplicantServiceError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Failed to fetch applicants for job {job_id}: {str(e)}")
        return error_response('Failed to fetch job applicants', 500)

    result['success'] = True
    return jsonify(result)
