"""
Return Requests Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.core import add_log, errors
from delivery_dashboard.core.models import to_json
from .service import ReturnRequestsService

return_requests_bp = Blueprint('return_requests', __name__)

# Initialize service
service = ReturnRequestsService()


def _respond(result):
    if result['success'] and result.get('data') is not None:
        data = result['data']
        if isinstance(data, list):
            result = dict(result, data=[to_json(item) for item in data])
        elif not isinstance(data, dict):
            result = dict(result, data=to_json(data))
    return jsonify(result), errors.http_status_for(result)


def _logged(result, return_id, action):
    if result['success']:
        add_log('INFO', f'Return request {return_id}: {action}')
    else:
        add_log('WARNING', f'Return request {return_id} {action} failed: {result["message"]}')
    return _respond(result)


@return_requests_bp.route('/api/returns')
def api_returns():
    return _respond(service.get_return_requests(
        status=request.args.get('status'),
        search=request.args.get('search'),
    ))


@return_requests_bp.route('/api/returns/<int:return_id>')
def api_return_detail(return_id):
    return _respond(service.get_return_request(return_id))


@return_requests_bp.route('/api/returns/<int:return_id>/accept', methods=['POST'])
def api_accept_return(return_id):
    data = request.get_json(silent=True) or {}
    return _logged(service.accept_return_request(return_id, notes=data.get('notes')), return_id, 'accepted')


@return_requests_bp.route('/api/returns/<int:return_id>/start', methods=['POST'])
def api_start_return(return_id):
    return _logged(service.start_return_process(return_id), return_id, 'started')


@return_requests_bp.route('/api/returns/<int:return_id>/complete', methods=['POST'])
def api_complete_return(return_id):
    data = request.get_json(silent=True) or {}
    return _logged(service.complete_return(return_id, notes=data.get('notes')), return_id, 'completed')


@return_requests_bp.route('/api/returns/<int:return_id>/delivery-location')
def api_return_location(return_id):
    return _respond(service.get_delivery_location(return_id))


def init_return_requests(app):
    """Initialize return requests component with Flask app"""
    app.register_blueprint(return_requests_bp)
    return service
