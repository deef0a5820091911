"""
Unified Deliveries Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.core import add_log, errors
from .service import UnifiedDeliveryService, serialize_deliveries

unified_deliveries_bp = Blueprint('unified_deliveries', __name__)

# Initialize service
service = UnifiedDeliveryService()


def _respond(result, action=None, delivery_id=None):
    if action and result['success']:
        add_log('INFO', f'Delivery request {delivery_id}: {action}')
    elif action:
        add_log('WARNING', f"Delivery request {delivery_id} {action} failed: {result['message']}")
    return jsonify(result), errors.http_status_for(result)


@unified_deliveries_bp.route('/api/deliveries')
def api_deliveries():
    result = service.get_deliveries(
        status=request.args.get('status'),
        delivery_type=request.args.get('type'),
    )
    if result['success']:
        result = dict(result, data=serialize_deliveries(result['data']))
    return _respond(result)


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>')
def api_delivery_detail(delivery_id):
    return _respond(service.get_delivery_detail(delivery_id))


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>/accept', methods=['POST'])
def api_accept_delivery(delivery_id):
    return _respond(service.accept_delivery(delivery_id), 'accepted', delivery_id)


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>/reject', methods=['POST'])
def api_reject_delivery(delivery_id):
    data = request.get_json(silent=True) or {}
    reason = data.get('rejection_reason') or data.get('reason') or ''
    return _respond(service.reject_delivery(delivery_id, reason), 'rejected', delivery_id)


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>/start', methods=['POST'])
def api_start_delivery(delivery_id):
    return _respond(service.start_delivery(delivery_id), 'started', delivery_id)


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>/location', methods=['POST'])
def api_delivery_location(delivery_id):
    data = request.get_json(silent=True) or {}
    try:
        latitude = float(data['latitude'])
        longitude = float(data['longitude'])
    except (KeyError, TypeError, ValueError):
        return jsonify(errors.failure('latitude and longitude are required', errors.VALIDATION_ERROR)), 400
    return _respond(service.update_location(delivery_id, latitude, longitude))


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>/complete', methods=['POST'])
def api_complete_delivery(delivery_id):
    data = request.get_json(silent=True) or {}
    return _respond(service.complete_delivery(delivery_id, data.get('notes')), 'completed', delivery_id)


@unified_deliveries_bp.route('/api/deliveries/<int:delivery_id>/payment-status', methods=['PATCH'])
def api_delivery_payment_status(delivery_id):
    data = request.get_json(silent=True) or {}
    result = service.update_payment_status(
        delivery_id,
        deposit_paid=data.get('deposit_paid'),
        fine_status=data.get('fine_status'),
        fine_is_paid=data.get('fine_is_paid'),
    )
    return _respond(result)


def init_unified_deliveries(app):
    """Initialize unified deliveries component with Flask app"""
    app.register_blueprint(unified_deliveries_bp)
    return service
