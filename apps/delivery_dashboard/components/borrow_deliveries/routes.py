"""
Borrow Deliveries Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.components.delivery_status import status_provider
from delivery_dashboard.core import add_log, errors
from .provider import STATUS_FILTER_OPTIONS, BorrowDeliveryProvider
from .service import BorrowDeliveryService

borrow_deliveries_bp = Blueprint('borrow_deliveries', __name__)

# Initialize service and provider
service = BorrowDeliveryService()
provider = registry.register_provider(BorrowDeliveryProvider(service, status_provider))


def _provider_response(ok, action, order_id):
    if ok:
        add_log('INFO', f'Borrow order {order_id}: {action}')
        return jsonify(dict(provider.snapshot(), success=True))
    add_log('WARNING', f'Borrow order {order_id} {action} failed: {provider.error}')
    result = provider.failure_result()
    return jsonify(result), errors.http_status_for(result)


@borrow_deliveries_bp.route('/api/borrow-deliveries')
def api_borrow_deliveries():
    if request.args.get('refresh') or not provider.all_orders:
        if not provider.load_borrow_requests(status=request.args.get('status'),
                                             search=request.args.get('search')):
            result = provider.failure_result()
            result.update(provider.snapshot())
            return jsonify(result), errors.http_status_for(result)
    return jsonify(dict(provider.snapshot(), status_filters=STATUS_FILTER_OPTIONS))


@borrow_deliveries_bp.route('/api/borrow-deliveries/assignments')
def api_borrow_assignments():
    result = service.get_my_assignments()
    return jsonify(result), errors.http_status_for(result)


@borrow_deliveries_bp.route('/api/borrow-deliveries/<int:order_id>')
def api_borrow_order_details(order_id):
    result = service.get_borrow_order_details(order_id)
    return jsonify(result), errors.http_status_for(result)


@borrow_deliveries_bp.route('/api/borrow-deliveries/<int:order_id>/accept', methods=['POST'])
def api_accept_borrow(order_id):
    return _provider_response(provider.accept_request(order_id), 'accepted', order_id)


@borrow_deliveries_bp.route('/api/borrow-deliveries/<int:order_id>/reject', methods=['POST'])
def api_reject_borrow(order_id):
    data = request.get_json(silent=True) or {}
    reason = (data.get('rejection_reason') or data.get('reason') or '').strip()
    if not reason:
        return jsonify(errors.failure('Rejection reason is required', errors.VALIDATION_ERROR)), 400
    return _provider_response(provider.reject_request(order_id, reason), 'rejected', order_id)


@borrow_deliveries_bp.route('/api/borrow-deliveries/<int:order_id>/start', methods=['POST'])
def api_start_borrow(order_id):
    return _provider_response(provider.start_delivery(order_id), 'started', order_id)


@borrow_deliveries_bp.route('/api/borrow-deliveries/<int:order_id>/complete', methods=['POST'])
def api_complete_borrow(order_id):
    return _provider_response(provider.complete_delivery(order_id), 'completed', order_id)


def init_borrow_deliveries(app):
    """Initialize borrow deliveries component with Flask app"""
    app.register_blueprint(borrow_deliveries_bp)
    return provider
