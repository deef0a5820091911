"""
Orders Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.components.location import location_tracker
from delivery_dashboard.core import add_log, errors
from .provider import OrdersProvider
from .service import OrdersService

orders_bp = Blueprint('orders', __name__)

# Initialize service and provider
service = OrdersService()
provider = registry.register_provider(OrdersProvider(service, location_tracker))


@orders_bp.route('/api/orders')
def api_orders():
    if request.args.get('refresh') or not provider.orders:
        if not provider.load_orders():
            result = provider.failure_result()
            return jsonify(result), errors.http_status_for(result)
    return jsonify(provider.snapshot())


@orders_bp.route('/api/orders/<int:order_id>/start', methods=['POST'])
def api_start_order(order_id):
    data = request.get_json(silent=True) or {}
    result = provider.start_delivery(order_id, data.get('latitude'), data.get('longitude'))
    if result['success']:
        add_log('INFO', f'Order {order_id}: delivery started, location tracking on')
    return jsonify(result), errors.http_status_for(result)


@orders_bp.route('/api/orders/<int:order_id>/complete', methods=['POST'])
def api_complete_order(order_id):
    data = request.get_json(silent=True) or {}
    result = provider.complete_delivery(order_id, data.get('delivery_notes'), data.get('rating'))
    if result['success']:
        add_log('INFO', f'Order {order_id}: delivery completed, location tracking off')
    return jsonify(result), errors.http_status_for(result)


@orders_bp.route('/api/orders/<int:order_id>/status', methods=['POST'])
def api_order_status(order_id):
    data = request.get_json(silent=True) or {}
    status = data.get('status')
    if not status:
        return jsonify(errors.failure('status is required', errors.VALIDATION_ERROR)), 400
    result = service.update_order_status(order_id, status, data.get('notes'))
    return jsonify(result), errors.http_status_for(result)


def init_orders(app):
    """Initialize orders component with Flask app"""
    app.register_blueprint(orders_bp)
    return provider
