"""
Delivery Status Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.core import add_log, errors
from .provider import DeliveryStatusProvider
from .service import DeliveryStatusService

delivery_status_bp = Blueprint('delivery_status', __name__)

# Initialize service and provider
service = DeliveryStatusService()
provider = registry.register_provider(DeliveryStatusProvider(service))


@delivery_status_bp.route('/api/delivery-status')
def api_delivery_status():
    """Cached status; ?refresh=1 reloads it from the server first"""
    if request.args.get('refresh'):
        provider.load_current_status()
    return jsonify(provider.snapshot())


@delivery_status_bp.route('/api/delivery-status', methods=['POST'])
def api_update_delivery_status():
    data = request.get_json(silent=True) or {}
    new_status = data.get('status') or data.get('delivery_status')
    previous = provider.current_status

    if provider.update_status(new_status):
        if previous != provider.current_status:
            add_log('INFO', f'Delivery status changed: {previous} -> {provider.current_status}')
        return jsonify(dict(provider.snapshot(), success=True))

    result = provider.failure_result()
    result.update(provider.snapshot())
    return jsonify(result), errors.http_status_for(result)


@delivery_status_bp.route('/api/delivery-status/reset', methods=['POST'])
def api_reset_delivery_status():
    result = service.reset_status_if_no_active_deliveries()
    if result['success']:
        provider.set_status_locally(result.get('current_status') or 'offline')
    return jsonify(result), errors.http_status_for(result)


@delivery_status_bp.route('/api/delivery-status/busy', methods=['POST'])
def api_delivery_status_busy():
    result = service.update_status_to_busy()
    if result['success']:
        provider.set_status_locally(result['current_status'])
    return jsonify(result), errors.http_status_for(result)


def init_delivery_status(app):
    """Initialize delivery status component with Flask app"""
    app.register_blueprint(delivery_status_bp)
    return provider
