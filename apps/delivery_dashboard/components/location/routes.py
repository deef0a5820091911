"""
Location Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.core import errors
from .service import LocationService
from .tracker import LocationTracker

location_bp = Blueprint('location', __name__)

# Initialize service and tracker
service = LocationService()
tracker = registry.register_provider(LocationTracker())


def _respond(result):
    return jsonify(result), errors.http_status_for(result)


@location_bp.route('/api/location')
def api_current_location():
    return _respond(service.get_current_location())


@location_bp.route('/api/location', methods=['POST'])
def api_update_location():
    data = request.get_json(silent=True) or {}
    return _respond(service.update_location(
        latitude=data.get('latitude'),
        longitude=data.get('longitude'),
        address=data.get('address'),
    ))


@location_bp.route('/api/location/managers/<int:manager_id>')
def api_manager_location(manager_id):
    return _respond(service.get_delivery_manager_location(manager_id))


@location_bp.route('/api/location/managers/online')
def api_online_managers():
    return _respond(service.get_online_delivery_managers())


@location_bp.route('/api/location/managers/available')
def api_available_managers():
    return _respond(service.get_available_delivery_managers())


@location_bp.route('/api/location/status', methods=['POST'])
def api_location_delivery_status():
    data = request.get_json(silent=True) or {}
    status = data.get('delivery_status') or data.get('status')
    if not status:
        return jsonify(errors.failure('delivery_status is required', errors.VALIDATION_ERROR)), 400
    return _respond(service.update_delivery_status(status))


@location_bp.route('/api/location/tracking')
def api_tracking_state():
    return jsonify(tracker.snapshot())


@location_bp.route('/api/location/tracking', methods=['POST'])
def api_update_tracking():
    """Switch tracking on or off, locally and on the courier's profile"""
    data = request.get_json(silent=True) or {}
    active = bool(data.get('is_tracking_active', data.get('active')))
    result = service.update_tracking_status(active)
    if result['success']:
        if active:
            tracker.start(order_id=data.get('order_id'))
        else:
            tracker.stop()
        result['tracking'] = tracker.snapshot()
    return _respond(result)


def init_location(app):
    """Initialize location component with Flask app"""
    app.register_blueprint(location_bp)
    return tracker
