"""
Main routes for dashboard
"""
from datetime import datetime

from flask import Blueprint, jsonify

from delivery_dashboard.components import registry
from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import get_backend_client, sse

# Create main blueprint
main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def dashboard():
    """Dashboard index: backend target and session state"""
    client = get_backend_client()
    return jsonify({
        'name': 'Delivery Manager Dashboard',
        'backend': DashboardConfig.BACKEND_BASE_URL,
        'authenticated': client.has_token(),
        'polling_intervals': DashboardConfig.POLLING_INTERVALS,
        'current_time': datetime.now().isoformat()
    })


@main_bp.route('/health')
def health():
    return jsonify({
        'status': 'healthy',
        'event_subscribers': sse.subscriber_count(),
        'timestamp': datetime.now().isoformat()
    })


@main_bp.route('/api/components')
def api_components():
    return jsonify(registry.describe())


@main_bp.route('/api/events/stream')
def api_events_stream():
    """Provider changes as server-sent events"""
    return sse.stream()
