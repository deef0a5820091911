"""
Dashboard Overview Routes
"""
from flask import Blueprint, jsonify

from delivery_dashboard.components.delivery_status import status_provider
from delivery_dashboard.components.delivery_tasks import tasks_provider
from delivery_dashboard.components.delivery_tasks.routes import service as tasks_service
from delivery_dashboard.components.location import location_tracker
from delivery_dashboard.components.notifications import notifications_provider
from .service import DashboardOverviewService

dashboard_overview_bp = Blueprint('dashboard_overview', __name__)

# Initialize service
service = DashboardOverviewService(
    tasks_service, tasks_provider, status_provider, notifications_provider, location_tracker
)


@dashboard_overview_bp.route('/api/overview')
def api_overview():
    return jsonify(service.get_overview())


def init_dashboard_overview(app):
    """Initialize dashboard overview component with Flask app"""
    app.register_blueprint(dashboard_overview_bp)
    return service
