"""
Delivery Manager Dashboard
Flask application wiring the delivery components together
"""
import logging

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from delivery_dashboard.components import registry
from delivery_dashboard.components.auth import auth_service, init_auth
from delivery_dashboard.components.borrow_deliveries import init_borrow_deliveries
from delivery_dashboard.components.dashboard_overview import init_dashboard_overview
from delivery_dashboard.components.delivery_status import init_delivery_status, status_provider
from delivery_dashboard.components.delivery_tasks import init_delivery_tasks
from delivery_dashboard.components.location import init_location, location_tracker
from delivery_dashboard.components.notifications import init_notifications, notifications_provider
from delivery_dashboard.components.orders import init_orders
from delivery_dashboard.components.profile import init_profile
from delivery_dashboard.components.return_requests import init_return_requests
from delivery_dashboard.components.system_logs import init_system_logs
from delivery_dashboard.components.unified_deliveries import init_unified_deliveries
from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import StatusMonitor, add_log, sse
from delivery_dashboard.routes.main_routes import main_bp

logger = logging.getLogger(__name__)


class DashboardApp:
    """Main dashboard application class"""

    def __init__(self):
        self.app = None
        self.monitor = None

    def create_app(self):
        """Create and configure Flask application"""
        self.app = Flask(__name__)

        # Load configuration
        self.app.config.from_object(DashboardConfig)

        # Initialize extensions
        Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[DashboardConfig.RATELIMIT_DEFAULT],
            storage_uri=DashboardConfig.RATELIMIT_STORAGE_URI
        )

        # Initialize monitoring
        self.monitor = StatusMonitor(
            status_provider=status_provider,
            notifications_provider=notifications_provider,
            auth_service=auth_service
        )

        # Initialize components
        init_auth(self.app)
        init_delivery_status(self.app)
        init_unified_deliveries(self.app)
        init_borrow_deliveries(self.app)
        init_orders(self.app)
        init_delivery_tasks(self.app)
        init_notifications(self.app)
        init_location(self.app)
        init_profile(self.app)
        init_return_requests(self.app)
        init_system_logs(self.app)
        init_dashboard_overview(self.app)

        # Register main blueprint
        self.app.register_blueprint(main_bp)

        # Push every provider change to the event stream
        for provider in registry.providers.values():
            provider.add_listener(sse.publish)

        return self.app

    def run(self):
        """Start the dashboard application"""
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )

        # Start monitoring
        self.monitor.start()
        add_log('INFO', 'Delivery dashboard started')

        logger.info('Delivery Manager Dashboard on http://%s:%s', DashboardConfig.HOST, DashboardConfig.PORT)
        logger.info('Backend API: %s', DashboardConfig.BACKEND_BASE_URL)

        try:
            self.app.run(host=DashboardConfig.HOST, port=DashboardConfig.PORT, debug=False)
        finally:
            self.monitor.stop()
            location_tracker.stop()


def main():
    """Main entry point"""
    dashboard = DashboardApp()
    dashboard.create_app()
    dashboard.run()


if __name__ == '__main__':
    main()
