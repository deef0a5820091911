"""
Background status monitor
Keeps the courier's availability, unread count and access token fresh
"""
import logging
import threading

from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import jwt_utils

logger = logging.getLogger(__name__)


class StatusMonitor:
    """Periodic refresh of the session-wide state"""

    def __init__(self, status_provider=None, notifications_provider=None,
                 auth_service=None, interval=None):
        self.status_provider = status_provider
        self.notifications_provider = notifications_provider
        self.auth_service = auth_service
        self.interval = interval or DashboardConfig.get_polling_interval('delivery_status')
        self.running = False
        self.thread = None
        self.last_status = None
        self._stop_event = threading.Event()

    def start(self):
        """Start monitoring thread"""
        if self.thread is None or not self.thread.is_alive():
            self.running = True
            self._stop_event.clear()
            self.thread = threading.Thread(target=self._monitor_loop, daemon=True)
            self.thread.start()
            logger.info('Status monitor started (every %ss)', self.interval)

    def stop(self):
        """Stop monitoring thread"""
        self.running = False
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=2)

    def _monitor_loop(self):
        while self.running:
            try:
                self.run_once()
            except Exception as e:
                self._add_log('ERROR', f'Monitor loop error: {e}')
            self._stop_event.wait(self.interval)

    def run_once(self):
        """One monitoring pass; a failing step is logged and the next one still runs"""
        for step in (self._refresh_token, self._refresh_status, self._refresh_unread_count):
            try:
                step()
            except Exception as e:
                self._add_log('ERROR', f'Monitor step {step.__name__} failed: {e}')

    def _refresh_token(self):
        if self.auth_service is None or not self.auth_service.refresh_token:
            return
        token = self.auth_service.client.token
        if token and not jwt_utils.should_refresh_token(token):
            return

        result = self.auth_service.refresh()
        if result['success']:
            self._add_log('INFO', 'Access token refreshed')
        else:
            self._add_log('WARNING', f"Token refresh failed: {result.get('message')}")

    def _refresh_status(self):
        if self.status_provider is None:
            return
        self.status_provider.load_current_status()
        status = self.status_provider.current_status
        if status != self.last_status:
            if self.last_status is not None:
                self._add_log('INFO', f'Delivery status changed: {self.last_status} -> {status}')
            self.last_status = status

    def _refresh_unread_count(self):
        if self.notifications_provider is None or not self.notifications_provider.service.client.has_token():
            return
        self.notifications_provider.refresh_unread_count()

    def _add_log(self, level, message):
        from delivery_dashboard.core import add_log
        add_log(level, message)
