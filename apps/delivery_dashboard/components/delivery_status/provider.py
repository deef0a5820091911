"""
Delivery status provider
Local mirror of the courier's availability; the server stays authoritative.
"""
import logging

from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import errors
from delivery_dashboard.core.notifier import ChangeNotifier
from .service import INVALID_STATUS_MESSAGE, DeliveryStatusService

logger = logging.getLogger(__name__)

BUSY_MESSAGE = ('Cannot change status manually while busy. Status will automatically '
                'change to online when delivery is completed.')


class DeliveryStatusProvider(ChangeNotifier):
    name = 'delivery_status'

    def __init__(self, service=None):
        super().__init__()
        self.service = service or DeliveryStatusService()
        self.current_status = 'offline'
        self.can_change_manually = True

    @property
    def is_online(self):
        return self.current_status == 'online'

    @property
    def is_busy(self):
        return self.current_status == 'busy'

    def snapshot(self):
        return {
            'current_status': self.current_status,
            'can_change_manually': self.can_change_manually,
            'is_loading': self.is_loading,
            'error': self.error
        }

    def _has_token(self):
        return self.service.client.has_token()

    def _apply_status_data(self, status_data):
        self.current_status = status_data.get('delivery_status') or 'offline'
        self.can_change_manually = status_data.get('can_change_manually', True)

    def load_current_status(self):
        """Load the status from the server; silently skipped before login"""
        if not self._has_token():
            logger.debug('No auth token available - skipping status load')
            return

        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                status_data = self.service.get_current_status()
                if status_data is None:
                    self.error = 'Failed to load current status'
                    return

                self._apply_status_data(status_data)

                # A stale busy status is reset when nothing is in progress
                if self.is_busy and self.reset_status_if_no_active_deliveries():
                    updated = self.service.get_current_status()
                    if updated is not None:
                        self._apply_status_data(updated)
            finally:
                self._set_loading(False)

    def update_status(self, new_status):
        """Manual online/offline switch; returns True on success"""
        if not self._has_token():
            self.error_code = errors.NO_TOKEN
            self._set_error(f'{errors.NO_TOKEN_MESSAGE}. Please login again.')
            return False

        if new_status not in DashboardConfig.MANUAL_STATUSES:
            self.error_code = errors.INVALID_STATUS
            self._set_error(INVALID_STATUS_MESSAGE)
            return False

        with self._lock:
            if self.current_status == new_status:
                return True

            if self.is_busy:
                self.error_code = errors.INVALID_STATUS
                self._set_error(BUSY_MESSAGE)
                return False

            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.update_status(new_status)
                if result['success']:
                    self.current_status = result.get('current_status') or new_status
                    self.can_change_manually = (result.get('data') or {}).get('can_change_manually', True)
                    return True

                if result.get('current_status'):
                    self.current_status = result['current_status']
                return self._fail(result, 'Failed to update status')
            finally:
                self._set_loading(False)

    def reset_status_if_no_active_deliveries(self):
        with self._lock:
            result = self.service.reset_status_if_no_active_deliveries()
            if result['success']:
                self.current_status = result.get('current_status') or 'offline'
                self.can_change_manually = self.current_status != 'busy'
                logger.info('Status reset - %s', result.get('message'))
                self.notify_listeners()
                return True

            logger.info('Reset attempt failed: %s', result.get('message'))
            return False

    def refresh_status_from_server(self):
        """Pick up server-side changes, e.g. after a delivery completes"""
        if not self._has_token():
            return

        new_status = self.service.refresh_status_from_server()
        with self._lock:
            if new_status and new_status != self.current_status:
                self.current_status = new_status
                self.can_change_manually = self.service.can_change_status_manually()
                logger.info('Status refreshed to %s', new_status)
                self.notify_listeners()

    def set_status_locally(self, status):
        """Adopt a status implied by a delivery action without a server call"""
        with self._lock:
            if status in DashboardConfig.DELIVERY_STATUSES and status != self.current_status:
                self.current_status = status
                self.can_change_manually = status != 'busy'
                logger.info('Status set locally to %s', status)
                self.notify_listeners()

    def reset(self):
        with self._lock:
            self.current_status = 'offline'
            self.can_change_manually = True
        super().reset()
