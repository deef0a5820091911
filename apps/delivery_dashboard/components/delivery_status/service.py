"""
Delivery Status Service
Courier availability (online / offline / busy) on /delivery-profiles/
"""
import logging

from delivery_dashboard.components import register_component
from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService, body_success

logger = logging.getLogger(__name__)

UPDATE_FAILED = 'UPDATE_FAILED'
RESET_FAILED = 'RESET_FAILED'

INVALID_STATUS_MESSAGE = 'Invalid status. You can only manually change between online and offline.'


@register_component('delivery_status')
class DeliveryStatusService(BackendService):
    """Service for the courier's availability status"""

    def get_current_status(self):
        """Current status record, or None when unavailable"""
        if not self.client.has_token():
            return None

        result = self.client.get('/delivery-profiles/current_status/')
        if body_success(result):
            return result['data'].get('data')

        logger.info('Failed to get current status: %s', result.get('message'))
        return None

    def update_status(self, new_status):
        """Manually switch between online and offline"""
        if not self.client.has_token():
            return errors.no_token()

        if new_status not in DashboardConfig.MANUAL_STATUSES:
            return errors.failure(INVALID_STATUS_MESSAGE, errors.INVALID_STATUS)

        result = self.client.post(
            '/delivery-profiles/update_status/',
            payload={'delivery_status': new_status},
            error_code=UPDATE_FAILED,
            default_message='Failed to update status',
        )
        body = result.get('data') if isinstance(result.get('data'), dict) else {}

        if body_success(result):
            data = body.get('data') or {}
            return {
                'success': True,
                'message': body.get('message'),
                'data': data,
                'current_status': data.get('delivery_status'),
            }

        if result['success']:
            result = errors.failure('Failed to update status', UPDATE_FAILED)
        if body.get('message'):
            result['message'] = body['message']
        if body.get('error_code') and result['error_code'] == UPDATE_FAILED:
            result['error_code'] = body['error_code']
        result['current_status'] = body.get('current_status')
        return result

    def reset_status_if_no_active_deliveries(self):
        """Ask the server to drop a stale 'busy' status"""
        if not self.client.has_token():
            return errors.no_token()

        result = self.client.post(
            '/delivery-profiles/reset_status/',
            error_code=RESET_FAILED,
            default_message='Failed to reset status',
        )
        body = result.get('data') if isinstance(result.get('data'), dict) else {}
        data = body.get('data') if isinstance(body.get('data'), dict) else {}

        if body_success(result):
            return {
                'success': True,
                'message': body.get('message'),
                'data': data,
                'current_status': data.get('delivery_status'),
                'was_reset': bool(data.get('was_reset')),
            }

        if result['success']:
            result = errors.failure(body.get('message') or 'Failed to reset status', RESET_FAILED)
        elif body.get('message'):
            result['message'] = body['message']
        result['current_status'] = data.get('delivery_status')
        return result

    def update_status_to_busy(self):
        """Mark the courier busy, then re-read the authoritative status"""
        if not self.client.has_token():
            return errors.no_token()

        result = self.client.post(
            '/delivery/managers/update-status/',
            payload={'status': 'busy'},
            error_code=UPDATE_FAILED,
            default_message='Failed to update status',
        )
        body = result.get('data') if isinstance(result.get('data'), dict) else {}

        if body_success(result):
            refreshed = self.get_current_status() or {}
            return {
                'success': True,
                'message': body.get('message') or 'Status updated to busy',
                'current_status': refreshed.get('delivery_status') or 'busy',
            }

        if result['success']:
            return errors.failure(
                errors.backend_message(body, 'Failed to update status'),
                body.get('error_code') or UPDATE_FAILED,
            )
        return result

    def refresh_status_from_server(self):
        status_data = self.get_current_status()
        if status_data:
            return status_data.get('delivery_status')
        return None

    def can_change_status_manually(self):
        status_data = self.get_current_status()
        if status_data:
            return bool(status_data.get('can_change_manually', False))
        return False
