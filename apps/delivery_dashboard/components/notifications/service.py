"""
Notifications Service
Delivery notifications: list, read state, unread count and deletion
"""
import logging

from delivery_dashboard.components import register_component
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService
from delivery_dashboard.core.models import Notification

logger = logging.getLogger(__name__)

FETCH_FAILED = 'FETCH_FAILED'
UPDATE_FAILED = 'UPDATE_FAILED'
DELETE_FAILED = 'DELETE_FAILED'


@register_component('notifications')
class NotificationsService(BackendService):
    """Service for the delivery manager's notifications"""

    def get_notifications(self, limit=None, offset=None):
        params = {}
        if limit is not None:
            params['limit'] = limit
        if offset is not None:
            params['offset'] = offset

        result = self.client.get(
            '/delivery/notifications/',
            params=params or None,
            error_code=FETCH_FAILED,
            default_message='Failed to load notifications',
        )
        if not result['success']:
            return result

        body = result['data'] if isinstance(result['data'], dict) else {}
        if body.get('success') is not True or not isinstance(body.get('notifications'), list):
            return {'success': True, 'data': []}
        notifications = [Notification.from_json(item)
                         for item in body['notifications'] if isinstance(item, dict)]
        return {'success': True, 'data': notifications}

    def mark_as_read(self, notification_id):
        result = self.client.post(
            f'/delivery/notifications/{notification_id}/mark-read/',
            error_code=UPDATE_FAILED,
            default_message='Failed to mark notification as read',
        )
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        if body.get('success') is not True:
            return errors.failure(body.get('message') or 'Failed to mark notification as read', UPDATE_FAILED)
        return {'success': True, 'message': 'Notification marked as read'}

    def get_unread_count(self):
        """Unread count from the server; 0 when it cannot be read"""
        result = self.client.get('/delivery/notifications/unread-count/', error_code=FETCH_FAILED)
        if not result['success']:
            logger.warning('Unread count unavailable: %s', result['message'])
            return 0
        body = result['data'] if isinstance(result['data'], dict) else {}
        try:
            return int(body.get('unread_count') or 0)
        except (TypeError, ValueError):
            return 0

    def delete_notification(self, notification_id):
        result = self.client.delete(
            f'/notifications/{notification_id}/',
            success_statuses=(200, 204),
            error_code=DELETE_FAILED,
            default_message='Failed to delete notification',
        )
        if not result['success']:
            return result
        return {'success': True, 'message': 'Notification deleted'}

    def delete_all_notifications(self):
        result = self.client.delete(
            '/notifications/delete_all/',
            success_statuses=(200, 204),
            error_code=DELETE_FAILED,
            default_message='Failed to delete all notifications',
        )
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        deleted = body.get('deleted_count') or 0
        logger.info('Deleted %s notifications', deleted)
        return {'success': True, 'message': 'All notifications deleted', 'deleted_count': deleted}
