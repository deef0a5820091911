"""
Notifications provider
"""
from datetime import datetime, timedelta, timezone

from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core.models import to_json
from delivery_dashboard.core.notifier import ChangeNotifier
from .service import NotificationsService


def _aware(value):
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class NotificationsProvider(ChangeNotifier):
    name = 'notifications'

    def __init__(self, service=None):
        super().__init__()
        self.service = service or NotificationsService()
        self.notifications = []
        self.unread_count = 0

    def _local_unread(self):
        return sum(1 for n in self.notifications if not n.is_read)

    def _find(self, notification_id):
        notification_id = str(notification_id)
        for notification in self.notifications:
            if notification.id == notification_id:
                return notification
        return None

    @property
    def unread_notifications(self):
        return [n for n in self.notifications if not n.is_read]

    @property
    def urgent_notifications(self):
        return [n for n in self.notifications if n.is_urgent]

    def recent_notifications(self, now=None):
        """Notifications created within the last RECENT_NOTIFICATION_DAYS days"""
        now = _aware(now or datetime.now(timezone.utc))
        cutoff = now - timedelta(days=DashboardConfig.RECENT_NOTIFICATION_DAYS)
        return [n for n in self.notifications
                if n.created_at is not None and _aware(n.created_at) >= cutoff]

    def snapshot(self):
        return {
            'notifications': [to_json(n) for n in self.notifications],
            'unread_count': self.unread_count,
            'urgent_count': len(self.urgent_notifications),
            'is_loading': self.is_loading,
            'error': self.error
        }

    def load_notifications(self, limit=None, offset=None):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.get_notifications(limit=limit, offset=offset)
                if not result['success']:
                    return self._fail(result, 'Failed to load notifications')
                self.notifications = result['data']
            finally:
                self._set_loading(False)
        self.refresh_unread_count()
        return True

    def refresh_unread_count(self):
        """Server count, falling back to the local unread items when it reports nothing"""
        count = self.service.get_unread_count()
        with self._lock:
            if count == 0 and self.notifications:
                count = self._local_unread()
            changed = count != self.unread_count
            self.unread_count = count
        if changed:
            self.notify_listeners()
        return count

    def mark_as_read(self, notification_id):
        with self._lock:
            result = self.service.mark_as_read(notification_id)
            if not result['success']:
                self._fail(result, 'Failed to mark notification as read')
                self.notify_listeners()
                return False

            notification = self._find(notification_id)
            if notification is not None and not notification.is_read:
                notification.is_read = True
                self.unread_count = max(0, self.unread_count - 1)
        self.notify_listeners()
        self.refresh_unread_count()
        return True

    def mark_all_as_read(self):
        """Mark every unread notification; stops at the first failure"""
        for notification in list(self.unread_notifications):
            if not self.mark_as_read(notification.id):
                return False
        return True

    def delete_notification(self, notification_id):
        with self._lock:
            result = self.service.delete_notification(notification_id)
            if not result['success']:
                self._fail(result, 'Failed to delete notification')
                self.notify_listeners()
                return False

            notification = self._find(notification_id)
            if notification is not None:
                self.notifications.remove(notification)
                if not notification.is_read:
                    self.unread_count = max(0, self.unread_count - 1)
        self.notify_listeners()
        self.refresh_unread_count()
        return True

    def delete_all_notifications(self):
        with self._lock:
            result = self.service.delete_all_notifications()
            if not result['success']:
                self._fail(result, 'Failed to delete all notifications')
                self.notify_listeners()
                return False
            self.notifications = []
            self.unread_count = 0
        self.notify_listeners()
        return True

    def reset(self):
        with self._lock:
            self.notifications = []
            self.unread_count = 0
        super().reset()
