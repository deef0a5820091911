"""
Dashboard Overview Service
One document combining server statistics with the local provider state
"""
from datetime import datetime


class DashboardOverviewService:
    """Service for the dashboard landing summary"""

    def __init__(self, tasks_service, tasks_provider, status_provider,
                 notifications_provider, tracker):
        self.tasks_service = tasks_service
        self.tasks_provider = tasks_provider
        self.status_provider = status_provider
        self.notifications_provider = notifications_provider
        self.tracker = tracker

    def get_overview(self):
        stats = self.tasks_service.get_dashboard_stats()

        return {
            'statistics': stats['data'] if stats['success'] else {},
            'statistics_error': None if stats['success'] else stats['message'],
            'task_counts': self.tasks_provider.counts(),
            'delivery_status': self.status_provider.current_status,
            'can_change_status': self.status_provider.can_change_manually,
            'unread_notifications': self.notifications_provider.unread_count,
            'tracking': {
                'is_tracking': self.tracker.is_tracking,
                'order_id': self.tracker.order_id,
                'updates_sent': self.tracker.updates_sent,
            },
            'timestamp': datetime.now().isoformat()
        }
