"""
Notifications Component
"""
from .provider import NotificationsProvider
from .routes import init_notifications, notifications_bp, provider as notifications_provider
from .service import NotificationsService

__all__ = [
    'notifications_bp',
    'init_notifications',
    'notifications_provider',
    'NotificationsProvider',
    'NotificationsService'
]
