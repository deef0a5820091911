"""
Notifications Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.core import errors
from delivery_dashboard.core.models import to_json
from .provider import NotificationsProvider
from .service import NotificationsService

notifications_bp = Blueprint('notifications', __name__)

# Initialize service and provider
service = NotificationsService()
provider = registry.register_provider(NotificationsProvider(service))


def _provider_response(ok):
    if ok:
        return jsonify(dict(provider.snapshot(), success=True))
    result = provider.failure_result()
    return jsonify(result), errors.http_status_for(result)


@notifications_bp.route('/api/notifications')
def api_notifications():
    """?view=unread|urgent|recent narrows the list"""
    if request.args.get('refresh') or not provider.notifications:
        limit = request.args.get('limit', type=int)
        offset = request.args.get('offset', type=int)
        if not provider.load_notifications(limit=limit, offset=offset):
            return _provider_response(False)

    view = request.args.get('view')
    if view == 'unread':
        items = provider.unread_notifications
    elif view == 'urgent':
        items = provider.urgent_notifications
    elif view == 'recent':
        items = provider.recent_notifications()
    else:
        items = provider.notifications

    return jsonify({
        'notifications': [to_json(n) for n in items],
        'unread_count': provider.unread_count,
        'error': provider.error
    })


@notifications_bp.route('/api/notifications/unread-count')
def api_unread_count():
    return jsonify({'unread_count': provider.refresh_unread_count()})


@notifications_bp.route('/api/notifications/<notification_id>/read', methods=['POST'])
def api_mark_read(notification_id):
    return _provider_response(provider.mark_as_read(notification_id))


@notifications_bp.route('/api/notifications/read-all', methods=['POST'])
def api_mark_all_read():
    return _provider_response(provider.mark_all_as_read())


@notifications_bp.route('/api/notifications/<notification_id>', methods=['DELETE'])
def api_delete_notification(notification_id):
    return _provider_response(provider.delete_notification(notification_id))


@notifications_bp.route('/api/notifications', methods=['DELETE'])
def api_delete_all_notifications():
    return _provider_response(provider.delete_all_notifications())


def init_notifications(app):
    """Initialize notifications component with Flask app"""
    app.register_blueprint(notifications_bp)
    return provider
