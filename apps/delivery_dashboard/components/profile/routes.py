"""
Profile Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.core import add_log, errors
from .service import ProfileService

profile_bp = Blueprint('profile', __name__)

# Initialize service
service = ProfileService()


def _respond(result):
    return jsonify(result), errors.http_status_for(result)


@profile_bp.route('/api/profile', methods=['GET', 'PUT'])
def api_profile():
    if request.method == 'GET':
        return _respond(service.get_profile())
    result = service.update_profile(request.get_json(silent=True) or {})
    if result['success']:
        add_log('INFO', 'Profile updated')
    return _respond(result)


@profile_bp.route('/api/profile/password', methods=['POST'])
def api_change_password():
    data = request.get_json(silent=True) or {}
    result = service.change_password(data.get('current_password'), data.get('new_password'))
    if result['success']:
        add_log('INFO', 'Password changed')
    return _respond(result)


@profile_bp.route('/api/profile/email', methods=['POST'])
def api_change_email():
    data = request.get_json(silent=True) or {}
    return _respond(service.change_email(data.get('new_email'), data.get('password')))


@profile_bp.route('/api/profile/notification-preferences', methods=['GET', 'PUT'])
def api_notification_preferences():
    if request.method == 'GET':
        return _respond(service.get_notification_preferences())
    return _respond(service.update_notification_preferences(request.get_json(silent=True) or {}))


@profile_bp.route('/api/profile/languages')
def api_languages():
    return _respond(service.get_language_options())


@profile_bp.route('/api/profile/language', methods=['POST'])
def api_language():
    data = request.get_json(silent=True) or {}
    return _respond(service.update_language(data.get('language')))


def init_profile(app):
    """Initialize profile component with Flask app"""
    app.register_blueprint(profile_bp)
    return service
