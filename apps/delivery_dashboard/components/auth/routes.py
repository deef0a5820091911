"""
Auth Component Routes
"""
from flask import Blueprint, jsonify, request

from delivery_dashboard.components import registry
from delivery_dashboard.core import add_log, errors
from .service import AuthService

auth_bp = Blueprint('auth', __name__)

# Initialize service
service = AuthService()


@auth_bp.route('/api/auth/login', methods=['POST'])
def api_login():
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''
    if not email or not password:
        return jsonify(errors.failure('Email and password are required', errors.VALIDATION_ERROR)), 400

    result = service.login(email, password)
    if result['success']:
        add_log('INFO', f'Courier {email} logged in')
    else:
        add_log('WARNING', f"Login failed for {email}: {result['message']}")
    status = 401 if result.get('error_code') == 'LOGIN_FAILED' else errors.http_status_for(result)
    return jsonify(result), status


@auth_bp.route('/api/auth/logout', methods=['POST'])
def api_logout():
    result = service.logout()
    registry.reset_providers()
    add_log('INFO', 'Courier logged out')
    return jsonify(result)


@auth_bp.route('/api/auth/refresh', methods=['POST'])
def api_refresh():
    result = service.refresh()
    return jsonify(result), errors.http_status_for(result)


@auth_bp.route('/api/auth/token', methods=['POST'])
def api_set_token():
    """Adopt an access token issued elsewhere (e.g. by the mobile app)"""
    data = request.get_json(silent=True) or {}
    token = data.get('token')
    if not token:
        return jsonify(errors.failure('token is required', errors.VALIDATION_ERROR)), 400
    return jsonify(service.set_token(token, data.get('refresh_token')))


@auth_bp.route('/api/auth/session')
def api_session():
    return jsonify(service.session_info())


def init_auth(app):
    """Initialize auth component with Flask app"""
    app.register_blueprint(auth_bp)
    return service
