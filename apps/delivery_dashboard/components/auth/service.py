"""
Auth Service
Courier login session: tokens, user identity and JWT-based refresh
"""
import logging

from delivery_dashboard.components import register_component
from delivery_dashboard.core import errors, jwt_utils
from delivery_dashboard.core.api_client import BackendService

logger = logging.getLogger(__name__)

LOGIN_FAILED = 'LOGIN_FAILED'
REFRESH_FAILED = 'REFRESH_FAILED'


@register_component('auth')
class AuthService(BackendService):
    """Holds the logged-in courier and keeps the shared client's token in sync"""

    def __init__(self, client=None):
        super().__init__(client)
        self.refresh_token = None
        self.user = None

    def login(self, email, password):
        result = self.client.post(
            '/users/login/',
            payload={'email': email, 'password': password},
            error_code=LOGIN_FAILED,
            default_message='Login failed',
            require_auth=False,
        )
        if not result['success']:
            return result

        body = result.get('data') if isinstance(result.get('data'), dict) else {}
        if body.get('success') is not True:
            return errors.failure(
                body.get('message') or body.get('error') or 'Login failed',
                LOGIN_FAILED,
                errors=body.get('errors'),
            )

        data = body.get('data') or {}
        access_token = data.get('access_token')
        if not access_token:
            return errors.failure('Login response did not include a token', errors.INVALID_RESPONSE)

        self.client.set_token(access_token)
        self.refresh_token = data.get('refresh_token')
        self.user = {
            'user_id': data.get('user_id'),
            'email': data.get('email'),
            'user_type': data.get('user_type'),
            'full_name': data.get('full_name'),
        }
        logger.info('Logged in as %s (%s)', self.user['email'], self.user['user_type'])
        return {'success': True, 'message': body.get('message') or 'Login successful', 'user': self.user}

    def logout(self):
        """Best-effort backend logout; the local session is always cleared"""
        result = None
        if self.refresh_token and self.client.has_token():
            result = self.client.post('/logout/', payload={'refresh_token': self.refresh_token})
            if not result['success']:
                logger.warning('Backend logout failed: %s', result.get('message'))

        self.client.set_token(None)
        self.refresh_token = None
        self.user = None
        return {'success': True, 'message': 'Logged out', 'backend_logout': bool(result and result['success'])}

    def refresh(self):
        if not self.refresh_token:
            return errors.failure('No refresh token available', errors.NO_TOKEN)

        result = self.client.post(
            '/token/refresh/',
            payload={'refresh': self.refresh_token},
            error_code=REFRESH_FAILED,
            default_message='Token refresh failed',
            require_auth=False,
        )
        if not result['success']:
            return result

        data = result.get('data') or {}
        access_token = data.get('access') or data.get('access_token')
        if not access_token:
            return errors.failure('Token refresh failed', REFRESH_FAILED)

        self.client.set_token(access_token)
        self.refresh_token = data.get('refresh') or data.get('refresh_token') or self.refresh_token
        return {'success': True, 'message': data.get('message') or 'Token refreshed successfully'}

    def set_token(self, token, refresh_token=None):
        """Adopt a token obtained elsewhere"""
        self.client.set_token(token)
        if refresh_token:
            self.refresh_token = refresh_token
        user_id = jwt_utils.get_user_id(token)
        if user_id is not None:
            self.user = dict(self.user or {}, user_id=user_id)
        return {'success': True, 'user_id': user_id}

    def is_authenticated(self):
        token = self.client.token
        return bool(token) and not jwt_utils.is_token_expired(token)

    def session_info(self):
        token = self.client.token
        remaining = jwt_utils.time_until_expiration(token) if token else None
        return {
            'authenticated': self.is_authenticated(),
            'has_token': bool(token),
            'has_refresh_token': bool(self.refresh_token),
            'user': self.user,
            'expires_in_seconds': int(remaining.total_seconds()) if remaining else None,
            'should_refresh': jwt_utils.should_refresh_token(token) if token else False,
        }
