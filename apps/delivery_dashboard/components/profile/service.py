"""
Profile Service
Account profile, credentials and preferences on /users/
"""
from delivery_dashboard.components import register_component
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService

UPDATE_FAILED = 'UPDATE_FAILED'

PROFILE_FIELDS = ('first_name', 'last_name', 'phone_number', 'address', 'city', 'profile_picture')


@register_component('profile')
class ProfileService(BackendService):
    """Service for the signed-in user's profile and settings"""

    def _validation_failure(self, result):
        if result.get('status_code') != 400:
            return result
        field_errors = result.get('errors')
        body = result.get('data')
        # DRF serializers answer with the field map as the whole body
        if not isinstance(field_errors, dict) and isinstance(body, dict) \
                and not ('error' in body or 'message' in body):
            field_errors = body
        if isinstance(field_errors, dict) and field_errors:
            result['message'] = errors.format_validation_errors(field_errors)
        result['error_code'] = errors.VALIDATION_ERROR
        return result

    def get_profile(self):
        result = self.client.get('/users/profile/', default_message='Failed to load profile')
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return {'success': True, 'data': body.get('data', body)}

    def update_profile(self, fields):
        payload = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}
        if not payload:
            return errors.failure('No profile fields to update', errors.VALIDATION_ERROR)

        result = self.client.put(
            '/users/profile/',
            payload=payload,
            error_code=UPDATE_FAILED,
            default_message='Failed to update profile',
        )
        if not result['success']:
            return self._validation_failure(result)
        body = result['data'] if isinstance(result['data'], dict) else {}
        return {'success': True, 'message': 'Profile updated successfully', 'data': body.get('data', body)}

    def change_password(self, current_password, new_password):
        if not current_password or not new_password:
            return errors.failure('Current and new password are required', errors.VALIDATION_ERROR)
        result = self.client.post(
            '/users/change-password/',
            payload={'current_password': current_password, 'new_password': new_password},
            error_code=UPDATE_FAILED,
            default_message='Failed to change password',
        )
        if not result['success']:
            return self._validation_failure(result)
        return {'success': True, 'message': 'Password changed successfully'}

    def change_email(self, new_email, password):
        if not new_email or not password:
            return errors.failure('New email and password are required', errors.VALIDATION_ERROR)
        result = self.client.post(
            '/users/change-email/',
            payload={'new_email': new_email, 'password': password},
            error_code=UPDATE_FAILED,
            default_message='Failed to change email',
        )
        if not result['success']:
            return self._validation_failure(result)
        return {'success': True, 'message': 'Email changed successfully'}

    def get_notification_preferences(self):
        result = self.client.get('/users/notification-preferences/',
                                 default_message='Failed to load notification preferences')
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return {'success': True, 'data': body.get('data', body)}

    def update_notification_preferences(self, preferences):
        result = self.client.put(
            '/users/notification-preferences/',
            payload=preferences,
            error_code=UPDATE_FAILED,
            default_message='Failed to update notification preferences',
        )
        if not result['success']:
            return self._validation_failure(result)
        return {'success': True, 'message': 'Notification preferences updated'}

    def get_language_options(self):
        result = self.client.get('/users/languages/', default_message='Failed to load languages')
        if not result['success']:
            return result
        data = result['data']
        if isinstance(data, dict):
            data = data.get('languages') or data.get('data') or []
        return {'success': True, 'data': data if isinstance(data, list) else []}

    def update_language(self, language_code):
        if not language_code:
            return errors.failure('language is required', errors.VALIDATION_ERROR)
        result = self.client.post(
            '/users/language-preference/',
            payload={'language': language_code},
            error_code=UPDATE_FAILED,
            default_message='Failed to update language preference',
        )
        if not result['success']:
            return result
        return {'success': True, 'message': 'Language preference updated', 'language': language_code}
