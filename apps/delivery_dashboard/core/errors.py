"""
Error codes and user-facing messages for backend calls
"""
import json

import requests

NO_TOKEN = 'NO_TOKEN'
UNAUTHORIZED = 'UNAUTHORIZED'
FORBIDDEN = 'FORBIDDEN'
NOT_FOUND = 'NOT_FOUND'
VALIDATION_ERROR = 'VALIDATION_ERROR'
INVALID_STATUS = 'INVALID_STATUS'
INVALID_RESPONSE = 'INVALID_RESPONSE'
NETWORK_ERROR = 'NETWORK_ERROR'
REQUEST_FAILED = 'REQUEST_FAILED'

NO_TOKEN_MESSAGE = 'No authentication token available'

# Dashboard HTTP status for each failure code; anything unlisted is a bad gateway
HTTP_STATUS_FOR_CODE = {
    NO_TOKEN: 401,
    UNAUTHORIZED: 401,
    FORBIDDEN: 403,
    NOT_FOUND: 404,
    VALIDATION_ERROR: 400,
    INVALID_STATUS: 400,
    NETWORK_ERROR: 503,
}


def handle_network_error(error):
    """Translate a transport exception into a message for the courier"""
    if isinstance(error, requests.exceptions.ConnectionError):
        return 'No internet connection. Please check your network settings.'
    if isinstance(error, requests.exceptions.Timeout):
        return 'Could not reach the server. Please try again later.'
    if isinstance(error, (ValueError, json.JSONDecodeError)):
        return 'Invalid response format from the server.'
    return f'Network error: {error}'


def handle_api_error(status_code, data=None):
    """Default message for a non-success HTTP status"""
    data = data if isinstance(data, dict) else {}
    if status_code == 400:
        return data.get('message') or 'Invalid request. Please check your input.'
    if status_code == 401:
        return 'Authentication failed. Please log in again.'
    if status_code == 403:
        return 'You are not authorized to perform this action.'
    if status_code == 404:
        return 'Resource not found.'
    if status_code == 422:
        return data.get('message') or 'Validation error. Please check your input.'
    if status_code in (500, 501, 502, 503):
        return 'Server error. Please try again later.'
    return data.get('message') or 'An unexpected error occurred.'


def backend_message(data, default):
    """Pick the backend's own message, preferring 'error' over 'message'"""
    if isinstance(data, dict):
        return data.get('error') or data.get('message') or default
    return default


def format_validation_errors(errors):
    """Flatten a DRF-style {field: [messages]} map into readable lines"""
    if not errors:
        return 'Validation failed.'

    lines = []
    for field, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            lines.append(f"{field}: {', '.join(str(m) for m in messages)}")
        else:
            lines.append(f'{field}: {messages}')
    return '\n'.join(lines)


def failure(message, error_code, **extra):
    """Build a failed result dict"""
    result = {'success': False, 'message': message, 'error_code': error_code}
    result.update(extra)
    return result


def no_token():
    return failure(NO_TOKEN_MESSAGE, NO_TOKEN)


def http_status_for(result):
    """HTTP status the dashboard should answer with for a service result"""
    if result.get('success'):
        return 200
    return HTTP_STATUS_FOR_CODE.get(result.get('error_code'), 502)
