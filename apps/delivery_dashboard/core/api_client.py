"""
Backend HTTP client
Adds the bearer token to every request and folds responses into result dicts
"""
import logging
import threading

import requests

from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core import errors

logger = logging.getLogger(__name__)


def extract_list(data, *keys):
    """Pull a list of records out of the backend's various list envelopes

    Accepts a bare list, {'results': [...]}, a nested {'results': {'results': [...]}}
    and {'data': [...]}; extra envelope keys may be passed in `keys`.
    """
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return []

    results = data.get('results')
    if isinstance(results, list):
        return results
    if isinstance(results, dict) and isinstance(results.get('results'), list):
        return results['results']

    for key in keys + ('data',):
        value = data.get(key)
        if isinstance(value, list):
            return value
    return []


def body_success(result):
    """True when the call succeeded and the body itself reports success"""
    data = result.get('data')
    return bool(result.get('success')) and isinstance(data, dict) and data.get('success') is True


class BackendClient:
    """Thin wrapper around requests.Session for the bookstore backend"""

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or DashboardConfig.BACKEND_BASE_URL).rstrip('/')
        self.timeout = timeout or DashboardConfig.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self._token = None
        self._lock = threading.Lock()

    @property
    def token(self):
        return self._token

    def set_token(self, token):
        """Set (or clear, with None) the bearer token"""
        with self._lock:
            self._token = token or None
        if token:
            logger.info('Backend token set (%s...)', token[:12])
        else:
            logger.info('Backend token cleared')

    def has_token(self):
        return bool(self._token)

    def url_for(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self):
        headers = {'Content-Type': 'application/json'}
        if self._token:
            headers['Authorization'] = f'Bearer {self._token}'
        return headers

    def request(self, method, path, params=None, payload=None):
        """Send a raw request and return the requests.Response

        Transport errors propagate as requests.exceptions.RequestException.
        """
        url = self.url_for(path)
        logger.debug('%s %s params=%s', method, url, params)
        response = self.session.request(
            method,
            url,
            headers=self.headers(),
            params=params,
            json=payload,
            timeout=self.timeout,
        )
        logger.debug('%s %s -> HTTP %s', method, url, response.status_code)
        return response

    def call(self, method, path, error_code=errors.REQUEST_FAILED,
             default_message='Request failed', params=None, payload=None,
             success_statuses=(200,), require_auth=True):
        """Perform a request and return a uniform result dict

        Success:  {'success': True, 'status_code': int, 'data': <decoded body>}
        Failure:  {'success': False, 'message': str, 'error_code': str, ...}
                  plus 'data' when the error body was a JSON object
        """
        if require_auth and not self._token:
            return errors.no_token()

        try:
            response = self.request(method, path, params=params, payload=payload)
        except requests.exceptions.RequestException as e:
            logger.warning('%s %s failed: %s', method, path, e)
            return errors.failure(errors.handle_network_error(e), errors.NETWORK_ERROR)

        status_code = response.status_code
        try:
            data = response.json() if response.content else None
        except ValueError:
            if status_code in success_statuses:
                logger.warning('%s %s returned a non-JSON body', method, path)
                return errors.failure(
                    errors.handle_network_error(ValueError()),
                    errors.INVALID_RESPONSE,
                    status_code=status_code,
                )
            data = None

        if status_code in success_statuses:
            return {'success': True, 'status_code': status_code, 'data': data}

        logger.info('%s %s -> HTTP %s', method, path, status_code)
        if status_code == 401:
            return errors.failure(
                errors.handle_api_error(401), errors.UNAUTHORIZED,
                status_code=status_code,
            )
        if status_code == 403:
            return errors.failure(
                errors.backend_message(data, errors.handle_api_error(403)),
                errors.FORBIDDEN,
                status_code=status_code,
            )

        result = errors.failure(
            errors.backend_message(data, default_message), error_code,
            status_code=status_code,
        )
        if isinstance(data, dict):
            result['data'] = data
            if data.get('errors'):
                result['errors'] = data['errors']
            if data.get('error_code'):
                result['backend_error_code'] = data['error_code']
        return result

    def get(self, path, **kwargs):
        return self.call('GET', path, **kwargs)

    def post(self, path, **kwargs):
        return self.call('POST', path, **kwargs)

    def put(self, path, **kwargs):
        return self.call('PUT', path, **kwargs)

    def patch(self, path, **kwargs):
        return self.call('PATCH', path, **kwargs)

    def delete(self, path, **kwargs):
        return self.call('DELETE', path, **kwargs)


class BackendService:
    """Base for component services; defaults to the shared backend client"""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is not None:
            return self._client
        from delivery_dashboard.core import get_backend_client
        return get_backend_client()
