"""
Return Requests Service
Book returns picked up by the delivery manager (/returns/requests/)
"""
from delivery_dashboard.components import register_component
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService, extract_list
from delivery_dashboard.core.models import ReturnRequest

BASE_PATH = '/returns/requests/'
FETCH_FAILED = 'FETCH_FAILED'
UPDATE_FAILED = 'UPDATE_FAILED'


@register_component('return_requests')
class ReturnRequestsService(BackendService):
    """Service for the delivery side of return requests"""

    def _transition(self, return_id, action, default_message, payload=None):
        result = self.client.post(
            f'{BASE_PATH}{return_id}/{action}/',
            payload=payload or {},
            success_statuses=(200, 201),
            error_code=UPDATE_FAILED,
            default_message=default_message,
        )
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        if body.get('success') is not True:
            return errors.failure(body.get('message') or default_message, UPDATE_FAILED)
        data = body.get('data')
        return {
            'success': True,
            'message': body.get('message') or f'Return request {action} succeeded',
            'data': ReturnRequest.from_json(data) if isinstance(data, dict) else None,
        }

    def get_return_requests(self, status=None, search=None):
        params = {}
        if status and status.lower() != 'all':
            params['status'] = status
        if search:
            params['search'] = search

        result = self.client.get(
            f'{BASE_PATH}list/',
            params=params or None,
            error_code=FETCH_FAILED,
            default_message='Failed to load return requests',
        )
        if not result['success']:
            return result
        records = extract_list(result['data'])
        return {'success': True, 'data': [ReturnRequest.from_json(item)
                                          for item in records if isinstance(item, dict)]}

    def get_return_request(self, return_id):
        result = self.client.get(
            f'{BASE_PATH}{return_id}/',
            error_code=FETCH_FAILED,
            default_message='Failed to load return request',
        )
        if not result['success']:
            if result.get('status_code') == 404:
                result['error_code'] = errors.NOT_FOUND
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        data = body.get('data')
        if body.get('success') is not True or not isinstance(data, dict):
            return errors.failure(body.get('message') or 'Failed to load return request', FETCH_FAILED)
        return {'success': True, 'data': ReturnRequest.from_json(data)}

    def accept_return_request(self, return_id, notes=None):
        payload = {'notes': notes} if notes else None
        return self._transition(return_id, 'accept', 'Failed to accept return request', payload)

    def start_return_process(self, return_id):
        return self._transition(return_id, 'start', 'Failed to start return process')

    def complete_return(self, return_id, notes=None):
        payload = {'notes': notes} if notes else None
        return self._transition(return_id, 'complete', 'Failed to complete return', payload)

    def get_delivery_location(self, return_id):
        result = self.client.get(
            f'{BASE_PATH}{return_id}/delivery-location/',
            error_code=FETCH_FAILED,
            default_message='Failed to load delivery location',
        )
        if not result['success']:
            return result
        body = result['data'] if isinstance(result['data'], dict) else {}
        return {'success': True, 'data': body.get('data', body)}
