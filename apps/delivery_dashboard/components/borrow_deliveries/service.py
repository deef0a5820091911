"""
Borrow Deliveries Service
Library borrow orders assigned to the courier (/borrow/delivery/orders/)
"""
import logging

from delivery_dashboard.components import register_component
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService

logger = logging.getLogger(__name__)

FETCH_FAILED = 'FETCH_FAILED'
ACCEPT_FAILED = 'ACCEPT_FAILED'
REJECT_FAILED = 'REJECT_FAILED'
START_FAILED = 'START_FAILED'
COMPLETE_FAILED = 'COMPLETE_FAILED'

BASE_PATH = '/borrow/delivery/orders/'
UNAUTHORIZED_MESSAGE = 'Unauthorized: Please login again'


def _orders_from(data, *keys):
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in keys:
            if data.get(key) is not None:
                return data[key]
    return []


def _body(result):
    return result.get('data') if isinstance(result.get('data'), dict) else {}


@register_component('borrow_deliveries')
class BorrowDeliveryService(BackendService):
    """Service for borrow order deliveries"""

    def get_assigned_borrow_requests(self, status=None, search=None):
        params = {}
        if status and status.lower() != 'all':
            params['status'] = status
        if search:
            params['search'] = search

        result = self.client.get(
            BASE_PATH,
            params=params or None,
            error_code=FETCH_FAILED,
            default_message='Failed to fetch borrow requests',
        )
        if not result['success']:
            if result['error_code'] == errors.UNAUTHORIZED:
                result['message'] = UNAUTHORIZED_MESSAGE
            elif result['error_code'] == FETCH_FAILED:
                body = _body(result)
                result['message'] = (body.get('message') or body.get('detail')
                                     or f"Failed to fetch borrow requests ({result.get('status_code')})")
            return result

        data = result['data']
        orders = _orders_from(data, 'data', 'results', 'orders')
        logger.debug('Fetched %d borrow orders', len(orders))
        return {'success': True, 'data': data, 'orders': orders}

    def accept_borrow_request(self, order_id):
        """Accepting a borrow order starts it; the courier becomes busy"""
        result = self.client.patch(
            f'{BASE_PATH}{order_id}/start/',
            error_code=ACCEPT_FAILED,
            default_message='Failed to accept borrow request',
        )
        body = _body(result)
        if not result['success']:
            if body.get('message'):
                result['message'] = body['message']
            if body.get('error_code') and result['error_code'] == ACCEPT_FAILED:
                result['error_code'] = body['error_code']
            return result

        return {
            'success': True,
            'message': body.get('message') or 'Borrow delivery accepted successfully',
            'data': body.get('data'),
            'delivery_status': 'busy',
            'order_status': 'in_delivery',
        }

    def reject_borrow_request(self, order_id, rejection_reason):
        result = self.client.post(
            f'{BASE_PATH}{order_id}/reject/',
            payload={'rejection_reason': rejection_reason},
            error_code=REJECT_FAILED,
            default_message='Failed to reject borrow request',
        )
        body = _body(result)
        if not result['success']:
            if body.get('message'):
                result['message'] = body['message']
            return result

        return {
            'success': True,
            'message': body.get('message') or 'Borrow delivery rejected successfully',
        }

    def start_delivery(self, order_id):
        result = self.client.patch(
            f'{BASE_PATH}{order_id}/start/',
            error_code=START_FAILED,
            default_message='Failed to start delivery',
        )
        if not result['success']:
            return result

        body = _body(result)
        return {
            'success': True,
            'message': body.get('message') or 'Delivery started successfully',
            'order_status': body.get('order_status') or 'in_delivery',
            'delivery_manager_status': body.get('delivery_manager_status') or 'busy',
        }

    def complete_delivery(self, order_id):
        """Completing returns the courier to online"""
        result = self.client.patch(
            f'{BASE_PATH}{order_id}/complete/',
            error_code=COMPLETE_FAILED,
            default_message='Failed to complete delivery',
        )
        body = _body(result)
        if not result['success']:
            if body.get('message'):
                result['message'] = body['message']
            return result

        return {
            'success': True,
            'message': body.get('message') or 'Delivery completed successfully',
            'data': body.get('data'),
            'order_status': 'delivered',
            'delivery_status': 'online',
        }

    def get_my_assignments(self):
        result = self.client.get(
            BASE_PATH,
            params={'status': 'in_delivery,delivered'},
            error_code=FETCH_FAILED,
        )
        if not result['success']:
            if result['error_code'] == FETCH_FAILED:
                result['message'] = 'Failed to fetch assignments'
            return result
        return {'success': True, 'data': _orders_from(result['data'], 'results', 'orders')}

    def get_borrow_order_details(self, order_id):
        result = self.client.get(f'/delivery/orders/{order_id}/', error_code=FETCH_FAILED)
        if not result['success']:
            if result['error_code'] == FETCH_FAILED:
                result['message'] = 'Failed to fetch order details'
            return result
        return {'success': True, 'data': result['data']}
