"""
Unified Deliveries Service
Purchase, borrow and return deliveries behind /delivery/delivery-requests/
"""
import logging

from delivery_dashboard.components import register_component
from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import BackendService, extract_list
from delivery_dashboard.core.models import UnifiedDelivery, to_json

logger = logging.getLogger(__name__)

FETCH_FAILED = 'FETCH_FAILED'
ACCEPT_FAILED = 'ACCEPT_FAILED'
REJECT_FAILED = 'REJECT_FAILED'
START_FAILED = 'START_FAILED'
UPDATE_LOCATION_FAILED = 'UPDATE_LOCATION_FAILED'
COMPLETE_FAILED = 'COMPLETE_FAILED'
UPDATE_FAILED = 'UPDATE_FAILED'

BASE_PATH = '/delivery/delivery-requests/'


@register_component('unified_deliveries')
class UnifiedDeliveryService(BackendService):
    """Service for the unified delivery request workflow"""

    def _action(self, method, path, error_code, default_message, success_message, payload=None):
        result = self.client.call(
            method, path,
            error_code=error_code,
            default_message=default_message,
            payload=payload,
        )
        if result['success']:
            return {'success': True, 'message': success_message, 'data': result['data']}
        return result

    def get_delivery_list(self, status=None, delivery_type=None):
        params = {}
        if status:
            params['status'] = status
        if delivery_type:
            params['type'] = delivery_type

        result = self.client.get(
            BASE_PATH,
            params=params or None,
            error_code=FETCH_FAILED,
            default_message='Failed to fetch deliveries',
        )
        if not result['success']:
            return result

        deliveries = extract_list(result['data'])
        logger.debug('Fetched %d deliveries', len(deliveries))
        return {'success': True, 'data': deliveries}

    def get_deliveries(self, status=None, delivery_type=None):
        """Typed variant of get_delivery_list"""
        result = self.get_delivery_list(status=status, delivery_type=delivery_type)
        if not result['success']:
            return result
        return {
            'success': True,
            'data': [UnifiedDelivery.from_json(item) for item in result['data'] if isinstance(item, dict)]
        }

    def get_delivery_detail(self, delivery_id):
        result = self.client.get(
            f'{BASE_PATH}{delivery_id}/',
            error_code=FETCH_FAILED,
            default_message='Failed to fetch delivery details',
        )
        if not result['success']:
            return result
        return {'success': True, 'data': result['data']}

    def accept_delivery(self, delivery_id):
        return self._action(
            'POST', f'{BASE_PATH}{delivery_id}/accept/',
            ACCEPT_FAILED, 'Failed to accept delivery',
            'Delivery request accepted successfully',
        )

    def reject_delivery(self, delivery_id, rejection_reason):
        if not self.client.has_token():
            return errors.no_token()
        if not rejection_reason or not rejection_reason.strip():
            return errors.failure('Rejection reason is required', errors.VALIDATION_ERROR)

        return self._action(
            'POST', f'{BASE_PATH}{delivery_id}/reject/',
            REJECT_FAILED, 'Failed to reject delivery',
            'Delivery rejected successfully',
            payload={'rejection_reason': rejection_reason},
        )

    def start_delivery(self, delivery_id):
        return self._action(
            'POST', f'{BASE_PATH}{delivery_id}/start/',
            START_FAILED, 'Failed to start delivery',
            'Delivery started successfully',
        )

    def update_location(self, delivery_id, latitude, longitude):
        return self._action(
            'POST', f'{BASE_PATH}{delivery_id}/update-location/',
            UPDATE_LOCATION_FAILED, 'Failed to update location',
            'Location updated successfully',
            payload={'latitude': latitude, 'longitude': longitude},
        )

    def complete_delivery(self, delivery_id, notes=None):
        payload = {}
        if notes:
            payload['notes'] = notes
        return self._action(
            'POST', f'{BASE_PATH}{delivery_id}/complete/',
            COMPLETE_FAILED, 'Failed to complete delivery',
            'Delivery completed successfully',
            payload=payload,
        )

    def update_payment_status(self, delivery_id, deposit_paid=None, fine_status=None, fine_is_paid=None):
        payload = {}
        if deposit_paid is not None:
            payload['deposit_paid'] = deposit_paid
        if fine_status is not None:
            payload['fine_status'] = fine_status
        if fine_is_paid is not None:
            payload['fine_is_paid'] = fine_is_paid

        return self._action(
            'PATCH', f'{BASE_PATH}{delivery_id}/update-payment-status/',
            UPDATE_FAILED, 'Failed to update payment status',
            'Payment status updated successfully',
            payload=payload,
        )


def serialize_deliveries(deliveries):
    return [to_json(delivery) for delivery in deliveries]
