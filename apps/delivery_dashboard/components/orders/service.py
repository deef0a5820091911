"""
Orders Service
Purchase orders assigned to the courier (/delivery/orders/)
"""
from delivery_dashboard.components import register_component
from delivery_dashboard.config.settings import DashboardConfig
from delivery_dashboard.core.api_client import BackendService

FETCH_FAILED = 'FETCH_FAILED'
START_FAILED = 'START_FAILED'
COMPLETE_FAILED = 'COMPLETE_FAILED'
UPDATE_FAILED = 'UPDATE_FAILED'

DEFAULT_COMPLETION_NOTES = 'Delivered successfully'
DEFAULT_RATING = 5


@register_component('orders')
class OrdersService(BackendService):
    """Service for the assigned orders list"""

    def get_assigned_orders(self):
        result = self.client.get(
            '/delivery/orders/',
            error_code=FETCH_FAILED,
            default_message='Failed to load assigned orders',
        )
        if not result['success']:
            return result
        data = result['data']
        orders = data.get('results') if isinstance(data, dict) else data
        return {'success': True, 'data': orders if isinstance(orders, list) else []}

    def start_delivery(self, order_id, latitude=None, longitude=None):
        if latitude is None or longitude is None:
            latitude = DashboardConfig.DEFAULT_LOCATION['latitude']
            longitude = DashboardConfig.DEFAULT_LOCATION['longitude']

        result = self.client.patch(
            f'/delivery/orders/{order_id}/start_delivery/',
            payload={
                'latitude': latitude,
                'longitude': longitude,
                'address': 'Starting delivery',
            },
            error_code=START_FAILED,
            default_message='Failed to start delivery',
        )
        if not result['success']:
            return result
        return {'success': True, 'message': 'Delivery started successfully', 'data': result['data']}

    def complete_delivery(self, order_id, delivery_notes=None, rating=None):
        result = self.client.patch(
            f'/delivery/orders/{order_id}/complete_delivery/',
            payload={
                'delivery_notes': delivery_notes or DEFAULT_COMPLETION_NOTES,
                'rating': DEFAULT_RATING if rating is None else rating,
            },
            error_code=COMPLETE_FAILED,
            default_message='Failed to complete delivery',
        )
        if not result['success']:
            return result
        return {'success': True, 'message': 'Delivery completed successfully', 'data': result['data']}

    def update_order_status(self, order_id, status, notes=None):
        payload = {'status': status}
        if notes:
            payload['notes'] = notes

        result = self.client.post(
            f'/delivery/orders/{order_id}/update-status/',
            payload=payload,
            error_code=UPDATE_FAILED,
            default_message='Failed to update order status',
            success_statuses=(200, 201),
        )
        if not result['success']:
            return result
        return {'success': True, 'message': f'Order status updated to {status}', 'data': result['data']}
