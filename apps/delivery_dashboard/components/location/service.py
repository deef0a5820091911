"""
Location Service
Courier position and tracking flags on /delivery-profiles/
"""
from delivery_dashboard.components import register_component
from delivery_dashboard.core.api_client import BackendService

BASE_PATH = '/delivery-profiles/'


@register_component('location')
class LocationService(BackendService):
    """Location management; failures carry the reason under 'error'"""

    def _call(self, method, endpoint, default_message, payload=None):
        result = self.client.call(
            method, f'{BASE_PATH}{endpoint}',
            default_message=default_message,
            payload=payload,
        )
        if result['success']:
            return {'success': True, 'data': result['data']}
        result['error'] = result['message']
        return result

    def update_location(self, latitude=None, longitude=None, address=None):
        payload = {}
        if latitude is not None:
            payload['latitude'] = latitude
        if longitude is not None:
            payload['longitude'] = longitude
        if address is not None:
            payload['address'] = address
        return self._call('POST', 'update_location/', 'Failed to update location', payload)

    def get_current_location(self):
        return self._call('GET', 'my_profile/', 'Failed to get location')

    def get_delivery_manager_location(self, delivery_manager_id):
        return self._call('GET', f'{delivery_manager_id}/', 'Failed to get delivery manager location')

    def update_delivery_status(self, status):
        return self._call('POST', 'update_status/', 'Failed to update delivery status',
                          {'delivery_status': status})

    def update_tracking_status(self, is_tracking_active):
        return self._call('POST', 'update_tracking/', 'Failed to update tracking status',
                          {'is_tracking_active': bool(is_tracking_active)})

    def get_online_delivery_managers(self):
        return self._call('GET', 'online_managers/', 'Failed to get online delivery managers')

    def get_available_delivery_managers(self):
        return self._call('GET', 'available_managers/', 'Failed to get available delivery managers')
