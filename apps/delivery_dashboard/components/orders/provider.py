"""
Orders provider
Assigned orders plus the location tracking that runs while one is out for delivery
"""
from delivery_dashboard.core.models import Order, to_json
from delivery_dashboard.core.notifier import ChangeNotifier
from .service import OrdersService


class OrdersProvider(ChangeNotifier):
    name = 'orders'

    def __init__(self, service=None, tracker=None):
        super().__init__()
        self.service = service or OrdersService()
        self.tracker = tracker
        self.orders = []

    def snapshot(self):
        return {
            'orders': [to_json(order) for order in self.orders],
            'count': len(self.orders),
            'is_loading': self.is_loading,
            'error': self.error
        }

    def load_orders(self):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.get_assigned_orders()
                if not result['success']:
                    return self._fail(result, 'Failed to load assigned orders')
                self.orders = [Order.from_json(item) for item in result['data'] if isinstance(item, dict)]
                return True
            finally:
                self._set_loading(False)

    def start_delivery(self, order_id, latitude=None, longitude=None):
        result = self.service.start_delivery(order_id, latitude, longitude)
        if not result['success']:
            with self._lock:
                self._fail(result, 'Failed to start delivery')
            self.notify_listeners()
            return result

        self.load_orders()
        if self.tracker is not None:
            self.tracker.start(order_id=order_id)
        return result

    def complete_delivery(self, order_id, delivery_notes=None, rating=None):
        result = self.service.complete_delivery(order_id, delivery_notes, rating)
        if not result['success']:
            with self._lock:
                self._fail(result, 'Failed to complete delivery')
            self.notify_listeners()
            return result

        self.load_orders()
        if self.tracker is not None:
            self.tracker.stop()
        return result

    def reset(self):
        with self._lock:
            self.orders = []
        super().reset()
