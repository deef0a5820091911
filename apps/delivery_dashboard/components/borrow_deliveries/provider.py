"""
Borrow deliveries provider
Groups the courier's borrow orders by stage and mirrors the status each action implies
"""
import logging

from delivery_dashboard.core.models import Order, to_json
from delivery_dashboard.core.notifier import ChangeNotifier
from .service import BorrowDeliveryService

logger = logging.getLogger(__name__)

PENDING_STATUSES = {'assigned', 'assigned_to_delivery', 'pending', 'confirmed'}
IN_PROGRESS_STATUSES = {'preparing', 'pending_delivery', 'out_for_delivery',
                        'out_for_return_pickup', 'in_delivery'}
COMPLETED_STATUSES = {'delivered', 'returned', 'completed'}

STATUS_FILTER_OPTIONS = ['pending', 'confirmed', 'in_delivery', 'delivered', 'active', 'returned']

# Backend messages meaning the order was already taken off this courier
UNASSIGNED_MARKERS = ('not currently assigned', 'already been unassigned')


class BorrowDeliveryProvider(ChangeNotifier):
    name = 'borrow_deliveries'

    def __init__(self, service=None, status_provider=None):
        super().__init__()
        self.service = service or BorrowDeliveryService()
        self.status_provider = status_provider
        self.pending = []
        self.in_progress = []
        self.completed = []
        self.current_delivery_status = 'offline'

    @property
    def all_orders(self):
        return self.pending + self.in_progress + self.completed

    @property
    def is_busy(self):
        return self.current_delivery_status == 'busy'

    def snapshot(self):
        return {
            'pending': [to_json(o) for o in self.pending],
            'in_progress': [to_json(o) for o in self.in_progress],
            'completed': [to_json(o) for o in self.completed],
            'current_delivery_status': self.current_delivery_status,
            'is_loading': self.is_loading,
            'error': self.error
        }

    def _categorize(self, raw_orders):
        self.pending, self.in_progress, self.completed = [], [], []
        for raw in raw_orders:
            if not isinstance(raw, dict):
                continue
            order = Order.from_json(raw)
            status = order.status.lower()
            if not status or status == 'none':
                borrow_request = raw.get('borrow_request')
                if not isinstance(borrow_request, dict):
                    borrow_request = {}
                status = str(borrow_request.get('status') or '').lower()
                order.status = status

            if status in PENDING_STATUSES:
                self.pending.append(order)
            elif status in IN_PROGRESS_STATUSES:
                self.in_progress.append(order)
            elif status in COMPLETED_STATUSES:
                self.completed.append(order)
            else:
                logger.debug('Unhandled borrow status %r for order %s', status, order.id)

    def _adopt_status(self, status):
        """Mirror the courier status implied by an action"""
        if not status:
            return
        self.current_delivery_status = status
        if self.status_provider is not None:
            self.status_provider.set_status_locally(status)

    def _find(self, orders, order_id):
        order_id = str(order_id)
        for order in orders:
            if order.id == order_id:
                return order
        return None

    def _remove(self, orders, order_id):
        order_id = str(order_id)
        orders[:] = [o for o in orders if o.id != order_id]

    def get_order(self, order_id):
        return (self._find(self.pending, order_id) or self._find(self.in_progress, order_id)
                or self._find(self.completed, order_id))

    def load_borrow_requests(self, status=None, search=None):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.get_assigned_borrow_requests(status=status, search=search)
                if not result['success']:
                    return self._fail(result, 'Failed to load borrow requests')

                self._categorize(result['orders'])
                if self.status_provider is not None:
                    self.current_delivery_status = self.status_provider.current_status
                logger.info('Loaded borrow requests: %d pending, %d in progress, %d completed',
                            len(self.pending), len(self.in_progress), len(self.completed))
                return True
            finally:
                self._set_loading(False)

    def accept_request(self, order_id):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.accept_borrow_request(order_id)
                if not result['success']:
                    return self._fail(result, 'Failed to accept request')

                order = self._find(self.pending, order_id)
                if order is not None:
                    self._remove(self.pending, order_id)
                    order.status = result['order_status']
                    self.in_progress.append(order)
                self._adopt_status(result['delivery_status'])
                return True
            finally:
                self._set_loading(False)

    def reject_request(self, order_id, reason):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.reject_borrow_request(order_id, reason)
                if result['success']:
                    self._remove(self.pending, order_id)
                    return True

                message = result.get('message') or ''
                if any(marker in message for marker in UNASSIGNED_MARKERS):
                    self._remove(self.pending, order_id)
                    self._remove(self.in_progress, order_id)
                    return True

                return self._fail(result, 'Failed to reject request')
            finally:
                self._set_loading(False)

    def start_delivery(self, order_id):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.start_delivery(order_id)
                if not result['success']:
                    return self._fail(result, 'Failed to start delivery')

                order = self._find(self.in_progress, order_id)
                if order is not None:
                    order.status = result['order_status']
                self._adopt_status(result['delivery_manager_status'])
                return True
            finally:
                self._set_loading(False)

    def complete_delivery(self, order_id):
        with self._lock:
            self._set_loading(True)
            self.error = None
            self.error_code = None
            try:
                result = self.service.complete_delivery(order_id)
                if not result['success']:
                    return self._fail(result, 'Failed to complete delivery')

                order = self._find(self.in_progress, order_id)
                if order is not None:
                    self._remove(self.in_progress, order_id)
                    order.status = result['order_status']
                    self.completed.insert(0, order)
                self._adopt_status(result['delivery_status'])
                return True
            finally:
                self._set_loading(False)

    def reset(self):
        with self._lock:
            self.pending, self.in_progress, self.completed = [], [], []
            self.current_delivery_status = 'offline'
        super().reset()
