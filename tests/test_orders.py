from delivery_dashboard.components.orders import OrdersProvider, OrdersService


class RecordingTracker:
    def __init__(self):
        self.started = []
        self.stopped = 0

    def start(self, order_id=None):
        self.started.append(order_id)

    def stop(self):
        self.stopped += 1


def test_start_delivery_uses_default_location_and_starts_tracking(session, backend):
    session.add('PATCH', '/delivery/orders/4/start_delivery/', 200, {'status': 'in_delivery'})
    session.add('GET', '/delivery/orders/', 200, {'results': [{'id': 4, 'status': 'in_delivery'}]})
    tracker = RecordingTracker()
    provider = OrdersProvider(OrdersService(backend), tracker)

    result = provider.start_delivery(4)

    assert result['success'] is True
    assert session.calls_to('PATCH', '/delivery/orders/4/start_delivery/')[0]['json'] == {
        'latitude': 40.7128, 'longitude': -74.0060, 'address': 'Starting delivery'}
    assert [o.id for o in provider.orders] == ['4']
    assert tracker.started == [4]


def test_failed_start_does_not_track(session, backend):
    session.add('PATCH', '/delivery/orders/4/start_delivery/', 400, {'error': 'Order not ready'})
    tracker = RecordingTracker()
    provider = OrdersProvider(OrdersService(backend), tracker)

    result = provider.start_delivery(4)

    assert result['success'] is False
    assert provider.error == 'Order not ready'
    assert tracker.started == []


def test_complete_delivery_defaults_and_stops_tracking(session, backend):
    session.add('PATCH', '/delivery/orders/4/complete_delivery/', 200, {})
    session.add('GET', '/delivery/orders/', 200, [])
    tracker = RecordingTracker()
    provider = OrdersProvider(OrdersService(backend), tracker)

    assert provider.complete_delivery(4)['success'] is True

    assert session.calls_to('PATCH', '/delivery/orders/4/complete_delivery/')[0]['json'] == {
        'delivery_notes': 'Delivered successfully', 'rating': 5}
    assert tracker.stopped == 1


def test_order_status_update_accepts_201(session, backend):
    session.add('POST', '/delivery/orders/4/update-status/', 201, {'status': 'delivered'})

    result = OrdersService(backend).update_order_status(4, 'delivered', notes='Signed by customer')

    assert result['success'] is True
    assert session.calls[0]['json'] == {'status': 'delivered', 'notes': 'Signed by customer'}
