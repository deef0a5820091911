import threading
import time

import pytest

from delivery_dashboard.components.location import LocationService, LocationTracker, simulated_position

UPDATE = '/delivery/location/update/'


def test_simulated_position_is_derived_from_the_clock():
    position = simulated_position(ms=1234567)

    assert position['latitude'] == pytest.approx(40.7128 + 0.0067)
    assert position['longitude'] == pytest.approx(-74.0060 + 0.0067)
    assert position['speed'] == 17.0


def test_send_update_payload(session, backend):
    session.add('PATCH', UPDATE, 200, {'success': True})
    tracker = LocationTracker(client=backend)

    result = tracker.send_update(ms=1234567)

    assert result['success'] is True
    assert tracker.updates_sent == 1
    payload = session.calls_to('PATCH', UPDATE)[0]['json']
    assert payload['tracking_type'] == 'gps'
    assert payload['accuracy'] == 5.0
    assert payload['speed'] == 17.0
    assert payload['latitude'] == pytest.approx(40.7195)


def test_failed_update_is_recorded_not_raised(session, backend):
    session.add('PATCH', UPDATE, 500, {'error': 'db down'})
    tracker = LocationTracker(client=backend)

    result = tracker.send_update()

    assert result['success'] is False
    assert tracker.last_error == 'db down'
    assert tracker.updates_sent == 0


def test_tracker_start_and_stop(session, backend):
    session.add('PATCH', UPDATE, 200, {'success': True})
    tracker = LocationTracker(client=backend, interval=60)

    tracker.start(order_id=12)
    assert tracker.is_tracking
    assert tracker.order_id == 12

    tracker.stop()
    assert not tracker.is_tracking
    assert tracker.order_id is None


def test_stop_without_start_is_harmless(backend):
    LocationTracker(client=backend).stop()


def test_location_errors_use_error_key(session, backend):
    session.add('POST', '/delivery-profiles/update_location/', 400, {'message': 'Latitude out of range'})

    result = LocationService(backend).update_location(latitude=123.0, longitude=1.0)

    assert result['success'] is False
    assert result['error'] == 'Latitude out of range'
    assert session.calls[0]['json'] == {'latitude': 123.0, 'longitude': 1.0}


def test_tracking_flag_is_sent_as_bool(session, backend):
    session.add('POST', '/delivery-profiles/update_tracking/', 200, {'is_tracking_active': True})

    result = LocationService(backend).update_tracking_status(1)

    assert result['success'] is True
    assert session.calls[0]['json'] == {'is_tracking_active': True}


class BlockingClient:
    """Holds every location PATCH until released, recording the sending thread"""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()
        self.senders = []

    def patch(self, path, payload=None, **kwargs):
        self.senders.append(threading.current_thread())
        self.entered.set()
        self.release.wait(5)
        return {'success': True, 'status_code': 200, 'data': {}}


def test_restart_during_slow_update_leaves_one_sender():
    client = BlockingClient()
    tracker = LocationTracker(client=client, interval=0.05)
    tracker.join_timeout = 0.1

    tracker.start(order_id=1)
    assert client.entered.wait(2)
    old_thread = tracker.thread
    tracker.stop()
    assert old_thread.is_alive()

    tracker.start(order_id=2)
    new_thread = tracker.thread
    client.release.set()
    old_thread.join(2)
    time.sleep(0.3)
    tracker.stop()
    new_thread.join(2)

    assert not old_thread.is_alive()
    assert client.senders.count(old_thread) == 1
    assert client.senders.count(new_thread) >= 2


def test_online_and_available_managers(session, backend):
    session.add('GET', '/delivery-profiles/online_managers/', 200, [{'id': 3, 'delivery_status': 'online'}])
    session.add('GET', '/delivery-profiles/available_managers/', 200, [])
    service = LocationService(backend)

    online = service.get_online_delivery_managers()
    available = service.get_available_delivery_managers()

    assert online == {'success': True, 'data': [{'id': 3, 'delivery_status': 'online'}]}
    assert available == {'success': True, 'data': []}
