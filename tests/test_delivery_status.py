from delivery_dashboard.components.delivery_status import DeliveryStatusProvider, DeliveryStatusService
from delivery_dashboard.core import errors

CURRENT = '/delivery-profiles/current_status/'
UPDATE = '/delivery-profiles/update_status/'
RESET = '/delivery-profiles/reset_status/'


def status_body(status, can_change=True):
    return {'success': True, 'data': {'delivery_status': status, 'can_change_manually': can_change}}


def make_provider(backend):
    return DeliveryStatusProvider(DeliveryStatusService(backend))


def test_load_current_status(session, backend):
    session.add('GET', CURRENT, 200, status_body('online'))
    provider = make_provider(backend)

    provider.load_current_status()

    assert provider.current_status == 'online'
    assert provider.is_online
    assert provider.error is None


def test_load_is_skipped_without_token(session, anonymous_backend):
    provider = make_provider(anonymous_backend)

    provider.load_current_status()

    assert provider.current_status == 'offline'
    assert session.calls == []


def test_stale_busy_status_is_reset_then_reloaded(session, backend):
    session.add('GET', CURRENT, 200, status_body('busy', can_change=False))
    session.add('GET', CURRENT, 200, status_body('online'))
    session.add('POST', RESET, 200, {
        'success': True, 'message': 'Status reset',
        'data': {'delivery_status': 'online', 'was_reset': True},
    })
    provider = make_provider(backend)

    provider.load_current_status()

    assert provider.current_status == 'online'
    assert provider.can_change_manually is True
    assert len(session.calls_to('POST', RESET)) == 1
    assert len(session.calls_to('GET', CURRENT)) == 2


def test_busy_status_is_kept_when_reset_is_refused(session, backend):
    session.add('GET', CURRENT, 200, status_body('busy', can_change=False))
    session.add('POST', RESET, 400, {'success': False, 'message': 'Active deliveries in progress'})
    provider = make_provider(backend)

    provider.load_current_status()

    assert provider.is_busy
    assert provider.can_change_manually is False


def test_update_rejects_statuses_outside_online_offline(session, backend):
    provider = make_provider(backend)

    assert provider.update_status('busy') is False
    assert provider.error_code == errors.INVALID_STATUS
    assert session.calls == []


def test_update_refused_while_busy(session, backend):
    provider = make_provider(backend)
    provider.set_status_locally('busy')

    assert provider.update_status('online') is False
    assert 'while busy' in provider.error
    assert session.calls == []


def test_update_to_same_status_is_a_no_op(session, backend):
    provider = make_provider(backend)

    assert provider.update_status('offline') is True
    assert session.calls == []


def test_update_uses_server_status(session, backend):
    session.add('POST', UPDATE, 200, {
        'success': True, 'message': 'Status updated',
        'data': {'delivery_status': 'online', 'can_change_manually': True},
    })
    provider = make_provider(backend)

    assert provider.update_status('online') is True
    assert provider.current_status == 'online'
    assert session.calls_to('POST', UPDATE)[0]['json'] == {'delivery_status': 'online'}


def test_failed_update_adopts_reported_status(session, backend):
    session.add('POST', UPDATE, 400, {
        'success': False, 'message': 'You have active deliveries',
        'error_code': 'ACTIVE_DELIVERIES', 'current_status': 'busy',
    })
    provider = make_provider(backend)

    assert provider.update_status('online') is False
    assert provider.current_status == 'busy'
    assert provider.error == 'You have active deliveries'
    assert provider.error_code == 'ACTIVE_DELIVERIES'


def test_update_without_token(anonymous_backend):
    provider = make_provider(anonymous_backend)

    assert provider.update_status('online') is False
    assert provider.error_code == errors.NO_TOKEN


def test_listeners_see_changes(backend):
    provider = make_provider(backend)
    seen = []
    provider.add_listener(lambda name, state: seen.append((name, state['current_status'])))

    provider.set_status_locally('busy')

    assert seen == [('delivery_status', 'busy')]


def test_reset_restores_offline(backend):
    provider = make_provider(backend)
    provider.set_status_locally('online')

    provider.reset()

    assert provider.current_status == 'offline'
    assert provider.error is None


def test_update_status_to_busy_rereads_current_status(session, backend):
    session.add('POST', '/delivery/managers/update-status/', 200, {'success': True, 'message': 'Now busy'})
    session.add('GET', CURRENT, 200, status_body('busy', can_change=False))

    result = DeliveryStatusService(backend).update_status_to_busy()

    assert result == {'success': True, 'message': 'Now busy', 'current_status': 'busy'}
    assert session.calls_to('POST', '/delivery/managers/update-status/')[0]['json'] == {'status': 'busy'}
    assert len(session.calls_to('GET', CURRENT)) == 1


def test_update_status_to_busy_refused_by_backend(session, backend):
    session.add('POST', '/delivery/managers/update-status/', 200,
                {'success': False, 'error': 'No active delivery', 'error_code': 'NO_ACTIVE_DELIVERY'})

    result = DeliveryStatusService(backend).update_status_to_busy()

    assert result['success'] is False
    assert result['message'] == 'No active delivery'
    assert result['error_code'] == 'NO_ACTIVE_DELIVERY'
    assert session.calls_to('GET', CURRENT) == []


def test_refresh_and_manual_change_read_the_server(session, backend):
    session.add('GET', CURRENT, 200, status_body('busy', can_change=False))
    service = DeliveryStatusService(backend)

    assert service.refresh_status_from_server() == 'busy'
    assert service.can_change_status_manually() is False


def test_refresh_and_manual_change_when_server_fails(session, backend):
    session.add('GET', CURRENT, 500, {'error': 'boom'})
    service = DeliveryStatusService(backend)

    assert service.refresh_status_from_server() is None
    assert service.can_change_status_manually() is False
