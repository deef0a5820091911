from datetime import datetime, timedelta, timezone

from delivery_dashboard.components.notifications import NotificationsProvider, NotificationsService

LIST = '/delivery/notifications/'
COUNT = '/delivery/notifications/unread-count/'


def iso(days_ago):
    return (datetime.now(timezone.utc) - timedelta(days=days_ago)).isoformat()


NOTIFICATIONS = [
    {'id': 1, 'title': 'New task', 'type': 'urgent', 'is_read': False, 'created_at': iso(1)},
    {'id': 2, 'title': 'Reminder', 'type': 'info', 'is_read': False, 'created_at': iso(2)},
    {'id': 3, 'title': 'Old news', 'type': 'info', 'priority': 'high', 'is_read': True,
     'created_at': iso(30)},
]


def make_provider(backend):
    return NotificationsProvider(NotificationsService(backend))


def loaded_provider(session, backend, unread_count=2):
    session.add('GET', LIST, 200, {'success': True, 'notifications': NOTIFICATIONS})
    session.add('GET', COUNT, 200, {'unread_count': unread_count})
    provider = make_provider(backend)
    assert provider.load_notifications() is True
    return provider


def test_list_uses_notifications_only_when_successful(session, backend):
    session.add('GET', LIST, 200, {'success': False, 'notifications': NOTIFICATIONS})

    assert NotificationsService(backend).get_notifications()['data'] == []


def test_list_paging_params(session, backend):
    session.add('GET', LIST, 200, {'success': True, 'notifications': []})

    NotificationsService(backend).get_notifications(limit=20, offset=40)

    assert session.calls[0]['params'] == {'limit': 20, 'offset': 40}


def test_unread_count_is_zero_on_failure(session, backend):
    session.add('GET', COUNT, 500, {'error': 'boom'})

    assert NotificationsService(backend).get_unread_count() == 0


def test_load_refreshes_unread_count(session, backend):
    provider = loaded_provider(session, backend, unread_count=5)

    assert len(provider.notifications) == 3
    assert provider.unread_count == 5


def test_count_falls_back_to_local_unread_items(session, backend):
    session.add('GET', LIST, 200, {'success': True, 'notifications': NOTIFICATIONS})
    session.add('GET', COUNT, 503, {'error': 'down'})
    provider = make_provider(backend)

    provider.load_notifications()

    assert provider.unread_count == 2


def test_mark_as_read_decrements_count(session, backend):
    provider = loaded_provider(session, backend)
    session.add('POST', '/delivery/notifications/1/mark-read/', 200, {'success': True})
    session.replace('GET', COUNT, 200, {'unread_count': 1})

    assert provider.mark_as_read(1) is True

    assert provider.unread_count == 1
    assert [n.id for n in provider.unread_notifications] == ['2']


def test_count_never_goes_below_zero(session, backend):
    provider = loaded_provider(session, backend, unread_count=2)
    provider.unread_count = 0
    session.add('POST', '/delivery/notifications/1/mark-read/', 200, {'success': True})
    seen = []
    provider.add_listener(lambda name, state: seen.append(state['unread_count']))

    provider.mark_as_read(1)

    assert seen[0] == 0


def test_marking_a_read_notification_keeps_count(session, backend):
    provider = loaded_provider(session, backend)
    session.add('POST', '/delivery/notifications/3/mark-read/', 200, {'success': True})

    provider.mark_as_read(3)

    assert provider.unread_count == 2


def test_failed_mark_as_read_changes_nothing(session, backend):
    provider = loaded_provider(session, backend)
    session.add('POST', '/delivery/notifications/1/mark-read/', 200, {'success': False})

    assert provider.mark_as_read(1) is False
    assert provider.unread_count == 2
    assert provider.error == 'Failed to mark notification as read'


def test_mark_all_as_read(session, backend):
    provider = loaded_provider(session, backend)
    session.add('POST', '/delivery/notifications/1/mark-read/', 200, {'success': True})
    session.add('POST', '/delivery/notifications/2/mark-read/', 200, {'success': True})
    session.replace('GET', COUNT, 200, {'unread_count': 0})

    assert provider.mark_all_as_read() is True
    assert provider.unread_count == 0
    assert provider.unread_notifications == []


def test_urgent_and_recent_views(session, backend):
    provider = loaded_provider(session, backend)

    assert [n.id for n in provider.urgent_notifications] == ['1', '3']
    assert [n.id for n in provider.recent_notifications()] == ['1', '2']


def test_delete_updates_local_list(session, backend):
    provider = loaded_provider(session, backend)
    session.add('DELETE', '/notifications/2/', 204)
    session.replace('GET', COUNT, 200, {'unread_count': 1})

    assert provider.delete_notification(2) is True

    assert [n.id for n in provider.notifications] == ['1', '3']
    assert provider.unread_count == 1


def test_delete_all(session, backend):
    provider = loaded_provider(session, backend)
    session.add('DELETE', '/notifications/delete_all/', 200, {'deleted_count': 3})

    assert provider.delete_all_notifications() is True
    assert provider.notifications == []
    assert provider.unread_count == 0


def test_server_count_is_reread_after_mark_as_read(session, backend):
    provider = loaded_provider(session, backend)
    session.add('POST', '/delivery/notifications/1/mark-read/', 200, {'success': True})
    session.replace('GET', COUNT, 200, {'unread_count': 4})
    seen = []
    provider.add_listener(lambda name, state: seen.append(state['unread_count']))

    provider.mark_as_read(1)

    assert seen == [1, 4]
    assert provider.unread_count == 4
    assert len(session.calls_to('GET', COUNT)) == 2


def test_server_count_is_reread_after_delete(session, backend):
    provider = loaded_provider(session, backend)
    session.add('DELETE', '/notifications/1/', 204)
    session.replace('GET', COUNT, 503, {'error': 'down'})

    provider.delete_notification(1)

    assert [n.id for n in provider.notifications] == ['2', '3']
    assert provider.unread_count == 1
    assert len(session.calls_to('GET', COUNT)) == 2
