from delivery_dashboard.components.return_requests import ReturnRequestsService
from delivery_dashboard.core import errors

RETURN = {
    'id': 5,
    'status': 'approved',
    'fine_amount': '2.50',
    'borrowing': {
        'id': 40,
        'delivery_address': '9 Pine Rd',
        'customer': {'full_name': 'Kim Park', 'phone_number': '555-0101'},
    },
}


def test_list_filters_and_parses(session, backend):
    session.add('GET', '/returns/requests/list/', 200, {'results': [RETURN]})

    result = ReturnRequestsService(backend).get_return_requests(status='approved', search='kim')

    record = result['data'][0]
    assert session.calls[0]['params'] == {'status': 'approved', 'search': 'kim'}
    assert record.borrowing_id == 40
    assert record.customer_name == 'Kim Park'
    assert record.customer_address == '9 Pine Rd'
    assert record.fine_amount == 2.5


def test_all_status_is_not_sent(session, backend):
    session.add('GET', '/returns/requests/list/', 200, [])

    ReturnRequestsService(backend).get_return_requests(status='all')

    assert session.calls[0]['params'] is None


def test_missing_return_request(session, backend):
    session.add('GET', '/returns/requests/9/', 404, {'detail': 'Not found.'})

    result = ReturnRequestsService(backend).get_return_request(9)

    assert result['error_code'] == errors.NOT_FOUND


def test_accept_needs_success_flag(session, backend):
    path = '/returns/requests/5/accept/'
    session.add('POST', path, 200, {'success': False, 'message': 'Already accepted'})
    session.add('POST', path, 200, {'success': True, 'data': dict(RETURN, status='assigned')})
    service = ReturnRequestsService(backend)

    refused = service.accept_return_request(5)
    accepted = service.accept_return_request(5, notes='On my way')

    assert refused['success'] is False
    assert refused['message'] == 'Already accepted'
    assert accepted['data'].status == 'assigned'
    assert session.calls_to('POST', path)[1]['json'] == {'notes': 'On my way'}


def test_complete_route_returns_serialized_record(client, session):
    session.add('POST', '/returns/requests/5/complete/', 201,
                {'success': True, 'message': 'Return completed', 'data': dict(RETURN, status='completed')})

    response = client.post('/api/returns/5/complete', json={'notes': 'Book received'})

    body = response.get_json()
    assert response.status_code == 200
    assert body['data']['status'] == 'completed'
    assert body['data']['id'] == 5


def test_delivery_location(session, backend):
    session.add('GET', '/returns/requests/5/delivery-location/', 200,
                {'success': True, 'data': {'latitude': 40.71, 'longitude': -74.0}})

    result = ReturnRequestsService(backend).get_delivery_location(5)

    assert result == {'success': True, 'data': {'latitude': 40.71, 'longitude': -74.0}}
