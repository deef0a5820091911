import requests

from delivery_dashboard.core import errors
from delivery_dashboard.core.api_client import body_success, extract_list


def test_successful_call_returns_decoded_body(session, backend):
    session.add('GET', '/delivery/orders/', 200, {'results': [{'id': 1}]})

    result = backend.get('/delivery/orders/')

    assert result == {'success': True, 'status_code': 200, 'data': {'results': [{'id': 1}]}}
    call = session.calls[0]
    assert call['headers']['Authorization'] == f'Bearer {backend.token}'
    assert call['headers']['Content-Type'] == 'application/json'
    assert call['timeout'] == 2


def test_call_without_token_never_reaches_the_backend(session, anonymous_backend):
    result = anonymous_backend.get('/delivery/orders/')

    assert result['success'] is False
    assert result['error_code'] == errors.NO_TOKEN
    assert session.calls == []


def test_unauthenticated_endpoints_skip_the_token_check(session, anonymous_backend):
    session.add('POST', '/users/login/', 200, {'success': True})

    result = anonymous_backend.post('/users/login/', payload={'email': 'a@b.c'}, require_auth=False)

    assert result['success'] is True
    assert 'Authorization' not in session.calls[0]['headers']


def test_401_maps_to_unauthorized(session, backend):
    session.add('GET', '/delivery/orders/', 401, {'detail': 'Token expired'})

    result = backend.get('/delivery/orders/')

    assert result['error_code'] == errors.UNAUTHORIZED
    assert result['status_code'] == 401


def test_403_keeps_backend_message(session, backend):
    session.add('POST', '/delivery/delivery-requests/3/accept/', 403,
                {'error': 'Only delivery managers can accept'})

    result = backend.post('/delivery/delivery-requests/3/accept/')

    assert result['error_code'] == errors.FORBIDDEN
    assert result['message'] == 'Only delivery managers can accept'


def test_other_status_prefers_error_over_message(session, backend):
    session.add('POST', '/x/', 400, {'error': 'Bad status', 'message': 'ignored', 'error_code': 'E42'})

    result = backend.post('/x/', error_code='UPDATE_FAILED', default_message='Update failed')

    assert result['success'] is False
    assert result['error_code'] == 'UPDATE_FAILED'
    assert result['message'] == 'Bad status'
    assert result['backend_error_code'] == 'E42'
    assert result['status_code'] == 400


def test_other_status_falls_back_to_default_message(session, backend):
    session.add('POST', '/x/', 500, text='<html>Server Error</html>')

    result = backend.post('/x/', error_code='UPDATE_FAILED', default_message='Update failed')

    assert result['message'] == 'Update failed'
    assert result['error_code'] == 'UPDATE_FAILED'


def test_network_error(session, backend):
    session.add('GET', '/delivery/orders/', exc=requests.exceptions.ConnectionError('refused'))

    result = backend.get('/delivery/orders/')

    assert result['success'] is False
    assert result['error_code'] == errors.NETWORK_ERROR
    assert result['message']


def test_non_json_success_body_is_invalid_response(session, backend):
    session.add('GET', '/delivery/orders/', 200, text='<html>login</html>')

    result = backend.get('/delivery/orders/')

    assert result['success'] is False
    assert result['error_code'] == errors.INVALID_RESPONSE


def test_custom_success_statuses(session, backend):
    session.add('DELETE', '/notifications/4/', 204)

    assert backend.delete('/notifications/4/', success_statuses=(200, 204))['success'] is True
    assert backend.delete('/notifications/4/')['success'] is False


def test_extract_list_accepts_every_envelope():
    records = [{'id': 1}, {'id': 2}]

    assert extract_list(records) == records
    assert extract_list({'results': records}) == records
    assert extract_list({'results': {'results': records}}) == records
    assert extract_list({'data': records}) == records
    assert extract_list({'orders': records}, 'orders') == records
    assert extract_list({'count': 0}) == []
    assert extract_list(None) == []


def test_body_success():
    assert body_success({'success': True, 'data': {'success': True}})
    assert not body_success({'success': True, 'data': {'success': False}})
    assert not body_success({'success': True, 'data': [1]})
    assert not body_success({'success': False, 'data': {'success': True}})


def test_http_status_for_result():
    assert errors.http_status_for({'success': True}) == 200
    assert errors.http_status_for(errors.no_token()) == 401
    assert errors.http_status_for(errors.failure('x', errors.FORBIDDEN)) == 403
    assert errors.http_status_for(errors.failure('x', errors.VALIDATION_ERROR)) == 400
    assert errors.http_status_for(errors.failure('x', errors.NOT_FOUND)) == 404
    assert errors.http_status_for(errors.failure('x', errors.NETWORK_ERROR)) == 503
    assert errors.http_status_for(errors.failure('x', 'ACCEPT_FAILED')) == 502


def test_format_validation_errors():
    message = errors.format_validation_errors({'email': ['Enter a valid email.'], 'phone': 'Required'})

    assert 'email: Enter a valid email.' in message
    assert 'phone: Required' in message
