from delivery_dashboard.components.borrow_deliveries import BorrowDeliveryProvider, BorrowDeliveryService
from delivery_dashboard.components.delivery_status import DeliveryStatusProvider, DeliveryStatusService

LIST = '/borrow/delivery/orders/'

ORDERS = [
    {'id': 1, 'order_number': 'B-1', 'status': 'assigned_to_delivery'},
    {'id': 2, 'order_number': 'B-2', 'status': 'in_delivery'},
    {'id': 3, 'order_number': 'B-3', 'status': 'delivered'},
    {'id': 4, 'order_number': 'B-4', 'status': None, 'borrow_request': {'status': 'pending'}},
    {'id': 5, 'order_number': 'B-5', 'status': 'mystery'},
]


def make_provider(backend):
    status_provider = DeliveryStatusProvider(DeliveryStatusService(backend))
    return BorrowDeliveryProvider(BorrowDeliveryService(backend), status_provider), status_provider


def loaded_provider(session, backend):
    session.add('GET', LIST, 200, {'results': ORDERS})
    provider, status_provider = make_provider(backend)
    assert provider.load_borrow_requests() is True
    return provider, status_provider


def test_orders_are_grouped_by_stage(session, backend):
    provider, _ = loaded_provider(session, backend)

    assert [o.id for o in provider.pending] == ['1', '4']
    assert [o.id for o in provider.in_progress] == ['2']
    assert [o.id for o in provider.completed] == ['3']
    assert provider.get_order(4).status == 'pending'


def test_unauthorized_list_asks_for_login(session, backend):
    session.add('GET', LIST, 401, {'detail': 'expired'})
    provider, _ = make_provider(backend)

    assert provider.load_borrow_requests() is False
    assert provider.error == 'Unauthorized: Please login again'


def test_accept_moves_order_and_marks_courier_busy(session, backend):
    provider, status_provider = loaded_provider(session, backend)
    session.add('PATCH', f'{LIST}1/start/', 200, {'message': 'Started'})

    assert provider.accept_request(1) is True

    assert [o.id for o in provider.pending] == ['4']
    assert provider.in_progress[-1].id == '1'
    assert provider.in_progress[-1].status == 'in_delivery'
    assert provider.is_busy
    assert status_provider.current_status == 'busy'


def test_complete_moves_order_and_frees_courier(session, backend):
    provider, status_provider = loaded_provider(session, backend)
    status_provider.set_status_locally('busy')
    session.add('PATCH', f'{LIST}2/complete/', 200, {'message': 'Delivered'})

    assert provider.complete_delivery(2) is True

    assert provider.in_progress == []
    assert provider.completed[0].id == '2'
    assert status_provider.current_status == 'online'


def test_reject_of_already_unassigned_order_counts_as_success(session, backend):
    provider, _ = loaded_provider(session, backend)
    session.add('POST', f'{LIST}1/reject/', 400,
                {'message': 'This order is not currently assigned to you'})

    assert provider.reject_request(1, 'Too far') is True
    assert '1' not in [o.id for o in provider.pending]


def test_reject_failure_keeps_order(session, backend):
    provider, _ = loaded_provider(session, backend)
    session.add('POST', f'{LIST}1/reject/', 400, {'message': 'Reason too short'})

    assert provider.reject_request(1, 'x') is False
    assert provider.error == 'Reason too short'
    assert '1' in [o.id for o in provider.pending]


def test_start_defaults_and_marks_courier_busy(session, backend):
    provider, status_provider = loaded_provider(session, backend)
    session.add('PATCH', LIST + '2/start/', 200, {})

    result = provider.service.start_delivery(2)
    assert result['order_status'] == 'in_delivery'
    assert result['delivery_manager_status'] == 'busy'

    assert provider.start_delivery(2) is True
    assert provider.get_order(2).status == 'in_delivery'
    assert provider.current_delivery_status == 'busy'
    assert status_provider.current_status == 'busy'
    assert status_provider.can_change_manually is False


def test_my_assignments_query(session, backend):
    session.add('GET', LIST, 200, {'orders': [{'id': 2, 'status': 'in_delivery'}]})

    result = BorrowDeliveryService(backend).get_my_assignments()

    assert result == {'success': True, 'data': [{'id': 2, 'status': 'in_delivery'}]}
    assert session.calls[0]['params'] == {'status': 'in_delivery,delivered'}


def test_order_details(session, backend):
    session.add('GET', '/delivery/orders/7/', 200, {'id': 7, 'status': 'in_delivery'})
    session.add('GET', '/delivery/orders/8/', 500, {})
    service = BorrowDeliveryService(backend)

    assert service.get_borrow_order_details(7)['data'] == {'id': 7, 'status': 'in_delivery'}
    assert service.get_borrow_order_details(8)['message'] == 'Failed to fetch order details'


def test_borrow_request_given_as_id_is_tolerated(session, backend):
    session.add('GET', LIST, 200, [{'id': 6, 'status': None, 'borrow_request': 12}, ORDERS[0]])
    provider, _ = make_provider(backend)

    assert provider.load_borrow_requests() is True
    assert [o.id for o in provider.all_orders] == ['1']
