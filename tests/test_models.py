from datetime import datetime

from delivery_dashboard.core.models import (
    DeliveryTask,
    Notification,
    ReturnRequest,
    UnifiedDelivery,
    parse_datetime,
    to_json,
)


def test_parse_datetime_handles_zulu_and_garbage():
    assert parse_datetime('2024-05-01T10:30:00Z').tzinfo is not None
    assert parse_datetime('2024-05-01T10:30:00') == datetime(2024, 5, 1, 10, 30)
    assert parse_datetime('yesterday') is None
    assert parse_datetime('') is None


def test_task_from_json_accepts_camel_case():
    task = DeliveryTask.from_json({
        'id': 9,
        'taskNumber': 'T-9',
        'status': 'assigned',
        'customerName': 'Rana',
        'deliveryAddress': '12 Elm St',
        'retryCount': '2',
        'assignedAt': 'not a date',
    })

    assert task.id == '9'
    assert task.task_number == 'T-9'
    assert task.customer_name == 'Rana'
    assert task.delivery_address == '12 Elm St'
    assert task.retry_count == 2
    assert task.assigned_at is None


def test_assignment_with_order_id_only():
    task = DeliveryTask.from_assignment({'id': 3, 'order': 15, 'status': 'in_progress'})

    assert task.id == '3'
    assert task.order_id == '15'
    assert task.task_number == 'ORDER-15'
    assert task.customer_name == 'Order ORDER-15'
    assert task.status == 'in_progress'


def test_assignment_with_order_object():
    task = DeliveryTask.from_assignment({
        'id': 4,
        'order': {
            'id': 21,
            'order_number': 'ORD-21',
            'delivery_address': '5 Oak Ave',
            'customer': {'id': 8, 'full_name': 'Sam Lee', 'phone_number': '555'},
            'items': [
                {'book_title': 'Dune', 'book_author': 'Frank Herbert', 'quantity': 2,
                 'unit_price': '9.50', 'total_price': '19.00'},
                {'book': {'name': 'Emma', 'author': {'name': 'Jane Austen'}}},
                {},
            ],
        },
    })

    assert task.task_number == 'ORD-21'
    assert task.customer_name == 'Sam Lee'
    assert task.customer_id == '8'
    assert task.delivery_address == '5 Oak Ave'
    assert task.status == DeliveryTask.STATUS_ASSIGNED
    assert task.items == [
        {'book_title': 'Dune', 'book_author': 'Frank Herbert', 'quantity': 2,
         'unit_price': 9.5, 'total_price': 19.0},
        {'book_title': 'Emma', 'book_author': 'Jane Austen', 'quantity': 1,
         'unit_price': 0.0, 'total_price': 0.0},
        {'book_title': 'Unknown Book', 'book_author': 'Unknown Author', 'quantity': 1,
         'unit_price': 0.0, 'total_price': 0.0},
    ]


def test_assignment_without_order_is_skipped():
    assert DeliveryTask.from_assignment({'id': 5}) is None


def test_unified_delivery_fallbacks():
    delivery = UnifiedDelivery.from_json({
        'id': '11',
        'delivery_status': 'in_progress',
        'current_latitude': '40.1',
        'customer': {'id': 6},
        'order': 30,
    })

    assert delivery.id == 11
    assert delivery.status == 'in_progress'
    assert delivery.delivery_type == UnifiedDelivery.TYPE_PURCHASE
    assert delivery.latitude == 40.1
    assert delivery.customer_id == 6
    assert delivery.order_id == 30
    assert UnifiedDelivery.from_json({'id': 1}).status == 'pending'


def test_return_request_reads_nested_borrowing():
    request = ReturnRequest.from_json({
        'id': 2,
        'status': 'pending',
        'borrowing': {'id': 77, 'delivery_address': '1 Main St',
                      'customer': {'full_name': 'Ada', 'phone_number': '123'}},
    })

    assert request.borrowing_id == 77
    assert request.customer_name == 'Ada'
    assert request.customer_address == '1 Main St'
    assert request.fine_amount == 0.0


def test_notification_urgency():
    assert Notification.from_json({'id': 1, 'type': 'urgent'}).is_urgent
    assert Notification.from_json({'id': 2, 'priority': 'high'}).is_urgent
    assert not Notification.from_json({'id': 3, 'type': 'info'}).is_urgent


def test_to_json_serializes_datetimes():
    task = DeliveryTask.from_json({'id': 1, 'assigned_at': '2024-05-01T10:30:00'})

    assert to_json(task)['assigned_at'] == '2024-05-01T10:30:00'
