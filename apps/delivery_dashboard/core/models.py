"""
Records returned by the delivery backend
Parsers accept snake_case and camelCase keys; malformed dates become None.
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def pick(data, *keys, default=None):
    """First non-None value among `keys`"""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def parse_datetime(value):
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None


def parse_float(value, default=None):
    """Accept numbers and numeric strings"""
    if value in (None, ''):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_int(value, default=None):
    if value in (None, ''):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _text(value):
    return '' if value is None else str(value)


def _related_id(value):
    """Id of a related record given either as an int or as a nested object"""
    if isinstance(value, dict):
        return parse_int(value.get('id'))
    return parse_int(value)


def order_item(data):
    """Line item with book title, author, quantity and prices filled in"""
    book = data.get('book') if isinstance(data.get('book'), dict) else {}
    author = book.get('author') if isinstance(book.get('author'), dict) else {}
    return {
        'book_title': data.get('book_title') or book.get('name') or 'Unknown Book',
        'book_author': data.get('book_author') or author.get('name') or 'Unknown Author',
        'quantity': parse_int(data.get('quantity'), 1),
        'unit_price': parse_float(data.get('unit_price'), 0.0),
        'total_price': parse_float(data.get('total_price'), 0.0),
    }


def to_json(record):
    """Serialize a record for the dashboard API"""
    data = asdict(record)
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = value.isoformat()
    return data


@dataclass
class Order:
    id: str
    order_number: str = ''
    status: str = ''
    order_type: str = 'purchase'
    customer_id: str = ''
    customer_name: str = ''
    customer_email: str = ''
    customer_phone: str = ''
    delivery_address: str = ''
    delivery_city: str = ''
    total_amount: float = 0.0
    delivery_notes: Optional[str] = None
    items: List[Dict[str, Any]] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_json(cls, data):
        customer = data.get('customer') if isinstance(data.get('customer'), dict) else {}
        return cls(
            id=_text(data.get('id')),
            order_number=_text(pick(data, 'order_number', 'orderNumber')),
            status=_text(data.get('status')),
            order_type=pick(data, 'order_type', 'orderType', default='purchase'),
            customer_id=_text(pick(data, 'customer_id', 'customerId', default=customer.get('id'))),
            customer_name=_text(pick(data, 'customer_name', 'customerName',
                                     default=customer.get('full_name'))),
            customer_email=_text(pick(data, 'customer_email', 'customerEmail',
                                      default=customer.get('email'))),
            customer_phone=_text(pick(data, 'customer_phone', 'customerPhone',
                                      default=customer.get('phone_number'))),
            delivery_address=_text(pick(data, 'delivery_address', 'deliveryAddress')),
            delivery_city=_text(pick(data, 'delivery_city', 'deliveryCity')),
            total_amount=parse_float(pick(data, 'total_amount', 'totalAmount'), 0.0),
            delivery_notes=pick(data, 'delivery_notes', 'deliveryNotes'),
            items=list(data.get('items') or []),
            created_at=parse_datetime(pick(data, 'created_at', 'createdAt')),
            updated_at=parse_datetime(pick(data, 'updated_at', 'updatedAt')),
        )


@dataclass
class DeliveryTask:
    STATUS_PENDING = 'pending'
    STATUS_ASSIGNED = 'assigned'
    STATUS_ACCEPTED = 'accepted'
    STATUS_PICKED_UP = 'picked_up'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_IN_TRANSIT = 'in_transit'
    STATUS_DELIVERED = 'delivered'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_FAILED = 'failed'

    TYPE_PICKUP = 'pickup'
    TYPE_DELIVERY = 'delivery'
    TYPE_RETURN = 'return'

    id: str
    task_number: str = ''
    task_type: str = ''
    status: str = ''
    order_id: str = ''
    customer_id: str = ''
    customer_name: str = ''
    customer_phone: str = ''
    customer_email: str = ''
    customer_address: str = ''
    delivery_address: str = ''
    delivery_city: str = ''
    notes: Optional[str] = None
    assigned_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    picked_up_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    estimated_delivery_time: Optional[datetime] = None
    delivery_notes: Optional[str] = None
    failure_reason: Optional[str] = None
    retry_count: int = 0
    items: List[Dict[str, Any]] = field(default_factory=list)
    status_history: List[Dict[str, Any]] = field(default_factory=list)
    proof_of_delivery: Optional[Dict[str, Any]] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            id=_text(data.get('id')),
            task_number=_text(pick(data, 'task_number', 'taskNumber')),
            task_type=_text(pick(data, 'task_type', 'taskType')),
            status=_text(data.get('status')),
            order_id=_text(pick(data, 'order_id', 'orderId')),
            customer_id=_text(pick(data, 'customer_id', 'customerId')),
            customer_name=_text(pick(data, 'customer_name', 'customerName')),
            customer_phone=_text(pick(data, 'customer_phone', 'customerPhone')),
            customer_email=_text(pick(data, 'customer_email', 'customerEmail')),
            customer_address=_text(pick(data, 'customer_address', 'customerAddress')),
            delivery_address=_text(pick(data, 'delivery_address', 'deliveryAddress')),
            delivery_city=_text(pick(data, 'delivery_city', 'deliveryCity')),
            notes=data.get('notes'),
            assigned_at=parse_datetime(pick(data, 'assigned_at', 'assignedAt')),
            accepted_at=parse_datetime(pick(data, 'accepted_at', 'acceptedAt')),
            picked_up_at=parse_datetime(pick(data, 'picked_up_at', 'pickedUpAt')),
            delivered_at=parse_datetime(pick(data, 'delivered_at', 'deliveredAt')),
            completed_at=parse_datetime(pick(data, 'completed_at', 'completedAt')),
            estimated_delivery_time=parse_datetime(
                pick(data, 'estimated_delivery_time', 'estimatedDeliveryTime')),
            delivery_notes=pick(data, 'delivery_notes', 'deliveryNotes'),
            failure_reason=pick(data, 'failure_reason', 'failureReason'),
            retry_count=parse_int(pick(data, 'retry_count', 'retryCount'), 0),
            items=list(data.get('items') or []),
            status_history=list(pick(data, 'status_history', 'statusHistory') or []),
            proof_of_delivery=pick(data, 'proof_of_delivery', 'proofOfDelivery'),
            latitude=parse_float(data.get('latitude')),
            longitude=parse_float(data.get('longitude')),
        )

    @classmethod
    def from_assignment(cls, data):
        """Build a task from a /delivery/assignments/ record

        Returns None when the assignment carries no order.
        """
        order = data.get('order')
        status = data.get('status') or cls.STATUS_ASSIGNED
        assigned_at = parse_datetime(data.get('assigned_at'))

        if isinstance(order, int) and not isinstance(order, bool):
            order_number = data.get('order_number') or f'ORDER-{order}'
            completed_at = parse_datetime(data.get('completed_at'))
            return cls(
                id=_text(data.get('id')),
                task_number=order_number,
                task_type=cls.TYPE_DELIVERY,
                status=status,
                order_id=str(order),
                customer_name=f'Order {order_number}',
                notes='',
                assigned_at=assigned_at,
                accepted_at=parse_datetime(data.get('started_at')),
                delivered_at=completed_at,
                completed_at=completed_at,
                estimated_delivery_time=parse_datetime(data.get('estimated_delivery_time')),
            )

        if not isinstance(order, dict):
            return None

        customer = order.get('customer') if isinstance(order.get('customer'), dict) else {}
        return cls(
            id=_text(data.get('id')),
            task_number=order.get('order_number') or f"ORDER-{order.get('id', '')}",
            task_type=cls.TYPE_DELIVERY,
            status=status,
            order_id=_text(order.get('id')),
            customer_id=_text(customer.get('id')),
            customer_name=(customer.get('full_name') or customer.get('get_full_name')
                           or 'Unknown Customer'),
            customer_phone=_text(customer.get('phone_number')),
            customer_email=_text(customer.get('email')),
            customer_address=_text(order.get('delivery_address')),
            delivery_address=_text(order.get('delivery_address')),
            delivery_city=_text(order.get('delivery_city')),
            notes=order.get('notes') or '',
            assigned_at=assigned_at,
            delivery_notes=order.get('delivery_notes') or '',
            items=[order_item(item) for item in order.get('items') or [] if isinstance(item, dict)],
        )


@dataclass
class UnifiedDelivery:
    TYPE_PURCHASE = 'purchase'
    TYPE_BORROW = 'borrow'
    TYPE_RETURN = 'return'

    STATUS_WAITING_FOR_APPROVAL = 'waiting_for_approval'
    STATUS_REJECTED = 'rejected'
    STATUS_READY = 'ready'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'

    id: int
    delivery_type: str = 'purchase'
    delivery_type_display: str = ''
    status: str = 'pending'
    status_display: str = ''
    order_id: Optional[int] = None
    order_number: Optional[str] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    delivery_manager_id: Optional[int] = None
    delivery_manager_name: Optional[str] = None
    availability_status: Optional[str] = None
    delivery_address: str = ''
    delivery_city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rejection_reason: Optional[str] = None
    assigned_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    notes: Optional[str] = None
    can_approve: bool = False
    can_reject: bool = False
    can_start: bool = False
    can_complete: bool = False

    @classmethod
    def from_json(cls, data):
        status = pick(data, 'status', 'delivery_status', default='pending')
        delivery_type = data.get('delivery_type') or cls.TYPE_PURCHASE
        customer = data.get('customer')
        return cls(
            id=parse_int(data.get('id'), 0),
            delivery_type=delivery_type,
            delivery_type_display=pick(data, 'delivery_type_display', default=delivery_type),
            status=status,
            status_display=pick(data, 'status_display', 'delivery_status_display', default=status),
            order_id=_related_id(data.get('order')),
            order_number=data.get('order_number'),
            customer_id=(_related_id(customer) if customer is not None
                         else parse_int(data.get('customer_id'))),
            customer_name=data.get('customer_name'),
            customer_phone=data.get('customer_phone'),
            customer_email=data.get('customer_email'),
            delivery_manager_id=_related_id(data.get('delivery_manager')),
            delivery_manager_name=data.get('delivery_manager_name'),
            availability_status=data.get('availability_status'),
            delivery_address=_text(data.get('delivery_address')),
            delivery_city=data.get('delivery_city'),
            latitude=parse_float(pick(data, 'latitude', 'current_latitude')),
            longitude=parse_float(pick(data, 'longitude', 'current_longitude')),
            rejection_reason=data.get('rejection_reason'),
            assigned_at=parse_datetime(data.get('assigned_at')),
            approved_at=parse_datetime(data.get('approved_at')),
            rejected_at=parse_datetime(data.get('rejected_at')),
            started_at=parse_datetime(data.get('started_at')),
            completed_at=parse_datetime(data.get('completed_at')),
            created_at=parse_datetime(data.get('created_at')),
            updated_at=parse_datetime(data.get('updated_at')),
            notes=data.get('notes'),
            can_approve=bool(data.get('can_approve', False)),
            can_reject=bool(data.get('can_reject', False)),
            can_start=bool(data.get('can_start', False)),
            can_complete=bool(data.get('can_complete', False)),
        )


@dataclass
class ReturnRequest:
    id: int
    borrowing_id: Optional[int] = None
    status: str = ''
    delivery_manager_id: Optional[int] = None
    delivery_manager_name: Optional[str] = None
    fine_amount: float = 0.0
    fine_invoice_id: Optional[int] = None
    return_notes: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    requested_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    picked_up_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_json(cls, data):
        borrowing = data.get('borrowing') if isinstance(data.get('borrowing'), dict) else {}
        customer = borrowing.get('customer') if isinstance(borrowing.get('customer'), dict) else {}
        manager = data.get('delivery_manager')
        return cls(
            id=parse_int(data.get('id'), 0),
            borrowing_id=(_related_id(data.get('borrowing'))
                          if data.get('borrowing') is not None
                          else parse_int(data.get('borrowing_id'))),
            status=_text(data.get('status')),
            delivery_manager_id=_related_id(manager),
            delivery_manager_name=(data.get('delivery_manager_name')
                                   or (manager.get('full_name') if isinstance(manager, dict) else None)),
            fine_amount=parse_float(data.get('fine_amount'), 0.0),
            fine_invoice_id=_related_id(pick(data, 'fine_invoice', 'fine_invoice_id')),
            return_notes=data.get('return_notes'),
            customer_name=pick(data, 'customer_name', default=customer.get('full_name')),
            customer_phone=pick(data, 'customer_phone', default=customer.get('phone_number')),
            customer_address=pick(data, 'customer_address', 'delivery_address',
                                  default=borrowing.get('delivery_address')),
            requested_at=parse_datetime(pick(data, 'requested_at', 'created_at')),
            accepted_at=parse_datetime(data.get('accepted_at')),
            picked_up_at=parse_datetime(data.get('picked_up_at')),
            completed_at=parse_datetime(data.get('completed_at')),
            updated_at=parse_datetime(data.get('updated_at')),
        )


@dataclass
class Notification:
    id: str
    title: str = ''
    message: str = ''
    type: str = ''
    priority: str = ''
    is_read: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            id=_text(data.get('id')),
            title=_text(data.get('title')),
            message=_text(data.get('message')),
            type=_text(pick(data, 'type', 'notification_type')),
            priority=_text(data.get('priority')),
            is_read=bool(pick(data, 'is_read', 'isRead', default=False)),
            created_at=parse_datetime(pick(data, 'created_at', 'createdAt')),
        )

    @property
    def is_urgent(self):
        return self.type == 'urgent' or self.priority == 'high'
