"""
Borrow Deliveries Component
"""
from .provider import BorrowDeliveryProvider
from .routes import borrow_deliveries_bp, init_borrow_deliveries
from .service import BorrowDeliveryService

__all__ = [
    'borrow_deliveries_bp',
    'init_borrow_deliveries',
    'BorrowDeliveryProvider',
    'BorrowDeliveryService'
]
