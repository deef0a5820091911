"""
Orders Component
"""
from .provider import OrdersProvider
from .routes import init_orders, orders_bp
from .service import OrdersService

__all__ = ['orders_bp', 'init_orders', 'OrdersProvider', 'OrdersService']
