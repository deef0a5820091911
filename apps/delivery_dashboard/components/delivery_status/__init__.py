"""
Delivery Status Component
Courier availability: online, offline, or busy while delivering
"""
from .provider import DeliveryStatusProvider
from .routes import delivery_status_bp, init_delivery_status, provider as status_provider
from .service import DeliveryStatusService

__all__ = [
    'delivery_status_bp',
    'init_delivery_status',
    'status_provider',
    'DeliveryStatusProvider',
    'DeliveryStatusService'
]
