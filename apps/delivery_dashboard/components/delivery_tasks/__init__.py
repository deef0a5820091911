"""
Delivery Tasks Component
"""
from .provider import DeliveryTasksProvider
from .routes import delivery_tasks_bp, init_delivery_tasks, provider as tasks_provider
from .service import DeliveryTasksService, format_eta

__all__ = [
    'delivery_tasks_bp',
    'init_delivery_tasks',
    'tasks_provider',
    'DeliveryTasksProvider',
    'DeliveryTasksService',
    'format_eta'
]
