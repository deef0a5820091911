"""
Unified Deliveries Component
"""
from .routes import unified_deliveries_bp, init_unified_deliveries
from .service import UnifiedDeliveryService

__all__ = ['unified_deliveries_bp', 'init_unified_deliveries', 'UnifiedDeliveryService']
