"""
Return Requests Component
"""
from .routes import init_return_requests, return_requests_bp
from .service import ReturnRequestsService

__all__ = ['return_requests_bp', 'init_return_requests', 'ReturnRequestsService']
