"""
Core services for dashboard components
"""
import logging
import threading
from collections import deque
from datetime import datetime

from delivery_dashboard.config.settings import DashboardConfig

logger = logging.getLogger('delivery_dashboard.activity')

# Global state - shared across all components
activity_logs = deque(maxlen=DashboardConfig.MAX_LOG_ENTRIES)

_client_lock = threading.Lock()
_backend_client = None


def add_log(level, message):
    """Record an entry in the activity log served at /api/logs"""
    activity_logs.append({
        'timestamp': datetime.now().isoformat(),
        'level': level,
        'message': message
    })
    logger.log(getattr(logging, level, logging.INFO), message)


def get_backend_client():
    """Shared backend client, created on first use"""
    global _backend_client
    with _client_lock:
        if _backend_client is None:
            _backend_client = BackendClient()
        return _backend_client


def set_backend_client(client):
    """Swap the shared backend client (None resets to a fresh one on next use)"""
    global _backend_client
    with _client_lock:
        _backend_client = client


from .api_client import BackendClient, BackendService  # noqa: E402
from .sse_service import SSEService  # noqa: E402
from .monitoring import StatusMonitor  # noqa: E402

sse = SSEService()

__all__ = [
    'BackendClient',
    'BackendService',
    'SSEService',
    'StatusMonitor',
    'activity_logs',
    'add_log',
    'get_backend_client',
    'set_backend_client',
    'sse'
]
