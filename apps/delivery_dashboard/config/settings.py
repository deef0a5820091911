"""
Dashboard configuration settings
"""
import os
from datetime import timedelta


class DashboardConfig:
    """Centralized configuration for the delivery manager dashboard"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me-in-production')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)

    # Rate limiting
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = "100 per minute"

    # Dashboard server
    HOST = os.environ.get('DASHBOARD_HOST', '0.0.0.0')
    PORT = int(os.environ.get('DASHBOARD_PORT', 8081))

    # Bookstore backend (every endpoint path is relative to this, which already includes /api)
    BACKEND_BASE_URL = os.environ.get('BACKEND_BASE_URL', 'http://localhost:8000/api')
    REQUEST_TIMEOUT = float(os.environ.get('BACKEND_TIMEOUT', 10))

    # Availability values the courier may pick by hand; 'busy' is set by the server only
    MANUAL_STATUSES = ('online', 'offline')
    DELIVERY_STATUSES = ('online', 'offline', 'busy')

    # Polling intervals in milliseconds
    POLLING_INTERVALS = {
        'delivery_status': 60000,   # status refresh while the dashboard is open
        'location': 30000,          # simulated GPS updates while tracking
        'notifications': 60000,
    }

    # Simulated GPS origin (no device location on the dashboard host)
    DEFAULT_LOCATION = {
        'latitude': 40.7128,
        'longitude': -74.0060,
    }
    LOCATION_ACCURACY = 5.0

    # Token lifetime handling
    TOKEN_EXPIRY_BUFFER = timedelta(minutes=5)
    TOKEN_REFRESH_WINDOW = timedelta(hours=1)

    # UI settings
    MAX_LOG_ENTRIES = 1000
    RECENT_NOTIFICATION_DAYS = 7

    @classmethod
    def get_polling_interval(cls, name):
        """Get a polling interval in seconds"""
        return cls.POLLING_INTERVALS.get(name, 60000) / 1000.0

    @classmethod
    def backend_url(cls, path):
        """Join an endpoint path onto the backend base URL"""
        return f"{cls.BACKEND_BASE_URL.rstrip('/')}/{path.lstrip('/')}"
