"""
Location Component
Courier location, other couriers' availability and the periodic tracker
"""
from .routes import init_location, location_bp, tracker as location_tracker
from .service import LocationService
from .tracker import LocationTracker, simulated_position

__all__ = [
    'location_bp',
    'init_location',
    'location_tracker',
    'LocationService',
    'LocationTracker',
    'simulated_position'
]
