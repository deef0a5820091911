"""
Profile Component
"""
from .routes import init_profile, profile_bp
from .service import ProfileService

__all__ = ['profile_bp', 'init_profile', 'ProfileService']
