"""
Auth Component
Login, logout and token lifecycle for the courier session
"""
from .routes import auth_bp, init_auth, service as auth_service
from .service import AuthService

__all__ = ['auth_bp', 'init_auth', 'auth_service', 'AuthService']
