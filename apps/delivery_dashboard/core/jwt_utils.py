"""
JWT helpers for the courier's access token
Payloads are read without signature verification; the backend verifies.
"""
import logging
from datetime import datetime, timezone

import jwt

from delivery_dashboard.config.settings import DashboardConfig

logger = logging.getLogger(__name__)


def decode_payload(token):
    """Return the token payload, or None when the token is malformed"""
    if not token:
        return None
    try:
        return jwt.decode(token, options={'verify_signature': False, 'verify_exp': False})
    except jwt.exceptions.DecodeError as e:
        logger.debug('Invalid token format: %s', e)
        return None


def get_expiration(token):
    payload = decode_payload(token)
    if not payload or payload.get('exp') is None:
        return None
    try:
        return datetime.fromtimestamp(int(payload['exp']), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug('Invalid exp claim: %r', payload['exp'])
        return None


def is_token_expired(token, now=None):
    """True when the token is invalid or expires within the buffer window"""
    expiration = get_expiration(token)
    if expiration is None:
        return True
    now = now or datetime.now(timezone.utc)
    return now + DashboardConfig.TOKEN_EXPIRY_BUFFER >= expiration


def time_until_expiration(token, now=None):
    expiration = get_expiration(token)
    if expiration is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now >= expiration:
        return None
    return expiration - now


def should_refresh_token(token, now=None):
    remaining = time_until_expiration(token, now=now)
    if remaining is None:
        return True
    return remaining < DashboardConfig.TOKEN_REFRESH_WINDOW


def get_user_id(token):
    payload = decode_payload(token)
    if not payload or payload.get('user_id') is None:
        return None
    try:
        return int(payload['user_id'])
    except (TypeError, ValueError):
        return None
