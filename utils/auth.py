"""
Token Authentication Module

Issues and verifies the bearer tokens clients send in the Authorization
header, and provides route decorators that put the caller's identity on
`flask.g.identity`.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt  # pyjwt
from flask import current_app, g, request

from services.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as seen by the write protocols."""
    user_id: int
    is_admin: bool = False
    email: str = ''


def issue_token(user):
    """Sign a token for `user` valid for JWT_EXPIRES_DAYS."""
    now = datetime.now(timezone.utc)
    payload = {
        'userId': user.id,
        'email': user.email,
        'isAdmin': bool(user.is_admin),
        'iat': now,
        'exp': now + timedelta(days=current_app.config['JWT_EXPIRES_DAYS']),
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def decode_token(token):
    """Verify `token` and return its Identity. Raises AuthenticationError."""
    try:
        decoded = jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError('Token expired')
    except jwt.InvalidTokenError as e:
        logger.info("Rejected token: %s", e)
        raise AuthenticationError('Invalid token')

    user_id = decoded.get('userId')
    if not isinstance(user_id, int):
        raise AuthenticationError('Invalid token')
    return Identity(
        user_id=user_id,
        is_admin=bool(decoded.get('isAdmin', False)),
        email=decoded.get('email', ''),
    )


def _identity_from_request():
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        raise AuthenticationError('No token provided')
    token = auth_header[len('Bearer '):].strip()
    if not token:
        raise AuthenticationError('No token provided')
    return decode_token(token)


def login_required(view):
    """Reject the request with 401 unless it carries a valid bearer token."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        g.identity = _identity_from_request()
        return view(*args, **kwargs)
    return wrapped


def admin_required(view):
    """Like login_required, and 403 unless the caller is an admin."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        g.identity = _identity_from_request()
        if not g.identity.is_admin:
            raise AuthorizationError('Admin access required')
        return view(*args, **kwargs)
    return wrapped
