"""
User Service

Registration, credential checks and profile management.
"""

import logging
import re

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants import MAX_LENGTHS, USER_PROFILE_FIELDS
from models import db, User
from utils.sanitizer import sanitize_line, sanitize_url
from .errors import (
    ValidationError, AuthenticationError, AuthorizationError,
    NotFoundError, ConflictError, UnexpectedStorageError,
)

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def _clean_username(username):
    if not isinstance(username, str):
        raise ValidationError('Username must be text')
    username = sanitize_line(username, max_length=MAX_LENGTHS['username'])
    if not username:
        raise ValidationError('Username is required')
    return username


def _clean_email(email):
    if not isinstance(email, str):
        raise ValidationError('Email must be text')
    email = email.strip().lower()
    if not _EMAIL_PATTERN.match(email) or len(email) > MAX_LENGTHS['email']:
        raise ValidationError('Invalid email address')
    return email


def _clean_avatar_url(avatar_url):
    if avatar_url is None or avatar_url == '':
        return None
    if not isinstance(avatar_url, str) or not sanitize_url(avatar_url):
        raise ValidationError('avatar_url must be an http(s) URL')
    return sanitize_url(avatar_url)[:MAX_LENGTHS['avatar_url']]


def _commit(action):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Username or email already exists')
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to %s user", action)
        raise UnexpectedStorageError(f'Failed to {action} user')


def register_user(username, email, password, avatar_url=None):
    """Create an account. Duplicate username or email is a ConflictError."""
    if not username or not email or not password:
        raise ValidationError('Username, email, and password are required')
    if not isinstance(password, str):
        raise ValidationError('Password must be text')
    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    if len(password) < min_length:
        raise ValidationError(f'Password must be at least {min_length} characters')

    user = User(
        username=_clean_username(username),
        email=_clean_email(email),
        avatar_url=_clean_avatar_url(avatar_url),
    )
    user.set_password(password)
    db.session.add(user)
    _commit('register')
    logger.info("Registered user %d (%s)", user.id, user.username)
    return user


def authenticate_user(email, password):
    """Return the user for valid credentials, else raise AuthenticationError."""
    if not email or not password:
        raise ValidationError('Email and password are required')
    if not isinstance(email, str) or not isinstance(password, str):
        raise AuthenticationError('Invalid email or password')

    user = User.query.filter_by(email=email.strip().lower()).first()
    if user is None or not user.check_password(password):
        raise AuthenticationError('Invalid email or password')
    return user


def list_users():
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('User not found')
    return user


def get_user_by_username(username):
    user = User.query.filter(db.func.lower(User.username) == username.strip().lower()).first()
    if user is None:
        raise NotFoundError('User not found')
    return user


def update_user(user_id, data, identity):
    """
    Update a profile. Users may edit only themselves unless admin; fields
    absent or None keep their current value.
    """
    if identity.user_id != user_id and not identity.is_admin:
        raise AuthorizationError('Not authorized to update this user')
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    user = get_user(user_id)
    cleaners = {
        'username': _clean_username,
        'email': _clean_email,
        'avatar_url': _clean_avatar_url,
    }
    for field in USER_PROFILE_FIELDS:
        value = data.get(field)
        if value is not None:
            setattr(user, field, cleaners[field](value))
    _commit('update')
    return user


def delete_user(user_id):
    """Remove a user; their recipes and favorites are removed with them."""
    user = get_user(user_id)
    db.session.delete(user)
    _commit('delete')
    logger.info("Deleted user %d", user_id)
