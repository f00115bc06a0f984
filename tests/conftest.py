"""
Shared fixtures: a fresh app and in-memory database per test, plus helpers
for registering users and building auth headers.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so the app modules import when tests run from anywhere
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app  # noqa: E402
from models import db  # noqa: E402
from services.users import register_user  # noqa: E402
from utils.auth import Identity  # noqa: E402


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def register(client):
    """Register through the API and return (user dict, auth headers)."""
    def _register(username, email=None, password='secret123'):
        email = email or f'{username}@example.com'
        res = client.post('/api/auth/register', json={
            'username': username, 'email': email, 'password': password,
        })
        assert res.status_code == 201, res.get_json()
        body = res.get_json()
        return body['user'], auth_header(body['token'])
    return _register


@pytest.fixture
def alice(register):
    return register('alice')


@pytest.fixture
def bob(register):
    return register('bob')


@pytest.fixture
def admin(app, client):
    user = register_user('admin', 'admin@example.com', 'adminpass')
    user.is_admin = True
    db.session.commit()
    res = client.post('/api/auth/login', json={'email': 'admin@example.com', 'password': 'adminpass'})
    body = res.get_json()
    return body['user'], auth_header(body['token'])


@pytest.fixture
def owner(app):
    """A stored user and the Identity the services expect for them."""
    user = register_user('owner', 'owner@example.com', 'ownerpass')
    return Identity(user_id=user.id, email=user.email)
