import jwt
import pytest

from models import User
from utils.auth import decode_token, issue_token
from services.errors import AuthenticationError


def test_register_returns_token_and_user(client):
    res = client.post('/api/auth/register', json={
        'username': 'carol', 'email': 'Carol@Example.com', 'password': 'secret123',
    })

    assert res.status_code == 201
    body = res.get_json()
    assert body['user']['username'] == 'carol'
    assert body['user']['email'] == 'carol@example.com'
    assert body['user']['is_admin'] is False
    assert 'password_hash' not in body['user']
    assert body['token']


def test_register_stores_a_password_hash(client, alice):
    user = User.query.filter_by(username='alice').one()
    assert user.password_hash != 'secret123'
    assert user.check_password('secret123')


@pytest.mark.parametrize('payload', [
    {'username': 'carol', 'email': 'carol@example.com'},
    {'username': 'carol', 'password': 'secret123'},
    {'email': 'carol@example.com', 'password': 'secret123'},
    {'username': 'carol', 'email': 'not-an-email', 'password': 'secret123'},
    {'username': 'carol', 'email': 'carol@example.com', 'password': '123'},
])
def test_register_rejects_incomplete_or_invalid(client, payload):
    res = client.post('/api/auth/register', json=payload)
    assert res.status_code == 400
    assert 'error' in res.get_json()


def test_register_duplicate_is_conflict(client, alice):
    res = client.post('/api/auth/register', json={
        'username': 'alice', 'email': 'other@example.com', 'password': 'secret123',
    })
    assert res.status_code == 409

    res = client.post('/api/auth/register', json={
        'username': 'alice2', 'email': 'ALICE@example.com', 'password': 'secret123',
    })
    assert res.status_code == 409


def test_login(client, alice):
    res = client.post('/api/auth/login', json={'email': 'alice@example.com', 'password': 'secret123'})
    assert res.status_code == 200
    assert res.get_json()['user']['id'] == alice[0]['id']

    res = client.post('/api/auth/login', json={'email': 'alice@example.com', 'password': 'wrong-pass'})
    assert res.status_code == 401
    assert res.get_json() == {'error': 'Invalid email or password'}

    res = client.post('/api/auth/login', json={'email': 'nobody@example.com', 'password': 'secret123'})
    assert res.status_code == 401


def test_me(client, alice):
    res = client.get('/api/auth/me', headers=alice[1])
    assert res.status_code == 200
    assert res.get_json()['username'] == 'alice'


@pytest.mark.parametrize('headers, message', [
    ({}, 'No token provided'),
    ({'Authorization': 'Token abc'}, 'No token provided'),
    ({'Authorization': 'Bearer not.a.token'}, 'Invalid token'),
])
def test_me_rejects_missing_or_bad_token(client, headers, message):
    res = client.get('/api/auth/me', headers=headers)
    assert res.status_code == 401
    assert res.get_json() == {'error': message}


def test_token_round_trip(app, alice):
    user = User.query.filter_by(username='alice').one()
    identity = decode_token(issue_token(user))

    assert identity.user_id == user.id
    assert identity.is_admin is False
    assert identity.email == 'alice@example.com'


def test_expired_token_is_rejected(app):
    token = jwt.encode(
        {'userId': 1, 'exp': 1}, app.config['JWT_SECRET'], algorithm=app.config['JWT_ALGORITHM'],
    )
    with pytest.raises(AuthenticationError, match='Token expired'):
        decode_token(token)


def test_token_signed_with_another_secret_is_rejected(app):
    token = jwt.encode({'userId': 1}, 'some-other-secret-that-is-long-enough', algorithm='HS256')
    with pytest.raises(AuthenticationError, match='Invalid token'):
        decode_token(token)
