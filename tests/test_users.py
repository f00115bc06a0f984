def test_list_users_is_admin_only(client, alice, admin):
    assert client.get('/api/users', headers=alice[1]).status_code == 403
    res = client.get('/api/users', headers=admin[1])
    assert res.status_code == 200
    assert {u['username'] for u in res.get_json()} == {'alice', 'admin'}


def test_email_only_visible_to_self_or_admin(client, alice, bob, admin):
    alice_id = alice[0]['id']

    assert client.get(f'/api/users/{alice_id}', headers=alice[1]).get_json()['email'] == 'alice@example.com'
    assert 'email' in client.get(f'/api/users/{alice_id}', headers=admin[1]).get_json()
    assert 'email' not in client.get(f'/api/users/{alice_id}', headers=bob[1]).get_json()


def test_lookup_by_username(client, alice):
    res = client.get('/api/users/by-username/ALICE')
    assert res.status_code == 200
    assert res.get_json()['id'] == alice[0]['id']
    assert 'email' not in res.get_json()

    assert client.get('/api/users/by-username/nobody').status_code == 404


def test_update_own_profile(client, alice):
    alice_id = alice[0]['id']
    res = client.put(
        f'/api/users/{alice_id}',
        json={'username': 'alice_b', 'avatar_url': 'https://img.example.com/a.png'},
        headers=alice[1],
    )

    assert res.status_code == 200
    body = res.get_json()
    assert body['username'] == 'alice_b'
    assert body['avatar_url'] == 'https://img.example.com/a.png'
    assert body['email'] == 'alice@example.com'


def test_update_other_profile_is_forbidden(client, alice, bob, admin):
    alice_id = alice[0]['id']
    assert client.put(f'/api/users/{alice_id}', json={'username': 'x'}, headers=bob[1]).status_code == 403

    res = client.put(f'/api/users/{alice_id}', json={'username': 'alice_admin_edit'}, headers=admin[1])
    assert res.status_code == 200


def test_update_to_taken_username_is_conflict(client, alice, bob):
    res = client.put(f"/api/users/{alice[0]['id']}", json={'username': 'bob'}, headers=alice[1])
    assert res.status_code == 409


def test_update_rejects_unsafe_avatar(client, alice):
    res = client.put(
        f"/api/users/{alice[0]['id']}", json={'avatar_url': 'javascript:alert(1)'}, headers=alice[1],
    )
    assert res.status_code == 400


def test_admin_deletes_user_and_their_recipes(client, alice, admin):
    from models import Recipe

    client.post('/api/recipes', json={'title': 'Soup', 'steps': ['Boil']}, headers=alice[1])
    assert Recipe.query.count() == 1

    assert client.delete(f"/api/users/{alice[0]['id']}", headers=alice[1]).status_code == 403
    res = client.delete(f"/api/users/{alice[0]['id']}", headers=admin[1])

    assert res.status_code == 200
    assert Recipe.query.count() == 0
    assert client.get(f"/api/users/{alice[0]['id']}", headers=admin[1]).status_code == 404
