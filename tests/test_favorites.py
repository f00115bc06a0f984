def make_recipe(client, headers, title='Soup'):
    return client.post('/api/recipes', json={'title': title}, headers=headers).get_json()


def test_favorite_lifecycle(client, alice, bob):
    recipe = make_recipe(client, alice[1])
    check_url = f"/api/favorites/check/{recipe['id']}"

    assert client.get(check_url, headers=bob[1]).get_json() == {'is_favorited': False}

    assert client.post(f"/api/favorites/{recipe['id']}", headers=bob[1]).status_code == 201
    assert client.get(check_url, headers=bob[1]).get_json() == {'is_favorited': True}
    # Per user
    assert client.get(check_url, headers=alice[1]).get_json() == {'is_favorited': False}

    favorites = client.get('/api/favorites', headers=bob[1]).get_json()
    assert [f['title'] for f in favorites] == ['Soup']
    assert favorites[0]['is_favorited'] is True
    assert favorites[0]['author'] == 'alice'

    assert client.delete(f"/api/favorites/{recipe['id']}", headers=bob[1]).status_code == 200
    assert client.get('/api/favorites', headers=bob[1]).get_json() == []


def test_favoriting_twice_is_idempotent(client, alice):
    from models import Favorite

    recipe = make_recipe(client, alice[1])
    client.post(f"/api/favorites/{recipe['id']}", headers=alice[1])
    res = client.post(f"/api/favorites/{recipe['id']}", headers=alice[1])

    assert res.status_code == 201
    assert Favorite.query.count() == 1


def test_favorite_missing_recipe_is_404(client, alice):
    assert client.post('/api/favorites/999', headers=alice[1]).status_code == 404


def test_favorites_require_login(client):
    assert client.get('/api/favorites').status_code == 401
