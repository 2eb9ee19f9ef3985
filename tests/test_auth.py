def test_register_login_me(client):
    r = client.post(
        '/api/v1/auth/register',
        json={'username': 'Maya', 'password': 'secret123', 'email': 'maya@example.com', 'phone': '555-0100'},
    )
    assert r.status_code == 201
    assert r.json()['role'] == 'citizen'

    login = client.post('/api/v1/auth/login', json={'username': 'maya', 'password': 'secret123'})
    assert login.status_code == 200
    body = login.json()
    assert body['user']['username'] == 'Maya'

    me = client.get('/api/v1/users/me', headers={'Authorization': f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()['email'] == 'maya@example.com'


def test_register_duplicate_username_ignoring_case(client):
    payload = {'username': 'Maya', 'password': 'secret123', 'email': 'maya@example.com'}
    assert client.post('/api/v1/auth/register', json=payload).status_code == 201

    duplicate = client.post('/api/v1/auth/register', json={**payload, 'username': 'MAYA'})

    assert duplicate.status_code == 400


def test_register_cannot_request_admin_role(client):
    r = client.post(
        '/api/v1/auth/register',
        json={'username': 'sneaky', 'password': 'pw', 'email': 's@example.com', 'role': 'admin'},
    )

    assert r.status_code == 201
    assert r.json()['role'] == 'citizen'


def test_login_with_wrong_password(client):
    client.post('/api/v1/auth/register', json={'username': 'Maya', 'password': 'secret123', 'email': 'm@b.com'})

    response = client.post('/api/v1/auth/login', json={'username': 'Maya', 'password': 'wrong'})

    assert response.status_code == 401
    assert response.json()['detail'] == 'Wrong username or password'


def test_invalid_token_is_rejected(client):
    response = client.get('/api/v1/users/me', headers={'Authorization': 'Bearer not-a-token'})

    assert response.status_code == 401
