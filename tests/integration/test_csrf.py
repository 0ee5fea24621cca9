"""Integration tests for CSRF protection and JSON error responses."""


def test_csrf_token_endpoint(client):
    response = client.get('/api/csrf-token')

    assert response.status_code == 200
    assert response.get_json()['csrf_token']


def test_post_without_token_rejected(app, client):
    app.config['WTF_CSRF_ENABLED'] = True

    response = client.post('/login', json={'password': 'senha-teste'})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Token CSRF inválido ou ausente.'


def test_post_with_header_token_accepted(app, client):
    app.config['WTF_CSRF_ENABLED'] = True
    token = client.get('/api/csrf-token').get_json()['csrf_token']

    response = client.post('/login', json={'password': 'senha-teste'}, headers={'X-CSRFToken': token})

    assert response.status_code == 200


def test_unknown_route_is_json_404(client):
    response = client.get('/nao-existe')

    assert response.status_code == 404
    assert response.get_json() == {'error': 'Recurso não encontrado.', 'status_code': 404}


def test_wrong_method_is_json_405(client):
    response = client.delete('/health')

    assert response.status_code == 405
    assert response.get_json()['status_code'] == 405
