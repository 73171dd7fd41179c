from agenda.auth import jwt_handler
from agenda.models.user import User

CALC = {'name': 'Calc I', 'day': 'Monday', 'start_time': '09:00', 'end_time': '10:00'}


def _make_admin(client, register, db, username: str = 'root') -> str:
    _, user = register(username)
    stored = db.get(User, user['id'])
    stored.role = 'admin'
    db.commit()
    response = client.post('/auth/login', json={'username': username, 'password': 'pw123456'})
    return response.json()['token']


def test_admin_routes_reject_regular_users(client, register, bearer) -> None:
    token, user = register('ana')

    responses = [
        client.get('/admin/users', headers=bearer(token)),
        client.get('/admin/stats', headers=bearer(token)),
        client.put(f"/admin/users/{user['id']}/role", headers=bearer(token), json={'role': 'admin'}),
    ]

    assert [response.status_code for response in responses] == [403, 403, 403]
    assert responses[0].json() == {'error': 'Admin access required'}


def test_admin_routes_require_token(client) -> None:
    assert client.get('/admin/users').status_code == 401
    assert client.get('/admin/stats', headers={'Authorization': 'Bearer forged'}).status_code == 403


def test_list_users_is_newest_first_without_passwords(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)
    register('ana')
    register('ben')

    response = client.get('/admin/users', headers=bearer(admin_token))

    assert response.status_code == 200
    users = response.json()
    assert [user['username'] for user in users] == ['ben', 'ana', 'root']
    assert all('password' not in user for user in users)
    assert users[-1]['role'] == 'admin'


def test_stats_counts_every_users_rows(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)
    ana_token, _ = register('ana')
    ben_token, _ = register('ben')
    client.post('/classes', headers=bearer(ana_token), json=CALC)
    client.post('/classes', headers=bearer(ben_token), json=CALC)
    client.post('/tasks', headers=bearer(ben_token), json={'title': 'Essay'})

    response = client.get('/admin/stats', headers=bearer(admin_token))

    assert response.status_code == 200
    assert response.json() == {'totalUsers': 3, 'totalClasses': 2, 'totalTasks': 1}


def test_admin_cannot_see_other_users_tasks(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)
    ana_token, _ = register('ana')
    task_id = client.post('/tasks', headers=bearer(ana_token), json={'title': 'Private'}).json()['id']

    assert client.get('/tasks', headers=bearer(admin_token)).json() == []
    assert client.patch(f'/tasks/{task_id}/toggle', headers=bearer(admin_token)).status_code == 404
    assert client.delete(f'/tasks/{task_id}', headers=bearer(admin_token)).status_code == 404


def test_set_role_updates_user(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)
    _, ana = register('ana')

    response = client.put(f"/admin/users/{ana['id']}/role", headers=bearer(admin_token), json={'role': 'admin'})

    assert response.status_code == 200
    body = response.json()
    assert body['message'] == 'User role updated successfully'
    assert body['user']['id'] == ana['id']
    assert body['user']['role'] == 'admin'


def test_set_role_rejects_unknown_role(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)
    _, ana = register('ana')

    for payload in ({'role': 'superuser'}, {}):
        response = client.put(f"/admin/users/{ana['id']}/role", headers=bearer(admin_token), json=payload)

        assert response.status_code == 400
        assert response.json() == {'error': 'Invalid role. Must be "user" or "admin"'}


def test_set_role_for_missing_user_is_404(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)

    response = client.put('/admin/users/999/role', headers=bearer(admin_token), json={'role': 'user'})

    assert response.status_code == 404
    assert response.json() == {'error': 'User not found'}


def test_promoted_users_existing_token_keeps_old_role(client, register, bearer, db) -> None:
    admin_token = _make_admin(client, register, db)
    old_token, ana = register('ana')

    client.put(f"/admin/users/{ana['id']}/role", headers=bearer(admin_token), json={'role': 'admin'})

    assert jwt_handler.decode_access_token(old_token).role == 'user'
    assert client.get('/admin/stats', headers=bearer(old_token)).status_code == 403

    new_token = client.post('/auth/login', json={'username': 'ana', 'password': 'pw123456'}).json()['token']
    assert client.get('/admin/stats', headers=bearer(new_token)).status_code == 200
