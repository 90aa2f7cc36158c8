"""
Account route tests.

Scenario: register alice/pw1/a@x.com, then log in with the right and the
wrong password.
"""

from market.models import User
from market.extensions import db


def _set_cookies(resp):
    return resp.headers.getlist('Set-Cookie')


def _register(client, username='alice', password='pw1', email='a@x.com'):
    return client.post('/register', data={
        'username': username,
        'password': password,
        'email': email,
    })


class TestRegister:

    def test_register_sets_identity_cookie_and_redirects(self, client):
        resp = _register(client)
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/dashboard.html?user=alice')

        cookies = _set_cookies(resp)
        assert any(c.startswith('username=alice') and 'HttpOnly' in c for c in cookies)

        user = db.session.get(User, 'alice')
        assert user.password == 'pw1'
        assert user.email == 'a@x.com'

    def test_duplicate_username_answers_200_with_message(self, client):
        _register(client)
        resp = _register(client, password='other', email='b@x.com')

        assert resp.status_code == 200
        assert resp.get_data(as_text=True) == 'Username already exists. Please choose another.'
        assert _set_cookies(resp) == []
        assert db.session.get(User, 'alice').password == 'pw1'

    def test_missing_fields(self, client):
        resp = client.post('/register', data={'username': 'alice'})
        assert resp.status_code == 400
        assert db.session.query(User).count() == 0

    def test_json_body_is_accepted(self, client):
        resp = client.post('/register', json={'username': 'dana', 'password': 'x', 'email': 'd@x.com'})
        assert resp.status_code == 302

    def test_username_is_url_encoded_in_redirect(self, client):
        resp = _register(client, username='al ice&co')
        assert resp.headers['Location'].endswith('/dashboard.html?user=al%20ice%26co')


class TestLogin:

    def test_correct_password_sets_cookie(self, client):
        _register(client)
        client.get('/logout')

        resp = client.post('/login', data={'username': 'alice', 'password': 'pw1'})
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/dashboard.html?user=alice')
        assert any(c.startswith('username=alice') for c in _set_cookies(resp))

        assert client.get('/whoami').get_json() == {'username': 'alice'}

    def test_wrong_password_redirects_with_error_and_no_cookie(self, client):
        _register(client)

        resp = client.post('/login', data={'username': 'alice', 'password': 'wrong'})
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/?error=invalid')
        assert _set_cookies(resp) == []

    def test_password_is_case_sensitive(self, client):
        _register(client)
        resp = client.post('/login', data={'username': 'alice', 'password': 'PW1'})
        assert resp.headers['Location'].endswith('/?error=invalid')

    def test_username_is_case_sensitive(self, client):
        _register(client)
        resp = client.post('/login', data={'username': 'Alice', 'password': 'pw1'})
        assert resp.headers['Location'].endswith('/?error=invalid')

    def test_unknown_user(self, client):
        resp = client.post('/login', data={'username': 'ghost', 'password': 'pw1'})
        assert resp.headers['Location'].endswith('/?error=invalid')


class TestIdentityCookie:

    def test_logout_clears_cookie(self, client):
        _register(client)

        resp = client.get('/logout')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/')
        assert any(c.startswith('username=;') for c in _set_cookies(resp))

        assert client.get('/whoami').get_json() == {'username': None}

    def test_whoami_ignores_query_and_header_claims(self, client):
        resp = client.get('/whoami?username=eve', headers={'X-Username': 'eve'})
        assert resp.get_json() == {'username': None}

    def test_whoami_reports_cookie(self, client):
        client.set_cookie('username', 'carol')
        assert client.get('/whoami').get_json() == {'username': 'carol'}
