import pytest

from vtcs_shop.app import create_app
from vtcs_shop.backend import SQLiteBackend

SHELL_MARKERS = (
    "INTENTIONALLY VULNERABLE APPLICATION - FOR TRAINING ONLY",
    '<a href="?page=home">Home</a>',
    "Known Vulnerabilities (Training)",
)


def assert_shell(body):
    for marker in SHELL_MARKERS:
        assert marker in body


@pytest.mark.parametrize("path", ["/", "/?page=home", "/?page=products", "/?page=nope", "/index.php"])
def test_plain_pages_render_shell_without_session_change(client, store, path):
    response = client.get(path)
    assert response.status_code == 200
    assert response.mimetype == 'text/html'
    assert_shell(response.get_data(as_text=True))
    assert len(store) == 0


def test_home_has_search_form(client):
    body = client.get('/').get_data(as_text=True)
    assert "<h3>Search Products</h3>" in body
    assert 'id="results"' not in body


def test_login_page_has_form_and_hint(client):
    body = client.get('/?page=login').get_data(as_text=True)
    assert '<button type="submit" name="login">Login</button>' in body
    assert "Hint: Try SQL injection on the login form" in body


@pytest.mark.parametrize("page", ["products", "nope", ""])
def test_other_pages_have_no_body(client, page):
    body = client.get('/', query_string={'page': page}).get_data(as_text=True)
    assert "Search Products" not in body
    assert "<h2>Login</h2>" not in body
    assert "Admin Panel" not in body


def test_nav_hides_admin_links_without_session(client):
    body = client.get('/').get_data(as_text=True)
    assert "?page=admin" not in body
    assert "?logout=1" not in body


def test_admin_without_session_asks_for_login(client):
    body = client.get('/?page=admin').get_data(as_text=True)
    assert 'Please <a href="?page=login">login</a> first.' in body


def test_admin_lists_users_for_admin_role(client, login):
    login("admin", "admin123")
    body = client.get('/?page=admin').get_data(as_text=True)

    assert "<p>Welcome, admin!</p>" in body
    assert "<p>Role: admin</p>" in body
    assert 'id="users"' in body
    for username in ("admin", "john", "jane", "guest"):
        assert f"<td>{username}</td>" in body


def test_admin_denies_plain_user(client, login):
    login("john", "password123")
    body = client.get('/?page=admin').get_data(as_text=True)

    assert "<p>Role: user</p>" in body
    assert "Access denied. Admin role required." in body
    assert 'id="users"' not in body


def test_user_list_encodes_usernames(client, add_rows, login):
    add_rows("INSERT INTO users (id, username, password, role) "
             "VALUES (7, '<script>x</script>', 'pw', '<b>r</b>')")
    login("admin", "admin123")
    body = client.get('/?page=admin').get_data(as_text=True)

    assert "<td>&lt;script&gt;x&lt;/script&gt;</td>" in body
    assert "<td>&lt;b&gt;r&lt;/b&gt;</td>" in body


@pytest.mark.parametrize("role", ["Admin", "administrator", "admin ", "ADMIN"])
def test_role_check_is_exact(client, store, role):
    client.get('/')
    sid = client.get_cookie("session").value
    store.save(sid, {'user': 'mallory', 'role': role})

    body = client.get('/?page=admin').get_data(as_text=True)
    assert "Access denied. Admin role required." in body
    assert 'id="users"' not in body


def test_forged_session_is_trusted(client, store):
    client.set_cookie("session", "attacker-chosen-token")
    store.save("attacker-chosen-token", {'user': '<img src=x>', 'role': 'admin'})

    body = client.get('/?page=admin').get_data(as_text=True)
    assert "<p>Welcome, <img src=x>!</p>" in body
    assert 'id="users"' in body


def test_missing_role_displays_as_user(client, store):
    client.get('/')
    sid = client.get_cookie("session").value
    store.save(sid, {'user': 'nobody', 'role': None})

    body = client.get('/?page=admin').get_data(as_text=True)
    assert "<p>Role: user</p>" in body


def test_connection_failure_aborts_request(tmp_path, store):
    missing = str(tmp_path / "missing" / "db.sqlite")
    app = create_app({'TESTING': True}, backend=SQLiteBackend(missing), store=store)
    client = app.test_client()

    for path in ('/', '/?page=admin', '/?logout=1'):
        response = client.get(path)
        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert body.startswith("Database connection failed: unable to open database file")
        assert "Known Vulnerabilities" not in body


def test_plain_pages_leave_logged_in_session_untouched(client, store, login):
    login("john", "password123")
    sid = client.get_cookie("session").value
    before = store.load(sid)

    for page in ("home", "products", "admin", "nope"):
        response = client.get('/', query_string={'page': page})
        assert response.status_code == 200
        assert 'Set-Cookie' not in response.headers

    assert store.load(sid) == before == {'user': 'john', 'role': 'user'}
