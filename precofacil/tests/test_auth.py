import pytest
from fastapi.testclient import TestClient

from precofacil.app import app
from precofacil.auth import users
from precofacil.auth.users import AuthError, authenticate, register


@pytest.fixture(autouse=True)
def fresh_users():
    users.clear_users()
    yield
    users.clear_users()


@pytest.fixture
def client():
    return TestClient(app)


# ── Registration rules ───────────────────────────────────────────────────


@pytest.mark.parametrize("email, password, name, message", [
    ("", "secret1", "Ana", users.ERR_MISSING_FIELDS),
    ("ana@example.com", "", "Ana", users.ERR_MISSING_FIELDS),
    ("ana@example.com", "secret1", "", users.ERR_MISSING_FIELDS),
    ("ana.example.com", "secret1", "Ana", users.ERR_INVALID_EMAIL),
    ("ana@example.com", "12345", "Ana", users.ERR_SHORT_PASSWORD),
])
def test_register_validation(email, password, name, message):
    with pytest.raises(AuthError, match=message):
        register(email, password, name)


def test_register_duplicate_email():
    register("ana@example.com", "secret1", "Ana")
    with pytest.raises(AuthError, match=users.ERR_DUPLICATE_EMAIL):
        register("ana@example.com", "another1", "Outra Ana")


def test_password_is_not_stored_in_plaintext():
    register("ana@example.com", "secret1", "Ana")
    record = users._users["ana@example.com"]
    assert "password" not in record
    assert record["password_hash"] != "secret1"


def test_authenticate_same_message_for_unknown_and_wrong_password():
    register("ana@example.com", "secret1", "Ana")
    with pytest.raises(AuthError) as unknown:
        authenticate("bob@example.com", "secret1")
    with pytest.raises(AuthError) as wrong:
        authenticate("ana@example.com", "wrong-pass")
    assert str(unknown.value) == str(wrong.value) == users.ERR_BAD_CREDENTIALS


def test_users_file_persistence(tmp_path, monkeypatch):
    path = tmp_path / "users.json"
    monkeypatch.setattr(users, "_users_file", path)
    register("ana@example.com", "secret1", "Ana")
    assert path.is_file()

    users.clear_users()
    users._load()
    assert authenticate("ana@example.com", "secret1") == {"email": "ana@example.com", "name": "Ana"}


# ── Endpoints ────────────────────────────────────────────────────────────


def test_register_login_me_logout(client):
    resp = client.post("/auth/register", json={"email": "ana@example.com", "password": "secret1", "name": "Ana"})
    assert resp.status_code == 201
    assert resp.json()["user"] == {"email": "ana@example.com", "name": "Ana"}

    assert client.get("/auth/me").status_code == 401

    resp = client.post("/auth/login", json={"email": "ana@example.com", "password": "secret1"})
    assert resp.status_code == 200

    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == "ana@example.com"

    assert client.post("/auth/logout").json() == {"status": "logged_out"}
    assert client.get("/auth/me").status_code == 401


def test_register_endpoint_error(client):
    resp = client.post("/auth/register", json={"email": "x", "password": "secret1", "name": "X"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == users.ERR_INVALID_EMAIL


def test_login_endpoint_bad_credentials(client):
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret1"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == users.ERR_BAD_CREDENTIALS


def test_product_prices_requires_login(client):
    resp = client.post("/prices/product", json={"product_name": "Leite", "store_names": ["A"], "city": "Natal"})
    assert resp.status_code == 401
