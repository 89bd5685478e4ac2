from jobly.core.auth import decode_token

NEW_ACCOUNT = {
    "username": "new",
    "firstName": "first",
    "lastName": "last",
    "password": "password",
    "email": "new@email.com",
}


# ---------------------------------------------------------------- POST /auth/token

def test_token_works(client, settings):
    resp = client.post("/auth/token", json={"username": "u1", "password": "password1"})
    assert resp.status_code == 200
    payload = decode_token(resp.json()["token"], settings)
    assert payload["username"] == "u1"
    assert payload["isAdmin"] is True


def test_token_unknown_user(client):
    resp = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})
    assert resp.status_code == 401
    assert resp.json() == {"error": {"message": "Invalid username/password", "status": 401}}


def test_token_wrong_password(client):
    resp = client.post("/auth/token", json={"username": "u1", "password": "nope"})
    assert resp.status_code == 401


def test_token_missing_data(client):
    resp = client.post("/auth/token", json={"username": "u1"})
    assert resp.status_code == 400


def test_token_invalid_data(client):
    resp = client.post("/auth/token", json={"username": 42, "password": "above-is-a-number"})
    assert resp.status_code == 400


# ---------------------------------------------------------------- POST /auth/register

def test_register_anon(client, settings):
    resp = client.post("/auth/register", json=NEW_ACCOUNT)
    assert resp.status_code == 201
    payload = decode_token(resp.json()["token"], settings)
    assert payload["username"] == "new"
    assert payload["isAdmin"] is False


def test_register_cannot_claim_admin(client):
    resp = client.post("/auth/register", json={**NEW_ACCOUNT, "isAdmin": True})
    assert resp.status_code == 400


def test_registered_user_can_log_in(client):
    client.post("/auth/register", json=NEW_ACCOUNT)
    resp = client.post("/auth/token", json={"username": "new", "password": "password"})
    assert resp.status_code == 200


def test_register_duplicate(client):
    resp = client.post("/auth/register", json={**NEW_ACCOUNT, "username": "u2"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Duplicate username: u2"


def test_register_missing_fields(client):
    resp = client.post("/auth/register", json={"username": "new"})
    assert resp.status_code == 400


def test_register_invalid_email(client):
    resp = client.post("/auth/register", json={**NEW_ACCOUNT, "email": "not-an-email"})
    assert resp.status_code == 400


# ---------------------------------------------------------------- GET /health

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
