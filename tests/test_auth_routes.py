import jwt
import pytest

from tollgate.auth import JWT_ALGORITHM, JWT_SECRET, hash_password, verify_password


async def register(client, **overrides):
    payload = {"username": "agent1", "password": "secret", "interchange": "NS Interchange"}
    payload.update(overrides)
    return await client.post("/api/auth/register", json=payload)


def test_password_hashing():
    password_hash = hash_password("secret")

    assert password_hash != "secret"
    assert verify_password("secret", password_hash)
    assert not verify_password("wrong", password_hash)
    assert not verify_password("secret", "not-a-bcrypt-hash")


async def test_register(client):
    r = await register(client)

    assert r.status_code == 201
    assert r.json()["message"] == "User registered successfully."


@pytest.mark.parametrize("missing", ["username", "password", "interchange"])
async def test_register_requires_fields(client, missing):
    r = await register(client, **{missing: None})

    assert r.status_code == 400
    assert "required" in r.json()["detail"]


async def test_register_rejects_unknown_interchange(client):
    r = await register(client, interchange="Invalid")

    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid interchange: Invalid"


async def test_register_duplicate_username(client):
    await register(client)
    r = await register(client, interchange="Bahria Interchange")

    assert r.status_code == 409
    assert "already exists" in r.json()["detail"]


async def test_login_issues_token_and_cookie(client):
    await register(client)
    r = await client.post("/api/auth/login", json={"username": "agent1", "password": "secret"})

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["interchange"] == "NS Interchange"
    assert body["tokenType"] == "bearer"
    assert r.cookies.get("token") == body["accessToken"]

    claims = jwt.decode(body["accessToken"], JWT_SECRET, algorithms=[JWT_ALGORITHM])
    assert claims["username"] == "agent1"
    assert claims["interchange"] == "NS Interchange"


async def test_login_with_other_interchange(client):
    await register(client)
    r = await client.post("/api/auth/login",
                          json={"username": "agent1", "password": "secret", "interchange": "Bahria Interchange"})

    assert r.status_code == 200
    claims = jwt.decode(r.json()["accessToken"], JWT_SECRET, algorithms=[JWT_ALGORITHM])
    assert claims["interchange"] == "Bahria Interchange"


async def test_login_requires_fields(client):
    r = await client.post("/api/auth/login", json={"username": "agent1"})

    assert r.status_code == 400


async def test_login_rejects_unknown_interchange(client):
    r = await client.post("/api/auth/login",
                          json={"username": "agent1", "password": "secret", "interchange": "Invalid"})

    assert r.status_code == 400
    assert "Invalid interchange" in r.json()["detail"]


@pytest.mark.parametrize("username,password", [("nobody", "secret"), ("agent1", "wrong")])
async def test_login_rejects_bad_credentials(client, username, password):
    await register(client)
    r = await client.post("/api/auth/login", json={"username": username, "password": password})

    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid username or password."


async def test_token_from_login_opens_entries_at_its_interchange(client):
    await register(client)
    login = await client.post("/api/auth/login",
                              json={"username": "agent1", "password": "secret", "interchange": "Ph4 Interchange"})
    headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}
    client.cookies.clear()

    r = await client.post("/api/entry", json={"numberPlate": "XYZ-999"}, headers=headers)

    assert r.status_code == 201
    assert r.json()["entry"]["entryInterchange"] == "Ph4 Interchange"
