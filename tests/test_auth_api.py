from passlib.hash import argon2

from app.core.security_password import check_user_password
from app.models.user import User
from conftest import PASSWORD, auth_header

AUTH = "/api/v1/auth"


def _login(client, email="educator@daycare.com", password=PASSWORD):
    return client.post(f"{AUTH}/login", json={"email": email, "password": password})


def test_login_returns_tokens_and_user(client, educator):
    r = _login(client, email="Educator@Daycare.com")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["tokenType"] == "bearer"
    assert body["accessToken"] and body["refreshToken"]
    assert body["user"]["id"] == educator.id
    assert body["user"]["role"] == "educator"
    assert "hashedPassword" not in body["user"]


def test_login_rejects_bad_credentials(client, educator):
    assert _login(client, password="wrong-password").status_code == 401
    assert _login(client, email="nobody@daycare.com").status_code == 401


def test_oauth2_form_login(client, educator):
    r = client.post(f"{AUTH}/token", data={"username": "educator@daycare.com", "password": PASSWORD})
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "educator@daycare.com"


def test_profile(client, educator):
    token = _login(client).json()["accessToken"]
    r = client.get(f"{AUTH}/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["firstName"] == "Educator"
    assert client.get(f"{AUTH}/profile").status_code == 401


def test_refresh_rotates_token(client, educator):
    old = _login(client).json()["refreshToken"]

    r = client.post(f"{AUTH}/refresh", json={"refreshToken": old})
    assert r.status_code == 200, r.text
    new = r.json()["refreshToken"]
    assert new != old

    assert client.post(f"{AUTH}/refresh", json={"refreshToken": old}).status_code == 401
    assert client.post(f"{AUTH}/refresh", params={"token": new}).status_code == 200


def test_refresh_rejects_access_token(client, educator):
    access = _login(client).json()["accessToken"]
    assert client.post(f"{AUTH}/refresh", json={"refreshToken": access}).status_code == 401


def test_logout_revokes_refresh(client, educator):
    tok = _login(client).json()["refreshToken"]
    r = client.post(f"{AUTH}/logout", json={"refreshToken": tok})
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert client.post(f"{AUTH}/refresh", json={"refreshToken": tok}).status_code == 401


def test_deactivated_user_loses_access(client, educator, admin_headers):
    headers = auth_header(educator)
    assert client.get(f"{AUTH}/profile", headers=headers).status_code == 200
    assert client.delete(f"/api/v1/users/{educator.id}", headers=admin_headers).status_code == 204
    assert client.get(f"{AUTH}/profile", headers=headers).status_code == 401
    assert _login(client).status_code == 401


def test_login_upgrades_outdated_hash(client, db, educator):
    educator.hashed_password = argon2.using(memory_cost=8192, rounds=1).hash(PASSWORD)
    db.commit()

    assert _login(client).status_code == 200
    db.expire_all()
    assert "m=19456" in db.get(User, educator.id).hashed_password
    # o hash novo continua válido
    assert _login(client).status_code == 200


def test_unreadable_hash_is_a_failed_login(client, db, educator):
    educator.hashed_password = "not-a-hash"
    db.commit()
    assert _login(client).status_code == 401


def test_check_user_password_leaves_current_hash_alone(educator):
    before = educator.hashed_password
    assert check_user_password(educator, PASSWORD)
    assert not check_user_password(educator, "wrong-password")
    assert educator.hashed_password == before
