"""Tests for registration, login and bearer-token resolution."""

from datetime import timedelta

from study_doctor.routers.auth import create_access_token

from conftest import make_settings


def test_register_then_login(client):
	res = client.post("/api/register", json={"username": "ana", "email": "Ana@Example.com", "password": "pw12345"})
	assert res.status_code == 201
	assert res.json() == {"message": "User registered successfully"}

	res = client.post("/api/login", json={"email": "ana@example.com", "password": "pw12345"})
	assert res.status_code == 200
	body = res.json()
	assert body["username"] == "ana"
	assert body["email"] == "ana@example.com"
	assert isinstance(body["token"], str)


def test_duplicate_email_rejected(client):
	payload = {"username": "ana", "email": "ana@example.com", "password": "pw12345"}
	assert client.post("/api/register", json=payload).status_code == 201
	res = client.post("/api/register", json=payload)
	assert res.status_code == 400
	assert res.json()["detail"] == "User already exists"


def test_register_requires_fields(client):
	res = client.post("/api/register", json={"username": "ana", "email": "", "password": "pw"})
	assert res.status_code == 400


def test_wrong_password(client, register_and_login):
	register_and_login(email="bo@example.com")
	res = client.post("/api/login", json={"email": "bo@example.com", "password": "nope"})
	assert res.status_code == 400
	assert res.json()["detail"] == "Invalid credentials"


def test_unknown_email(client):
	assert client.post("/api/login", json={"email": "ghost@example.com", "password": "x"}).status_code == 400


def test_me_returns_current_user(client, auth_headers):
	res = client.get("/api/me", headers=auth_headers)
	assert res.status_code == 200
	assert res.json()["email"] == "student@example.com"


def test_missing_token_is_unauthorized(client):
	assert client.get("/api/me").status_code == 401


def test_expired_token_is_forbidden(client, auth_headers):
	token = create_access_token({"sub": "1"}, make_settings(), expires_delta=timedelta(minutes=-5))
	res = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
	assert res.status_code == 403


def test_token_signed_with_other_secret_is_forbidden(client, auth_headers):
	token = create_access_token({"sub": "1"}, make_settings(JWT_SECRET_KEY="other"))
	assert client.get("/api/me", headers={"Authorization": f"Bearer {token}"}).status_code == 403


def test_token_for_deleted_user_is_forbidden(client, auth_headers):
	token = create_access_token({"sub": "999"}, make_settings())
	assert client.get("/api/me", headers={"Authorization": f"Bearer {token}"}).status_code == 403
