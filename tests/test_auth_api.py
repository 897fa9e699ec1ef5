"""
Tests for register/login/logout and the auth_token cookie.
"""

from sqlalchemy import select

from safari_booking.db.models import User

from conftest import PASSWORD, login


class TestRegister:
	def test_register_sets_http_only_cookie(self, client, session_factory):
		response = client.post(
			"/auth/register",
			json={"name": "Amani", "email": "Amani@Example.com", "password": "long-enough-pw"},
		)
		assert response.status_code == 201, response.text
		body = response.json()
		assert body["user"]["email"] == "amani@example.com"
		assert body["user"]["role"] == "customer"

		cookie = response.headers["set-cookie"]
		assert cookie.startswith("auth_token=")
		assert "HttpOnly" in cookie
		assert "samesite=lax" in cookie.lower()
		assert "Max-Age=604800" in cookie
		assert "auth_token" not in response.text

		with session_factory() as s:
			user = s.scalars(select(User).where(User.email == "amani@example.com")).one()
			assert user.password_hash and user.password_hash != "long-enough-pw"

	def test_register_duplicate_email(self, client, customer):
		response = client.post(
			"/auth/register",
			json={"name": "Copy", "email": customer.email, "password": "long-enough-pw"},
		)
		assert response.status_code == 409
		assert response.json()["error_code"] == "conflict"

	def test_register_cannot_choose_role(self, client, session_factory):
		response = client.post(
			"/auth/register",
			json={"name": "Eve", "email": "eve@example.com", "password": "long-enough-pw", "role": "admin"},
		)
		assert response.status_code == 201
		assert response.json()["user"]["role"] == "customer"


class TestLogin:
	def test_login_and_me(self, client, customer):
		login(client, customer.email)
		response = client.get("/auth/me")
		assert response.status_code == 200
		assert response.json()["id"] == customer.id

	def test_unknown_email_and_wrong_password_look_the_same(self, client, customer):
		unknown = client.post("/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})
		wrong = client.post("/auth/login", json={"email": customer.email, "password": "not-the-password"})
		assert unknown.status_code == wrong.status_code == 401
		assert unknown.json() == wrong.json()
		assert unknown.json()["message"] == "Invalid credentials"

	def test_implicit_user_without_password_cannot_login(self, client, db):
		db.add(User(name="Guest", email="guest@example.com", password_hash=None))
		db.commit()
		response = client.post("/auth/login", json={"email": "guest@example.com", "password": ""})
		assert response.status_code == 401
		assert response.json()["error_code"] == "invalid_credentials"

	def test_logout_clears_session(self, client, customer):
		login(client, customer.email)
		assert client.post("/auth/logout").status_code == 200
		response = client.get("/auth/me")
		assert response.status_code == 401
		assert response.json()["error_code"] == "invalid_session"

	def test_garbage_cookie_is_anonymous(self, client):
		client.cookies.set("auth_token", "garbage")
		assert client.get("/auth/me").status_code == 401

	def test_token_for_deleted_user_is_anonymous(self, client, sessions):
		client.cookies.set("auth_token", sessions.issue("no-such-user", "admin"))
		assert client.get("/auth/me").status_code == 401
