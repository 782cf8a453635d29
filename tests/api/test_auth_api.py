from datetime import datetime, timedelta, timezone

import jwt
import pytest

from db.models import User, UserOtp
from services import auth_service, mail_service
from services.mail_service import MailError
from tests.factories import UserFactory


@pytest.fixture
def outbox(monkeypatch):
    """Capture mail instead of logging it."""
    sent = []

    def _send(settings, to, subject, html):
        sent.append({"to": to, "subject": subject, "html": html})

    monkeypatch.setattr(mail_service, "send_mail", _send)
    return sent


def _register(client, **overrides):
    body = {"username": "johndoe", "password": "password123", "email": "john@example.com"}
    body.update(overrides)
    return client.post("/api/v1/auth/register", json=body)


def test_register_mails_an_otp(client, outbox, count_rows):
    response = _register(client)

    assert response.status_code == 201
    assert response.get_json()["user"]["username"] == "johndoe"
    assert "password" not in response.get_json()["user"]
    assert len(outbox) == 1
    assert outbox[0]["to"] == "john@example.com"
    assert outbox[0]["subject"] == "Verify your account"
    assert count_rows(UserOtp) == 1


def test_register_clash(client, outbox):
    _register(client)
    response = _register(client, username="other")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Username or Email already exists"}


def test_register_requires_fields(client, outbox):
    response = client.post("/api/v1/auth/register", json={"username": "x"})
    assert response.status_code == 400
    assert response.get_json()["details"] == ["password is required", "email is required"]


def test_register_rolls_back_when_mail_fails(client, monkeypatch, count_rows):
    def _fail(*_a, **_kw):
        raise MailError("smtp down")

    monkeypatch.setattr(mail_service, "send_mail", _fail)
    response = _register(client)

    assert response.status_code == 500
    assert response.get_json() == {"error": "Registration failed"}
    assert count_rows(User) == 0


def test_login_issues_token(app, session, client):
    user = UserFactory(username="jane")
    response = client.post(
        "/api/v1/auth/login", json={"username": "jane", "password": "password123"},
    )

    assert response.status_code == 200
    token = response.get_json()["token"]
    claims = jwt.decode(token, app.config["JWT_SECRET"], algorithms=["HS256"])
    assert (claims["id"], claims["username"]) == (user.id, "jane")


@pytest.mark.parametrize("username, password", [("jane", "wrong"), ("nobody", "password123")])
def test_login_rejects(session, client, username, password):
    UserFactory(username="jane")
    response = client.post(
        "/api/v1/auth/login", json={"username": username, "password": password},
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid username or password"}


def test_verify_otp_flow(client, outbox, count_rows):
    _register(client)
    code = outbox[0]["html"].split("<b>")[1].split("</b>")[0]

    wrong = client.post("/api/v1/auth/verify-otp", json={"email": "john@example.com", "otp": "000000x"})
    assert wrong.status_code == 400
    assert wrong.get_json() == {"error": "Invalid or expired OTP"}

    ok = client.post("/api/v1/auth/verify-otp", json={"email": "john@example.com", "otp": code})
    assert ok.status_code == 200
    assert ok.get_json() == {"message": "Account verified successfully"}
    assert count_rows(UserOtp) == 0

    again = client.post("/api/v1/auth/verify-otp", json={"email": "john@example.com", "otp": code})
    assert again.get_json() == {"error": "User already verified"}


def test_verify_unknown_user(client):
    response = client.post("/api/v1/auth/verify-otp", json={"email": "x@example.com", "otp": "1"})
    assert response.status_code == 404
    assert response.get_json() == {"error": "User not found"}


def test_expired_otp_is_refused(session, client):
    user = UserFactory(email="late@example.com")
    session.add(UserOtp(
        user_id=user.id, otp_code="123456",
        expires_at=datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1),
    ))
    session.commit()

    response = client.post(
        "/api/v1/auth/verify-otp", json={"email": "late@example.com", "otp": "123456"},
    )
    assert response.status_code == 400


def test_expired_token_is_forbidden(app, session, client):
    user = UserFactory()
    settings = dict(app.config, JWT_EXPIRES_MINUTES=-1)
    token = auth_service.issue_token(user, settings)
    response = client.delete(
        "/api/v1/products/1", headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 403


def test_generate_otp_is_numeric():
    code = auth_service.generate_otp(6)
    assert len(code) == 6 and code.isdigit()
