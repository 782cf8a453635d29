"""
services.auth_service - Registration, login, OTP verification and JWTs.

Passwords are stored as werkzeug hashes; tokens are HS256 JWTs carrying
the user id and username.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Mapping

import jwt
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from db.models import User, UserOtp
from services import mail_service
from services.errors import BadInput, Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Verify your account"


def generate_otp(length: int) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


def _naive_utc(dt: datetime) -> datetime:
    # SQLite hands DateTime back without tzinfo
    return dt.astimezone(timezone.utc).replace(tzinfo=None) if dt.tzinfo else dt


def _require(data: dict, *keys: str) -> list[str]:
    values, missing = [], []
    for k in keys:
        val = data.get(k)
        if not isinstance(val, str) or not val.strip():
            missing.append(f"{k} is required")
        values.append(val.strip() if isinstance(val, str) else val)
    if missing:
        raise BadInput("Validation failed", details=missing)
    return values


# ── Tokens ─────────────────────────────────────────────────────────────

def issue_token(user: User, settings: Mapping) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "username": user.username,
        "iat": now,
        "exp": now + timedelta(minutes=settings["JWT_EXPIRES_MINUTES"]),
    }
    return jwt.encode(payload, settings["JWT_SECRET"], algorithm=settings["JWT_ALGORITHM"])


def decode_token(token: str, settings: Mapping) -> dict:
    """Return the claims or raise Forbidden."""
    try:
        return jwt.decode(token, settings["JWT_SECRET"], algorithms=[settings["JWT_ALGORITHM"]])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise Forbidden("Invalid or expired token") from None
    except jwt.InvalidTokenError as exc:
        logger.info(f"Rejected invalid token: {exc}")
        raise Forbidden("Invalid or expired token") from None


class AuthService:

    @staticmethod
    def register(session: Session, data: dict, settings: Mapping) -> User:
        """
        Create an unverified user and mail them an OTP.  Nothing is
        committed by the caller unless the mail was handed off.
        """
        username, password, email = _require(data, "username", "password", "email")

        clash = session.query(User).filter(
            (User.username == username) | (User.email == email)
        ).first()
        if clash:
            raise Conflict("Username or Email already exists")

        user = User(
            username=username,
            password=generate_password_hash(password),
            email=email,
        )
        session.add(user)
        session.flush()

        ttl = settings["OTP_TTL_MINUTES"]
        code = generate_otp(settings["OTP_LENGTH"])
        session.add(UserOtp(
            user_id=user.id,
            otp_code=code,
            expires_at=_naive_utc(datetime.now(timezone.utc) + timedelta(minutes=ttl)),
        ))
        session.flush()

        mail_service.send_mail(
            settings, email, OTP_SUBJECT,
            f"<p>Your OTP code is <b>{code}</b>. It will expire in {ttl} minutes.</p>",
        )
        logger.info(f"Registered user {username} (id={user.id})")
        return user

    @staticmethod
    def login(session: Session, data: dict, settings: Mapping) -> tuple[User, str]:
        username, password = _require(data, "username", "password")
        user = session.query(User).filter(User.username == username).first()
        if user is None or not check_password_hash(user.password, password):
            raise BadInput("Invalid username or password")
        return user, issue_token(user, settings)

    @staticmethod
    def verify_otp(session: Session, data: dict) -> User:
        email, otp = _require(data, "email", "otp")
        user = session.query(User).filter(User.email == email).first()
        if user is None:
            raise NotFound("User not found")
        if user.is_verified:
            raise BadInput("User already verified")

        now = _naive_utc(datetime.now(timezone.utc))
        match = (
            session.query(UserOtp)
            .filter(
                UserOtp.user_id == user.id,
                UserOtp.otp_code == otp,
                UserOtp.expires_at > now,
            )
            .order_by(UserOtp.created_at.desc(), UserOtp.id.desc())
            .first()
        )
        if match is None:
            raise BadInput("Invalid or expired OTP")

        user.is_verified = True
        session.query(UserOtp).filter(UserOtp.user_id == user.id).delete(
            synchronize_session="fetch")
        session.flush()
        logger.info(f"Verified user {user.username}")
        return user
