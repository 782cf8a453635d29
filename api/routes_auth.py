"""
api.routes_auth - /api/v1/auth register / login / verify-otp.
"""

from flask import current_app, jsonify

from api import api_bp
from api.payload import json_body
from db import get_session
from services.auth_service import AuthService
from services.mail_service import MailError


@api_bp.route("/auth/register", methods=["POST"])
def register():
    """
    POST /api/v1/auth/register  {username, password, email}

    The account starts unverified; an OTP is mailed to `email`.
    """
    data = json_body()
    session = get_session()
    try:
        user = AuthService.register(session, data, current_app.config)
        session.commit()
        return jsonify({
            "message": "User registered successfully. Please check your email for OTP.",
            "user": user.to_public(),
        }), 201
    except MailError:
        session.rollback()
        return jsonify({"error": "Registration failed"}), 500
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@api_bp.route("/auth/login", methods=["POST"])
def login():
    """POST /api/v1/auth/login  {username, password} → JWT"""
    data = json_body()
    session = get_session()
    try:
        user, token = AuthService.login(session, data, current_app.config)
        return jsonify({
            "message": "User login successfully",
            "token": token,
            "user": user.to_public(),
        })
    finally:
        session.close()


@api_bp.route("/auth/verify-otp", methods=["POST"])
def verify_otp():
    """POST /api/v1/auth/verify-otp  {email, otp}"""
    data = json_body()
    session = get_session()
    try:
        AuthService.verify_otp(session, data)
        session.commit()
        return jsonify({"message": "Account verified successfully"})
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
