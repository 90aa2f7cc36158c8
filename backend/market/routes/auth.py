# Overview: Flask routes for account registration, login and the identity cookie.

# backend/market/routes/auth.py
"""
Account routes.

SECURITY: There are no sessions. A successful register/login sets a plain,
unsigned `username` cookie (HttpOnly) that later requests present as their
identity. Logout just clears it.
"""

from urllib.parse import quote

from flask import Blueprint, current_app, jsonify, make_response, redirect, request

from ..extensions import db
from ..identity import cookie_identity
from ..request_utils import form_payload
from ..services import auth_service
from ..validation import ConflictError, ValidationError

DASHBOARD_PAGE = "/dashboard.html"
DUPLICATE_USERNAME_MESSAGE = "Username already exists. Please choose another."

auth_bp = Blueprint("auth", __name__)


def _signed_in_redirect(username: str):
    response = make_response(redirect(f"{DASHBOARD_PAGE}?user={quote(username, safe='')}"))
    response.set_cookie(current_app.config["IDENTITY_COOKIE_NAME"], username, httponly=True)
    return response


@auth_bp.post("/register")
def register_route():
    """
    Create an account and sign it in.

    NOTE: A taken username answers 200 with a plain-text message (not 409);
    the registration page renders that text as-is.
    """
    data = form_payload()
    username = data.get("username")
    password = data.get("password")
    email = data.get("email")

    try:
        if auth_service.find_user_by_username(username) is not None:
            return DUPLICATE_USERNAME_MESSAGE, 200
        auth_service.create_user(username, password, email)
    except ConflictError:
        return DUPLICATE_USERNAME_MESSAGE, 200
    except ValidationError as e:
        return str(e), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to register user")
        return "Server error", 500

    current_app.logger.info("Registered user=%s", username)
    return _signed_in_redirect(username)


@auth_bp.post("/login")
def login_route():
    """
    Check username/password and set the identity cookie.

    Success redirects to the dashboard; bad credentials redirect to
    /?error=invalid without touching cookies.
    """
    data = form_payload()
    username = data.get("username")
    password = data.get("password")

    try:
        user = auth_service.authenticate(username, password)
    except Exception:
        current_app.logger.exception("Failed to login user")
        return redirect("/?error=server")

    if user is None:
        return redirect("/?error=invalid")

    current_app.logger.info("Login user=%s", user.username)
    return _signed_in_redirect(user.username)


@auth_bp.get("/logout")
def logout_route():
    response = make_response(redirect("/"))
    response.delete_cookie(current_app.config["IDENTITY_COOKIE_NAME"])
    return response


@auth_bp.get("/whoami")
def whoami_route():
    """Report the identity cookie only (query/header claims are ignored here)."""
    return jsonify({"username": cookie_identity(request)})
