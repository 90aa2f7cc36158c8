# Overview: Service-layer operations for accounts; encapsulates business logic and database work.

"""
Account store.

SECURITY NOTES:
- Passwords are stored and compared as plaintext. This mirrors the data the
  marketplace frontend already relies on; it is a known defect, not a design.
- Username uniqueness is enforced by the primary key, so two concurrent
  registrations for the same name cannot both succeed.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import FlushError

from ..extensions import db
from ..models import User
from ..validation import ConflictError, ValidationError


def find_user_by_username(username: str | None) -> User | None:
    if not username:
        return None
    return db.session.get(User, username)


def list_users() -> list[User]:
    return db.session.query(User).order_by(User.username.asc()).all()


def create_user(username: str, password: str, email: str) -> User:
    """
    Create a new account.

    Raises:
        ValidationError: if any field is missing
        ConflictError: if the username is already taken
    """
    if not username or not password or not email:
        raise ValidationError("username, password and email are required")

    user = User(username=username, password=password, email=email)
    db.session.add(user)
    try:
        db.session.commit()
    except (IntegrityError, FlushError):
        db.session.rollback()
        raise ConflictError("Username already exists. Please choose another.")
    return user


def authenticate(username: str | None, password: str | None) -> User | None:
    """Exact, case-sensitive match on both username and password."""
    user = find_user_by_username(username)
    if user is None or password is None:
        return None
    if user.password != password:
        return None
    return user
