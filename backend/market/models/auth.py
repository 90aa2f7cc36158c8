from __future__ import annotations

from ..extensions import db


class User(db.Model):
    """
    Marketplace accounts.

    Username is the natural primary key: it is what the identity cookie
    carries and what products/transactions record as their owner.

    NOTE: password is stored verbatim (plaintext). Hashing is out of scope for
    this service; do not reuse these credentials anywhere else.
    """
    __tablename__ = "users"

    username = db.Column(db.String(64), primary_key=True)
    password = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User username={self.username!r}>"
