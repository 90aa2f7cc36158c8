from __future__ import annotations

import json

from ..extensions import db


class Transaction(db.Model):
    """
    Sale record (append-only).

    WHY: The ledger is written once at checkout and never edited, so the line
    items and the geo payload are kept as opaque JSON text rather than being
    normalized into child tables.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        db.Index("ix_transactions_owner", "owner"),
    )

    # Sequential sale number, allocated by sales_service.next_transaction_id()
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    owner = db.Column(db.String(64), nullable=True)

    items_json = db.Column("items", db.Text, nullable=False)
    total = db.Column(db.Float, nullable=True)
    item_count = db.Column("itemCount", db.Integer, nullable=True)

    payment_method = db.Column("paymentMethod", db.String(32), nullable=True)
    proof_uploaded = db.Column("proofUploaded", db.Boolean, nullable=False, default=False)
    proof_filename = db.Column("proofFilename", db.String(255), nullable=True)

    location_json = db.Column("location", db.Text, nullable=True)

    # Caller-supplied ISO timestamp and server display string, both verbatim
    timestamp = db.Column(db.String(64), nullable=True)
    date = db.Column(db.String(32), nullable=True)

    @property
    def items(self) -> list:
        return json.loads(self.items_json) if self.items_json else []

    @items.setter
    def items(self, value: list) -> None:
        self.items_json = json.dumps(value)

    @property
    def location(self):
        return json.loads(self.location_json) if self.location_json else None

    @location.setter
    def location(self, value) -> None:
        self.location_json = json.dumps(value) if value is not None else None

    def __repr__(self) -> str:
        return f"<Transaction id={self.id} owner={self.owner!r} total={self.total}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner": self.owner,
            "items": self.items,
            "total": self.total,
            "itemCount": self.item_count,
            "paymentMethod": self.payment_method,
            "proofUploaded": bool(self.proof_uploaded),
            "proofFilename": self.proof_filename,
            "location": self.location,
            "timestamp": self.timestamp,
            "date": self.date,
        }


class TransactionSequence(db.Model):
    """
    Atomic sale-number counter.

    WHY: Reading MAX(id) and inserting MAX(id)+1 as two steps lets concurrent
    checkouts collide. The counter row is bumped with a single UPDATE inside
    the same DB transaction as the insert.
    """
    __tablename__ = "transaction_sequences"
    __table_args__ = (
        db.UniqueConstraint("name", name="uq_transaction_sequences_name"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), nullable=False)
    next_number = db.Column(db.Integer, nullable=False, default=1)
