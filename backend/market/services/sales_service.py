# Overview: Service-layer operations for the sales ledger; encapsulates business logic and database work.

"""
Sales ledger invariants (authoritative)

- Append-only: transactions are created once and never updated or deleted.
- Sale numbers are sequential: next = (highest existing number, or 0) + 1.
- The number is allocated from transaction_sequences inside the same DB
  transaction as the insert, so concurrent checkouts cannot receive the
  same number.
- total = sum(price * qty) and itemCount = sum(qty) over the line items; a
  line without qty counts as 1, a line without price counts as 0.
"""

from __future__ import annotations

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Transaction, TransactionSequence
from ..time_utils import display_date, to_iso_z, utcnow
from ..validation import ValidationError, coerce_number
from .concurrency import KEY_COLLISION_ERRORS, run_with_retry

SEQUENCE_NAME = "sale"
DEFAULT_PAYMENT_METHOD = "CASH"


class LedgerError(Exception):
    """Raised when the sale-number sequence cannot be allocated."""
    pass


def list_transactions(owner: str | None = None) -> list[dict]:
    """Most recent first; restricted to an exact owner match when given."""
    query = db.session.query(Transaction)
    if owner:
        query = query.filter(Transaction.owner == owner)
    return [t.to_dict() for t in query.order_by(Transaction.id.desc()).all()]


def _allocate() -> int:
    stmt = (
        update(TransactionSequence)
        .where(TransactionSequence.name == SEQUENCE_NAME)
        .values(next_number=TransactionSequence.next_number + 1)
        .execution_options(synchronize_session=False)
    )
    result = db.session.execute(stmt)
    max_id = db.session.query(func.max(Transaction.id)).scalar() or 0
    if result.rowcount:
        seq = db.session.query(TransactionSequence).filter_by(name=SEQUENCE_NAME).one()
        db.session.refresh(seq)
        allocated = seq.next_number - 1
        if allocated <= max_id:
            # Rows were written with explicit ids past the counter; catch up.
            seq.next_number = max_id + 2
            db.session.flush()
            allocated = max_id + 1
        return allocated

    # First allocation: seed from whatever the ledger already holds.
    seq = TransactionSequence(name=SEQUENCE_NAME, next_number=max_id + 2)
    db.session.add(seq)
    db.session.flush()
    return max_id + 1


def next_transaction_id() -> int:
    """
    Allocate the next sale number.

    Returns (highest existing sale number, or 0) + 1. The counter bump is
    flushed but not committed; the caller commits it together with the
    transaction row, and a rollback releases the number again.
    """
    try:
        return _allocate()
    except IntegrityError:
        # Another writer created the sequence row first; bump theirs instead.
        db.session.rollback()
        try:
            return _allocate()
        except IntegrityError as exc:
            db.session.rollback()
            raise LedgerError("Could not allocate a sale number") from exc


def compute_totals(items: list) -> tuple[float, int]:
    total = 0
    item_count = 0
    for index, item in enumerate(items):
        qty = item.get("qty")
        price = item.get("price")
        qty = 1 if qty in (None, "") else coerce_number(f"items[{index}].qty", qty)
        price = 0 if price in (None, "") else coerce_number(f"items[{index}].price", price)
        total += qty * price
        item_count += qty
    return total, item_count


def validate_items(items) -> list[dict]:
    if not items or not isinstance(items, list):
        raise ValidationError("No items in transaction")
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"items[{index}] must be an object")
    return items


def create_transaction(data: dict) -> Transaction:
    """
    Persist a fully computed transaction.

    `data` uses the wire field names (id, owner, items, total, itemCount,
    paymentMethod, proofUploaded, proofFilename, location, timestamp, date).
    A missing id is allocated here.
    """
    t = Transaction(
        id=data.get("id") or next_transaction_id(),
        owner=data.get("owner"),
        total=data.get("total"),
        item_count=data.get("itemCount"),
        payment_method=data.get("paymentMethod") or DEFAULT_PAYMENT_METHOD,
        proof_uploaded=bool(data.get("proofUploaded")),
        proof_filename=data.get("proofFilename"),
        timestamp=data.get("timestamp"),
        date=data.get("date"),
    )
    t.items = data.get("items") or []
    t.location = data.get("location")
    db.session.add(t)
    db.session.commit()
    return t


def record_sale(
    *,
    items,
    owner: str | None = None,
    payment_method: str | None = None,
    proof_uploaded=False,
    proof_filename: str | None = None,
    location=None,
    timestamp: str | None = None,
) -> dict:
    """
    Validate a checkout, compute its totals and append it to the ledger.

    Allocation and insert share one DB transaction; the whole unit is retried
    if a concurrent writer wins the race.

    Raises:
        ValidationError: no items, or a non-numeric price/qty
    """
    items = validate_items(items)
    total, item_count = compute_totals(items)

    def _op() -> dict:
        t = create_transaction({
            "id": next_transaction_id(),
            "owner": owner or None,
            "items": items,
            "total": total,
            "itemCount": item_count,
            "paymentMethod": payment_method or DEFAULT_PAYMENT_METHOD,
            "proofUploaded": bool(proof_uploaded),
            "proofFilename": proof_filename or None,
            "location": location,
            "timestamp": timestamp or to_iso_z(utcnow()),
            "date": display_date(),
        })
        return t.to_dict()

    return run_with_retry(_op, retry_on=KEY_COLLISION_ERRORS)
