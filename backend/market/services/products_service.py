# backend/market/services/products_service.py
"""
Catalog store.

OWNERSHIP: Products record the username that listed them. The only
authorization rule in the marketplace lives here: a product with an owner
can only be deleted by that owner. Products without an owner are deletable
by anyone (legacy listings created before identities existed).

FILES: The image filename is stored on the row; the file itself lives in
UPLOAD_FOLDER. Replaced/orphaned images are removed after commit via
file_service.discard_after_commit.
"""
from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Product
from ..validation import ForbiddenError, NotFoundError, coerce_int
from .concurrency import run_with_retry
from .file_service import discard_after_commit
from .identifier_service import new_product_id

DEFAULT_TITLE = "Untitled"
PRODUCT_MUTABLE_FIELDS = ("title", "description", "price", "stock", "image")


def list_products(owner: str | None = None) -> list[dict]:
    """
    All products, or only those whose owner exactly equals `owner`.

    Order is unspecified; clients sort for display.
    """
    query = db.session.query(Product)
    if owner:
        query = query.filter(Product.owner == owner)
    return [p.to_dict() for p in query.all()]


def get_product(product_id: str) -> Product | None:
    return db.session.get(Product, str(product_id))


def create_product(
    *,
    title: str | None = None,
    description: str | None = None,
    price: str | None = None,
    stock=None,
    image: str | None = None,
    owner: str | None = None,
    product_id: str | None = None,
) -> dict:
    """
    Create a product listing.

    Blank title falls back to "Untitled", description/price to "" and stock
    to 0. When product_id is omitted a time-derived id is allocated; a
    primary-key collision is retried with a fresh id.

    Raises:
        ValidationError: if stock is not an integer
    """
    stock_value = coerce_int("stock", stock) if stock not in (None, "") else 0

    def _op() -> dict:
        p = Product(
            id=product_id or new_product_id(),
            title=title or DEFAULT_TITLE,
            description=description or "",
            price=price or "",
            stock=stock_value,
            image=image,
            owner=owner or None,
        )
        db.session.add(p)
        db.session.commit()
        return p.to_dict()

    if product_id:
        return _op()
    return run_with_retry(_op, retry_on=(IntegrityError,))


def update_product(product_id: str, patch: dict) -> dict:
    """
    Replace any of title/description/price/stock/image; absent keys keep the
    stored value, and so does a blank stock.

    When a new image replaces an existing one, the old file is removed after
    the commit succeeds.

    Raises:
        NotFoundError: if the product does not exist
        ValidationError: if stock is not an integer
    """
    p = get_product(product_id)
    if p is None:
        raise NotFoundError("Product not found")

    changes = {k: v for k, v in patch.items() if k in PRODUCT_MUTABLE_FIELDS}
    if changes.get("stock") in (None, ""):
        changes.pop("stock", None)
    else:
        changes["stock"] = coerce_int("stock", changes["stock"])

    if "image" in changes and changes["image"] != p.image:
        discard_after_commit(current_app.config["UPLOAD_FOLDER"], p.image)

    for k, v in changes.items():
        setattr(p, k, v)

    db.session.commit()
    return p.to_dict()


def delete_product(product_id: str) -> None:
    """
    Delete the product row and queue its image for removal after commit.

    Raises:
        NotFoundError: if the product does not exist
    """
    p = get_product(product_id)
    if p is None:
        raise NotFoundError("Product not found")

    discard_after_commit(current_app.config["UPLOAD_FOLDER"], p.image)
    db.session.delete(p)
    db.session.commit()


def remove_product_as(product_id: str, actor: str | None) -> Product:
    """
    Delete a product on behalf of `actor`.

    Raises:
        NotFoundError: if the product does not exist
        ForbiddenError: if the product has an owner other than `actor`
    """
    p = get_product(product_id)
    if p is None:
        raise NotFoundError("Product not found")

    if p.owner and p.owner != actor:
        raise ForbiddenError("Forbidden")

    delete_product(product_id)
    return p
