# Overview: Flask routes for product listings; parses form/JSON input and returns JSON or redirects.

# backend/market/routes/products.py
"""
Product routes.

OWNERSHIP: The acting username comes from @with_identity (query param,
X-Username header or username cookie). It scopes listings, becomes the owner
of new products, and must match the owner to delete one.

Create/update are form posts from the inventory page and answer with a
redirect back to it; list/get/delete answer JSON.
"""
from flask import Blueprint, current_app, g, jsonify, redirect, request

from ..decorators import with_identity
from ..extensions import db
from ..request_utils import form_payload
from ..services import products_service
from ..services.file_service import discard_file, save_upload
from ..validation import ForbiddenError, NotFoundError, ValidationError

INVENTORY_PAGE = "/inventory.html"

products_bp = Blueprint("products", __name__, url_prefix="/products")


def _save_image() -> str | None:
    image = request.files.get("image")
    if image is None or not image.filename:
        return None
    return save_upload(
        image,
        folder=current_app.config["UPLOAD_FOLDER"],
        allowed_extensions=current_app.config["IMAGE_EXTENSIONS"],
    )


@products_bp.get("")
@with_identity
def list_products_route():
    """List products, scoped to the caller when an identity is present."""
    try:
        products = products_service.list_products(g.actor)
    except Exception:
        current_app.logger.exception("Failed to load products")
        return jsonify({"error": "Server error"}), 500

    current_app.logger.info(
        "GET /products user=%s source=%s returning=%d", g.actor, g.actor_source, len(products)
    )
    return jsonify(products)


@products_bp.get("/<product_id>")
def get_product_route(product_id: str):
    try:
        product = products_service.get_product(product_id)
    except Exception:
        current_app.logger.exception("Failed to load product %s", product_id)
        return jsonify({"error": "Server error"}), 500

    if product is None:
        return jsonify({"error": "Product not found"}), 404
    return jsonify(product.to_dict())


@products_bp.post("")
@with_identity
def create_product_route():
    """
    Create a product from the inventory form.

    Form fields: title, description, price, stock, image (file).
    The caller's identity becomes the owner.
    """
    data = form_payload()
    image = None
    try:
        image = _save_image()
        created = products_service.create_product(
            title=data.get("title"),
            description=data.get("description"),
            price=data.get("price"),
            stock=data.get("stock"),
            image=image,
            owner=g.actor,
        )
    except ValidationError as e:
        discard_file(current_app.config["UPLOAD_FOLDER"], image)
        return str(e), 400
    except Exception:
        discard_file(current_app.config["UPLOAD_FOLDER"], image)
        db.session.rollback()
        current_app.logger.exception("Failed to create product")
        return "Server error", 500

    current_app.logger.info("Created product id=%s by=%s", created["id"], g.actor)
    return redirect(INVENTORY_PAGE)


@products_bp.post("/<product_id>")
def update_product_route(product_id: str):
    """
    Update a product from the inventory form.

    Any of title, description, price, stock may be sent; omitted fields keep
    their stored values. A new image replaces the old one, and the old file is
    removed once the update commits.
    """
    data = form_payload()
    patch = {k: data[k] for k in ("title", "description", "price", "stock") if k in data}

    image = None
    try:
        if products_service.get_product(product_id) is None:
            raise NotFoundError("Product not found")
        image = _save_image()
        if image:
            patch["image"] = image
        products_service.update_product(product_id, patch)
    except NotFoundError:
        discard_file(current_app.config["UPLOAD_FOLDER"], image)
        return "Product not found", 404
    except ValidationError as e:
        discard_file(current_app.config["UPLOAD_FOLDER"], image)
        return str(e), 400
    except Exception:
        discard_file(current_app.config["UPLOAD_FOLDER"], image)
        db.session.rollback()
        current_app.logger.exception("Failed to update product %s", product_id)
        return "Server error", 500

    current_app.logger.info("Updated product id=%s fields=%s", product_id, ", ".join(sorted(patch)))
    return redirect(INVENTORY_PAGE)


@products_bp.delete("/<product_id>")
@with_identity
def delete_product_route(product_id: str):
    """
    Delete a product.

    Products with an owner can only be deleted by that owner (403 otherwise);
    products without an owner can be deleted by anyone.
    """
    try:
        products_service.remove_product_as(product_id, g.actor)
    except NotFoundError:
        return jsonify({"error": "Product not found"}), 404
    except ForbiddenError:
        current_app.logger.info("DELETE forbidden id=%s requester=%s", product_id, g.actor)
        return jsonify({"error": "Forbidden"}), 403
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to delete product %s", product_id)
        return jsonify({"error": "Server error"}), 500

    current_app.logger.info("Deleted product id=%s by=%s", product_id, g.actor)
    return jsonify({"ok": True}), 200
