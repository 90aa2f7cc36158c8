# Overview: Flask routes for the sales ledger and payment-proof uploads; returns JSON responses.

# backend/market/routes/transactions.py
"""Sales ledger routes. The acting username scopes listings and owns new sales."""

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import with_identity
from ..extensions import db
from ..services import sales_service
from ..services.file_service import save_upload
from ..validation import ValidationError

PROOF_URL_PREFIX = "/payment-proofs/"

transactions_bp = Blueprint("transactions", __name__)


@transactions_bp.get("/transactions")
@with_identity
def list_transactions_route():
    """List sales, most recent first, scoped to the caller when known."""
    try:
        transactions = sales_service.list_transactions(g.actor)
    except Exception:
        current_app.logger.exception("Failed to load transactions")
        return jsonify({"error": "Server error"}), 500

    current_app.logger.info("GET /transactions user=%s returning=%d", g.actor, len(transactions))
    return jsonify(transactions)


@transactions_bp.post("/transactions")
@with_identity
def create_transaction_route():
    """
    Record a checkout.

    Body (JSON):
    {
        "items": [{"price": 10, "qty": 2}, ...],   // required, non-empty
        "paymentMethod": "CASH",                   // optional, default CASH
        "proofUploaded": false,                    // optional
        "proofFilename": "...",                    // optional, from /upload-payment-proof
        "location": {...},                         // optional geo payload
        "timestamp": "2026-01-01T00:00:00.000Z"    // optional, default now
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        transaction = sales_service.record_sale(
            items=data.get("items"),
            owner=g.actor,
            payment_method=data.get("paymentMethod"),
            proof_uploaded=data.get("proofUploaded"),
            proof_filename=data.get("proofFilename"),
            location=data.get("location"),
            timestamp=data.get("timestamp"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to save transaction")
        return jsonify({"error": "Server error"}), 500

    current_app.logger.info(
        "New transaction id=%s by=%s total=%s", transaction["id"], g.actor, transaction["total"]
    )
    return jsonify({"ok": True, "transaction": transaction})


@transactions_bp.post("/upload-payment-proof")
def upload_payment_proof_route():
    """Store a payment-proof file (multipart field "proof") and return its reference."""
    proof = request.files.get("proof")
    if proof is None or not proof.filename:
        return jsonify({"error": "No file uploaded"}), 400

    try:
        filename = save_upload(
            proof,
            folder=current_app.config["PAYMENT_PROOF_FOLDER"],
            allowed_extensions=current_app.config["PROOF_EXTENSIONS"],
            infix="proof-",
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to upload payment proof")
        return jsonify({"error": "Server error"}), 500

    current_app.logger.info("Uploaded payment proof %s", filename)
    return jsonify({
        "ok": True,
        "filename": filename,
        "path": PROOF_URL_PREFIX + filename,
    })
