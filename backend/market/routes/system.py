# backend/market/routes/system.py
"""
System health endpoint.

Checks the dependencies the marketplace cannot serve without: the database
and the two stored-file folders.
"""

import os
import time
from flask import Blueprint, current_app
from ..extensions import db
from ..models import Product, Transaction, User
from ..time_utils import to_iso_z, utcnow

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity and basic operations.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        details = {
            "users": db.session.query(User).count(),
            "products": db.session.query(Product).count(),
            "transactions": db.session.query(Transaction).count(),
        }
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


def check_storage_health() -> dict:
    """
    Stored-file folders must be writable once they exist.

    A folder that does not exist yet is "degraded": it is created on the
    first upload.
    """
    folders = {
        "uploads": current_app.config["UPLOAD_FOLDER"],
        "payment_proofs": current_app.config["PAYMENT_PROOF_FOLDER"],
    }
    status = "healthy"
    details = {}
    for name, folder in folders.items():
        if not os.path.isdir(folder):
            details[name] = "missing"
            status = "degraded" if status == "healthy" else status
        elif not os.access(folder, os.W_OK):
            details[name] = "not writable"
            status = "unhealthy"
        else:
            details[name] = "ok"
    return {"status": status, "details": details}


@system_bp.get("/health")
def health():
    """
    Returns:
    - 200: healthy or degraded
    - 503: one or more checks unhealthy
    """
    start_time = time.time()

    database_health = check_database_health()
    storage_health = check_storage_health()

    all_checks = [database_health, storage_health]
    if any(check["status"] == "unhealthy" for check in all_checks):
        overall_status, http_status = "unhealthy", 503
    elif any(check["status"] == "degraded" for check in all_checks):
        overall_status, http_status = "degraded", 200
    else:
        overall_status, http_status = "healthy", 200

    response = {
        "status": overall_status,
        "timestamp": to_iso_z(utcnow()),
        "total_latency_ms": round((time.time() - start_time) * 1000, 2),
        "checks": {
            "database": database_health,
            "storage": storage_health,
        }
    }
    return response, http_status
