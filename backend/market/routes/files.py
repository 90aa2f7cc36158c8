# Overview: Serves stored product images and payment proofs.

from flask import Blueprint, current_app, send_from_directory

files_bp = Blueprint("files", __name__)


@files_bp.get("/uploads/<path:filename>")
def uploaded_image_route(filename: str):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)


@files_bp.get("/payment-proofs/<path:filename>")
def payment_proof_route(filename: str):
    return send_from_directory(current_app.config["PAYMENT_PROOF_FOLDER"], filename)
