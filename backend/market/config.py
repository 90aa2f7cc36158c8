# backend/market/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/market.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///market.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Stored files (product images and payment proofs)
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", os.path.abspath("uploads"))
    PAYMENT_PROOF_FOLDER = os.environ.get("PAYMENT_PROOF_FOLDER", os.path.abspath("payment-proofs"))
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", 5 * 1024 * 1024))
    IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
    PROOF_EXTENSIONS = IMAGE_EXTENSIONS | {"pdf"}

    # Google Maps web services
    MAPS_API_KEY = os.environ.get("MAPS_API_KEY")
    MAPS_BASE_URL = os.environ.get("MAPS_BASE_URL", "https://maps.googleapis.com/maps/api")
    MAPS_ELEVATION_TIMEOUT = float(os.environ.get("MAPS_ELEVATION_TIMEOUT", "1.0"))
    MAPS_GEOCODE_TIMEOUT = float(os.environ.get("MAPS_GEOCODE_TIMEOUT", "2.0"))

    # Caller identity (unauthenticated: query param, header, then cookie)
    IDENTITY_QUERY_PARAM = "username"
    IDENTITY_HEADER = os.environ.get("IDENTITY_HEADER", "X-Username")
    IDENTITY_COOKIE_NAME = os.environ.get("IDENTITY_COOKIE_NAME", "username")
