"""
Pytest fixtures for the marketplace backend tests.

Every test gets a fresh app backed by its own SQLite file and its own
stored-file folders under tmp_path.
"""

import os

import httpx
import pytest

from market import create_app
from market.extensions import db
from market.services import products_service
from market.services.geo_service import MapsClient


@pytest.fixture()
def app(tmp_path):
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'market.sqlite3'}",
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
        'PAYMENT_PROOF_FOLDER': str(tmp_path / 'payment-proofs'),
        'MAPS_API_KEY': 'test-key',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture()
def upload_folder(app):
    folder = app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    return folder


@pytest.fixture()
def stored_image(upload_folder):
    """Write a fake stored image and return its filename."""
    def _make(name: str = 'old-image.png') -> str:
        with open(os.path.join(upload_folder, name), 'wb') as fh:
            fh.write(b'\x89PNG fake')
        return name
    return _make


@pytest.fixture()
def make_product(app):
    """Create a product directly through the catalog store."""
    def _make(**fields) -> dict:
        fields.setdefault('title', 'Lamp')
        return products_service.create_product(**fields)
    return _make


@pytest.fixture()
def maps_stub(app):
    """
    Route the maps client through an httpx.MockTransport.

    Usage: maps_stub(handler) where handler(request) -> httpx.Response.
    Returns the list of requests the provider received.
    """
    seen = []

    def _install(handler):
        def _record(request):
            seen.append(request)
            return handler(request)

        app.extensions['maps_client'] = MapsClient.from_config(
            app.config, transport=httpx.MockTransport(_record)
        )
        return seen

    return _install
