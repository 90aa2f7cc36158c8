# backend/market/__init__.py
import os

from flask import Flask

from .config import Config
from .extensions import db, migrate


def create_app(overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(os.path.dirname(os.path.dirname(__file__)), "migrations"))

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Caller identity and the maps client are swappable per app (tests, real auth)
    from .identity import RequestIdentityResolver
    from .services.geo_service import MapsClient
    app.extensions.setdefault("identity_provider", RequestIdentityResolver.from_config(app.config))
    app.extensions.setdefault("maps_client", MapsClient.from_config(app.config))

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.products import products_bp
    from .routes.transactions import transactions_bp
    from .routes.geo import geo_bp
    from .routes.files import files_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(geo_bp)
    app.register_blueprint(files_bp)

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
