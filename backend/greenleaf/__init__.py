# backend/greenleaf/__init__.py
from __future__ import annotations

from flask import Flask, request

from .config import Config
from .extensions import BACKEND_EXTENSION_KEY, db, migrate


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # One storage backend per app, handed to routes through get_backend()
    from .storage import build_backend
    backend = build_backend(app.config)
    app.extensions[BACKEND_EXTENSION_KEY] = backend
    if backend.kind == "records":
        backend.initialize()

    # Register blueprints
    from .routes.system import system_bp
    from .routes.products import products_bp
    from .routes.customers import customers_bp
    from .routes.employees import employees_bp
    from .routes.orders import orders_bp
    from .routes.inventory import inventory_bp
    from .routes.catalog import catalog_bp
    from .routes.dispensaries import dispensaries_bp
    from .routes.cart import cart_bp
    from .routes.exports import exports_bp
    from .routes.reports import reports_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(employees_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(dispensaries_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(exports_bp)
    app.register_blueprint(reports_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allowed_origins = {
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        }
        if origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
