#!/usr/bin/env python3
"""
StockDesk - Products & employees REST backend
=============================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging
from typing import Mapping

from flask import Flask, jsonify

import config
from db import init_db
from api import api_bp
from api.errors import register_app_handlers


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def create_app(overrides: Mapping | None = None) -> Flask:
    """Flask application factory.  `overrides` replaces config.py values."""

    app = Flask(__name__)
    app.config.from_mapping(config.as_dict())
    if overrides:
        app.config.from_mapping(overrides)
    app.secret_key = app.config["SECRET"]
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"]

    configure_logging(app.config["LOG_LEVEL"])

    # ── Initialise database ─────────────────────────────────────────
    init_db(app.config["DB_URL"])

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)
    register_app_handlers(app)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


def main():
    print("=" * 56)
    print("  StockDesk - Products & Employees API")
    print("=" * 56)

    app = create_app()

    print(f"  Database: {config.DB_URL}")
    print(f"  Uploads:  {config.UPLOAD_DIR}")
    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
