"""Local library catalog: authors, books, genres and book copies.

Application factory. Routes live in the ``catalog`` blueprint (views.py).
"""

from collections.abc import Mapping

from flask import Flask, redirect, url_for
from flask_talisman import Talisman
from flask_wtf import CSRFProtect

from .cli import register_commands
from .config import Config
from .integrity import RelationIntegrity
from .logging_config import setup_logging
from .models import db
from .repository import CatalogRepository
from .views import bp as catalog_bp

csrf = CSRFProtect()

# Security headers; adjust CSP if adding external resources
CONTENT_SECURITY_POLICY = {
    'default-src': ["'self'"],
    'style-src': ["'self'", "https://cdn.jsdelivr.net", "'unsafe-inline'"],
    'img-src': ["'self'", "data:"],
}


def create_app(config=None):
    """Create and configure the Flask app.

    ``config`` may be a config object (class or module) or a mapping of
    overrides applied on top of ``Config``.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config, Mapping):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    if app.config.get("CONFIGURE_LOGGING", True):
        setup_logging(app.config["LOG_LEVEL"], app.config.get("LOG_DIR"))

    db.init_app(app)
    csrf.init_app(app)
    force_https = app.config.get("FORCE_HTTPS", False)
    Talisman(app, force_https=force_https, session_cookie_secure=force_https,
             content_security_policy=CONTENT_SECURITY_POLICY)

    repository = CatalogRepository(db)
    app.extensions["locallibrary"] = {
        "repository": repository,
        "integrity": RelationIntegrity(repository),
    }

    app.register_blueprint(catalog_bp)
    register_commands(app)

    @app.route("/")
    def home():
        return redirect(url_for("catalog.index"))

    with app.app_context():
        db.create_all()
        app.logger.info("Catalog ready (database: %s)", db.engine.url.render_as_string(hide_password=True))

    return app
