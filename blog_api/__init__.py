import logging

from flask import Flask
from flasgger import Swagger
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError

from .config import get_config, DEFAULT_JWT_SECRET
from .errors import register_error_handlers
from models import DBStorage

logger = logging.getLogger(__name__)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "WorldInsight Blog API",
        "version": "1.0.0",
        "description": "REST API for blog posts, comments and wishlists. "
                       "Protected routes read the session token from the `token` cookie set by POST /jwt.",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None, storage: DBStorage | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    The document store is opened once here and shared by every request;
    pass `storage` to reuse an existing one.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))

    if app.config["APP_ENV"] == "production" and app.config["JWT_SECRET"] == DEFAULT_JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set in production")

    # Credentialed CORS so the frontend can send the session cookie
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    if storage is None:
        storage = DBStorage(app.config["DATABASE_URL"], echo=app.config["DATABASE_ECHO"])
        storage.reload()
    app.extensions["storage"] = storage
    try:
        storage.ping()
        logger.info("Pinged the document store. Connection is up.")
    except SQLAlchemyError:
        # Keep serving; /health reports the store as degraded
        logger.exception("Document store ping failed at startup")

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .blogs import bp as blogs_bp
    from .wishlists import bp as wishlists_bp
    from .comments import bp as comments_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(blogs_bp)
    app.register_blueprint(wishlists_bp)
    app.register_blueprint(comments_bp)

    # Release the request's session; the engine pool stays open
    @app.teardown_appcontext
    def remove_session(exception=None):
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Server is running",
            "docs": "/apidocs/",
            "health": "/health",
        }, 200

    return app
