"""
Entrypoint for running the API in development.
In production run create_app() under a WSGI server (gunicorn/uwsgi).
"""
import logging
import os
from . import create_app
from .config import get_config

logging.basicConfig(
    level=get_config(None).LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Respect APP_ENV for configuration selection (handled in get_config())
app = create_app()

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    logging.getLogger(__name__).info("Server listening on port: %s", port)
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))
