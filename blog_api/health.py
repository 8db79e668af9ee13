import logging

from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

bp = Blueprint("health", __name__)

VERSION = "1.0.0"


@bp.get("/health")
def health():
    """
    Health check (pings the document store)
    ---
    tags:
      - Health
    responses:
      200:
        description: API and store are up
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            version:
              type: string
              example: 1.0.0
      503:
        description: Store unreachable
    """
    try:
        current_app.extensions["storage"].ping()
    except SQLAlchemyError:
        logger.exception("Store ping failed")
        return {"status": "degraded", "version": VERSION}, 503
    return {"status": "ok", "version": VERSION}, 200
