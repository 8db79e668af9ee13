"""Helpers shared by the resource blueprints."""
from __future__ import annotations

import uuid

from flask import abort, current_app, request

from models import Collection
from models.schemas.document import DocumentInSchema

document_in_schema = DocumentInSchema()


def get_collection(name: str) -> Collection:
    """Collection bound to the process-wide storage created by create_app()."""
    return current_app.extensions["storage"].collection(name)


def parse_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError:
        abort(400, description="Invalid document id")


def load_document() -> dict:
    """Request body as a document; 400 unless it is a JSON object."""
    payload = request.get_json(silent=True)
    if payload is None:
        abort(400, description="Request body must be JSON")
    return document_in_schema.load(payload)
