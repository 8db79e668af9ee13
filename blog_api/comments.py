from __future__ import annotations

from flask import Blueprint, jsonify

from models.schemas.document import InsertOneResultSchema
from utils.decorators import token_required

from .common import get_collection, load_document

bp = Blueprint("comments", __name__)

COLLECTION = "comments"

insert_result_schema = InsertOneResultSchema()


@bp.post("/addComment")
def create_comment():
    """
    Add a comment
    ---
    tags: [Comments]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
    responses:
      200: { description: Insertion acknowledgement }
      400: { description: Body is not a JSON object }
    """
    data = load_document()
    result = get_collection(COLLECTION).insert_one(data)
    return jsonify(insert_result_schema.dump(result))


@bp.get("/getComments")
@token_required(optional=True)
def list_comments():
    """
    List every comment
    ---
    tags: [Comments]
    responses:
      200: { description: OK }
    """
    return jsonify(get_collection(COLLECTION).find())
