from __future__ import annotations

from flask import Blueprint, jsonify

from models.schemas.document import InsertOneResultSchema, DeleteResultSchema
from utils.decorators import token_required

from .common import get_collection, parse_id, load_document

bp = Blueprint("wishlists", __name__)

COLLECTION = "wishlists"

insert_result_schema = InsertOneResultSchema()
delete_result_schema = DeleteResultSchema()


@bp.get("/allWishlists")
@token_required(optional=True)
def list_wishlists():
    """
    List every wishlist entry
    ---
    tags: [Wishlists]
    responses:
      200: { description: OK }
    """
    return jsonify(get_collection(COLLECTION).find())


@bp.get("/allWishlists/<email>")
@token_required(optional=True)
def list_wishlists_by_email(email: str):
    """
    List wishlist entries by user email
    ---
    tags: [Wishlists]
    parameters:
      - in: path
        name: email
        type: string
        required: true
    responses:
      200: { description: OK }
    """
    return jsonify(get_collection(COLLECTION).find({"userMail": email}))


@bp.get("/allWishlist/<name>")
@token_required(optional=True)
def list_wishlists_by_name(name: str):
    """
    List wishlist entries by user name
    ---
    tags: [Wishlists]
    parameters:
      - in: path
        name: name
        type: string
        required: true
    responses:
      200: { description: OK }
    """
    return jsonify(get_collection(COLLECTION).find({"userName": name}))


@bp.post("/addWishlist")
def create_wishlist():
    """
    Add a wishlist entry
    ---
    tags: [Wishlists]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            userMail: { type: string }
            userName: { type: string }
    responses:
      200: { description: Insertion acknowledgement }
      400: { description: Body is not a JSON object }
    """
    data = load_document()
    result = get_collection(COLLECTION).insert_one(data)
    return jsonify(insert_result_schema.dump(result))


@bp.delete("/deleteWishlist/<wishlist_id>")
def delete_wishlist(wishlist_id: str):
    """
    Remove a wishlist entry
    ---
    tags: [Wishlists]
    parameters:
      - in: path
        name: wishlist_id
        type: string
        required: true
    responses:
      200: { description: Deletion acknowledgement (deletedCount 0 when absent) }
      400: { description: Malformed id }
    """
    doc_id = parse_id(wishlist_id)
    result = get_collection(COLLECTION).delete_one(doc_id)
    return jsonify(delete_result_schema.dump(result))
