from __future__ import annotations

from flask import Blueprint, jsonify

from models.schemas.document import InsertOneResultSchema, UpdateResultSchema
from utils.decorators import token_required, owner_required

from .common import get_collection, parse_id, load_document

bp = Blueprint("blogs", __name__)

COLLECTION = "blogs"

insert_result_schema = InsertOneResultSchema()
update_result_schema = UpdateResultSchema()


@bp.get("/allBlogs")
@token_required(optional=True)
def list_blogs():
    """
    List every blog post
    ---
    tags: [Blogs]
    responses:
      200: { description: OK }
    """
    return jsonify(get_collection(COLLECTION).find())


@bp.get("/allBlogs/<blog_id>")
@token_required(optional=True)
def get_blog(blog_id: str):
    """
    Get a blog post by id (null when absent)
    ---
    tags: [Blogs]
    parameters:
      - in: path
        name: blog_id
        type: string
        required: true
    responses:
      200: { description: OK }
      400: { description: Malformed id }
    """
    doc_id = parse_id(blog_id)
    return jsonify(get_collection(COLLECTION).find_one(doc_id))


@bp.get("/all_Blogs/<email>")
@owner_required("email", claim_field="email")
def list_blogs_by_email(email: str):
    """
    List the caller's blog posts by owner email
    ---
    tags: [Blogs]
    parameters:
      - in: path
        name: email
        type: string
        required: true
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      403: { description: Email does not match the session identity }
    """
    return jsonify(get_collection(COLLECTION).find({"email": email}))


@bp.get("/allBlog/<name>")
@owner_required("name", claim_field="name")
def list_blogs_by_name(name: str):
    """
    List the caller's blog posts by owner name
    ---
    tags: [Blogs]
    parameters:
      - in: path
        name: name
        type: string
        required: true
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      403: { description: Name does not match the session identity }
    """
    return jsonify(get_collection(COLLECTION).find({"name": name}))


@bp.post("/addBlog")
def create_blog():
    """
    Create a blog post (fields stored as sent)
    ---
    tags: [Blogs]
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            title: { type: string }
            email: { type: string }
            name: { type: string }
    responses:
      200: { description: Insertion acknowledgement }
      400: { description: Body is not a JSON object }
    """
    data = load_document()
    result = get_collection(COLLECTION).insert_one(data)
    return jsonify(insert_result_schema.dump(result))


@bp.put("/update/<blog_id>")
@token_required()
def update_blog(blog_id: str):
    """
    Merge fields into a blog post, creating it when the id is unknown
    ---
    tags: [Blogs]
    consumes:
      - application/json
    parameters:
      - in: path
        name: blog_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
    responses:
      200: { description: Update acknowledgement }
      400: { description: Malformed id or body }
      401: { description: Unauthorized }
    """
    doc_id = parse_id(blog_id)
    data = load_document()
    result = get_collection(COLLECTION).update_one(doc_id, data, upsert=True)
    return jsonify(update_result_schema.dump(result))
