from flask import Blueprint, request, jsonify
import logging

import models
import schemas
from errors import NotFoundError
from services.session import login_required, admin_required

logger = logging.getLogger(__name__)

education_bp = Blueprint("education", __name__, url_prefix="/api/education")

# kind -> (collection getter, create schema, update schema, display name)
CONTENT_TYPES = {
    "materials": (models.materials_col, schemas.MaterialIn, schemas.MaterialUpdateIn, "Material"),
    "videos": (models.videos_col, schemas.VideoIn, schemas.VideoUpdateIn, "Video"),
}


def _content_type(kind):
    if kind not in CONTENT_TYPES:
        raise NotFoundError("Resource not found")
    return CONTENT_TYPES[kind]


def _get_or_404(kind, doc_id):
    collection, _, _, label = _content_type(kind)
    doc = models.get_document(collection(), doc_id)
    if not doc:
        raise NotFoundError(f"{label} not found")
    return doc


@education_bp.route("/<kind>", methods=["GET"])
@login_required
def list_content(kind, session):
    collection = _content_type(kind)[0]
    return jsonify(models.list_documents(collection()))


@education_bp.route("/<kind>", methods=["POST"])
@admin_required
def create_content(kind, session):
    collection, create_schema, _, label = _content_type(kind)
    data = schemas.parse(create_schema, request.get_json(silent=True))
    doc = models.create_document(collection(), data.model_dump())
    logger.info(f"{label} {doc['_id']} created")
    return jsonify(doc), 201


@education_bp.route("/<kind>/<doc_id>", methods=["GET"])
@login_required
def get_content(kind, doc_id, session):
    return jsonify(_get_or_404(kind, doc_id))


@education_bp.route("/<kind>/<doc_id>", methods=["PUT"])
@admin_required
def update_content(kind, doc_id, session):
    collection, _, update_schema, _ = _content_type(kind)
    doc = _get_or_404(kind, doc_id)
    data = schemas.parse(update_schema, request.get_json(silent=True))
    fields = schemas.changed_fields(data)
    if not fields:
        return jsonify(doc)
    return jsonify(models.update_document(collection(), doc["_id"], fields))


@education_bp.route("/<kind>/<doc_id>", methods=["DELETE"])
@admin_required
def delete_content(kind, doc_id, session):
    collection, _, _, label = _content_type(kind)
    doc = _get_or_404(kind, doc_id)
    models.delete_document(collection(), doc["_id"])
    return jsonify({"message": f"{label} removed"})
