"""
Drug catalog routes – upload and exact-name search.
Uploaded records are immutable; search is case-insensitive but never
prefix or substring.
"""

import json
import logging
from flask import Blueprint, current_app, request, jsonify

from druginfo.exceptions import ConflictError, NotFoundError, ValidationError
from druginfo.helpers import json_body, require_fields
from druginfo.models.models import DrugData
from druginfo.services.store import get_store

logger = logging.getLogger("druginfo.routes.drugs")

drugs_bp = Blueprint("drugs", __name__)

# request key → column
LIST_FIELDS = {
    "uses": "uses",
    "indications": "indications",
    "sideEffects": "side_effects",
    "warnings": "warnings",
}


def parse_string_list(value, field):
    """
    Accept a list of strings either as a real list (JSON bodies) or as its
    JSON-serialised text (form fields). Empty or absent → [].
    """
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            raise ValidationError(f"'{field}' must be a JSON array of strings.", fields=[field])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"'{field}' must be a JSON array of strings.", fields=[field])
    return [v.strip() for v in value if v.strip()]


def _read_photo(upload):
    """Return (bytes, mimetype) for an uploaded image, or (None, None) when no file was sent."""
    if upload is None or not upload.filename:
        return None, None

    if not (upload.mimetype or "").startswith("image/"):
        raise ValidationError(
            f"Photo type '{upload.mimetype}' is not supported. Upload an image.", fields=["photo"]
        )

    limit = current_app.config["MAX_PHOTO_BYTES"]
    blob = upload.read(limit + 1)
    if len(blob) > limit:
        raise ValidationError(f"Photo exceeds the {limit} byte limit.", fields=["photo"])
    if not blob:
        return None, None
    return blob, upload.mimetype


@drugs_bp.route("/upload", methods=["POST"])
def upload_drug():
    """
    Create a DrugData record.
    Accepts multipart/form-data (with an optional 'photo' file) or JSON.
    """
    if request.mimetype == "multipart/form-data" or request.form:
        source = request.form
        photo, mimetype = _read_photo(request.files.get("photo"))
    else:
        source = json_body()
        photo, mimetype = None, None

    data = require_fields(source, ["drugName", "description"])
    lists = {column: parse_string_list(source.get(key), key) for key, column in LIST_FIELDS.items()}

    store = get_store()
    if store.find_drug(data["drugName"]):
        raise ConflictError(f"Drug '{data['drugName']}' already exists.")

    drug = DrugData(
        drug_name=data["drugName"],
        description=data["description"],
        photo=photo,
        photo_mimetype=mimetype,
        **lists,
    )
    store.add(drug, conflict_message=f"Drug '{data['drugName']}' already exists.")
    logger.info("Uploaded drug '%s' (photo=%s)", drug.drug_name, bool(photo))

    return jsonify({"message": "Drug uploaded successfully.", "drug": drug.to_dict()}), 201


@drugs_bp.route("/search-drug", methods=["GET"])
def search_drug():
    """Lookup by drug name (case-insensitive exact match)."""
    data = require_fields(request.args, ["drugName"])
    drug = get_store().find_drug(data["drugName"])
    if not drug:
        raise NotFoundError("Drug", data["drugName"])
    return jsonify({"message": "Drug found.", "drug": drug.to_dict()}), 200
