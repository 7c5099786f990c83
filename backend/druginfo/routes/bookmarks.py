"""
Bookmark routes – per-user ordered list of drug names.

Routes are keyed by the caller-supplied username; no session or token
ties the caller to that account. Membership is exact and case-sensitive.
"""

import logging
from flask import Blueprint, jsonify

from druginfo.exceptions import ConflictError, NotFoundError
from druginfo.helpers import json_body, require_fields
from druginfo.services.store import get_store

logger = logging.getLogger("druginfo.routes.bookmarks")

bookmarks_bp = Blueprint("bookmarks", __name__)


def _load_user(store, username):
    user = store.find_user(username)
    if not user:
        raise NotFoundError("User", username)
    return user


@bookmarks_bp.route("/show-bookmarks/<string:username>", methods=["GET"])
def show_bookmarks(username):
    user = _load_user(get_store(), username)
    return jsonify({"message": "Bookmarks retrieved.", "bookmarks": list(user.bookmarks or [])}), 200


@bookmarks_bp.route("/add-bookmark", methods=["POST"])
def add_bookmark():
    data = require_fields(json_body(), ["username", "drugName"])
    store = get_store()
    user = _load_user(store, data["username"])

    current = list(user.bookmarks or [])
    if data["drugName"] in current:
        raise ConflictError(f"'{data['drugName']}' is already bookmarked.")

    # JSON columns only track reassignment, not in-place mutation
    user.bookmarks = current + [data["drugName"]]
    store.save()
    logger.info("User '%s' bookmarked '%s'", user.username, data["drugName"])

    return jsonify({"message": "Bookmark added.", "bookmarks": user.bookmarks}), 200


@bookmarks_bp.route("/remove-bookmark", methods=["POST"])
def remove_bookmark():
    data = require_fields(json_body(), ["username", "drugName"])
    store = get_store()
    user = _load_user(store, data["username"])

    current = list(user.bookmarks or [])
    if data["drugName"] not in current:
        raise NotFoundError("Bookmark", data["drugName"])

    user.bookmarks = [name for name in current if name != data["drugName"]]
    store.save()
    logger.info("User '%s' removed bookmark '%s'", user.username, data["drugName"])

    return jsonify({"message": "Bookmark removed.", "bookmarks": user.bookmarks}), 200


@bookmarks_bp.route("/check-bookmark", methods=["POST"])
def check_bookmark():
    """Membership test; an absent bookmark is a normal False result."""
    data = require_fields(json_body(), ["username", "drugName"])
    user = _load_user(get_store(), data["username"])
    return jsonify({
        "message": "Bookmark status retrieved.",
        "isBookmarked": data["drugName"] in (user.bookmarks or []),
    }), 200
