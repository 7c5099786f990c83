"""
Account routes – registration, login, profile lookup and edits.
Passwords are bcrypt-hashed on write and never returned.
"""

import logging
from flask import Blueprint, request, jsonify

from druginfo.exceptions import AuthError, ConflictError, NotFoundError
from druginfo.helpers import json_body, require_fields
from druginfo.models.models import User
from druginfo.services.passwords import hash_password, verify_password
from druginfo.services.store import get_store

logger = logging.getLogger("druginfo.routes.users")

users_bp = Blueprint("users", __name__)


@users_bp.route("/register-user", methods=["POST"])
def register_user():
    """Create a user account keyed by a unique email."""
    data = require_fields(json_body(), ["username", "email", "password"], raw=("password",))
    store = get_store()

    if store.find_user_by_email(data["email"]):
        raise ConflictError("Email already registered.")

    user = User(
        username=data["username"],
        email=data["email"],
        password_hash=hash_password(data["password"]),
        bookmarks=[],
    )
    store.add(user, conflict_message="Email already registered.")
    logger.info("Registered user '%s'", user.username)

    return jsonify({
        "message": "User registered successfully.",
        "username": user.username,
        "email": user.email,
    }), 201


@users_bp.route("/login-user", methods=["POST"])
def login_user():
    data = require_fields(json_body(), ["email", "password"], raw=("password",))

    user = get_store().find_user_by_email(data["email"])
    if not user:
        raise NotFoundError("User", message="No account found for that email.")
    if not verify_password(data["password"], user.password_hash):
        raise AuthError("Invalid email or password.")

    return jsonify({
        "message": "Login successful.",
        "username": user.username,
        "email": user.email,
    }), 200


@users_bp.route("/get-user", methods=["GET"])
def get_user():
    data = require_fields(request.args, ["username"])
    user = get_store().find_user(data["username"])
    if not user:
        raise NotFoundError("User", data["username"])
    return jsonify({"message": "User found.", "user": user.to_dict()}), 200


@users_bp.route("/edit-username", methods=["PUT"])
def edit_username():
    """Rename an account in place. The new name must not belong to anyone else."""
    data = require_fields(json_body(), ["currentUsername", "newUsername"])
    current, new = data["currentUsername"], data["newUsername"]
    store = get_store()

    user = store.find_user(current)
    if not user:
        raise NotFoundError("User", current)
    if store.username_taken(new):
        raise ConflictError(f"Username '{new}' is already taken.")

    user.username = new
    store.save()
    logger.info("Renamed user '%s' to '%s'", current, new)

    return jsonify({"message": "Username updated successfully.", "username": user.username}), 200


@users_bp.route("/edit-password", methods=["PUT"])
def edit_password():
    data = require_fields(json_body(), ["username", "newPassword"], raw=("newPassword",))
    store = get_store()

    user = store.find_user(data["username"])
    if not user:
        raise NotFoundError("User", data["username"])

    user.password_hash = hash_password(data["newPassword"])
    store.save()
    logger.info("Password changed for user '%s'", user.username)

    return jsonify({"message": "Password updated successfully."}), 200
