"""
Store adapter – every handler's single point of contact with the database.

Lookups return ORM objects or None; writes commit immediately. Failures are
translated into the application error taxonomy:

  IntegrityError (unique index rejected the write) → ConflictError
  any other SQLAlchemyError                        → StoreError

The unique indexes on users.email and drug_data.drug_name are the
authoritative duplicate guard; handler pre-checks only produce friendlier
messages.
"""

import logging
from functools import wraps
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from druginfo.exceptions import ConflictError, StoreError
from druginfo.models.models import Admin, DrugData, User

logger = logging.getLogger("druginfo.store")


def _translate_errors(fn):
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            logger.error("Store operation %s failed: %s", fn.__name__, exc)
            raise StoreError(cause=exc, context={"operation": fn.__name__}) from exc
    return wrapper


class Store:
    """Request-independent handle around the Flask-SQLAlchemy session."""

    def __init__(self, db):
        self.db = db

    # ── Users ──

    @_translate_errors
    def find_user(self, username: str) -> Optional[User]:
        # username is not unique at the store level; oldest account wins
        return User.query.filter_by(username=username).order_by(User.id).first()

    @_translate_errors
    def find_user_by_email(self, email: str) -> Optional[User]:
        return User.query.filter_by(email=email).first()

    @_translate_errors
    def username_taken(self, username: str) -> bool:
        return User.query.filter_by(username=username).first() is not None

    # ── Admins ──

    @_translate_errors
    def find_admin_by_email(self, email: str) -> Optional[Admin]:
        return Admin.query.filter_by(email=email).first()

    # ── Drugs ──

    @_translate_errors
    def find_drug(self, drug_name: str) -> Optional[DrugData]:
        """Case-insensitive exact match on drug name."""
        return DrugData.query.filter_by(drug_name_key=DrugData.name_key(drug_name)).first()

    # ── Writes ──

    def add(self, record, conflict_message: str = "Record already exists"):
        self.db.session.add(record)
        self.save(conflict_message)
        return record

    def save(self, conflict_message: str = "Record already exists") -> None:
        """Commit pending changes; a unique-index rejection becomes ConflictError."""
        try:
            self.db.session.commit()
        except IntegrityError as exc:
            self.db.session.rollback()
            logger.info("Unique constraint rejected write: %s", exc.orig)
            raise ConflictError(conflict_message, context={"constraint": str(exc.orig)}) from exc
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            logger.error("Commit failed: %s", exc)
            raise StoreError(cause=exc, context={"operation": "save"}) from exc


def init_store(app, db) -> Store:
    store = Store(db)
    app.extensions["store"] = store
    return store


def get_store() -> Store:
    """Store bound to the current application."""
    return current_app.extensions["store"]
