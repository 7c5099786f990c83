"""
SQLAlchemy ORM models – the three record kinds held by the store.
JSON payloads use camelCase keys; columns stay snake_case.
"""

import base64
from datetime import datetime
from sqlalchemy.orm import validates

from druginfo.database import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(255), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    bookmarks = db.Column(db.JSON, nullable=False, default=list)   # ordered drug names
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "username": self.username,
            "email": self.email,
            "bookmarks": list(self.bookmarks or []),
        }


class Admin(db.Model):
    __tablename__ = "admins"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    referral_id = db.Column(db.String(255), nullable=False)
    referred_id = db.Column(db.String(255))
    my_referrals = db.Column(db.Text)
    phone_number = db.Column(db.String(32), nullable=False)
    bookmarks = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "username": self.username,
            "email": self.email,
            "referralId": self.referral_id,
            "referredId": self.referred_id,
            "myReferrals": self.my_referrals,
            "phoneNumber": self.phone_number,
            "bookmarks": list(self.bookmarks or []),
        }


class DrugData(db.Model):
    __tablename__ = "drug_data"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    drug_name = db.Column(db.String(255), nullable=False, unique=True)
    # casefolded in Python so lookups ignore case for non-ASCII names on every backend
    drug_name_key = db.Column(db.String(255), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=False)
    uses = db.Column(db.JSON, nullable=False, default=list)
    indications = db.Column(db.JSON, nullable=False, default=list)
    side_effects = db.Column(db.JSON, nullable=False, default=list)
    warnings = db.Column(db.JSON, nullable=False, default=list)
    photo = db.Column(db.LargeBinary)
    photo_mimetype = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @staticmethod
    def name_key(name):
        return name.strip().casefold()

    @validates("drug_name")
    def _sync_name_key(self, key, value):
        self.drug_name_key = self.name_key(value)
        return value

    def photo_data_uri(self):
        if not self.photo:
            return None
        encoded = base64.b64encode(self.photo).decode("ascii")
        return f"data:{self.photo_mimetype or 'application/octet-stream'};base64,{encoded}"

    def to_dict(self):
        return {
            "drugName": self.drug_name,
            "description": self.description,
            "uses": self.uses or [],
            "indications": self.indications or [],
            "sideEffects": self.side_effects or [],
            "warnings": self.warnings or [],
            "photo": self.photo_data_uri(),
        }
