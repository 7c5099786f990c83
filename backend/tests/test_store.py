"""
Store adapter tests – unique-constraint translation and store failures.
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from druginfo.exceptions import ConflictError, StoreError
from druginfo.models.models import DrugData, User
from druginfo.services.store import get_store


def _disk_error(*args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


class TestStoreUnit:
    def test_unique_email_enforced_by_store(self, app):
        with app.app_context():
            store = get_store()
            store.add(User(username="a", email="dup@x.com", password_hash="h", bookmarks=[]))
            with pytest.raises(ConflictError):
                store.add(User(username="b", email="dup@x.com", password_hash="h", bookmarks=[]))
            # Session is usable again after the rollback
            assert User.query.count() == 1

    def test_unique_drug_name_enforced_by_store(self, app):
        with app.app_context():
            store = get_store()
            store.add(DrugData(drug_name="Aspirin", description="d"))
            with pytest.raises(ConflictError):
                store.add(DrugData(drug_name="Aspirin", description="again"))

    def test_find_drug_case_insensitive(self, app):
        with app.app_context():
            store = get_store()
            store.add(DrugData(drug_name="Metformin", description="d"))
            assert store.find_drug("METFORMIN").drug_name == "Metformin"
            assert store.find_drug("Metfor") is None

    def test_find_user_returns_oldest_on_shared_username(self, app):
        with app.app_context():
            store = get_store()
            store.add(User(username="sam", email="s1@x.com", password_hash="h", bookmarks=[]))
            store.add(User(username="sam", email="s2@x.com", password_hash="h", bookmarks=[]))
            assert store.find_user("sam").email == "s1@x.com"
            assert store.username_taken("sam")
            assert not store.username_taken("nobody")

    def test_commit_failure_becomes_store_error(self, app, monkeypatch):
        with app.app_context():
            monkeypatch.setattr(Session, "commit", _disk_error)
            with pytest.raises(StoreError) as info:
                get_store().add(User(username="a", email="a@x.com", password_hash="h", bookmarks=[]))
            assert "disk I/O error" in info.value.detail()


class TestStoreThroughRoutes:
    def test_race_past_precheck_is_conflict(self, app, client, registered_user, monkeypatch):
        """A duplicate that slips past the pre-check is still rejected with 409."""
        store = app.extensions["store"]
        monkeypatch.setattr(store, "find_user_by_email", lambda email: None)
        resp = client.post("/register-user", json={
            "username": "alice-again", "email": "a@x.com", "password": "pw",
        })
        assert resp.status_code == 409
        assert resp.get_json()["error"] == "conflict"

    def test_store_failure_is_500_with_detail(self, app, client, registered_user, monkeypatch):
        monkeypatch.setattr(Session, "commit", _disk_error)
        resp = client.post("/add-bookmark", json={"username": "alice", "drugName": "Aspirin"})
        assert resp.status_code == 500
        data = resp.get_json()
        assert "message" in data
        assert "disk I/O error" in data["error"]


class TestDrugNameKey:
    def test_case_variant_rejected_by_store(self, app):
        with app.app_context():
            store = get_store()
            store.add(DrugData(drug_name="Étoposide", description="d"))
            with pytest.raises(ConflictError):
                store.add(DrugData(drug_name="ÉTOPOSIDE", description="again"))

    def test_key_is_casefolded(self):
        drug = DrugData(drug_name="Étoposide", description="d")
        assert drug.drug_name_key == "étoposide"
