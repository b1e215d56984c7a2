"""Tests for UserService.

Validation behaviour is checked against a recording store so that "no
store access" can be asserted directly; persistence behaviour runs against
the in-memory SQLite repository from conftest.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import pytest
from sqlalchemy import event
from sqlmodel import SQLModel

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db.repositories.base import UserStore
from app.db.repositories.user import UserRepository
from app.db.session import build_engine, create_session
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.services.user_service import UserService


class RecordingStore(UserStore):
    """UserStore that records calls and returns canned users."""

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def find_many(self) -> list[User]:
        self._record("find_many")
        return []

    def find_by_id(self, user_id: int) -> Optional[User]:
        self._record("find_by_id", user_id)
        return None

    def find_by_email(self, email: str) -> Optional[User]:
        self._record("find_by_email", email)
        return None

    def create(self, data: dict[str, Any]) -> User:
        self._record("create", data)
        return User(id=1, **data)

    def update(self, user_id: int, patch: dict[str, Any]) -> User:
        self._record("update", user_id, patch)
        fields = {"email": "a@x.com", "name": "A", "password": "p"}
        fields.update(patch)
        return User(id=user_id, **fields)

    def delete(self, user_id: int) -> User:
        self._record("delete", user_id)
        return User(id=user_id, email="a@x.com", name="A", password="p")


@pytest.fixture
def store():
    return RecordingStore()


def _create_payload(**overrides) -> dict:
    payload = {"email": "a@x.com", "name": "A", "password": "p"}
    payload.update(overrides)
    return payload


# ======================================================================
# Input shaping (recording store)
# ======================================================================


class TestInputShaping:
    def test_invalid_email_never_reaches_store(self, store):
        service = UserService(store)
        with pytest.raises(ValidationError) as exc_info:
            service.create(_create_payload(email="not-an-email"))
        assert store.calls == []
        assert exc_info.value.details[0]["field"] == "email"

    def test_missing_name_never_reaches_store(self, store):
        service = UserService(store)
        with pytest.raises(ValidationError):
            service.create({"email": "a@x.com", "password": "p"})
        assert store.calls == []

    def test_invalid_update_never_reaches_store(self, store):
        service = UserService(store)
        with pytest.raises(ValidationError):
            service.update(1, {"name": None})
        assert store.calls == []

    def test_create_forwards_every_declared_field(self, store):
        UserService(store).create(_create_payload())
        assert store.calls == [
            ("create", ({"email": "a@x.com", "name": "A", "password": "p", "company_id": None, "branch_id": None},)),
        ]

    def test_create_accepts_schema_instance(self, store):
        UserService(store).create(UserCreate(**_create_payload(), company_id=2))
        assert store.calls[0][1][0]["company_id"] == 2

    def test_update_forwards_only_present_keys(self, store):
        UserService(store).update(7, {"name": "B"})
        assert store.calls == [("update", (7, {"name": "B"}))]

    def test_update_forwards_explicit_null(self, store):
        UserService(store).update(7, UserUpdate.model_validate({"branchId": None}))
        assert store.calls == [("update", (7, {"branch_id": None}))]

    def test_each_operation_makes_one_store_call(self, store):
        service = UserService(store)
        service.list_all()
        service.get_by_id(1)
        service.get_by_email("a@x.com")
        service.delete(1)
        assert [name for name, _ in store.calls] == ["find_many", "find_by_id", "find_by_email", "delete"]


# ======================================================================
# Persistence (SQLite repository)
# ======================================================================


class TestCreateAndRead:
    def test_round_trip(self, service, company, branch):
        created = service.create(_create_payload(companyId=company.id, branchId=branch.id))
        fetched = service.get_by_id(created.id)
        assert fetched is not None
        assert (fetched.email, fetched.name, fetched.company_id, fetched.branch_id) == (
            "a@x.com", "A", company.id, branch.id,
        )

    def test_assigns_id_and_timestamps(self, service):
        created = service.create(_create_payload())
        assert created.id == 1
        assert created.created_at is not None
        assert created.updated_at is not None

    def test_get_by_email(self, service):
        created = service.create(_create_payload())
        assert service.get_by_email("a@x.com").id == created.id

    def test_mixed_case_email_round_trip(self, service):
        created = service.create(_create_payload(email="Alice@Example.COM"))
        assert created.email == "Alice@Example.COM"
        assert service.get_by_id(created.id).email == "Alice@Example.COM"
        assert service.get_by_email("Alice@Example.COM").id == created.id

    def test_out_of_range_id_is_not_found(self, service):
        assert service.get_by_id(2**63) is None
        with pytest.raises(NotFoundError):
            service.delete(2**63)

    def test_reads_expand_relations(self, service, company, branch):
        service.create(_create_payload(companyId=company.id, branchId=branch.id))
        user = service.get_by_email("a@x.com")
        assert user.company.name == "Acme"
        assert user.branch.name == "Acme North"

    def test_list_all(self, service, company):
        service.create(_create_payload(email="a@x.com", companyId=company.id))
        service.create(_create_payload(email="b@x.com"))
        users = service.list_all()
        assert [u.email for u in users] == ["a@x.com", "b@x.com"]
        assert users[0].company.name == "Acme"
        assert users[1].company is None

    def test_list_all_empty(self, service):
        assert service.list_all() == []

    def test_missing_keys_return_none(self, service):
        assert service.get_by_id(42) is None
        assert service.get_by_email("ghost@x.com") is None


class TestConflicts:
    def test_duplicate_email_conflicts(self, service):
        service.create(_create_payload(name="Original"))
        with pytest.raises(ConflictError):
            service.create(_create_payload(name="Impostor"))
        assert service.get_by_email("a@x.com").name == "Original"
        assert len(service.list_all()) == 1

    def test_update_to_taken_email_conflicts(self, service):
        service.create(_create_payload(email="a@x.com"))
        other = service.create(_create_payload(email="b@x.com"))
        with pytest.raises(ConflictError):
            service.update(other.id, {"email": "a@x.com"})
        assert service.get_by_id(other.id).email == "b@x.com"

    def test_unknown_company_is_rejected_by_store(self, service):
        with pytest.raises(ConflictError):
            service.create(_create_payload(companyId=999))

    def test_concurrent_creates_with_same_email(self, tmp_path):
        """Two racing creates: exactly one wins, the other conflicts."""
        engine = build_engine(f"sqlite:///{tmp_path / 'race.db'}")

        # SQLite writers must take the write lock up front or they deadlock
        @event.listens_for(engine, "connect")
        def _no_implicit_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(connection):
            connection.exec_driver_sql("BEGIN IMMEDIATE")

        SQLModel.metadata.create_all(engine)

        def attempt(name: str):
            with create_session(engine) as session:
                try:
                    return UserService(UserRepository(session)).create(_create_payload(name=name))
                except ConflictError as e:
                    return e

        try:
            with ThreadPoolExecutor(max_workers=2) as pool:
                results = list(pool.map(attempt, ["first", "second"]))
        finally:
            engine.dispose()

        assert sum(isinstance(r, User) for r in results) == 1
        assert sum(isinstance(r, ConflictError) for r in results) == 1


class TestUpdate:
    def test_partial_update_isolation(self, service, company, branch):
        created = service.create(_create_payload(companyId=company.id, branchId=branch.id))
        updated = service.update(created.id, {"name": "X"})
        assert updated.name == "X"
        assert updated.email == "a@x.com"
        assert updated.company_id == company.id
        assert updated.branch_id == branch.id
        assert updated.password == "p"

    def test_explicit_null_clears_relation(self, service, company):
        created = service.create(_create_payload(companyId=company.id))
        updated = service.update(created.id, {"companyId": None})
        assert updated.company_id is None

    def test_empty_patch_changes_nothing(self, service):
        created = service.create(_create_payload())
        updated = service.update(created.id, {})
        assert (updated.email, updated.name) == ("a@x.com", "A")

    def test_update_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.update(42, {"name": "X"})


class TestDelete:
    def test_returns_snapshot(self, service):
        created = service.create(_create_payload())
        deleted = service.delete(created.id)
        assert deleted.id == created.id
        assert deleted.email == "a@x.com"

    def test_deleted_user_stays_gone(self, service):
        created = service.create(_create_payload())
        service.delete(created.id)
        assert service.get_by_id(created.id) is None
        assert service.get_by_id(created.id) is None
        with pytest.raises(NotFoundError):
            service.delete(created.id)

    def test_delete_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.delete(42)
