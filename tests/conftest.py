"""Shared fixtures: in-memory SQLite database, repository, service, API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.db import base  # noqa: F401  (registers every table)
from app.db.repositories.user import UserRepository
from app.db.session import create_session, get_db
from app.main import app
from app.models.company import Branch, Company
from app.services.user_service import UserService


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with create_session(engine) as session:
        yield session


@pytest.fixture
def repository(session):
    return UserRepository(session)


@pytest.fixture
def service(repository):
    return UserService(repository)


@pytest.fixture
def company(session):
    company = Company(name="Acme")
    session.add(company)
    session.commit()
    session.refresh(company)
    return company


@pytest.fixture
def branch(session, company):
    branch = Branch(name="Acme North", company_id=company.id)
    session.add(branch)
    session.commit()
    session.refresh(branch)
    return branch


@pytest.fixture
def client(engine):
    """TestClient bound to the in-memory database (lifespan not run)."""

    def override_get_db():
        with create_session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
