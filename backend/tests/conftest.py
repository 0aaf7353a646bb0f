import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shiftdesk.core.db import Base, get_db
from shiftdesk.models import ClientType, IdType
from shiftdesk.services.clients import ClientService
from shiftdesk.services.shifts import ShiftRecordService
from shiftdesk.services.staff_members import StaffMemberService

OWNER = "a@x.com"
OTHER_OWNER = "b@x.com"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def query_log(engine):
    """Statements sent to the database while the fixture is active."""
    statements = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def client_types(db):
    rows = [
        ClientType(name="Aged Care", order=1),
        ClientType(name="NDIS", order=2),
        ClientType(name="Retired", order=3, active=False),
    ]
    db.add_all(rows)
    db.commit()
    return {t.name: t.id for t in rows}


@pytest.fixture
def id_types(db):
    rows = [IdType(name="Passport", order=2), IdType(name="Driver Licence", order=1)]
    db.add_all(rows)
    db.commit()
    return {t.name: t.id for t in rows}


@pytest.fixture
def clients(db):
    return ClientService(db)


@pytest.fixture
def staff(db):
    return StaffMemberService(db)


@pytest.fixture
def shifts(db):
    return ShiftRecordService(db)


@pytest.fixture
def c1(clients):
    return clients.create_client(
        OWNER,
        {"name": "C1", "address": "1 Main St", "suburb": "Carlton", "state": "VIC", "postcode": "3053"},
    )["id"]


@pytest.fixture
def s1(staff):
    return staff.create_staff_member(OWNER, {"name": "Sam One", "email": "s1@x.com"})["id"]


@pytest.fixture
def s2(staff):
    return staff.create_staff_member(OWNER, {"name": "Sue Two", "email": "s2@x.com"})["id"]


@pytest.fixture
def api(session_factory):
    from shiftdesk.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
