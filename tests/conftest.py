import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from invix.core.security import hash_password
from invix.db.base import Base
from invix.db.row_store import RowStore
from invix.db.session import build_engine, get_master_db
from invix.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def rows(db):
    return RowStore(db)


@pytest.fixture
def make_client(rows):
    counter = {"n": 0}

    def _make(username="acme", password="rightpass", access_status=True, **extra):
        counter["n"] += 1
        record = {
            "client_id": f"CLT9{counter['n']:05d}",
            "company_name": username,
            "username": username,
            "password_hash": hash_password(password),
            "access_status": access_status,
            "subscription_status": "ACTIVE" if access_status else "INACTIVE",
        }
        record.update(extra)
        return rows.insert("clients", record)

    return _make


@pytest.fixture
def make_admin(rows):
    def _make(username="root", password="adminpass", is_active=True, is_super_admin=True):
        return rows.insert("admins", {
            "username": username,
            "password_hash": hash_password(password),
            "is_active": is_active,
            "is_super_admin": is_super_admin,
        })

    return _make


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_master_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_master_db] = override_get_master_db
    yield TestClient(app)
    app.dependency_overrides.clear()
