"""
Pytest configuration and fixtures: fresh in-memory database per test
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEFAULT_USERS", "false")
os.environ.setdefault("LOGS_PATH", os.path.join(os.path.dirname(__file__), ".logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import wms.models  # noqa: F401  registers the tables
from wms.core import Base, get_db
from wms.core.database import build_engine
from wms.core.security import create_access_token, get_password_hash
from wms.models import User


@pytest.fixture(scope='function')
def db():
    """Session bound to a brand new in-memory database"""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def make_user(db, username, role, department="창고부", **overrides):
    user = User(
        username=username,
        hashed_password=get_password_hash("pass1234"),
        role=role,
        department=department,
        **overrides
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def super_admin(db):
    return make_user(db, "admin", "super_admin", department="관리부")


@pytest.fixture
def admin(db):
    return make_user(db, "manager_kim", "admin")


@pytest.fixture
def worker(db):
    return make_user(db, "worker_lee", "user")


@pytest.fixture
def viewer(db):
    return make_user(db, "viewer", "viewer")


def auth_headers(user):
    token = create_access_token({"sub": str(user.id), "username": user.username, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(db):
    """Test client whose requests share the test session"""
    from main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
