import os
import tempfile

# Settings are read at import time, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_DB"] = "false"
os.environ["ENABLE_METRICS"] = "false"
os.environ["RATE_LIMIT"] = "10000/minute"
os.environ["TZ_DEFAULT"] = "UTC"
os.environ["EXPORTS_DIR"] = tempfile.mkdtemp(prefix="gadget_exports_")

import pytest
from fastapi.testclient import TestClient

from gadget_tracker.db import Base, SessionLocal, engine
from gadget_tracker.main import app
from gadget_tracker.schemas.assets import AssetCreate
from gadget_tracker.schemas.users import UserCreate
from gadget_tracker.services.assets import create_asset
from gadget_tracker.services.users import create_user


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def make_asset(db):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        data = {
            "asset_number": f"AST-{counter['n']:04d}",
            "category": "laptop",
            "status": "baik",
        }
        data.update(fields)
        return create_asset(db, AssetCreate(**data))

    return _make


@pytest.fixture
def make_user(db):
    def _make(nik="1001", **fields):
        data = {
            "nik": nik,
            "name": "Budi Santoso",
            "position": "IT Support",
            "unit": "IT",
            "location": "Jakarta",
        }
        data.update(fields)
        return create_user(db, UserCreate(**data))

    return _make
