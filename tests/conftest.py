"""
Test configuration and fixtures.

Provides:
- In-memory SQLite session shared with the app through dependency overrides
- In-memory fake object storage
- FastAPI TestClient wired to both
"""
import os
from typing import Generator

# Settings must exist before the app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AWS_ACCESS_KEY", "test-access-key")
os.environ.setdefault("AWS_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.models.submission import Submission  # noqa: F401
from app.models.uploaded_file import UploadedFile  # noqa: F401
from app.services.s3 import get_storage


class FakeStorage:
    """Stands in for StorageService; keeps uploaded bytes in a dict."""

    bucket = "test-bucket"

    def __init__(self):
        self.objects = {}
        self.attempts = []
        self.should_fail = lambda key: False

    def upload_file(self, fileobj, key, content_type=None):
        self.attempts.append(key)
        if self.should_fail(key):
            raise RuntimeError(f"storage rejected {key}")
        self.objects[key] = (fileobj.read(), content_type)
        return key


@pytest.fixture(scope="function")
def session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture(scope="function")
def client(session, storage) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()
