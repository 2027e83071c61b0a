import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("IDENTITY_JWT_KEY", "test-identity-secret")
os.environ.setdefault("IDENTITY_JWT_ALGORITHM", "HS256")
os.environ.setdefault("WEBHOOK_SECRET", "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw")
os.environ.setdefault("S3_BUCKET_NAME", "test-bucket")
os.environ.setdefault("S3_PUBLIC_BASE_URL", "https://cdn.example.test")

import app.main as main  # noqa: E402  (import after env vars are set)
from app.database import SessionLocal  # noqa: E402
from app.models.favourite import Favourite  # noqa: E402
from app.models.profile import Profile  # noqa: E402
from app.models.reminder import Reminder  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services import storage_service  # noqa: E402
from app.services.auth_middleware import get_current_user  # noqa: E402

TEST_USER_ID = "user_test_1"
OTHER_USER_ID = "user_test_2"


class FakeS3:
    """In-memory stand-in for the boto3 S3 client."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_put = False
        self.fail_delete = False

    def put_object(self, Bucket, Key, Body, **kwargs):
        if self.fail_put:
            raise ClientError({"Error": {"Code": "500", "Message": "upload failed"}}, "PutObject")
        self.objects[Key] = Body

    def delete_object(self, Bucket, Key):
        if self.fail_delete:
            raise ClientError({"Error": {"Code": "500", "Message": "delete failed"}}, "DeleteObject")
        self.objects.pop(Key, None)


def _clear_tables():
    session = SessionLocal()
    try:
        session.query(Reminder).delete()
        session.query(Favourite).delete()
        session.query(Profile).delete()
        session.query(User).delete()
        session.commit()
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clean_db():
    _clear_tables()
    yield
    _clear_tables()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def test_user(db_session):
    for user_id, name in ((TEST_USER_ID, "Test User"), (OTHER_USER_ID, "Other User")):
        db_session.add(User(id=user_id, email=f"{user_id}@example.com", name=name, phone_number="+15550001111"))
    db_session.commit()
    return SimpleNamespace(id=TEST_USER_ID, email=f"{TEST_USER_ID}@example.com", name="Test User",
                           phone_number="+15550001111")


@pytest.fixture()
def override_user(test_user):
    main.app.dependency_overrides[get_current_user] = lambda: test_user
    yield test_user
    main.app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture()
def fake_s3(monkeypatch):
    fake = FakeS3()
    monkeypatch.setattr(storage_service, "s3", fake)
    return fake
