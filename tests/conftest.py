import os
from pathlib import Path

import pytest

# Configure a dedicated SQLite DB for tests before importing the Flask app.
TEST_DB_PATH = Path(__file__).resolve().parent / "pytest_enquiries.db"
os.environ["FLASK_ENV"] = "testing"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH.as_posix()}"
for key in ("SMTP_USER", "SMTP_PASS", "ADMIN_EMAIL"):
    os.environ.pop(key, None)

from app import create_app
from models import db


@pytest.fixture(scope="session")
def _app():
    return create_app("testing")


@pytest.fixture
def flask_app(_app):
    with _app.app_context():
        db.session.remove()
        db.drop_all()
        db.create_all()
        yield _app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


@pytest.fixture
def store(flask_app):
    return flask_app.extensions["enquiry_store"]
