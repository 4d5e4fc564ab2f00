import os

# Must be set before the settings singleton is first built
os.environ.setdefault("INVOICER_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from invoicer.app.core.security import get_password_hash
from invoicer.app.core.settings import Settings
from invoicer.app.db.session import Database
from invoicer.app.main import create_app
from invoicer.app.models.user import User

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        secret_key=TEST_SECRET,
        database_url=f"sqlite:///{tmp_path / 'invoices.db'}",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs startup (migrations) and shutdown (dispose)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(settings):
    database = Database(settings.database_url)
    database.init()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make_user(username: str = "alice", password: str = "secret1") -> User:
        user = User(username=username, hashed_password=get_password_hash(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user
