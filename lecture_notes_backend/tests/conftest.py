import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lecture_notes_backend.src.api import auth
from lecture_notes_backend.src.api.deps import get_app_settings, get_db
from lecture_notes_backend.src.api.main import app
from lecture_notes_database.config import Settings
from lecture_notes_database.db import enable_sqlite_foreign_keys
from lecture_notes_database.init_db import drop_all, init_db


@pytest.fixture(scope="session")
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"

@pytest.fixture(scope="session")
def engine(sqlite_url):
    """Fixture for a persistent in-memory SQLite engine with foreign keys on."""
    engine = create_engine(
        sqlite_url, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    return enable_sqlite_foreign_keys(engine)

@pytest.fixture
def tables(engine):
    """Fresh tables for every test, so ids and positions start over."""
    init_db(engine)
    yield
    drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Provide a SQLAlchemy session for isolated test usage."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", register_only_for_admin=False)

@pytest.fixture
def client(db_session, settings):
    """Fixture for FastAPI TestClient with test DB dependency override."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_app_settings] = lambda: settings

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

@pytest.fixture
def admin_header(db_session):
    """Returns {'Authorization': 'Bearer <token>'} for a fresh admin account."""
    issued = auth.register(db_session, "admin", "adminpassword", is_admin=True)
    return {"Authorization": f"Bearer {issued.token}"}

@pytest.fixture
def user_header(db_session):
    """Returns the auth header of a regular, non-admin account."""
    issued = auth.register(db_session, "alice", "alicepassword123")
    return {"Authorization": f"Bearer {issued.token}"}
