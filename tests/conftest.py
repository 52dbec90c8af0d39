from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from learnhub.auth.models.user import UserRole  # noqa: E402
from learnhub.core.security import create_access_token  # noqa: E402
from learnhub.courses.services.promo_service import (  # noqa: E402
    PromoRegistry,
    get_promo_registry,
)
from learnhub.db.session import Base, get_db  # noqa: E402
from learnhub.main import app  # noqa: E402
from tests.utils.factories import create_user_factory  # noqa: E402

TEST_PROMO_CODES = {
    "BFSALE25": {"discount": 0.5, "description": "Black Friday Sale - 50% off"},
    "SPRING10": {"discount": 0.1, "description": "Spring Sale - 10% off"},
}


@pytest.fixture
def memory_engine():
    """In-memory SQLite shared by every connection of the test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(memory_engine):
    session_factory = sessionmaker(bind=memory_engine, autocommit=False, autoflush=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def promo_registry() -> PromoRegistry:
    return PromoRegistry.from_config(TEST_PROMO_CODES)


@pytest.fixture
async def test_app(db_session, promo_registry):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_promo_registry] = lambda: promo_registry

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def test_instructor(db_session):
    return create_user_factory(
        db_session, email="instructor@example.com", name="Ada Instructor", role=UserRole.INSTRUCTOR
    )


@pytest.fixture
def other_instructor(db_session):
    return create_user_factory(db_session, role=UserRole.INSTRUCTOR)


@pytest.fixture
def test_learner(db_session):
    return create_user_factory(
        db_session, email="learner@example.com", name="Lee Learner", role=UserRole.LEARNER
    )


@pytest.fixture
def other_learner(db_session):
    return create_user_factory(db_session, role=UserRole.LEARNER)


def _token_for(user) -> str:
    return create_access_token(
        {"sub": str(user.id), "email": user.email, "role": UserRole(user.role).value}
    )


@pytest.fixture
def test_instructor_token(test_instructor):
    return _token_for(test_instructor)


@pytest.fixture
def other_instructor_token(other_instructor):
    return _token_for(other_instructor)


@pytest.fixture
def test_learner_token(test_learner):
    return _token_for(test_learner)


@pytest.fixture
def other_learner_token(other_learner):
    return _token_for(other_learner)
