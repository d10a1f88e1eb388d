"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, and authentication fixtures.

==============================================================================
"""

import os

# Keep the application's own engine in memory during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config import get_settings
from app.db.database import Base, configure_sqlite_engine, get_db
from app.db.models import Product, User
from app.core.security import get_security_manager


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = configure_sqlite_engine(create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
))

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

PASSWORD = "secret123"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# USER FIXTURES
# ============================================================================

def _create_user(db: Session, name: str, email: str) -> User:
    security = get_security_manager()
    user = User(
        name=name,
        email=email,
        password_hash=security.hash_password(PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def password() -> str:
    """Plain password shared by all user fixtures."""
    return PASSWORD


@pytest.fixture
def seller(db: Session) -> User:
    """User who lists products."""
    return _create_user(db, "Sally Seller", "sally@example.com")


@pytest.fixture
def bidder(db: Session) -> User:
    """User who bids."""
    return _create_user(db, "Bob Bidder", "bob@example.com")


@pytest.fixture
def rival(db: Session) -> User:
    """Second bidder."""
    return _create_user(db, "Rita Rival", "rita@example.com")


@pytest.fixture
def product(db: Session, seller: User) -> Product:
    """Product with a starting bid of 10."""
    item = Product(
        title="Brass lamp",
        description="Works, slightly dented",
        starting_bid=Decimal("10.00"),
        owner_id=seller.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


# ============================================================================
# SESSION FIXTURES
# ============================================================================

@pytest.fixture
def login_as(client: TestClient) -> Callable[[User], TestClient]:
    """Attach a signed session cookie for the given user to the client."""
    def _login(user: User) -> TestClient:
        security = get_security_manager()
        token = security.create_session_token(user.id, user.email)
        client.cookies.set(get_settings().session_cookie_name, token)
        return client

    return _login
