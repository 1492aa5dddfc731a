"""Pytest configuration shared by unit, integration and API tests.

Settings are read from the environment when src.core.config is first
imported, so the test environment is set here before anything from src is
imported.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./wyndo_test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdefghijklmnop")
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-key-0123456789abcdefghij")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from uuid_extensions import uuid7  # noqa: E402

from src.domain.entities.user import User  # noqa: E402
from src.domain.enums import SubscriptionStatus, SubscriptionTier  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402

TEST_ENCRYPTION_KEY = os.environ["ENCRYPTION_KEY"]
TEST_SECRET_KEY = os.environ["SECRET_KEY"]


def create_user(**overrides) -> User:
    """Build a real User entity with sensible defaults.

    Usage:
        user = create_user(mfa_enabled=True, mfa_secret="encrypted")
    """
    now = datetime.now(UTC)
    fields = {
        "id": uuid7(),
        "email": "alice@example.com",
        "password_hash": "$2b$04$hashed",
        "name": "Alice",
        "subscription_tier": SubscriptionTier.FREE,
        "subscription_status": SubscriptionStatus.TRIAL,
        "trial_ends_at": now + timedelta(days=14),
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def mock_logger():
    """Logger double that records structured calls."""
    logger = Mock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Fresh SQLite database with every table created.

    Each test gets its own file, so nothing leaks between tests.
    """
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'wyndo.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(test_database):
    """Session on the per-test database."""
    async with test_database.get_session() as session:
        yield session
