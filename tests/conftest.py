"""
Shared pytest fixtures for all tests.

This module provides database sessions on in-memory SQLite, repository
instances, tenants and other shared testing utilities.
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

from app.config.settings import Settings  # noqa: E402
from app.domains.orders.application.services import AuditLogWriter, InventorySynchronizer, RetryPolicy  # noqa: E402
from app.domains.orders.application.use_cases import (  # noqa: E402
    BulkTransitionCoordinator,
    TransitionExecutor,
    TransitionOrderStatusUseCase,
)
from app.domains.orders.infrastructure.repositories import (  # noqa: E402
    SQLAlchemyInventoryHistoryRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyProductStockRepository,
)
from app.models.db import Base  # noqa: E402

# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite://",
        ORDER_TRANSITION_MAX_ATTEMPTS=3,
        ORDER_TRANSITION_RETRY_DELAY=0.0,
    )


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def async_engine():
    """In-memory SQLite engine with the schema created from the models."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(async_engine) -> async_sessionmaker:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Fresh session per test; the database itself is dropped with the engine."""
    async with async_session_factory() as session:
        yield session


# ============================================================================
# TENANTS
# ============================================================================


@pytest.fixture
def tenant_id() -> UUID:
    return uuid4()


@pytest.fixture
def other_tenant_id() -> UUID:
    return uuid4()


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def order_repository(db_session) -> SQLAlchemyOrderRepository:
    return SQLAlchemyOrderRepository(session=db_session)


@pytest.fixture
def product_repository(db_session) -> SQLAlchemyProductStockRepository:
    return SQLAlchemyProductStockRepository(session=db_session)


@pytest.fixture
def history_repository(db_session) -> SQLAlchemyInventoryHistoryRepository:
    return SQLAlchemyInventoryHistoryRepository(session=db_session)


# ============================================================================
# USE CASE FIXTURES
# ============================================================================


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Replaces asyncio.sleep so retries do not slow the suite down."""
    return AsyncMock()


@pytest.fixture
def transition_executor(order_repository, product_repository, history_repository) -> TransitionExecutor:
    return TransitionExecutor(
        order_repository=order_repository,
        inventory_synchronizer=InventorySynchronizer(product_repository),
        audit_log_writer=AuditLogWriter(history_repository),
    )


@pytest.fixture
def transition_use_case(transition_executor, mock_sleep) -> TransitionOrderStatusUseCase:
    return TransitionOrderStatusUseCase(
        executor=transition_executor,
        retry_policy=RetryPolicy(max_attempts=3, delay=1.0, sleep=mock_sleep),
    )


@pytest.fixture
def bulk_coordinator(transition_use_case) -> BulkTransitionCoordinator:
    return BulkTransitionCoordinator(transition_use_case=transition_use_case)
