'''
Pytest configuration for the FastAPI application.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE (in-memory SQLite) before any app code is imported.
2. Providing a clean, isolated database session for each service test.
3. Providing a FastAPI TestClient for endpoint testing.
4. Providing instances of all service classes, pre-injected with the test db session.
'''
import os

# --- Must run before the settings object is created ---
os.environ.setdefault("DATABASE_URL_PROD", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_URL_TEST", "sqlite+aiosqlite:///:memory:")
os.environ["TEST_MODE"] = "True"
os.environ["CREATE_TABLES_ON_STARTUP"] = "True"

import pytest
from typing import AsyncGenerator

# --- FastAPI & Testing Imports ---
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# --- Constant Imports ----
from tests.constants import (
    TEST_SERVICE_ID,
    TEST_PATTERN_ID,
    WEEK_START_MONDAY,
    WEEK_END_FRIDAY,
    WORKDAY_START,
    WORKDAY_END,
    WEEKDAYS
)

# --- Application Imports ---
from availability_manager.main import app
from availability_manager.common.config import settings
from availability_manager.database import models as db_models
from availability_manager.services.service_management_service import ServiceManagementService
from availability_manager.services.exception_service import ExceptionService
from availability_manager.services.availability_service import AvailabilityService
from availability_manager.services.public_service import PublicService


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    1. Forces the backend to 'asyncio'.
    2. Promotes the scope to 'session'.
    """
    return "asyncio"


# --- 1. Endpoint Client ---

@pytest.fixture(scope="function")
def client() -> TestClient:
    """
    Runs the app's lifespan, which creates a fresh in-memory database
    (tables included) for every test.
    """
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your .env file or environment."

    with TestClient(app) as test_client:
        yield test_client


# --- 2. Function-Scoped Session Fixture (For Service Tests) ---

@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a single session bound to its own in-memory database.
    Independent of the TestClient so it lives on the test's event loop.
    """
    engine = create_async_engine(
        settings.DATABASE_URL_TEST,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(db_models.Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    session = session_factory()
    try:
        yield session
    finally:
        await session.rollback()
        await session.close()
        await engine.dispose()


# --- 3. SERVICE FIXTURES ---

@pytest.fixture(scope="function")
def service_management(db_session: AsyncSession) -> ServiceManagementService:
    return ServiceManagementService(db=db_session)

@pytest.fixture(scope="function")
def exception_service(db_session: AsyncSession, service_management: ServiceManagementService) -> ExceptionService:
    return ExceptionService(db=db_session, service_management=service_management)

@pytest.fixture(scope="function")
def availability_service(
    db_session: AsyncSession,
    service_management: ServiceManagementService,
    exception_service: ExceptionService
) -> AvailabilityService:
    return AvailabilityService(
        db=db_session,
        service_management=service_management,
        exception_service=exception_service
    )

@pytest.fixture(scope="function")
def public_service(
    service_management: ServiceManagementService,
    availability_service: AvailabilityService
) -> PublicService:
    return PublicService(service_management=service_management, availability_service=availability_service)


# --- 4. DATA FIXTURES ---

@pytest.fixture(scope="function")
async def test_service_orm(db_session: AsyncSession) -> db_models.Services:
    """An active service with no patterns, exceptions or links."""
    service = db_models.Services(
        id=TEST_SERVICE_ID,
        title="Haircut",
        provider_name="Dana Cole",
        business_name="Cole Studio",
        description="Wash, cut and style.",
        duration=60
    )
    db_session.add(service)
    await db_session.flush()
    return service

@pytest.fixture(scope="function")
def workweek_pattern_orm() -> db_models.AvailabilityPatterns:
    """
    Mon-Fri, hourly 09:00-17:00, for the first week of 2024.
    Transient (not added to any session).
    """
    return db_models.AvailabilityPatterns(
        id=TEST_PATTERN_ID,
        service_id=TEST_SERVICE_ID,
        slot_type="Hour",
        slot_duration=60,
        start_time=WORKDAY_START,
        end_time=WORKDAY_END,
        days_of_week=WEEKDAYS,
        start_date=WEEK_START_MONDAY,
        end_date=WEEK_END_FRIDAY
    )
