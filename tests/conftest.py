"""
Pytest configuration for the enquiry service tests
"""
import os

# Must be set before the application modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("MAILGUN_DEV", "yes")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import httpx
import pytest

from estate_enquiry.database import (
    build_engine,
    build_session_factory,
    create_tables,
    get_db,
    session_dependency,
)
from estate_enquiry.enquiry_form import PropertySummary
from estate_enquiry.models.database import User
from estate_enquiry.utils.auth import create_access_token


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test"""
    engine = build_engine("sqlite+aiosqlite://")
    await create_tables(engine)

    yield build_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def app(session_factory):
    """The FastAPI app wired to the test database"""
    from estate_enquiry.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_db] = session_dependency(session_factory)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def api_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _create_user(session_factory, email: str, role: str) -> User:
    async with session_factory() as db:
        user = User(email=email, hashed_password="not-a-real-hash", full_name="Test User", role=role)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user


@pytest.fixture
async def admin_headers(session_factory):
    user = await _create_user(session_factory, "admin@example.com", "admin")
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture
async def agent_headers(session_factory):
    user = await _create_user(session_factory, "agent@example.com", "agent")
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture
def listing():
    """Sample property with two configurations"""
    return PropertySummary(
        id="prop-123",
        title="Palm Grove Residency",
        location="Whitefield, Bengaluru",
        configurations=[2, 3],
    )


@pytest.fixture
def sample_contact_payload():
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "+91 98450 00000",
        "message": "Is the 3BHK still available?",
        "inquiry_type": "contact",
        "property_id": "prop-123",
        "property_name": "Palm Grove Residency",
        "property_location": "Whitefield, Bengaluru",
        "property_configurations": '{"2BHK","3BHK"}',
    }


@pytest.fixture
def sample_tour_payload():
    return {
        "name": "Vikram Shah",
        "email": "vikram@example.com",
        "phone": "+91 99000 11111",
        "message": "Tour request",
        "inquiry_type": "tour",
        "property_id": "prop-123",
        "property_name": "Palm Grove Residency",
        "property_location": "Whitefield, Bengaluru",
        "tour_date": "2026-10-17",
        "tour_time": "11:00 AM",
        "tour_type": '{"siteVisit","videoChat"}',
    }
