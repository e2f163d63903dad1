"""Shared fixtures: an in-memory SQLite database per test and an HTTP client
bound to the FastAPI app with get_db pointed at that database."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from impacts.auth import create_token, hash_password
from impacts.database import Base, enable_sqlite_foreign_keys, get_db
from impacts.main import app
from impacts.models import (
    ActivityCategory,
    FeedbackFormType,
    MilestoneCategory,
    MilestoneItem,
    SimulationType,
    User,
)

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def _client(session_factory, raise_app_exceptions=True):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    return AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions),
        base_url="http://test",
    )


@pytest_asyncio.fixture
async def client(session_factory):
    async with _client(session_factory) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def lenient_client(session_factory):
    """Client that returns 500 responses instead of re-raising app errors."""
    async with _client(session_factory, raise_app_exceptions=False) as ac:
        yield ac
    app.dependency_overrides.clear()


async def create_user(session_factory, email, role="normal", first_name="Casey", last_name="Morgan"):
    async with session_factory() as session:
        user = User(
            email=email,
            password_hash=hash_password(TEST_PASSWORD),
            first_name=first_name,
            last_name=last_name,
            hospital_name="County General",
            role=role,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return user


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_token(user)}"}


@pytest_asyncio.fixture
async def user(session_factory):
    return await create_user(session_factory, "coordinator@countygeneral.org")


@pytest_asyncio.fixture
async def other_user(session_factory):
    return await create_user(session_factory, "other@countygeneral.org", first_name="Riley")


@pytest_asyncio.fixture
async def admin_user(session_factory):
    return await create_user(session_factory, "admin@countygeneral.org", role="admin", first_name="Avery")


@pytest_asyncio.fixture
async def lookups(session_factory):
    """A few rows in each lookup table, returned as {name: id} per table."""
    async with session_factory() as session:
        categories = [ActivityCategory(name=n) for n in ("Simulation Prep", "Mentor Meeting", "General Admin")]
        sim_types = [SimulationType(name=n) for n in ("Tabletop", "In Situ")]
        form_types = [FeedbackFormType(name=n) for n in ("Site Report", "Participant Survey")]
        session.add_all(categories + sim_types + form_types)
        await session.commit()
        return {
            "categories": {c.name: c.id for c in categories},
            "simulation_types": {s.name: s.id for s in sim_types},
            "feedback_form_types": {f.name: f.id for f in form_types},
        }


@pytest_asyncio.fixture
async def milestone_definitions(session_factory):
    """Two categories with items and a trailing category with none."""
    async with session_factory() as session:
        initial = MilestoneCategory(name="Initial Steps", display_order=1)
        initial.items = [
            MilestoneItem(title="Complete assessment", description="Submit the survey",
                          link_url="https://www.pedsready.org", link_text="Assessment", display_order=2),
            MilestoneItem(title="Identify a coordinator", description="Name a PECC", display_order=1),
        ]
        equipment = MilestoneCategory(name="Equipment", display_order=2)
        equipment.items = [MilestoneItem(title="Audit supplies", display_order=1)]
        empty = MilestoneCategory(name="Quality Improvement", display_order=3)
        session.add_all([initial, equipment, empty])
        await session.commit()
        return {
            "initial": initial.id,
            "equipment": equipment.id,
            "empty": empty.id,
            "coordinator_item": initial.items[1].id,
            "assessment_item": initial.items[0].id,
            "audit_item": equipment.items[0].id,
        }
