import asyncio
from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dragonhoard.api.dependencies import get_generator
from dragonhoard.config import settings
from dragonhoard.db.database import get_session, get_session_factory
from dragonhoard.main import app
from dragonhoard.models.catalog import Element, Rarity
from dragonhoard.models.db import Base
from dragonhoard.models.dragon import Dragon, DragonContent, OffspringContent
from dragonhoard.models.failure import GenerationFailedError
from dragonhoard.services.session_registry import reset_session_registry


class FakeGenerator:
    """In-process stand-in for the content generator."""

    def __init__(self) -> None:
        self.fail = False
        self.delay = 0.0
        self.offspring_element: Element = Element.VOID
        self.calls: list[tuple[str, Rarity]] = []

    async def generate(self, rarity: Rarity, element: Element) -> DragonContent:
        self.calls.append(("generate", rarity))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise GenerationFailedError(detail="fake failure")
        return DragonContent(
            name=f"{element.value} Wyrm",
            description="Risen from a chest.",
            tags=("Scales", "Wings"),
        )

    async def generate_offspring(
        self, rarity: Rarity, parent_a: Dragon, parent_b: Dragon
    ) -> OffspringContent:
        self.calls.append(("generate_offspring", rarity))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise GenerationFailedError(detail="fake failure")
        return OffspringContent(
            name=f"Child of {parent_a.name} and {parent_b.name}",
            description="Born of two bloodlines.",
            element=self.offspring_element,
            tags=("Hybrid",),
        )


class RecordingStore:
    """ProgressStore that keeps every persisted snapshot in order."""

    def __init__(self) -> None:
        self.snapshots: list[tuple[int, int, list[str]]] = []

    async def persist(
        self,
        username: str,
        currency: int,
        experience: int,
        collection: list[Dragon],
    ) -> None:
        self.snapshots.append((currency, experience, [d.id for d in collection]))


@pytest.fixture(autouse=True)
def clear_session_registry():
    """Start every test with no logged-in players."""
    reset_session_registry()
    yield
    reset_session_registry()


@pytest.fixture(autouse=True)
def instant_reveal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove the presentation delays so flows finish immediately."""
    monkeypatch.setattr(settings, "presentation_floor_seconds", 0.0)
    monkeypatch.setattr(settings, "reveal_delay_seconds", 0.0)


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def make_dragon() -> Callable[..., Dragon]:
    """Factory for dragons with predictable ids."""
    counter = {"n": 0}

    def _make(
        rarity: Rarity = Rarity.WOODEN,
        element: Element = Element.FIRE,
        name: str | None = None,
    ) -> Dragon:
        counter["n"] += 1
        return Dragon(
            id=f"dragon-{counter['n']}",
            name=name or f"Dragon {counter['n']}",
            description="A test dragon.",
            rarity=rarity,
            element=element,
            tags=("Test",),
        )

    return _make


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory, fake_generator):
    """Async test client backed by the in-memory database and the fake generator."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_generator] = lambda: fake_generator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def logged_in(client: AsyncClient) -> str:
    """Register a player (which also logs them in) and send their session token."""
    response = await client.post(
        "/accounts/register", json={"username": "keeper", "password": "hunter2"}
    )
    assert response.status_code == 201
    client.headers["X-Session-Token"] = response.json()["session_token"]
    return "keeper"
