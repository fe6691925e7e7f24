"""Tests for the leaderboard and chest catalog endpoints."""

from httpx import AsyncClient

from dragonhoard.db.store import AccountStore
from dragonhoard.models.catalog import Element, Rarity


class TestChests:
    async def test_list_chests(self, client: AsyncClient) -> None:
        response = await client.get("/chests")

        assert response.status_code == 200
        chests = response.json()
        assert [c["chest_id"] for c in chests] == ["wood", "iron", "silver", "gold"]
        assert chests[0]["cost"] == 100
        assert chests[0]["drop_rates"] == {"1": 0.9, "2": 0.1}


class TestLeaderboard:
    async def test_empty(self, client: AsyncClient) -> None:
        response = await client.get("/leaderboard")

        assert response.status_code == 200
        assert response.json() == []

    async def test_ranked_by_experience(
        self, client: AsyncClient, session_factory, make_dragon
    ) -> None:
        """Accounts appear highest XP first with their collection stats."""
        store = AccountStore(session_factory)
        await store.create("novice", "pw")
        await store.create("veteran", "pw")
        await store.persist(
            "veteran",
            0,
            3200,
            [
                make_dragon(Rarity.IRON, Element.FIRE, name="Spark"),
                make_dragon(Rarity.GOLDEN, Element.DIVINE, name="Seraph"),
                make_dragon(Rarity.WOODEN, Element.FIRE),
            ],
        )

        response = await client.get("/leaderboard")

        assert response.status_code == 200
        entries = response.json()
        assert [e["username"] for e in entries] == ["veteran", "novice"]
        top = entries[0]
        assert top["rank"] == 1
        assert top["level"] == 4
        assert top["score"] == 50 + 1500 + 10
        assert top["best_dragon"] == "Seraph"
        assert top["favorite_element"] == "Fire"
        assert entries[1]["best_dragon"] is None

    async def test_limit(self, client: AsyncClient, session_factory) -> None:
        store = AccountStore(session_factory)
        for i in range(3):
            await store.create(f"player-{i}", "pw")

        response = await client.get("/leaderboard", params={"limit": 2})

        assert len(response.json()) == 2

    async def test_invalid_limit(self, client: AsyncClient) -> None:
        response = await client.get("/leaderboard", params={"limit": 0})

        assert response.status_code == 422
