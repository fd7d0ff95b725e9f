"""Unit tests for ideas API endpoints."""

from datetime import datetime

import pytest


@pytest.fixture
async def alice_idea(test_client_with_db, auth_headers, idea_payload) -> dict:
    """An idea authored by alice."""
    response = await test_client_with_db.post(
        "/api/ideas/",
        json=idea_payload("alice"),
        headers=auth_headers("alice"),
    )
    assert response.status_code == 201
    return response.json()


class TestCreateIdea:
    """Test cases for creating ideas."""

    @pytest.mark.asyncio
    async def test_create_idea_success(self, test_client_with_db, auth_headers, idea_payload):
        """Test creating an idea returns the stored record."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice"),
            headers=auth_headers("alice"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["title"] == "Solar Backpack"
        assert data["category"] == "product-idea"
        assert data["author_id"] == "alice"
        assert data["tags"] == ["solar", "outdoors"]
        assert data["likes"] == 0
        assert data["comments"] == 0
        assert data["collaboration_status"] == "lfp"
        assert data["collaborators"] == []
        assert data["created_at"] == data["updated_at"]

    @pytest.mark.asyncio
    async def test_create_idea_cleans_tags(self, test_client_with_db, auth_headers, idea_payload):
        """Test tags are trimmed and blank tags dropped."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice", tags=["  solar ", "", "   ", "diy"]),
            headers=auth_headers("alice"),
        )

        assert response.status_code == 201
        assert response.json()["tags"] == ["solar", "diy"]

    @pytest.mark.asyncio
    async def test_create_idea_requires_token(self, test_client_with_db, idea_payload):
        """Test creating without a token is unauthenticated."""
        response = await test_client_with_db.post("/api/ideas/", json=idea_payload("alice"))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_idea_requires_verified_email(
        self, test_client_with_db, auth_headers, idea_payload
    ):
        """Test an unverified caller cannot create ideas."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice"),
            headers=auth_headers("alice", email_verified=False),
        )

        assert response.status_code == 403
        assert "verified" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_create_idea_author_mismatch(self, test_client_with_db, auth_headers, idea_payload):
        """Test a caller cannot create ideas on behalf of someone else."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice"),
            headers=auth_headers("mallory"),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Author ID mismatch"

    @pytest.mark.asyncio
    async def test_create_idea_blank_title(self, test_client_with_db, auth_headers, idea_payload):
        """Test a whitespace-only title is rejected."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice", title="   "),
            headers=auth_headers("alice"),
        )

        assert response.status_code == 422
        assert response.json()["type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_create_idea_unknown_category(self, test_client_with_db, auth_headers, idea_payload):
        """Test categories outside the fixed set are rejected."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice", category="time-travel"),
            headers=auth_headers("alice"),
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_idea_title_too_long(self, test_client_with_db, auth_headers, idea_payload):
        """Test titles longer than the limit are rejected."""
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice", title="x" * 101),
            headers=auth_headers("alice"),
        )

        assert response.status_code == 422


class TestListIdeas:
    """Test cases for the idea feed."""

    async def _create(self, client, auth_headers, idea_payload, author_id, **overrides) -> dict:
        response = await client.post(
            "/api/ideas/",
            json=idea_payload(author_id, **overrides),
            headers=auth_headers(author_id),
        )
        assert response.status_code == 201
        return response.json()

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client_with_db, auth_headers, idea_payload):
        """Test the default order is newest first."""
        first = await self._create(test_client_with_db, auth_headers, idea_payload, "alice", title="First")
        second = await self._create(test_client_with_db, auth_headers, idea_payload, "bob", title="Second")

        response = await test_client_with_db.get("/api/ideas/")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [idea["id"] for idea in data["ideas"]] == [second["id"], first["id"]]

        response = await test_client_with_db.get("/api/ideas/", params={"sort_by": "oldest"})
        assert [idea["id"] for idea in response.json()["ideas"]] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_list_alphabetical(self, test_client_with_db, auth_headers, idea_payload):
        """Test alphabetical sort by title."""
        for title in ("Zeppelin Tours", "Apple Picker", "Moon Garden"):
            await self._create(test_client_with_db, auth_headers, idea_payload, "alice", title=title)

        response = await test_client_with_db.get("/api/ideas/", params={"sort_by": "alphabetical"})

        titles = [idea["title"] for idea in response.json()["ideas"]]
        assert titles == ["Apple Picker", "Moon Garden", "Zeppelin Tours"]

    @pytest.mark.asyncio
    async def test_list_most_liked(self, test_client_with_db, auth_headers, idea_payload):
        """Test most-liked sort reflects the like counter."""
        quiet = await self._create(test_client_with_db, auth_headers, idea_payload, "alice", title="Quiet")
        popular = await self._create(test_client_with_db, auth_headers, idea_payload, "alice", title="Popular")

        for user in ("bob", "carol"):
            response = await test_client_with_db.put(
                f"/api/ideas/{popular['id']}/likes",
                headers=auth_headers(user),
            )
            assert response.status_code == 200

        response = await test_client_with_db.get("/api/ideas/", params={"sort_by": "most-liked"})

        ideas = response.json()["ideas"]
        assert [idea["id"] for idea in ideas] == [popular["id"], quiet["id"]]
        assert ideas[0]["likes"] == 2

    @pytest.mark.asyncio
    async def test_list_filter_by_category(self, test_client_with_db, auth_headers, idea_payload):
        """Test category filter."""
        await self._create(test_client_with_db, auth_headers, idea_payload, "alice", category="app-idea")
        await self._create(test_client_with_db, auth_headers, idea_payload, "alice", category="health-idea")

        response = await test_client_with_db.get("/api/ideas/", params={"category": "health-idea"})

        data = response.json()
        assert data["total"] == 1
        assert data["ideas"][0]["category"] == "health-idea"

    @pytest.mark.asyncio
    async def test_list_search_matches_title_description_and_tags(
        self, test_client_with_db, auth_headers, idea_payload
    ):
        """Test search is case-insensitive across title, description and tags."""
        await self._create(
            test_client_with_db, auth_headers, idea_payload, "alice",
            title="Solar Backpack", description="Charges phones", tags=["energy"],
        )
        await self._create(
            test_client_with_db, auth_headers, idea_payload, "alice",
            title="Recipe Swap", description="Trade SOLAR oven recipes", tags=["food"],
        )
        await self._create(
            test_client_with_db, auth_headers, idea_payload, "alice",
            title="Bike Share", description="Rent bikes", tags=["Solar-Powered"],
        )
        await self._create(
            test_client_with_db, auth_headers, idea_payload, "alice",
            title="Book Club", description="Read together", tags=["books"],
        )

        response = await test_client_with_db.get("/api/ideas/", params={"search": "solar"})

        titles = sorted(idea["title"] for idea in response.json()["ideas"])
        assert titles == ["Bike Share", "Recipe Swap", "Solar Backpack"]

    @pytest.mark.asyncio
    async def test_list_by_author(self, test_client_with_db, auth_headers, idea_payload):
        """Test listing one author's ideas."""
        await self._create(test_client_with_db, auth_headers, idea_payload, "alice")
        await self._create(test_client_with_db, auth_headers, idea_payload, "bob")

        response = await test_client_with_db.get("/api/ideas/by-author/alice")

        data = response.json()
        assert data["total"] == 1
        assert data["ideas"][0]["author_id"] == "alice"

        response = await test_client_with_db.get("/api/ideas/by-author/nobody")
        assert response.json() == {"ideas": [], "total": 0}

    @pytest.mark.asyncio
    async def test_list_recent_limit(self, test_client_with_db, auth_headers, idea_payload):
        """Test the recent endpoint honours its limit."""
        for title in ("One", "Two", "Three"):
            await self._create(test_client_with_db, auth_headers, idea_payload, "alice", title=title)

        response = await test_client_with_db.get("/api/ideas/recent", params={"limit": 2})

        titles = [idea["title"] for idea in response.json()["ideas"]]
        assert titles == ["Three", "Two"]


class TestGetUpdateDeleteIdea:
    """Test cases for single-idea endpoints."""

    @pytest.mark.asyncio
    async def test_get_idea(self, test_client_with_db, alice_idea):
        """Test fetching an idea by ID."""
        response = await test_client_with_db.get(f"/api/ideas/{alice_idea['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == alice_idea["title"]

    @pytest.mark.asyncio
    async def test_get_idea_not_found(self, test_client_with_db):
        """Test fetching an unknown idea."""
        response = await test_client_with_db.get("/api/ideas/does-not-exist")

        assert response.status_code == 404
        assert response.json()["type"] == "IdeaNotFoundError"

    @pytest.mark.asyncio
    async def test_update_idea_bumps_updated_at(self, test_client_with_db, auth_headers, alice_idea):
        """Test a partial update changes only the given fields and stamps updated_at."""
        response = await test_client_with_db.patch(
            f"/api/ideas/{alice_idea['id']}",
            json={"title": "Solar Backpack v2", "collaboration_status": "gave-up"},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Solar Backpack v2"
        assert data["collaboration_status"] == "gave-up"
        assert data["description"] == alice_idea["description"]
        assert data["created_at"] == alice_idea["created_at"]
        assert datetime.fromisoformat(data["updated_at"]) > datetime.fromisoformat(data["created_at"])

    @pytest.mark.asyncio
    async def test_update_idea_rejects_identity_fields(
        self, test_client_with_db, auth_headers, alice_idea
    ):
        """Test author fields cannot be changed through an update."""
        response = await test_client_with_db.patch(
            f"/api/ideas/{alice_idea['id']}",
            json={"author_id": "mallory"},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_idea_rejects_null(self, test_client_with_db, auth_headers, alice_idea):
        """Test explicit nulls are rejected."""
        response = await test_client_with_db.patch(
            f"/api/ideas/{alice_idea['id']}",
            json={"title": None},
            headers=auth_headers("alice"),
        )

        assert response.status_code == 422
        assert response.json()["type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_update_idea_by_other_user(self, test_client_with_db, auth_headers, alice_idea):
        """Test only the author may edit an idea."""
        response = await test_client_with_db.patch(
            f"/api/ideas/{alice_idea['id']}",
            json={"title": "Hijacked"},
            headers=auth_headers("mallory"),
        )

        assert response.status_code == 403

        response = await test_client_with_db.get(f"/api/ideas/{alice_idea['id']}")
        assert response.json()["title"] == alice_idea["title"]

    @pytest.mark.asyncio
    async def test_delete_idea_by_other_user(self, test_client_with_db, auth_headers, alice_idea):
        """Test only the author may delete an idea."""
        response = await test_client_with_db.delete(
            f"/api/ideas/{alice_idea['id']}",
            headers=auth_headers("mallory"),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_idea(self, test_client_with_db, auth_headers, alice_idea):
        """Test deleting an idea removes it from reads."""
        response = await test_client_with_db.delete(
            f"/api/ideas/{alice_idea['id']}",
            headers=auth_headers("alice"),
        )

        assert response.status_code == 200
        assert response.json()["idea_id"] == alice_idea["id"]

        response = await test_client_with_db.get(f"/api/ideas/{alice_idea['id']}")
        assert response.status_code == 404

        response = await test_client_with_db.delete(
            f"/api/ideas/{alice_idea['id']}",
            headers=auth_headers("alice"),
        )
        assert response.status_code == 404


class TestSolarBackpackScenario:
    """Create, list and update an idea end to end."""

    @pytest.mark.asyncio
    async def test_create_list_update(self, test_client_with_db, auth_headers, idea_payload):
        """Test the new idea leads the feed and an update is reflected with a later updated_at."""
        await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("bob", title="Older Idea", description="Community garden app", tags=[]),
            headers=auth_headers("bob"),
        )
        response = await test_client_with_db.post(
            "/api/ideas/",
            json=idea_payload("alice", title="Solar Backpack", tags=["solar", "hiking"]),
            headers=auth_headers("alice"),
        )
        idea_id = response.json()["id"]

        response = await test_client_with_db.get("/api/ideas/", params={"sort_by": "newest"})
        first = response.json()["ideas"][0]
        assert first["id"] == idea_id
        assert first["created_at"] == first["updated_at"]

        response = await test_client_with_db.get("/api/ideas/by-author/alice")
        assert [idea["id"] for idea in response.json()["ideas"]] == [idea_id]

        await test_client_with_db.patch(
            f"/api/ideas/{idea_id}",
            json={"title": "Solar Backpack v2"},
            headers=auth_headers("alice"),
        )

        response = await test_client_with_db.get("/api/ideas/")
        updated = next(idea for idea in response.json()["ideas"] if idea["id"] == idea_id)
        assert updated["title"] == "Solar Backpack v2"
        assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(updated["created_at"])

        response = await test_client_with_db.get("/api/ideas/", params={"search": "SOLAR"})
        assert [idea["id"] for idea in response.json()["ideas"]] == [idea_id]
