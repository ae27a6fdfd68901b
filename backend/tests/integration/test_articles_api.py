"""End-to-end tests for the article HTTP endpoints over a SQLite-backed service."""

from collections.abc import AsyncIterator
from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from newsdesk.application.services import ArticleService
from newsdesk.infrastructure.dependencies import get_article_service
from newsdesk.main import app

AUTHOR_HEADERS = {"X-User-Id": "1", "X-User-Role": "author"}
ADMIN_HEADERS = {"X-User-Id": "99", "X-User-Role": "admin"}


@pytest_asyncio.fixture
async def client(repository) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_article_service] = lambda: ArticleService(repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def _payload(**overrides) -> dict:
    payload = {
        "title": "Valley of Flowers opens for the season",
        "content": "Forest officials opened the trail at Ghangaria.",
        "category": "Trekking & Hiking",
        "region": "Chamoli",
        "tags": ["Trek", "Himalaya", "trek"],
        "image": "https://cdn.example.org/vof.jpg",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_public_listing_envelope(client: AsyncClient, seed):
    author = await seed.author()
    for i in range(3):
        await seed.article(author, title=f"Trail {i}", category="Trekking & Hiking")
    await seed.article(author, title="Draft", category="Trekking & Hiking", status="draft")

    response = await client.get(
        "/api/v1/public/articles", params={"category": "Trekking & Hiking", "limit": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["articles"]) == 2
    assert body["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 3,
        "totalPages": 2,
        "hasNext": True,
        "hasPrev": False,
    }
    assert body["articles"][0]["author_name"] == "Asha Rawat"


@pytest.mark.asyncio
async def test_public_tag_filter_accepts_comma_list(client: AsyncClient, seed):
    author = await seed.author()
    await seed.article(author, title="Snowline", tags=["trek", "snow"])
    await seed.article(author, title="Bal mithai", tags=["food"])

    response = await client.get("/api/v1/public/articles/by-tags", params={"tags": "TREK,himalaya"})

    assert response.status_code == 200
    assert [a["title"] for a in response.json()["articles"]] == ["Snowline"]


@pytest.mark.asyncio
async def test_invalid_filter_is_unprocessable(client: AsyncClient):
    response = await client.get("/api/v1/public/articles", params={"category": "Cricket"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_public_search_requires_query(client: AsyncClient):
    response = await client.get("/api/v1/public/articles/search")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_public_trending(client: AsyncClient, seed):
    author = await seed.author()
    await seed.article(author, title="Unread", views=0, age=timedelta(hours=1))
    await seed.article(author, title="Read", views=12, age=timedelta(hours=1))

    response = await client.get("/api/v1/public/articles/trending", params={"timeframe": "day"})

    assert response.status_code == 200
    assert [a["title"] for a in response.json()["articles"]] == ["Read"]


@pytest.mark.asyncio
async def test_unknown_timeframe_is_rejected(client: AsyncClient):
    response = await client.get("/api/v1/public/articles/trending", params={"timeframe": "year"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_public_article_counts_views_and_hides_drafts(client: AsyncClient, seed):
    author = await seed.author()
    approved = await seed.article(author, views=2)
    draft = await seed.article(author, status="draft")

    first = await client.get(f"/api/v1/public/articles/{approved.id}")
    second = await client.get(f"/api/v1/public/articles/{approved.id}")
    hidden = await client.get(f"/api/v1/public/articles/{draft.id}")

    assert first.status_code == 200
    assert second.json()["views_count"] == 3
    assert hidden.status_code == 404


@pytest.mark.asyncio
async def test_dashboard_requires_caller_identity(client: AsyncClient):
    response = await client.get("/api/v1/articles")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_author_workflow_through_admin_approval(client: AsyncClient, seed):
    await seed.author()

    created = await client.post("/api/v1/articles", json=_payload(), headers=AUTHOR_HEADERS)
    assert created.status_code == 201
    article = created.json()
    assert article["status"] == "draft"
    assert article["tags"] == ["trek", "himalaya"]

    submitted = await client.post(f"/api/v1/articles/{article['id']}/submit", headers=AUTHOR_HEADERS)
    assert submitted.json()["status"] == "pending"

    forbidden = await client.post(
        f"/api/v1/articles/admin/{article['id']}/approve", headers=AUTHOR_HEADERS
    )
    assert forbidden.status_code == 403

    approved = await client.post(
        f"/api/v1/articles/admin/{article['id']}/approve", headers=ADMIN_HEADERS
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert approved.json()["publish_date"] is not None

    again = await client.post(
        f"/api/v1/articles/admin/{article['id']}/approve", headers=ADMIN_HEADERS
    )
    assert again.status_code == 422


@pytest.mark.asyncio
async def test_authors_only_list_their_own_articles(client: AsyncClient, seed):
    me = await seed.author()
    other = await seed.author("Rohit Bisht")
    mine = await seed.article(me, status="draft")
    await seed.article(other, status="draft")

    response = await client.get(
        "/api/v1/articles", params={"author_id": other.id}, headers=AUTHOR_HEADERS
    )

    assert [a["id"] for a in response.json()["articles"]] == [mine.id]


@pytest.mark.asyncio
async def test_admin_bulk_reject(client: AsyncClient, seed):
    author = await seed.author()
    pending = await seed.article(author, status="pending", published=False)
    draft = await seed.article(author, status="draft", published=False)

    response = await client.post(
        "/api/v1/articles/admin/bulk/reject",
        json={"ids": [pending.id, draft.id], "rejection_reason": "Missing sources"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert response.json() == {"affected": 1}


@pytest.mark.asyncio
async def test_store_fault_hides_driver_detail(client: AsyncClient, session, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT ...", {}, Exception("password authentication failed"))

    monkeypatch.setattr(session, "execute", failing_execute)

    response = await client.get("/api/v1/public/articles")

    assert response.status_code == 500
    assert response.json() == {"detail": "Database operation failed"}


@pytest.mark.asyncio
async def test_trending_limit_is_clamped(client: AsyncClient, seed):
    author = await seed.author()
    await seed.article(author, views=3)

    response = await client.get("/api/v1/public/articles/trending", params={"limit": 500, "page": 0})

    assert response.status_code == 200
    pagination = response.json()["pagination"]
    assert pagination["limit"] == 100
    assert pagination["page"] == 1


@pytest.mark.asyncio
async def test_culture_heritage_shortcut(client: AsyncClient, seed):
    author = await seed.author()
    await seed.article(author, title="Nanda Devi Raj Jat", category="Culture & Heritage")
    await seed.article(author, title="Rafting opens", category="Adventure Tourism")

    response = await client.get("/api/v1/public/articles/culture-heritage")

    assert response.status_code == 200
    assert [a["title"] for a in response.json()["articles"]] == ["Nanda Devi Raj Jat"]
