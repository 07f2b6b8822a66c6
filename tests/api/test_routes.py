"""
API tests: FastAPI TestClient with the in-memory repositories plugged in
through dependency overrides.
"""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from civicposts.api.dependencies import (
    get_article_repository,
    get_author_repository,
    get_image_store,
    get_page_invalidator,
    get_publisher_repository,
    get_response_cache,
    get_side_effect_runner,
    get_view_counter,
)
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.main import app


@pytest.fixture
def client(
    article_repository, author_repository, publisher_repository, cache, page_invalidator, image_store, side_effects
):
    app.dependency_overrides[get_article_repository] = lambda: article_repository
    app.dependency_overrides[get_author_repository] = lambda: author_repository
    app.dependency_overrides[get_publisher_repository] = lambda: publisher_repository
    app.dependency_overrides[get_view_counter] = lambda: article_repository
    app.dependency_overrides[get_response_cache] = lambda: cache
    app.dependency_overrides[get_page_invalidator] = lambda: page_invalidator
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_side_effect_runner] = lambda: side_effects
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _article_body(author_id=None, **overrides):
    body = {
        "title": "Bridge reopens after repairs",
        "content": ["The bridge reopened on Monday.", "Traffic is expected to ease."],
        "category": "news",
        "status": "published",
        "published_date": (date.today() - timedelta(days=1)).isoformat(),
        "main_image": {"url": "https://cdn.example.com/bridge.jpg", "public_id": "articles/bridge"},
    }
    if author_id is not None:
        body["author_id"] = str(author_id)
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# =============================================================================
# Public site
# =============================================================================


def test_public_article_uses_camel_case_flags(client, article_repository, make_article):
    article_repository.add(make_article(slug="budget", is_top_story=True))

    response = client.get("/api/v1/articles/budget")

    assert response.status_code == 200
    data = response.json()
    assert data["isTopStory"] is True
    assert data["isTrending"] is False
    assert data["author_name"] == "Jane Doe"


def test_draft_article_is_404(client, article_repository, make_article):
    article_repository.add(make_article(slug="budget", status=ArticleStatus.DRAFT))

    response = client.get("/api/v1/articles/budget")

    assert response.status_code == 404


def test_article_listing_pagination(client, article_repository, make_article):
    for i in range(3):
        article_repository.add(make_article(title=f"Story {i}"))

    response = client.get("/api/v1/articles/", params={"limit": 2})

    data = response.json()
    assert len(data["articles"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert data["hasMore"] is True


def test_author_page(client, article_repository, make_article):
    article_repository.add(make_article(author_name="Jane Doe"))

    response = client.get("/api/v1/articles/author/jane-doe")

    assert response.status_code == 200
    assert response.json()["authorName"] == "Jane Doe"


def test_home_page_keys(client, article_repository, make_article):
    article_repository.add(make_article(title="Top", is_top_story=True))

    data = client.get("/api/v1/articles/home").json()

    assert [a["title"] for a in data["topStories"]] == ["Top"]
    assert data["miniTopStories"] == []
    assert "news" in data["latestByCategory"]


# =============================================================================
# Admin
# =============================================================================


def test_admin_creates_article_and_revalidates(client, author_repository, page_invalidator, make_author):
    author = author_repository.add(make_author())

    response = client.post("/api/v1/admin/articles", json=_article_body(author.id))

    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "bridge-reopens-after-repairs"
    assert data["author_name"] == "Jane Doe"
    assert "/" in page_invalidator.paths


def test_create_with_unknown_author_is_400(client):
    response = client.post("/api/v1/admin/articles", json=_article_body(uuid4()))

    assert response.status_code == 400


def test_duplicate_title_is_409(client, author_repository, make_author):
    author = author_repository.add(make_author())
    client.post("/api/v1/admin/articles", json=_article_body(author.id))

    response = client.post("/api/v1/admin/articles", json=_article_body(author.id))

    assert response.status_code == 409


def test_placement_toggle_clears_other_flags(client, article_repository, make_article):
    article = article_repository.add(make_article(is_trending=True))

    response = client.put(
        f"/api/v1/admin/articles/{article.id}/placement",
        json={"flag": "isTopStory", "value": True},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isTopStory"] is True
    assert data["isTrending"] is False


def test_placement_unknown_flag_is_400(client, article_repository, make_article):
    article = article_repository.add(make_article())

    response = client.put(
        f"/api/v1/admin/articles/{article.id}/placement",
        json={"flag": "isBreaking", "value": True},
    )

    assert response.status_code == 400


def test_update_with_two_flags_is_400(client, article_repository, make_article):
    article = article_repository.add(make_article())

    response = client.patch(
        f"/api/v1/admin/articles/{article.id}",
        json={"isTopStory": True, "isLatest": True},
    )

    assert response.status_code == 400


def test_delete_article(client, article_repository, image_store, make_article):
    article = article_repository.add(make_article())

    response = client.delete(f"/api/v1/admin/articles/{article.id}")

    assert response.status_code == 200
    assert response.json()["message"] == "Article deleted successfully"
    assert article.id not in article_repository.articles


def test_author_never_exposes_credential(client):
    response = client.post(
        "/api/v1/admin/authors",
        json={"name": "Jane Doe", "email": "Jane@Example.com", "password": "s3cret-pass"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "jane@example.com"
    assert data["canLogin"] is True
    assert "credential" not in data
    assert "password" not in data


def test_duplicate_author_email_is_409(client, author_repository, make_author):
    author_repository.add(make_author())

    response = client.post("/api/v1/admin/authors", json={"name": "Other", "email": "jane@example.com"})

    assert response.status_code == 409


def test_rename_author_updates_articles(client, author_repository, article_repository, make_author, make_article):
    author = author_repository.add(make_author())
    article = article_repository.add(make_article(author_id=author.id))

    response = client.patch(f"/api/v1/admin/authors/{author.id}", json={"name": "Jane Smith"})

    assert response.status_code == 200
    assert article_repository.articles[article.id].author_name == "Jane Smith"


def test_delete_author_reports_affected_articles(client, author_repository, article_repository, make_author, make_article):
    author = author_repository.add(make_author())
    article_repository.add(make_article(author_id=author.id))

    response = client.delete(f"/api/v1/admin/authors/{author.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["articlesAffectedCount"] == 1
    assert "Jane Doe" in data["message"]


# =============================================================================
# Author and publisher portals
# =============================================================================


def test_author_portal_requires_identity(client):
    response = client.get("/api/v1/author-portal/articles")

    assert response.status_code == 401


def test_author_portal_forces_own_author(client, author_repository, make_author):
    author = author_repository.add(make_author())
    other = author_repository.add(make_author(name="John Roe", email="john@example.com"))

    response = client.post(
        "/api/v1/author-portal/articles",
        json=_article_body(other.id),
        headers={"X-Author-Id": str(author.id)},
    )

    assert response.status_code == 201
    assert response.json()["author_id"] == str(author.id)


def test_author_cannot_set_flags(client, author_repository, article_repository, make_author, make_article):
    author = author_repository.add(make_author())
    article = article_repository.add(make_article(author_id=author.id))

    response = client.patch(
        f"/api/v1/author-portal/articles/{article.id}",
        json={"isTopStory": True},
        headers={"X-Author-Id": str(author.id)},
    )

    assert response.status_code == 403


def test_author_cannot_read_foreign_article(client, article_repository, make_article):
    article = article_repository.add(make_article(author_id=uuid4()))

    response = client.get(
        f"/api/v1/author-portal/articles/{article.id}",
        headers={"X-Author-Id": str(uuid4())},
    )

    assert response.status_code == 403


def test_publisher_lists_only_own_articles(client, article_repository, make_article):
    publisher_id = uuid4()
    article_repository.add(make_article(title="Mine", publisher_id=publisher_id))
    article_repository.add(make_article(title="Theirs", publisher_id=uuid4()))

    response = client.get("/api/v1/publisher/articles", headers={"X-Publisher-Id": str(publisher_id)})

    assert [a["title"] for a in response.json()["articles"]] == ["Mine"]


def test_publisher_portal_create_requires_existing_account(client, author_repository, make_author):
    author = author_repository.add(make_author())

    response = client.post(
        "/api/v1/publisher/articles",
        json=_article_body(author.id),
        headers={"X-Publisher-Id": str(uuid4())},
    )

    assert response.status_code == 403


def test_publisher_portal_create(client, author_repository, publisher_repository, make_author, make_publisher):
    author = author_repository.add(make_author())
    publisher = publisher_repository.add(make_publisher())

    response = client.post(
        "/api/v1/publisher/articles",
        json=_article_body(author.id),
        headers={"X-Publisher-Id": str(publisher.id)},
    )

    assert response.status_code == 201
    assert response.json()["publisher_id"] == str(publisher.id)


# =============================================================================
# Admin: publishers
# =============================================================================


def test_admin_creates_publisher_without_exposing_credential(client):
    response = client.post(
        "/api/v1/admin/publishers",
        json={"name": "City Press", "email": "Desk@CityPress.example.com", "password": "press-pass"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "desk@citypress.example.com"
    assert data["createdByRole"] == "admin"
    assert "credential" not in data
    assert "password" not in data


def test_publisher_short_password_is_400(client):
    response = client.post(
        "/api/v1/admin/publishers",
        json={"name": "City Press", "email": "desk@citypress.example.com", "password": "123"},
    )

    assert response.status_code == 400


def test_delete_publisher(client, publisher_repository, make_publisher):
    publisher = publisher_repository.add(make_publisher())

    response = client.delete(f"/api/v1/admin/publishers/{publisher.id}")

    assert response.json() == {"success": True, "message": "Publisher deleted successfully."}
    assert client.get(f"/api/v1/admin/publishers/{publisher.id}").status_code == 404
