"""
Shared fixtures: in-memory implementations of every port.
"""

import copy
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

import pytest

from civicposts.application.handlers.article_command_handler import ArticleCommandHandler
from civicposts.application.handlers.author_command_handler import AuthorCommandHandler
from civicposts.application.handlers.publisher_command_handler import PublisherCommandHandler
from civicposts.application.services.article_service import ArticleService
from civicposts.application.services.author_name_resolver import AuthorNameResolver
from civicposts.application.services.background import SideEffectRunner
from civicposts.application.services.cache_invalidation import CacheInvalidationCoordinator
from civicposts.domain.entities.article import Article, ImageRef
from civicposts.domain.entities.author import Author, normalize_email
from civicposts.domain.entities.publisher import Publisher
from civicposts.domain.ports.image_store import IImageStore
from civicposts.domain.ports.page_invalidator import IPageInvalidator
from civicposts.domain.repositories.article_repository import IArticleRepository
from civicposts.domain.repositories.author_repository import IAuthorRepository
from civicposts.domain.repositories.publisher_repository import IPublisherRepository
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.infrastructure.cache.memory_cache import InMemoryResponseCache
from civicposts.shared.exceptions.domain_exceptions import DuplicateEntityError

NOW = datetime(2024, 6, 15, 12, 0)
TODAY = NOW.date()


# =============================================================================
# In-memory repositories
# =============================================================================


def _ordered(articles: List[Article]) -> List[Article]:
    result = sorted(articles, key=lambda a: str(a.id))
    result.sort(key=lambda a: a.created_at, reverse=True)
    return result


def _visible(article: Article, cutoff: date) -> bool:
    return article.status is ArticleStatus.PUBLISHED and article.published_date <= cutoff


class InMemoryArticleRepository(IArticleRepository):
    def __init__(self):
        self.articles: Dict[UUID, Article] = {}
        self.increment_calls = 0

    def add(self, article: Article) -> Article:
        self.articles[article.id] = copy.deepcopy(article)
        return article

    async def save(self, article: Article) -> Article:
        for other in self.articles.values():
            if other.slug == article.slug and other.id != article.id:
                raise DuplicateEntityError(f"Article with slug '{article.slug}' already exists")
        stored = copy.deepcopy(article)
        existing = self.articles.get(article.id)
        if existing is not None:
            # Only increment_views changes the counter of a stored article.
            stored.views = existing.views
        self.articles[article.id] = stored
        return copy.deepcopy(stored)

    async def find_by_id(self, article_id):
        article = self.articles.get(article_id)
        return copy.deepcopy(article) if article else None

    async def find_by_slug(self, slug):
        for article in self.articles.values():
            if article.slug == slug:
                return copy.deepcopy(article)
        return None

    async def find_visible_by_slug(self, slug, cutoff):
        article = await self.find_by_slug(slug)
        if article and _visible(article, cutoff):
            return article
        return None

    async def exists_by_slug(self, slug, exclude_id=None):
        return any(a.slug == slug and a.id != exclude_id for a in self.articles.values())

    def _matching(self, status=None, category=None, author_id=None, publisher_id=None):
        return [
            a for a in self.articles.values()
            if (status is None or a.status is status)
            and (category is None or a.category is category)
            and (author_id is None or a.author_id == author_id)
            and (publisher_id is None or a.publisher_id == publisher_id)
        ]

    async def find_all(self, status=None, category=None, author_id=None, publisher_id=None, limit=10, offset=0):
        matching = _ordered(self._matching(status, category, author_id, publisher_id))
        return copy.deepcopy(matching[offset:offset + limit])

    async def count(self, status=None, category=None, author_id=None, publisher_id=None):
        return len(self._matching(status, category, author_id, publisher_id))

    def _visible_matching(self, cutoff, category=None, author_name=None, exclude_slug=None):
        return [
            a for a in self.articles.values()
            if _visible(a, cutoff)
            and (category is None or a.category is category)
            and (author_name is None or a.author_name == author_name)
            and (exclude_slug is None or a.slug != exclude_slug)
        ]

    async def find_visible(self, cutoff, category=None, author_name=None, exclude_slug=None, limit=12, offset=0):
        matching = _ordered(self._visible_matching(cutoff, category, author_name, exclude_slug))
        return copy.deepcopy(matching[offset:offset + limit])

    async def count_visible(self, cutoff, category=None, author_name=None, exclude_slug=None):
        return len(self._visible_matching(cutoff, category, author_name, exclude_slug))

    async def find_placement_candidates(self, cutoff):
        matching = [a for a in self.articles.values() if _visible(a, cutoff) and a.has_any_placement()]
        return copy.deepcopy(_ordered(matching))

    async def distinct_author_names(self):
        names = []
        for article in self.articles.values():
            if article.status is ArticleStatus.PUBLISHED and article.author_name and article.author_name not in names:
                names.append(article.author_name)
        return names

    async def update_fields(self, article_id, fields: Dict[str, Any]):
        article = self.articles.get(article_id)
        if article is None:
            return None
        for name, value in fields.items():
            setattr(article, name, value)
        article.touch()
        return copy.deepcopy(article)

    async def update_author_name_where_name(self, old_name, new_name):
        updated = 0
        for article in self.articles.values():
            if article.author_name == old_name:
                article.author_name = new_name
                updated += 1
        return updated

    async def update_author_name_where_author(self, author_id, new_name):
        updated = 0
        for article in self.articles.values():
            if article.author_id == author_id and article.author_name != new_name:
                article.author_name = new_name
                updated += 1
        return updated

    async def count_by_author(self, author_id):
        return sum(1 for a in self.articles.values() if a.author_id == author_id)

    async def find_missing_author_name(self, limit=500, offset=0):
        missing = sorted(
            (a for a in self.articles.values() if not a.author_name),
            key=lambda a: (a.created_at, str(a.id)),
        )
        return copy.deepcopy(missing[offset:offset + limit])

    async def increment_views(self, article_id, amount=1):
        self.increment_calls += 1
        article = self.articles.get(article_id)
        if article is not None:
            article.views += amount

    async def delete(self, article_id):
        return self.articles.pop(article_id, None) is not None


class InMemoryAuthorRepository(IAuthorRepository):
    def __init__(self):
        self.authors: Dict[UUID, Author] = {}

    def add(self, author: Author) -> Author:
        self.authors[author.id] = copy.deepcopy(author)
        return author

    async def save(self, author):
        self.authors[author.id] = copy.deepcopy(author)
        return copy.deepcopy(author)

    async def find_by_id(self, author_id):
        author = self.authors.get(author_id)
        return copy.deepcopy(author) if author else None

    async def find_by_email(self, email):
        email = normalize_email(email)
        for author in self.authors.values():
            if author.email == email:
                return copy.deepcopy(author)
        return None

    async def exists_by_email(self, email, exclude_id=None):
        email = normalize_email(email)
        return any(a.email == email and a.id != exclude_id for a in self.authors.values())

    async def find_all(self):
        return copy.deepcopy(sorted(self.authors.values(), key=lambda a: a.name))

    async def delete(self, author_id):
        return self.authors.pop(author_id, None) is not None


class InMemoryPublisherRepository(IPublisherRepository):
    def __init__(self):
        self.publishers: Dict[UUID, Publisher] = {}

    def add(self, publisher: Publisher) -> Publisher:
        self.publishers[publisher.id] = copy.deepcopy(publisher)
        return publisher

    async def save(self, publisher):
        self.publishers[publisher.id] = copy.deepcopy(publisher)
        return copy.deepcopy(publisher)

    async def find_by_id(self, publisher_id):
        publisher = self.publishers.get(publisher_id)
        return copy.deepcopy(publisher) if publisher else None

    async def exists_by_email(self, email, exclude_id=None):
        email = normalize_email(email)
        return any(p.email == email and p.id != exclude_id for p in self.publishers.values())

    async def find_all(self):
        return copy.deepcopy(sorted(self.publishers.values(), key=lambda p: p.name))

    async def delete(self, publisher_id):
        return self.publishers.pop(publisher_id, None) is not None


# =============================================================================
# Outbound doubles
# =============================================================================


class RecordingPageInvalidator(IPageInvalidator):
    def __init__(self, fail: bool = False):
        self.paths: List[str] = []
        self.fail = fail

    async def invalidate(self, path):
        if self.fail:
            raise RuntimeError("revalidation endpoint down")
        self.paths.append(path)


class RecordingImageStore(IImageStore):
    def __init__(self, fail: bool = False):
        self.deleted: List[str] = []
        self.fail = fail

    async def delete_by_external_id(self, public_id):
        if self.fail:
            raise RuntimeError("CDN unavailable")
        self.deleted.append(public_id)


# =============================================================================
# Factories
# =============================================================================


def build_article(**overrides) -> Article:
    title = overrides.pop("title", "City council approves new budget")
    defaults = dict(
        title=title,
        slug=overrides.pop("slug", None) or title.lower().replace(" ", "-"),
        content=["First paragraph.", "Second paragraph."],
        status=ArticleStatus.PUBLISHED,
        published_date=TODAY - timedelta(days=1),
        author_name="Jane Doe",
        main_image=ImageRef(url="https://cdn.example.com/main.jpg", public_id="articles/main"),
        created_at=NOW - timedelta(hours=1),
    )
    defaults.update(overrides)
    return Article(**defaults)


@pytest.fixture
def make_article():
    return build_article


@pytest.fixture
def make_author():
    def _make(**overrides) -> Author:
        defaults = dict(name="Jane Doe", email="jane@example.com")
        defaults.update(overrides)
        return Author(**defaults)

    return _make


@pytest.fixture
def make_publisher():
    def _make(**overrides) -> Publisher:
        defaults = dict(name="City Press", email="desk@citypress.example.com", credential="$2b$12$stored-hash")
        defaults.update(overrides)
        return Publisher(**defaults)

    return _make


# =============================================================================
# Wiring
# =============================================================================


@pytest.fixture
def article_repository():
    return InMemoryArticleRepository()


@pytest.fixture
def author_repository():
    return InMemoryAuthorRepository()


@pytest.fixture
def publisher_repository():
    return InMemoryPublisherRepository()


@pytest.fixture
def cache():
    return InMemoryResponseCache(default_ttl_ms=60_000)


@pytest.fixture
def page_invalidator():
    return RecordingPageInvalidator()


@pytest.fixture
def image_store():
    return RecordingImageStore()


@pytest.fixture
def side_effects():
    return SideEffectRunner()


@pytest.fixture
def coordinator(cache, page_invalidator):
    return CacheInvalidationCoordinator(cache, page_invalidator)


@pytest.fixture
def name_resolver(article_repository, author_repository, coordinator):
    return AuthorNameResolver(article_repository, author_repository, coordinator)


@pytest.fixture
def article_handler(
    article_repository, author_repository, publisher_repository, name_resolver, coordinator, image_store, side_effects
):
    return ArticleCommandHandler(
        article_repository,
        author_repository,
        name_resolver,
        coordinator,
        image_store,
        side_effects,
        publisher_repository,
    )


@pytest.fixture
def author_handler(author_repository, name_resolver):
    return AuthorCommandHandler(author_repository, name_resolver)


@pytest.fixture
def publisher_handler(publisher_repository):
    return PublisherCommandHandler(publisher_repository)


@pytest.fixture
def article_service(article_repository, cache, side_effects):
    return ArticleService(article_repository, cache, side_effects)
