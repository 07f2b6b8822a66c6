"""
Application Service for articles.

Read side of the public site and the back office. Public reads only ever
see visible articles; listings are cached in the response cache and
dropped wholesale by the invalidation coordinator on every write.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from civicposts.application.queries.article_queries import (
    AdminListArticlesQuery,
    GetPublicArticleQuery,
    ListArticlesQuery,
    ListAuthorArticlesQuery,
    MoreArticlesQuery,
)
from civicposts.application.services.background import SideEffectRunner
from civicposts.domain.entities.article import Article
from civicposts.domain.ports.response_cache import IResponseCache
from civicposts.domain.ports.view_counter import IViewCounter
from civicposts.domain.repositories.article_repository import IArticleRepository
from civicposts.domain.services.invalidation import single_article_cache_key
from civicposts.domain.services.placement import HomePageLayout, resolve_home_page
from civicposts.domain.services.slugs import generate_author_slug
from civicposts.domain.services.visibility import visibility_cutoff
from civicposts.shared.exceptions.domain_exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a listing."""

    items: List[T] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0
    author_name: Optional[str] = None

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    @property
    def has_more(self) -> bool:
        return self.page * self.limit < self.total


class ArticleService:
    """
    Application Service for articles.

    Coordinates repositories, the response cache and side effects.
    """

    def __init__(
        self,
        repository: IArticleRepository,
        cache: IResponseCache,
        side_effects: SideEffectRunner,
        cache_ttl_ms: Optional[int] = None,
        view_counter: Optional[IViewCounter] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.side_effects = side_effects
        self.cache_ttl_ms = cache_ttl_ms
        # Increments run after the response; with SQL storage they need a
        # session of their own.
        self.view_counter = view_counter or repository

    # =========================================================================
    # Public
    # =========================================================================

    async def get_public_article(
        self,
        query: GetPublicArticleQuery,
        now: Optional[datetime] = None,
    ) -> Article:
        """
        Visible article by slug. Schedules a view increment.

        Raises:
            EntityNotFoundError: missing, draft or scheduled for later
        """
        key = single_article_cache_key(query.slug)
        article = self.cache.get(key)
        if article is None:
            article = await self.repository.find_visible_by_slug(query.slug, visibility_cutoff(now))
            if article is None:
                raise EntityNotFoundError(f"Article '{query.slug}' not found")
            self.cache.set(key, article, self.cache_ttl_ms)

        self.side_effects.fire(
            self.view_counter.increment_views(article.id),
            f"increment views of {article.slug}",
        )
        return article

    async def list_articles(
        self,
        query: ListArticlesQuery,
        now: Optional[datetime] = None,
    ) -> Page[Article]:
        category = query.category.value if query.category else "all"
        key = f"article:{category}:{query.page}:{query.limit}"

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        cutoff = visibility_cutoff(now)
        items = await self.repository.find_visible(
            cutoff, category=query.category, limit=query.limit, offset=query.offset
        )
        total = await self.repository.count_visible(cutoff, category=query.category)
        page = Page(items=items, page=query.page, limit=query.limit, total=total)
        self.cache.set(key, page, self.cache_ttl_ms)
        return page

    async def list_author_articles(
        self,
        query: ListAuthorArticlesQuery,
        now: Optional[datetime] = None,
    ) -> Page[Article]:
        """
        Public author page.

        The author is looked up by the slug of the names stored on published
        articles, so a deleted author keeps a page under their last name.

        Raises:
            EntityNotFoundError: no published article carries a matching name
        """
        key = f"author:{query.author_slug}:{query.page}:{query.limit}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        author_name = await self._resolve_author_name(query.author_slug)
        if author_name is None:
            raise EntityNotFoundError(f"Author '{query.author_slug}' not found")

        cutoff = visibility_cutoff(now)
        items = await self.repository.find_visible(
            cutoff, author_name=author_name, limit=query.limit, offset=query.offset
        )
        total = await self.repository.count_visible(cutoff, author_name=author_name)
        page = Page(
            items=items,
            page=query.page,
            limit=query.limit,
            total=total,
            author_name=author_name,
        )
        self.cache.set(key, page, self.cache_ttl_ms)
        return page

    async def more_articles(
        self,
        query: MoreArticlesQuery,
        now: Optional[datetime] = None,
    ) -> Page[Article]:
        key = f"articles:all:{query.exclude_slug or ''}:{query.page}:{query.limit}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        cutoff = visibility_cutoff(now)
        items = await self.repository.find_visible(
            cutoff, exclude_slug=query.exclude_slug, limit=query.limit, offset=query.offset
        )
        total = await self.repository.count_visible(cutoff, exclude_slug=query.exclude_slug)
        page = Page(items=items, page=query.page, limit=query.limit, total=total)
        self.cache.set(key, page, self.cache_ttl_ms)
        return page

    async def home_page(self, now: Optional[datetime] = None) -> HomePageLayout:
        """Home-page layout over the visible flagged articles."""
        moment = now or datetime.now()
        candidates = await self.repository.find_placement_candidates(visibility_cutoff(moment))
        return resolve_home_page(candidates, moment)

    # =========================================================================
    # Back office
    # =========================================================================

    async def get_article(self, article_id) -> Article:
        article = await self.repository.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError(f"Article {article_id} not found")
        return article

    async def admin_list(self, query: AdminListArticlesQuery) -> Page[Article]:
        """Every article matching the filters, drafts and scheduled included."""
        filters = dict(
            status=query.status,
            category=query.category,
            author_id=query.author_id,
            publisher_id=query.publisher_id,
        )
        items = await self.repository.find_all(limit=query.limit, offset=query.offset, **filters)
        total = await self.repository.count(**filters)
        return Page(items=items, page=query.page, limit=query.limit, total=total)

    async def _resolve_author_name(self, author_slug: str) -> Optional[str]:
        for name in await self.repository.distinct_author_names():
            if generate_author_slug(name) == author_slug:
                return name
        return None
