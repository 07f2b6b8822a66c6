"""
FastAPI Dependencies for DI.

Repositories are request scoped (one DB session per request). The response
cache, the side-effect runner and the outbound adapters are process-wide.
"""

from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from civicposts.application.commands.actor import Actor
from civicposts.application.handlers.article_command_handler import ArticleCommandHandler
from civicposts.application.handlers.author_command_handler import AuthorCommandHandler
from civicposts.application.handlers.publisher_command_handler import PublisherCommandHandler
from civicposts.application.services.article_service import ArticleService
from civicposts.application.services.author_name_resolver import AuthorNameResolver
from civicposts.application.services.background import SideEffectRunner
from civicposts.application.services.cache_invalidation import CacheInvalidationCoordinator
from civicposts.domain.ports.image_store import IImageStore
from civicposts.domain.ports.page_invalidator import IPageInvalidator
from civicposts.domain.ports.response_cache import IResponseCache
from civicposts.domain.ports.view_counter import IViewCounter
from civicposts.domain.repositories.article_repository import IArticleRepository
from civicposts.domain.repositories.author_repository import IAuthorRepository
from civicposts.domain.repositories.publisher_repository import IPublisherRepository
from civicposts.infrastructure.cache.memory_cache import InMemoryResponseCache
from civicposts.infrastructure.cdn.image_store import CdnImageStore, DisabledImageStore
from civicposts.infrastructure.config.database import AsyncSessionLocal, get_db_session
from civicposts.infrastructure.config.settings import get_settings
from civicposts.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
from civicposts.infrastructure.persistence.author_repository_impl import AuthorRepositoryImpl
from civicposts.infrastructure.persistence.publisher_repository_impl import PublisherRepositoryImpl
from civicposts.infrastructure.persistence.view_counter import SessionScopedViewCounter
from civicposts.infrastructure.revalidation.page_invalidator import (
    HttpPageInvalidator,
    LoggingPageInvalidator,
)

# =============================================================================
# Process-wide singletons
# =============================================================================


@lru_cache()
def get_response_cache() -> IResponseCache:
    return InMemoryResponseCache(default_ttl_ms=get_settings().cache_default_ttl_ms)


@lru_cache()
def get_side_effect_runner() -> SideEffectRunner:
    return SideEffectRunner()


@lru_cache()
def get_view_counter() -> IViewCounter:
    return SessionScopedViewCounter(AsyncSessionLocal)


@lru_cache()
def get_page_invalidator() -> IPageInvalidator:
    settings = get_settings()
    if not settings.revalidation_url:
        return LoggingPageInvalidator()
    return HttpPageInvalidator(
        settings.revalidation_url,
        secret=settings.revalidation_secret,
        timeout_seconds=settings.revalidation_timeout_seconds,
    )


@lru_cache()
def get_image_store() -> IImageStore:
    settings = get_settings()
    if not settings.is_cdn_configured():
        return DisabledImageStore()
    return CdnImageStore(
        settings.cdn_cloud_name,
        settings.cdn_api_key,
        settings.cdn_api_secret,
        base_url=settings.cdn_api_base_url,
        timeout_seconds=settings.cdn_timeout_seconds,
    )


# =============================================================================
# Request scoped
# =============================================================================


async def get_article_repository(
    session: AsyncSession = Depends(get_db_session),
) -> IArticleRepository:
    return ArticleRepositoryImpl(session)


async def get_author_repository(
    session: AsyncSession = Depends(get_db_session),
) -> IAuthorRepository:
    return AuthorRepositoryImpl(session)


async def get_publisher_repository(
    session: AsyncSession = Depends(get_db_session),
) -> IPublisherRepository:
    return PublisherRepositoryImpl(session)


def get_invalidation_coordinator(
    cache: IResponseCache = Depends(get_response_cache),
    page_invalidator: IPageInvalidator = Depends(get_page_invalidator),
) -> CacheInvalidationCoordinator:
    return CacheInvalidationCoordinator(cache, page_invalidator)


def get_author_name_resolver(
    article_repository: IArticleRepository = Depends(get_article_repository),
    author_repository: IAuthorRepository = Depends(get_author_repository),
    coordinator: CacheInvalidationCoordinator = Depends(get_invalidation_coordinator),
) -> AuthorNameResolver:
    return AuthorNameResolver(article_repository, author_repository, coordinator)


def get_article_command_handler(
    article_repository: IArticleRepository = Depends(get_article_repository),
    author_repository: IAuthorRepository = Depends(get_author_repository),
    name_resolver: AuthorNameResolver = Depends(get_author_name_resolver),
    coordinator: CacheInvalidationCoordinator = Depends(get_invalidation_coordinator),
    image_store: IImageStore = Depends(get_image_store),
    side_effects: SideEffectRunner = Depends(get_side_effect_runner),
    publisher_repository: IPublisherRepository = Depends(get_publisher_repository),
) -> ArticleCommandHandler:
    return ArticleCommandHandler(
        article_repository,
        author_repository,
        name_resolver,
        coordinator,
        image_store,
        side_effects,
        publisher_repository,
    )


def get_author_command_handler(
    author_repository: IAuthorRepository = Depends(get_author_repository),
    name_resolver: AuthorNameResolver = Depends(get_author_name_resolver),
) -> AuthorCommandHandler:
    return AuthorCommandHandler(author_repository, name_resolver)


def get_publisher_command_handler(
    publisher_repository: IPublisherRepository = Depends(get_publisher_repository),
) -> PublisherCommandHandler:
    return PublisherCommandHandler(publisher_repository)


def get_article_service(
    article_repository: IArticleRepository = Depends(get_article_repository),
    cache: IResponseCache = Depends(get_response_cache),
    side_effects: SideEffectRunner = Depends(get_side_effect_runner),
    view_counter: IViewCounter = Depends(get_view_counter),
) -> ArticleService:
    return ArticleService(
        article_repository,
        cache,
        side_effects,
        cache_ttl_ms=get_settings().cache_default_ttl_ms,
        view_counter=view_counter,
    )


# =============================================================================
# Acting identity (authentication happens upstream)
# =============================================================================


def _parse_identity(value: Optional[str], header: str) -> UUID:
    if not value:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    try:
        return UUID(value)
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Invalid {header} header")


def get_admin_actor() -> Actor:
    return Actor.admin()


def get_author_actor(x_author_id: Optional[str] = Header(None)) -> Actor:
    return Actor.author(_parse_identity(x_author_id, "X-Author-Id"))


def get_publisher_actor(x_publisher_id: Optional[str] = Header(None)) -> Actor:
    return Actor.publisher(_parse_identity(x_publisher_id, "X-Publisher-Id"))
