"""Application services."""

from .article_service import ArticleService, Page
from .author_name_resolver import AuthorDeletionResult, AuthorNameResolver
from .background import SideEffectRunner
from .cache_invalidation import CacheInvalidationCoordinator

__all__ = [
    "ArticleService",
    "Page",
    "AuthorDeletionResult",
    "AuthorNameResolver",
    "SideEffectRunner",
    "CacheInvalidationCoordinator",
]
