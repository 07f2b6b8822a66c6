"""
CQRS queries for the public read side.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category


@dataclass(frozen=True)
class GetPublicArticleQuery:
    """Visible article by slug."""

    slug: str


@dataclass(frozen=True)
class ListArticlesQuery:
    """Visible articles, optionally limited to one category."""

    category: Optional[Category] = None
    page: int = 1
    limit: int = 12

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit


@dataclass(frozen=True)
class ListAuthorArticlesQuery:
    """Visible articles of the author whose name slugifies to ``author_slug``."""

    author_slug: str
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit


@dataclass(frozen=True)
class MoreArticlesQuery:
    """Visible articles except the one currently displayed."""

    exclude_slug: Optional[str] = None
    page: int = 1
    limit: int = 12

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit


@dataclass(frozen=True)
class AdminListArticlesQuery:
    """Back-office listing, drafts and future-dated articles included."""

    status: Optional[ArticleStatus] = None
    category: Optional[Category] = None
    author_id: Optional[UUID] = None
    publisher_id: Optional[UUID] = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit
