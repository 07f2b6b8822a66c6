"""
Repository Interface: IArticleRepository

Port for article storage. Adapters live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from civicposts.domain.entities.article import Article
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category


class IArticleRepository(ABC):
    """
    Article repository.

    Every ``find_visible*`` / ``count_visible`` method applies the
    visibility rule inside the query: ``status == published`` and
    ``published_date <= cutoff``. Listings are ordered by created_at
    descending, then id.
    """

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """
        Insert or fully replace an article.

        Args:
            article: Article to store

        Returns:
            Stored article
        """
        pass

    @abstractmethod
    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Article]:
        pass

    @abstractmethod
    async def find_visible_by_slug(self, slug: str, cutoff: date) -> Optional[Article]:
        """
        Find a publicly visible article by slug.

        Args:
            slug: Article slug
            cutoff: Latest visible published_date

        Returns:
            Article or None when missing, draft or future-dated
        """
        pass

    @abstractmethod
    async def exists_by_slug(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        pass

    @abstractmethod
    async def find_all(
        self,
        status: Optional[ArticleStatus] = None,
        category: Optional[Category] = None,
        author_id: Optional[UUID] = None,
        publisher_id: Optional[UUID] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Article]:
        """Back-office listing; no visibility filtering."""
        pass

    @abstractmethod
    async def count(
        self,
        status: Optional[ArticleStatus] = None,
        category: Optional[Category] = None,
        author_id: Optional[UUID] = None,
        publisher_id: Optional[UUID] = None,
    ) -> int:
        pass

    @abstractmethod
    async def find_visible(
        self,
        cutoff: date,
        category: Optional[Category] = None,
        author_name: Optional[str] = None,
        exclude_slug: Optional[str] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> List[Article]:
        pass

    @abstractmethod
    async def count_visible(
        self,
        cutoff: date,
        category: Optional[Category] = None,
        author_name: Optional[str] = None,
        exclude_slug: Optional[str] = None,
    ) -> int:
        pass

    @abstractmethod
    async def find_placement_candidates(self, cutoff: date) -> List[Article]:
        """Visible articles with at least one placement flag set."""
        pass

    @abstractmethod
    async def distinct_author_names(self) -> List[str]:
        """Non-empty author names stored on published articles."""
        pass

    @abstractmethod
    async def update_fields(self, article_id: UUID, fields: Dict[str, Any]) -> Optional[Article]:
        """
        Atomically update a set of fields on one article.

        Returns:
            Updated article or None if it does not exist
        """
        pass

    @abstractmethod
    async def update_author_name_where_name(self, old_name: str, new_name: str) -> int:
        """
        Bulk update: ``author_name == old_name`` -> ``new_name``.

        Returns:
            Number of updated articles
        """
        pass

    @abstractmethod
    async def update_author_name_where_author(self, author_id: UUID, new_name: str) -> int:
        """
        Bulk update: ``author_id == author_id and author_name != new_name``
        (or missing) -> ``new_name``.

        Returns:
            Number of updated articles
        """
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UUID) -> int:
        pass

    @abstractmethod
    async def find_missing_author_name(self, limit: int = 500, offset: int = 0) -> List[Article]:
        """Articles with an empty author name, oldest first."""
        pass

    @abstractmethod
    async def increment_views(self, article_id: UUID, amount: int = 1) -> None:
        """Atomic increment; concurrent calls must all be counted."""
        pass

    @abstractmethod
    async def delete(self, article_id: UUID) -> bool:
        """
        Delete an article.

        Returns:
            True if it was deleted
        """
        pass
