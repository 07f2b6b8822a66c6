"""
Denormalization Resolver

Keeps ``Article.author_name`` in line with the Author store. Articles read
the cached name for display; the foreign key never implies the author still
exists.

Known gap: propagation runs after the author save and is not part of the
same transaction. A crash in between leaves articles with the old name until
the next rename (or ``resync_missing_author_names`` for empty names).
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from civicposts.application.services.cache_invalidation import CacheInvalidationCoordinator
from civicposts.domain.entities.article import Article
from civicposts.domain.repositories.article_repository import IArticleRepository
from civicposts.domain.repositories.author_repository import IAuthorRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorDeletionResult:
    """Informational outcome shown to the operator."""

    articles_affected_count: int
    author_name: Optional[str] = None

    @property
    def message(self) -> str:
        if self.articles_affected_count > 0:
            return (
                f"Author deleted successfully. {self.articles_affected_count} existing "
                f"article(s) will continue to display the author name "
                f"({self.author_name}) as stored in the article."
            )
        return "Author deleted successfully."


class AuthorNameResolver:
    """Propagates, freezes and back-fills denormalized author names."""

    def __init__(
        self,
        article_repository: IArticleRepository,
        author_repository: IAuthorRepository,
        coordinator: CacheInvalidationCoordinator,
    ):
        self.article_repository = article_repository
        self.author_repository = author_repository
        self.coordinator = coordinator

    async def propagate_name_change(self, author_id: UUID, old_name: str, new_name: str) -> int:
        """
        Push a renamed author's name into every article that shows it.

        Two raw bulk passes: articles still carrying ``old_name`` and
        articles referencing ``author_id`` whose name drifted. The total may
        count an article twice; it is only reported, never relied on.

        Returns:
            Sum of both passes
        """
        if old_name == new_name:
            return 0

        by_name = await self.article_repository.update_author_name_where_name(old_name, new_name)
        by_ref = await self.article_repository.update_author_name_where_author(author_id, new_name)
        total = by_name + by_ref

        logger.info(
            f"[AuthorName] '{old_name}' -> '{new_name}': "
            f"{by_name} by name, {by_ref} by reference"
        )
        await self.coordinator.author_name_changed()
        return total

    async def handle_author_deletion(self, author_id: UUID, author_name: Optional[str] = None) -> AuthorDeletionResult:
        """
        Report how many articles keep showing a deleted author's name.

        Nothing is written: articles keep the last synced name for good.
        """
        count = await self.article_repository.count_by_author(author_id)
        if count:
            logger.info(f"[AuthorName] author {author_id} deleted, {count} article(s) keep '{author_name}'")
        return AuthorDeletionResult(articles_affected_count=count, author_name=author_name)

    async def backfill_author_name(self, article: Article) -> Article:
        """
        Fill an empty ``author_name`` from the referenced author.

        A missing author is not an error: the article keeps whatever it has.
        """
        if article.author_name or article.author_id is None:
            return article

        author = await self.author_repository.find_by_id(article.author_id)
        if author is None:
            logger.warning(
                f"[AuthorName] author {article.author_id} not found for article "
                f"{article.id}, keeping stored author name"
            )
            return article

        article.author_name = author.name
        return article

    async def resync_missing_author_names(self, batch_size: int = 500) -> int:
        """
        Back-fill every stored article with an empty author name.

        Returns:
            Number of articles that received a name
        """
        filled = 0
        skipped = 0
        while True:
            # Articles left without a name stay at the head of the ordering.
            articles = await self.article_repository.find_missing_author_name(
                limit=batch_size, offset=skipped
            )
            if not articles:
                break
            for article in articles:
                await self.backfill_author_name(article)
                if article.author_name:
                    await self.article_repository.update_fields(
                        article.id, {"author_name": article.author_name}
                    )
                    filled += 1
                else:
                    skipped += 1

        if filled:
            await self.coordinator.author_name_changed()
        logger.info(f"[AuthorName] back-filled {filled} article(s), {skipped} without author")
        return filled
