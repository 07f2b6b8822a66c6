"""
Value Object: ArticleStatus

Editorial status of an article.
"""

from enum import Enum


class ArticleStatus(str, Enum):
    """Article lifecycle statuses."""

    DRAFT = "draft"
    PUBLISHED = "published"

    @property
    def is_published(self) -> bool:
        return self is ArticleStatus.PUBLISHED
