"""Repository ports."""

from .article_repository import IArticleRepository
from .author_repository import IAuthorRepository
from .publisher_repository import IPublisherRepository

__all__ = ["IArticleRepository", "IAuthorRepository", "IPublisherRepository"]
