from .article_repository_impl import ArticleRepositoryImpl
from .author_repository_impl import AuthorRepositoryImpl
from .models import ArticleModel, AuthorModel, Base, PublisherModel
from .publisher_repository_impl import PublisherRepositoryImpl
from .view_counter import SessionScopedViewCounter

__all__ = [
    "ArticleRepositoryImpl",
    "AuthorRepositoryImpl",
    "PublisherRepositoryImpl",
    "SessionScopedViewCounter",
    "ArticleModel",
    "AuthorModel",
    "PublisherModel",
    "Base",
]
