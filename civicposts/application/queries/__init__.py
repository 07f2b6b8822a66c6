"""Application queries."""

from .article_queries import (
    AdminListArticlesQuery,
    GetPublicArticleQuery,
    ListArticlesQuery,
    ListAuthorArticlesQuery,
    MoreArticlesQuery,
)

__all__ = [
    "AdminListArticlesQuery",
    "GetPublicArticleQuery",
    "ListArticlesQuery",
    "ListAuthorArticlesQuery",
    "MoreArticlesQuery",
]
