"""
FastAPI routes for the public site.

Only publicly visible articles are ever returned.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from civicposts.api.dependencies import get_article_service
from civicposts.api.schemas.article_schemas import (
    ArticleListResponse,
    ArticleResponse,
    HomePageResponse,
)
from civicposts.application.queries.article_queries import (
    GetPublicArticleQuery,
    ListArticlesQuery,
    ListAuthorArticlesQuery,
    MoreArticlesQuery,
)
from civicposts.application.services.article_service import ArticleService
from civicposts.domain.value_objects.category import Category

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("/", response_model=ArticleListResponse)
async def list_articles(
    category: Optional[Category] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
):
    """Visible articles, newest first."""
    result = await service.list_articles(ListArticlesQuery(category=category, page=page, limit=limit))
    return ArticleListResponse.from_page(result)


@router.get("/home", response_model=HomePageResponse)
async def home_page(service: ArticleService = Depends(get_article_service)):
    """Home-page slots."""
    layout = await service.home_page()
    return HomePageResponse.from_layout(layout)


@router.get("/more", response_model=ArticleListResponse)
async def more_articles(
    exclude: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
):
    """Visible articles except the one being read."""
    result = await service.more_articles(
        MoreArticlesQuery(exclude_slug=exclude, page=page, limit=limit)
    )
    return ArticleListResponse.from_page(result)


@router.get("/author/{author_slug}", response_model=ArticleListResponse)
async def author_articles(
    author_slug: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
):
    """Public author page."""
    result = await service.list_author_articles(
        ListAuthorArticlesQuery(author_slug=author_slug, page=page, limit=limit)
    )
    return ArticleListResponse.from_page(result)


@router.get("/{slug}", response_model=ArticleResponse)
async def get_article(slug: str, service: ArticleService = Depends(get_article_service)):
    """Visible article by slug."""
    article = await service.get_public_article(GetPublicArticleQuery(slug=slug))
    return ArticleResponse.from_entity(article)
