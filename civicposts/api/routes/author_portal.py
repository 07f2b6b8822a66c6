"""
FastAPI routes for the author portal.

The acting author is identified by the ``X-Author-Id`` header. Authors only
see and change their own articles and cannot set home-page placement.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from civicposts.api.dependencies import (
    get_article_command_handler,
    get_article_service,
    get_author_actor,
    get_author_command_handler,
)
from civicposts.api.schemas.article_schemas import (
    ArticleListResponse,
    ArticleResponse,
    CreateArticleRequest,
    UpdateArticleRequest,
)
from civicposts.api.schemas.author_schemas import AuthorResponse
from civicposts.application.commands.actor import Actor
from civicposts.application.commands.article_commands import DeleteArticleCommand
from civicposts.application.handlers.article_command_handler import ArticleCommandHandler
from civicposts.application.handlers.author_command_handler import AuthorCommandHandler
from civicposts.application.queries.article_queries import AdminListArticlesQuery
from civicposts.application.services.article_service import ArticleService
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.shared.exceptions.domain_exceptions import AccessDeniedError

router = APIRouter(prefix="/author-portal", tags=["author-portal"])


@router.get("/profile", response_model=AuthorResponse)
async def get_profile(
    actor: Actor = Depends(get_author_actor),
    handler: AuthorCommandHandler = Depends(get_author_command_handler),
):
    return AuthorResponse.from_entity(await handler.get_author(actor.id))


@router.get("/articles", response_model=ArticleListResponse)
async def list_own_articles(
    status: Optional[ArticleStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: Actor = Depends(get_author_actor),
    service: ArticleService = Depends(get_article_service),
):
    result = await service.admin_list(
        AdminListArticlesQuery(status=status, author_id=actor.id, page=page, limit=limit)
    )
    return ArticleListResponse.from_page(result)


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_own_article(
    article_id: UUID,
    actor: Actor = Depends(get_author_actor),
    service: ArticleService = Depends(get_article_service),
):
    article = await service.get_article(article_id)
    if article.author_id != actor.id:
        raise AccessDeniedError("Authors can only manage their own articles")
    return ArticleResponse.from_entity(article)


@router.post("/articles", response_model=ArticleResponse, status_code=201)
async def create_article(
    request: CreateArticleRequest,
    actor: Actor = Depends(get_author_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    article = await handler.handle_create_article(request.to_command(actor))
    return ArticleResponse.from_entity(article)


@router.patch("/articles/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: UUID,
    request: UpdateArticleRequest,
    actor: Actor = Depends(get_author_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    article = await handler.handle_update_article(request.to_command(article_id, actor))
    return ArticleResponse.from_entity(article)


@router.delete("/articles/{article_id}")
async def delete_article(
    article_id: UUID,
    actor: Actor = Depends(get_author_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    article = await handler.handle_delete_article(DeleteArticleCommand(article_id=article_id, actor=actor))
    return {"message": "Article deleted successfully", "id": str(article.id)}
