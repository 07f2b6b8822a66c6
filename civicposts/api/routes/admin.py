"""
FastAPI routes for the admin back office.

Admins manage every article, author and publisher account, and are the
only surface allowed to change home-page placement.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from civicposts.api.dependencies import (
    get_admin_actor,
    get_article_command_handler,
    get_article_service,
    get_author_command_handler,
    get_publisher_command_handler,
)
from civicposts.api.schemas.article_schemas import (
    ArticleListResponse,
    ArticleResponse,
    CreateArticleRequest,
    PlacementFlagRequest,
    UpdateArticleRequest,
)
from civicposts.api.schemas.author_schemas import (
    AuthorDeletionResponse,
    AuthorResponse,
    CreateAuthorRequest,
    UpdateAuthorRequest,
)
from civicposts.api.schemas.publisher_schemas import (
    CreatePublisherRequest,
    PublisherDeletionResponse,
    PublisherResponse,
    UpdatePublisherRequest,
)
from civicposts.application.commands.actor import Actor
from civicposts.application.commands.article_commands import (
    DeleteArticleCommand,
    SetPlacementFlagCommand,
)
from civicposts.application.commands.author_commands import DeleteAuthorCommand
from civicposts.application.commands.publisher_commands import DeletePublisherCommand
from civicposts.application.handlers.article_command_handler import ArticleCommandHandler
from civicposts.application.handlers.author_command_handler import AuthorCommandHandler
from civicposts.application.handlers.publisher_command_handler import PublisherCommandHandler
from civicposts.application.queries.article_queries import AdminListArticlesQuery
from civicposts.application.services.article_service import ArticleService
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category
from civicposts.domain.value_objects.placement_flag import PlacementFlag

router = APIRouter(prefix="/admin", tags=["admin"])


# =============================================================================
# Articles
# =============================================================================


@router.get("/articles", response_model=ArticleListResponse)
async def list_articles(
    status: Optional[ArticleStatus] = None,
    category: Optional[Category] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
):
    """All articles, drafts and scheduled included."""
    result = await service.admin_list(
        AdminListArticlesQuery(status=status, category=category, page=page, limit=limit)
    )
    return ArticleListResponse.from_page(result)


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: UUID, service: ArticleService = Depends(get_article_service)):
    return ArticleResponse.from_entity(await service.get_article(article_id))


@router.post("/articles", response_model=ArticleResponse, status_code=201)
async def create_article(
    request: CreateArticleRequest,
    actor: Actor = Depends(get_admin_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    article = await handler.handle_create_article(request.to_command(actor))
    return ArticleResponse.from_entity(article)


@router.patch("/articles/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: UUID,
    request: UpdateArticleRequest,
    actor: Actor = Depends(get_admin_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    article = await handler.handle_update_article(request.to_command(article_id, actor))
    return ArticleResponse.from_entity(article)


@router.delete("/articles/{article_id}")
async def delete_article(
    article_id: UUID,
    actor: Actor = Depends(get_admin_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    article = await handler.handle_delete_article(DeleteArticleCommand(article_id=article_id, actor=actor))
    return {"message": "Article deleted successfully", "id": str(article.id)}


@router.put("/articles/{article_id}/placement", response_model=ArticleResponse)
async def set_placement_flag(
    article_id: UUID,
    request: PlacementFlagRequest,
    actor: Actor = Depends(get_admin_actor),
    handler: ArticleCommandHandler = Depends(get_article_command_handler),
):
    """Enable or disable one home-page placement; enabling clears the other three."""
    command = SetPlacementFlagCommand(
        article_id=article_id,
        flag=PlacementFlag.parse(request.flag),
        value=request.value,
        actor=actor,
    )
    return ArticleResponse.from_entity(await handler.handle_set_placement_flag(command))


# =============================================================================
# Authors
# =============================================================================


@router.get("/authors", response_model=List[AuthorResponse])
async def list_authors(handler: AuthorCommandHandler = Depends(get_author_command_handler)):
    return [AuthorResponse.from_entity(a) for a in await handler.list_authors()]


@router.get("/authors/{author_id}", response_model=AuthorResponse)
async def get_author(author_id: UUID, handler: AuthorCommandHandler = Depends(get_author_command_handler)):
    return AuthorResponse.from_entity(await handler.get_author(author_id))


@router.post("/authors", response_model=AuthorResponse, status_code=201)
async def create_author(
    request: CreateAuthorRequest,
    handler: AuthorCommandHandler = Depends(get_author_command_handler),
):
    return AuthorResponse.from_entity(await handler.handle_create_author(request.to_command()))


@router.patch("/authors/{author_id}", response_model=AuthorResponse)
async def update_author(
    author_id: UUID,
    request: UpdateAuthorRequest,
    handler: AuthorCommandHandler = Depends(get_author_command_handler),
):
    """Update an author; a new name is pushed into every article that shows it."""
    return AuthorResponse.from_entity(await handler.handle_update_author(request.to_command(author_id)))


@router.delete("/authors/{author_id}", response_model=AuthorDeletionResponse)
async def delete_author(
    author_id: UUID,
    handler: AuthorCommandHandler = Depends(get_author_command_handler),
):
    """Delete an author. Existing articles keep displaying the stored name."""
    result = await handler.handle_delete_author(DeleteAuthorCommand(author_id=author_id))
    return AuthorDeletionResponse.from_result(result)


# =============================================================================
# Publishers
# =============================================================================


@router.get("/publishers", response_model=List[PublisherResponse])
async def list_publishers(handler: PublisherCommandHandler = Depends(get_publisher_command_handler)):
    return [PublisherResponse.from_entity(p) for p in await handler.list_publishers()]


@router.get("/publishers/{publisher_id}", response_model=PublisherResponse)
async def get_publisher(
    publisher_id: UUID,
    handler: PublisherCommandHandler = Depends(get_publisher_command_handler),
):
    return PublisherResponse.from_entity(await handler.get_publisher(publisher_id))


@router.post("/publishers", response_model=PublisherResponse, status_code=201)
async def create_publisher(
    request: CreatePublisherRequest,
    actor: Actor = Depends(get_admin_actor),
    handler: PublisherCommandHandler = Depends(get_publisher_command_handler),
):
    return PublisherResponse.from_entity(await handler.handle_create_publisher(request.to_command(actor)))


@router.patch("/publishers/{publisher_id}", response_model=PublisherResponse)
async def update_publisher(
    publisher_id: UUID,
    request: UpdatePublisherRequest,
    handler: PublisherCommandHandler = Depends(get_publisher_command_handler),
):
    return PublisherResponse.from_entity(
        await handler.handle_update_publisher(request.to_command(publisher_id))
    )


@router.delete("/publishers/{publisher_id}", response_model=PublisherDeletionResponse)
async def delete_publisher(
    publisher_id: UUID,
    handler: PublisherCommandHandler = Depends(get_publisher_command_handler),
):
    """Delete a publisher account. Articles it created stay in place."""
    message = await handler.handle_delete_publisher(DeletePublisherCommand(publisher_id=publisher_id))
    return PublisherDeletionResponse(message=message)
