"""
Pydantic schemas for the article API.
"""

from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from civicposts.application.commands.actor import Actor
from civicposts.application.commands.article_commands import (
    UNSET,
    CreateArticleCommand,
    UpdateArticleCommand,
)
from civicposts.application.services.article_service import Page
from civicposts.domain.entities.article import Article, ImageRef, SubImage
from civicposts.domain.services.placement import HomePageLayout
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category


class ImageSchema(BaseModel):
    """CDN image reference."""

    url: str
    public_id: str
    alt: Optional[str] = None

    def to_value(self) -> ImageRef:
        return ImageRef(url=self.url, public_id=self.public_id, alt=self.alt)

    @classmethod
    def from_value(cls, image: Optional[ImageRef]) -> Optional["ImageSchema"]:
        if image is None:
            return None
        return cls(url=image.url, public_id=image.public_id, alt=image.alt)


class SubImageSchema(ImageSchema):
    order: int = 0

    def to_value(self) -> SubImage:
        return SubImage(url=self.url, public_id=self.public_id, alt=self.alt, order=self.order)

    @classmethod
    def from_value(cls, image: SubImage) -> "SubImageSchema":
        return cls(url=image.url, public_id=image.public_id, alt=image.alt, order=image.order)


# =============================================================================
# Requests
# =============================================================================


class CreateArticleRequest(BaseModel):
    """Create an article. ``author_id`` is ignored on the author portal."""

    title: str = Field(..., max_length=500)
    subtitle: Optional[str] = None
    content: List[str]
    category: Category
    status: ArticleStatus = ArticleStatus.DRAFT
    published_date: date
    author_id: Optional[UUID] = None
    main_image: ImageSchema
    mini_image: Optional[ImageSchema] = None
    youtube_link: Optional[str] = None
    sub_images: List[SubImageSchema] = []

    def to_command(self, actor: Actor) -> CreateArticleCommand:
        return CreateArticleCommand(
            title=self.title,
            subtitle=self.subtitle,
            content=self.content,
            category=self.category,
            status=self.status,
            published_date=self.published_date,
            author_id=self.author_id,
            main_image=self.main_image.to_value(),
            mini_image=self.mini_image.to_value() if self.mini_image else None,
            youtube_link=self.youtube_link,
            sub_images=[image.to_value() for image in self.sub_images],
            actor=actor,
        )


class UpdateArticleRequest(BaseModel):
    """
    Partial update.

    Only fields present in the request body are applied; an explicit null
    clears a nullable field.
    """

    title: Optional[str] = Field(None, max_length=500)
    subtitle: Optional[str] = None
    content: Optional[List[str]] = None
    category: Optional[Category] = None
    status: Optional[ArticleStatus] = None
    published_date: Optional[date] = None
    author_id: Optional[UUID] = None
    main_image: Optional[ImageSchema] = None
    mini_image: Optional[ImageSchema] = None
    youtube_link: Optional[str] = None
    sub_images: Optional[List[SubImageSchema]] = None
    is_top_story: Optional[bool] = Field(None, alias="isTopStory")
    is_mini_top_story: Optional[bool] = Field(None, alias="isMiniTopStory")
    is_latest: Optional[bool] = Field(None, alias="isLatest")
    is_trending: Optional[bool] = Field(None, alias="isTrending")
    deleted_images: List[str] = Field(default_factory=list, alias="deletedImages")

    model_config = ConfigDict(populate_by_name=True)

    def to_command(self, article_id: UUID, actor: Actor) -> UpdateArticleCommand:
        changes = {}
        for name in self.model_fields_set:
            if name == "deleted_images":
                continue
            value = getattr(self, name)
            if name in ("main_image", "mini_image") and value is not None:
                value = value.to_value()
            elif name == "sub_images" and value is not None:
                value = [image.to_value() for image in value]
            changes[name] = value

        # Non-nullable fields sent as null are treated as absent.
        for name in ("title", "content", "category", "status", "published_date", "author_id", "main_image"):
            if changes.get(name, UNSET) is None:
                del changes[name]
        for name in ("is_top_story", "is_mini_top_story", "is_latest", "is_trending"):
            if changes.get(name, UNSET) is None:
                del changes[name]

        return UpdateArticleCommand(
            article_id=article_id,
            actor=actor,
            deleted_images=list(self.deleted_images),
            **changes,
        )


class PlacementFlagRequest(BaseModel):
    """Toggle one placement flag: isTopStory, isMiniTopStory, isLatest or isTrending."""

    flag: str
    value: bool


# =============================================================================
# Responses
# =============================================================================


class ArticleResponse(BaseModel):
    """Article."""

    id: UUID
    slug: str
    title: str
    subtitle: Optional[str]
    content: List[str]
    category: Category
    status: ArticleStatus
    published_date: date
    author_id: Optional[UUID]
    author_name: Optional[str]
    publisher_id: Optional[UUID]
    main_image: Optional[ImageSchema]
    mini_image: Optional[ImageSchema]
    youtube_link: Optional[str]
    sub_images: List[SubImageSchema]
    is_top_story: bool = Field(alias="isTopStory")
    is_mini_top_story: bool = Field(alias="isMiniTopStory")
    is_latest: bool = Field(alias="isLatest")
    is_trending: bool = Field(alias="isTrending")
    views: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @classmethod
    def from_entity(cls, entity: Article) -> "ArticleResponse":
        return cls(
            id=entity.id,
            slug=entity.slug,
            title=entity.title,
            subtitle=entity.subtitle,
            content=entity.content,
            category=entity.category,
            status=entity.status,
            published_date=entity.published_date,
            author_id=entity.author_id,
            author_name=entity.author_name,
            publisher_id=entity.publisher_id,
            main_image=ImageSchema.from_value(entity.main_image),
            mini_image=ImageSchema.from_value(entity.mini_image),
            youtube_link=entity.youtube_link,
            sub_images=[SubImageSchema.from_value(image) for image in entity.sub_images],
            is_top_story=entity.is_top_story,
            is_mini_top_story=entity.is_mini_top_story,
            is_latest=entity.is_latest,
            is_trending=entity.is_trending,
            views=entity.views,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class PaginationSchema(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ArticleListResponse(BaseModel):
    """One page of articles."""

    articles: List[ArticleResponse]
    pagination: PaginationSchema
    has_more: bool = Field(alias="hasMore")
    author_name: Optional[str] = Field(None, alias="authorName")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_page(cls, page: Page) -> "ArticleListResponse":
        return cls(
            articles=[ArticleResponse.from_entity(a) for a in page.items],
            pagination=PaginationSchema(
                page=page.page, limit=page.limit, total=page.total, pages=page.pages
            ),
            has_more=page.has_more,
            author_name=page.author_name,
        )


class HomePageResponse(BaseModel):
    """Home-page slots."""

    top_stories: List[ArticleResponse] = Field(alias="topStories")
    mini_top_stories: List[ArticleResponse] = Field(alias="miniTopStories")
    trending: List[ArticleResponse]
    latest_by_category: Dict[str, List[ArticleResponse]] = Field(alias="latestByCategory")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_layout(cls, layout: HomePageLayout) -> "HomePageResponse":
        def convert(articles):
            return [ArticleResponse.from_entity(a) for a in articles]

        return cls(
            top_stories=convert(layout.top_stories),
            mini_top_stories=convert(layout.mini_top_stories),
            trending=convert(layout.trending),
            latest_by_category={
                category.value: convert(articles)
                for category, articles in layout.latest_by_category.items()
            },
        )
