"""
CQRS commands for articles.

Update commands are partial: a field left as ``UNSET`` keeps the stored
value, while an explicit ``None`` clears a nullable field.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from civicposts.application.commands.actor import Actor
from civicposts.domain.entities.article import ImageRef, SubImage
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category
from civicposts.domain.value_objects.placement_flag import PlacementFlag


class _Unset:
    """Marker for fields absent from a partial update."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class CreateArticleCommand:
    """
    Create an article.

    Frozen (frozen=True), following CQRS.
    """

    # Required
    title: str
    content: List[str]
    author_id: UUID
    published_date: date
    main_image: ImageRef
    category: Category

    # Optional
    subtitle: Optional[str] = None
    mini_image: Optional[ImageRef] = None
    youtube_link: Optional[str] = None
    sub_images: List[SubImage] = field(default_factory=list)
    status: ArticleStatus = ArticleStatus.DRAFT
    actor: Actor = field(default_factory=Actor.admin)


@dataclass(frozen=True)
class UpdateArticleCommand:
    """Partial update of an article."""

    article_id: UUID
    actor: Actor = field(default_factory=Actor.admin)

    title: Union[str, Any] = UNSET
    subtitle: Union[Optional[str], Any] = UNSET
    content: Union[List[str], Any] = UNSET
    author_id: Union[UUID, Any] = UNSET
    published_date: Union[date, Any] = UNSET
    main_image: Union[ImageRef, Any] = UNSET
    mini_image: Union[Optional[ImageRef], Any] = UNSET
    youtube_link: Union[Optional[str], Any] = UNSET
    sub_images: Union[Optional[List[SubImage]], Any] = UNSET
    status: Union[ArticleStatus, Any] = UNSET
    category: Union[Category, Any] = UNSET
    is_top_story: Union[bool, Any] = UNSET
    is_mini_top_story: Union[bool, Any] = UNSET
    is_latest: Union[bool, Any] = UNSET
    is_trending: Union[bool, Any] = UNSET

    # CDN ids of images replaced in the editor
    deleted_images: List[str] = field(default_factory=list)

    _CONTROL_FIELDS = ("article_id", "actor", "deleted_images")

    def provided(self) -> Dict[str, Any]:
        """Fields carried by this update."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in self._CONTROL_FIELDS and getattr(self, f.name) is not UNSET
        }

    def provided_flags(self) -> Dict[str, bool]:
        provided = self.provided()
        return {
            name: bool(provided[name])
            for name in PlacementFlag.field_names()
            if name in provided
        }


@dataclass(frozen=True)
class DeleteArticleCommand:
    article_id: UUID
    actor: Actor = field(default_factory=Actor.admin)


@dataclass(frozen=True)
class SetPlacementFlagCommand:
    """Toggle one home-page placement flag (exclusive when enabling)."""

    article_id: UUID
    flag: PlacementFlag
    value: bool
    actor: Actor = field(default_factory=Actor.admin)
