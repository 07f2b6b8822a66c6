"""
Domain entity: Article

Carries the editorial content, the denormalized author name and the four
home-page placement flags.

Invariants:
- title is non-empty after trimming
- content has at least two paragraphs, none of them blank
- main image has both a url and a CDN public id
- at most the flag set through ``set_placement`` is true after that call
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category
from civicposts.domain.value_objects.placement_flag import PlacementFlag
from civicposts.shared.exceptions.domain_exceptions import DomainValidationError

MIN_PARAGRAPHS = 2


@dataclass(frozen=True)
class ImageRef:
    """Image stored on the CDN."""

    url: str
    public_id: str
    alt: Optional[str] = None

    def to_dict(self) -> dict:
        return {"url": self.url, "public_id": self.public_id, "alt": self.alt}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["ImageRef"]:
        if not data:
            return None
        return cls(url=data["url"], public_id=data["public_id"], alt=data.get("alt"))


@dataclass(frozen=True)
class SubImage(ImageRef):
    """Gallery image with an explicit position."""

    order: int = 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["order"] = self.order
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SubImage":
        return cls(
            url=data["url"],
            public_id=data["public_id"],
            alt=data.get("alt"),
            order=int(data.get("order", 0)),
        )


@dataclass
class Article:
    """Article aggregate."""

    # =========================================================================
    # Identity
    # =========================================================================
    id: UUID = field(default_factory=uuid4)
    slug: str = ""

    # =========================================================================
    # Content
    # =========================================================================
    title: str = ""
    subtitle: Optional[str] = None
    content: List[str] = field(default_factory=list)
    category: Category = Category.NEWS
    status: ArticleStatus = ArticleStatus.DRAFT
    published_date: date = field(default_factory=date.today)

    # =========================================================================
    # Authorship (weak references)
    # =========================================================================
    author_id: Optional[UUID] = None
    author_name: Optional[str] = None
    publisher_id: Optional[UUID] = None

    # =========================================================================
    # Media
    # =========================================================================
    main_image: Optional[ImageRef] = None
    mini_image: Optional[ImageRef] = None
    youtube_link: Optional[str] = None
    sub_images: List[SubImage] = field(default_factory=list)

    # =========================================================================
    # Home-page placement
    # =========================================================================
    is_top_story: bool = False
    is_mini_top_story: bool = False
    is_latest: bool = False
    is_trending: bool = False

    # =========================================================================
    # Counters and audit
    # =========================================================================
    views: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        self.category = Category(self.category)
        self.status = ArticleStatus(self.status)
        if isinstance(self.published_date, datetime):
            self.published_date = self.published_date.date()
        self.title = (self.title or "").strip()
        if self.subtitle is not None:
            self.subtitle = self.subtitle.strip() or None
        if self.author_name is not None:
            self.author_name = self.author_name.strip() or None
        self.content = list(self.content or [])
        self.sub_images = sorted(self.sub_images or [], key=lambda image: image.order)
        self.validate()

    def validate(self) -> None:
        """
        Check entity invariants.

        Raises:
            DomainValidationError: if an invariant is violated
        """
        if not self.title:
            raise DomainValidationError("Article title is required")

        if len(self.content) < MIN_PARAGRAPHS:
            raise DomainValidationError(
                f"Article must have at least {MIN_PARAGRAPHS} paragraphs"
            )
        if any(not paragraph or not paragraph.strip() for paragraph in self.content):
            raise DomainValidationError("Article paragraphs cannot be empty")

        if self.main_image is None or not self.main_image.url:
            raise DomainValidationError("Main image is required")
        if not self.main_image.public_id:
            raise DomainValidationError("Main image public_id is required")

        if self.views < 0:
            raise DomainValidationError("Views counter cannot be negative")

    # =========================================================================
    # Placement
    # =========================================================================

    @property
    def placement_flags(self) -> Dict[PlacementFlag, bool]:
        return {flag: bool(getattr(self, flag.field_name)) for flag in PlacementFlag}

    def has_any_placement(self) -> bool:
        return any(self.placement_flags.values())

    def set_placement(self, flag: PlacementFlag, value: bool) -> None:
        """Set a flag; setting one true clears the other three."""
        setattr(self, flag.field_name, bool(value))
        if value:
            for other in flag.others():
                setattr(self, other.field_name, False)
        self.updated_at = datetime.utcnow()

    # =========================================================================
    # Paths
    # =========================================================================

    @property
    def path(self) -> Optional[str]:
        """Path of the statically generated detail page."""
        if not self.slug:
            return None
        return f"/{self.category.value}/{self.slug}"

    def image_public_ids(self) -> List[str]:
        """Every CDN id owned by this article, main image first."""
        images = [self.main_image, self.mini_image, *self.sub_images]
        return [image.public_id for image in images if image and image.public_id]

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Article(id={self.id}, slug='{self.slug}', status={self.status.value})"
