"""
SQLAlchemy repository implementation for articles.

The visibility rule is part of the SQL filter, so public listings never load
drafts or future-dated articles.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import distinct, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from civicposts.domain.entities.article import Article, ImageRef, SubImage
from civicposts.domain.repositories.article_repository import IArticleRepository
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category
from civicposts.domain.value_objects.placement_flag import PlacementFlag
from civicposts.infrastructure.persistence.models import ArticleModel
from civicposts.shared.exceptions.domain_exceptions import DuplicateEntityError

_UPDATABLE_FIELDS = frozenset(
    {"author_name", "status", "published_date", "category", "title", "subtitle", "youtube_link"}
    | set(PlacementFlag.field_names())
)


class ArticleRepositoryImpl(IArticleRepository):
    """
    PostgreSQL implementation of the article repository.

    Adapter in the hexagonal architecture: maps Article entities to
    ArticleModel rows and back.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, article: Article) -> Article:
        """
        Insert a new article or update an existing one.

        ``views`` is written only on insert; existing rows change it through
        increment_views alone.
        """
        model = await self.session.get(ArticleModel, article.id)
        if model is None:
            model = self._to_model(article)
            self.session.add(model)
        else:
            for name, value in self._column_values(article).items():
                setattr(model, name, value)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEntityError(f"Article with slug '{article.slug}' already exists") from e
        await self.session.refresh(model)
        return self._to_entity(model)

    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.id == article_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_slug(self, slug: str) -> Optional[Article]:
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.slug == slug)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_visible_by_slug(self, slug: str, cutoff: date) -> Optional[Article]:
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.slug == slug, *self._visible(cutoff))
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists_by_slug(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(func.count(ArticleModel.id)).where(ArticleModel.slug == slug)
        if exclude_id is not None:
            query = query.where(ArticleModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar() > 0

    # =========================================================================
    # Back-office listings
    # =========================================================================

    async def find_all(
        self,
        status: Optional[ArticleStatus] = None,
        category: Optional[Category] = None,
        author_id: Optional[UUID] = None,
        publisher_id: Optional[UUID] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Article]:
        query = select(ArticleModel).where(
            *self._filters(status, category, author_id, publisher_id)
        )
        query = self._ordered(query).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count(
        self,
        status: Optional[ArticleStatus] = None,
        category: Optional[Category] = None,
        author_id: Optional[UUID] = None,
        publisher_id: Optional[UUID] = None,
    ) -> int:
        query = select(func.count(ArticleModel.id)).where(
            *self._filters(status, category, author_id, publisher_id)
        )
        result = await self.session.execute(query)
        return result.scalar()

    # =========================================================================
    # Public listings
    # =========================================================================

    async def find_visible(
        self,
        cutoff: date,
        category: Optional[Category] = None,
        author_name: Optional[str] = None,
        exclude_slug: Optional[str] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> List[Article]:
        query = select(ArticleModel).where(
            *self._visible(cutoff),
            *self._public_filters(category, author_name, exclude_slug),
        )
        query = self._ordered(query).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_visible(
        self,
        cutoff: date,
        category: Optional[Category] = None,
        author_name: Optional[str] = None,
        exclude_slug: Optional[str] = None,
    ) -> int:
        query = select(func.count(ArticleModel.id)).where(
            *self._visible(cutoff),
            *self._public_filters(category, author_name, exclude_slug),
        )
        result = await self.session.execute(query)
        return result.scalar()

    async def find_placement_candidates(self, cutoff: date) -> List[Article]:
        flagged = or_(
            ArticleModel.is_top_story.is_(True),
            ArticleModel.is_mini_top_story.is_(True),
            ArticleModel.is_latest.is_(True),
            ArticleModel.is_trending.is_(True),
        )
        query = self._ordered(select(ArticleModel).where(*self._visible(cutoff), flagged))
        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def distinct_author_names(self) -> List[str]:
        result = await self.session.execute(
            select(distinct(ArticleModel.author_name)).where(
                ArticleModel.status == ArticleStatus.PUBLISHED.value,
                ArticleModel.author_name.is_not(None),
                ArticleModel.author_name != "",
            )
        )
        return list(result.scalars().all())

    # =========================================================================
    # Bulk and atomic updates
    # =========================================================================

    async def update_fields(self, article_id: UUID, fields: Dict[str, Any]) -> Optional[Article]:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated in place: {', '.join(sorted(unknown))}")

        values = {
            name: value.value if isinstance(value, (ArticleStatus, Category)) else value
            for name, value in fields.items()
        }
        values["updated_at"] = datetime.utcnow()

        result = await self.session.execute(
            update(ArticleModel).where(ArticleModel.id == article_id).values(**values)
        )
        await self.session.commit()
        if result.rowcount == 0:
            return None
        return await self._reload(article_id)

    async def update_author_name_where_name(self, old_name: str, new_name: str) -> int:
        result = await self.session.execute(
            update(ArticleModel)
            .where(ArticleModel.author_name == old_name)
            .values(author_name=new_name)
        )
        await self.session.commit()
        return result.rowcount

    async def update_author_name_where_author(self, author_id: UUID, new_name: str) -> int:
        result = await self.session.execute(
            update(ArticleModel)
            .where(
                ArticleModel.author_id == author_id,
                or_(ArticleModel.author_name.is_(None), ArticleModel.author_name != new_name),
            )
            .values(author_name=new_name)
        )
        await self.session.commit()
        return result.rowcount

    async def count_by_author(self, author_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(ArticleModel.id)).where(ArticleModel.author_id == author_id)
        )
        return result.scalar()

    async def find_missing_author_name(self, limit: int = 500, offset: int = 0) -> List[Article]:
        result = await self.session.execute(
            select(ArticleModel)
            .where(or_(ArticleModel.author_name.is_(None), ArticleModel.author_name == ""))
            .order_by(ArticleModel.created_at.asc(), ArticleModel.id)
            .limit(limit)
            .offset(offset)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def increment_views(self, article_id: UUID, amount: int = 1) -> None:
        # Evaluated by the database, so concurrent increments are never lost.
        await self.session.execute(
            update(ArticleModel)
            .where(ArticleModel.id == article_id)
            .values(views=ArticleModel.views + amount)
        )
        await self.session.commit()

    async def delete(self, article_id: UUID) -> bool:
        model = await self.session.get(ArticleModel, article_id)
        if model:
            await self.session.delete(model)
            await self.session.commit()
            return True
        return False

    # =========================================================================
    # Query helpers
    # =========================================================================

    @staticmethod
    def _visible(cutoff: date) -> list:
        return [
            ArticleModel.status == ArticleStatus.PUBLISHED.value,
            ArticleModel.published_date <= cutoff,
        ]

    @staticmethod
    def _filters(status, category, author_id, publisher_id) -> list:
        conditions = []
        if status:
            conditions.append(ArticleModel.status == ArticleStatus(status).value)
        if category:
            conditions.append(ArticleModel.category == Category(category).value)
        if author_id:
            conditions.append(ArticleModel.author_id == author_id)
        if publisher_id:
            conditions.append(ArticleModel.publisher_id == publisher_id)
        return conditions

    @staticmethod
    def _public_filters(category, author_name, exclude_slug) -> list:
        conditions = []
        if category:
            conditions.append(ArticleModel.category == Category(category).value)
        if author_name:
            conditions.append(ArticleModel.author_name == author_name)
        if exclude_slug:
            conditions.append(ArticleModel.slug != exclude_slug)
        return conditions

    @staticmethod
    def _ordered(query):
        return query.order_by(ArticleModel.created_at.desc(), ArticleModel.id)

    async def _reload(self, article_id: UUID) -> Optional[Article]:
        # Bulk updates bypass the identity map; drop cached rows first.
        self.session.expire_all()
        return await self.find_by_id(article_id)

    # =========================================================================
    # Entity <-> Model mapping
    # =========================================================================

    def _to_model(self, entity: Article) -> ArticleModel:
        return ArticleModel(
            id=entity.id,
            views=entity.views,
            created_at=entity.created_at,
            **self._column_values(entity),
        )

    @staticmethod
    def _column_values(entity: Article) -> Dict[str, Any]:
        """Columns an update may overwrite."""
        return dict(
            slug=entity.slug,
            title=entity.title,
            subtitle=entity.subtitle,
            content=list(entity.content),
            category=entity.category.value,
            status=entity.status.value,
            published_date=entity.published_date,
            author_id=entity.author_id,
            author_name=entity.author_name,
            publisher_id=entity.publisher_id,
            main_image=entity.main_image.to_dict() if entity.main_image else None,
            mini_image=entity.mini_image.to_dict() if entity.mini_image else None,
            youtube_link=entity.youtube_link,
            sub_images=[image.to_dict() for image in entity.sub_images],
            is_top_story=entity.is_top_story,
            is_mini_top_story=entity.is_mini_top_story,
            is_latest=entity.is_latest,
            is_trending=entity.is_trending,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: ArticleModel) -> Article:
        return Article(
            id=model.id,
            slug=model.slug,
            title=model.title,
            subtitle=model.subtitle,
            content=model.content or [],
            category=Category(model.category),
            status=ArticleStatus(model.status),
            published_date=model.published_date,
            author_id=model.author_id,
            author_name=model.author_name,
            publisher_id=model.publisher_id,
            main_image=ImageRef.from_dict(model.main_image),
            mini_image=ImageRef.from_dict(model.mini_image),
            youtube_link=model.youtube_link,
            # None -> empty list
            sub_images=[SubImage.from_dict(data) for data in model.sub_images or []],
            is_top_story=bool(model.is_top_story),
            is_mini_top_story=bool(model.is_mini_top_story),
            is_latest=bool(model.is_latest),
            is_trending=bool(model.is_trending),
            views=model.views or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
