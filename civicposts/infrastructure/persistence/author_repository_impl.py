"""
SQLAlchemy repository implementation for authors.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from civicposts.domain.entities.author import Author, normalize_email
from civicposts.domain.repositories.author_repository import IAuthorRepository
from civicposts.infrastructure.persistence.models import AuthorModel
from civicposts.shared.exceptions.domain_exceptions import DuplicateEntityError


class AuthorRepositoryImpl(IAuthorRepository):
    """PostgreSQL implementation of the author repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, author: Author) -> Author:
        model = await self.session.merge(self._to_model(author))
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Unique index on email; lost race with a concurrent create.
            await self.session.rollback()
            raise DuplicateEntityError("Author with this email already exists") from e
        await self.session.refresh(model)
        return self._to_entity(model)

    async def find_by_id(self, author_id: UUID) -> Optional[Author]:
        model = await self.session.get(AuthorModel, author_id)
        return self._to_entity(model) if model else None

    async def find_by_email(self, email: str) -> Optional[Author]:
        result = await self.session.execute(
            select(AuthorModel).where(AuthorModel.email == normalize_email(email))
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(func.count(AuthorModel.id)).where(AuthorModel.email == normalize_email(email))
        if exclude_id is not None:
            query = query.where(AuthorModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar() > 0

    async def find_all(self) -> List[Author]:
        result = await self.session.execute(select(AuthorModel).order_by(AuthorModel.name))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def delete(self, author_id: UUID) -> bool:
        model = await self.session.get(AuthorModel, author_id)
        if model:
            await self.session.delete(model)
            await self.session.commit()
            return True
        return False

    # =========================================================================
    # Entity <-> Model mapping
    # =========================================================================

    def _to_model(self, entity: Author) -> AuthorModel:
        return AuthorModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            bio=entity.bio,
            avatar=entity.avatar,
            credential=entity.credential,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: AuthorModel) -> Author:
        return Author(
            id=model.id,
            name=model.name,
            email=model.email,
            bio=model.bio,
            avatar=model.avatar,
            credential=model.credential,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
