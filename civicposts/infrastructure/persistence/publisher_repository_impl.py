"""
SQLAlchemy repository implementation for publishers.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from civicposts.domain.entities.author import normalize_email
from civicposts.domain.entities.publisher import Publisher
from civicposts.domain.repositories.publisher_repository import IPublisherRepository
from civicposts.infrastructure.persistence.models import PublisherModel
from civicposts.shared.exceptions.domain_exceptions import DuplicateEntityError


class PublisherRepositoryImpl(IPublisherRepository):
    """PostgreSQL implementation of the publisher repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, publisher: Publisher) -> Publisher:
        model = await self.session.merge(self._to_model(publisher))
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEntityError("Publisher with this email already exists") from e
        await self.session.refresh(model)
        return self._to_entity(model)

    async def find_by_id(self, publisher_id: UUID) -> Optional[Publisher]:
        model = await self.session.get(PublisherModel, publisher_id)
        return self._to_entity(model) if model else None

    async def exists_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(func.count(PublisherModel.id)).where(
            PublisherModel.email == normalize_email(email)
        )
        if exclude_id is not None:
            query = query.where(PublisherModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar() > 0

    async def find_all(self) -> List[Publisher]:
        result = await self.session.execute(select(PublisherModel).order_by(PublisherModel.name))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def delete(self, publisher_id: UUID) -> bool:
        model = await self.session.get(PublisherModel, publisher_id)
        if model:
            await self.session.delete(model)
            await self.session.commit()
            return True
        return False

    def _to_model(self, entity: Publisher) -> PublisherModel:
        return PublisherModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            avatar=entity.avatar,
            credential=entity.credential,
            created_by=entity.created_by,
            created_by_role=entity.created_by_role,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: PublisherModel) -> Publisher:
        return Publisher(
            id=model.id,
            name=model.name,
            email=model.email,
            avatar=model.avatar,
            credential=model.credential,
            created_by=model.created_by,
            created_by_role=model.created_by_role,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
