"""
Repository Interface: IPublisherRepository
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from civicposts.domain.entities.publisher import Publisher


class IPublisherRepository(ABC):
    """Publisher repository. Emails are compared in their normalized form."""

    @abstractmethod
    async def save(self, publisher: Publisher) -> Publisher:
        pass

    @abstractmethod
    async def find_by_id(self, publisher_id: UUID) -> Optional[Publisher]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        pass

    @abstractmethod
    async def find_all(self) -> List[Publisher]:
        """All publishers ordered by name."""
        pass

    @abstractmethod
    async def delete(self, publisher_id: UUID) -> bool:
        pass
