"""
Repository Interface: IAuthorRepository

Port for the author identity store.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from civicposts.domain.entities.author import Author


class IAuthorRepository(ABC):
    """Author repository. Emails are compared in their normalized form."""

    @abstractmethod
    async def save(self, author: Author) -> Author:
        pass

    @abstractmethod
    async def find_by_id(self, author_id: UUID) -> Optional[Author]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Author]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """
        Check whether another author already uses ``email``.

        Args:
            email: Normalized email
            exclude_id: Author to ignore (the one being updated)
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Author]:
        """All authors ordered by name."""
        pass

    @abstractmethod
    async def delete(self, author_id: UUID) -> bool:
        pass
