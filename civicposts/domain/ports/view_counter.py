"""
Port: IViewCounter

Atomic view increments scheduled after a public read.
"""

from abc import ABC, abstractmethod
from uuid import UUID


class IViewCounter(ABC):

    @abstractmethod
    async def increment_views(self, article_id: UUID, amount: int = 1) -> None:
        pass
