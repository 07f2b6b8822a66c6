"""
Port: IPageInvalidator

Triggers out-of-band regeneration of a statically generated page.
"""

from abc import ABC, abstractmethod


class IPageInvalidator(ABC):

    @abstractmethod
    async def invalidate(self, path: str) -> None:
        pass
