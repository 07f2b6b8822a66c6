"""
Port: IImageStore

External image storage (CDN).
"""

from abc import ABC, abstractmethod


class IImageStore(ABC):

    @abstractmethod
    async def delete_by_external_id(self, public_id: str) -> None:
        """Delete an image by its CDN public id."""
        pass
