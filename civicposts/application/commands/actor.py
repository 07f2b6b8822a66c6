"""
Acting identity attached to every back-office command.

Authentication happens upstream; commands only carry who is acting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class Role(str, Enum):
    """Back-office surfaces."""

    ADMIN = "admin"
    AUTHOR = "author"
    PUBLISHER = "publisher"


@dataclass(frozen=True)
class Actor:
    role: Role
    id: Optional[UUID] = None

    @classmethod
    def admin(cls) -> "Actor":
        return cls(role=Role.ADMIN)

    @classmethod
    def author(cls, author_id: UUID) -> "Actor":
        return cls(role=Role.AUTHOR, id=author_id)

    @classmethod
    def publisher(cls, publisher_id: UUID) -> "Actor":
        return cls(role=Role.PUBLISHER, id=publisher_id)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
