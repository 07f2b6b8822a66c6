"""
CQRS commands for authors.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union
from uuid import UUID

from civicposts.application.commands.article_commands import UNSET


@dataclass(frozen=True)
class CreateAuthorCommand:
    name: str
    email: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    # Plain-text password for login-capable authors; hashed before storage.
    password: Optional[str] = None


@dataclass(frozen=True)
class UpdateAuthorCommand:
    """Partial update; ``UNSET`` fields keep the stored value."""

    author_id: UUID
    name: Union[str, Any] = UNSET
    email: Union[str, Any] = UNSET
    bio: Union[Optional[str], Any] = UNSET
    avatar: Union[Optional[str], Any] = UNSET
    password: Union[Optional[str], Any] = UNSET

    def provided(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "author_id" and getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class DeleteAuthorCommand:
    author_id: UUID
