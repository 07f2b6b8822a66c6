"""
CQRS commands for publishers.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union
from uuid import UUID

from civicposts.application.commands.actor import Actor
from civicposts.application.commands.article_commands import UNSET


@dataclass(frozen=True)
class CreatePublisherCommand:
    name: str
    email: str
    password: str
    actor: Actor
    avatar: Optional[str] = None


@dataclass(frozen=True)
class UpdatePublisherCommand:
    """
    Partial update; ``UNSET`` fields keep the stored value. An empty
    password keeps the stored credential.
    """

    publisher_id: UUID
    name: Union[str, Any] = UNSET
    email: Union[str, Any] = UNSET
    avatar: Union[Optional[str], Any] = UNSET
    password: Union[Optional[str], Any] = UNSET

    def provided(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "publisher_id" and getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class DeletePublisherCommand:
    publisher_id: UUID
