"""
Pydantic schemas for the publisher API. The stored credential is never returned.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from civicposts.application.commands.actor import Actor
from civicposts.application.commands.publisher_commands import (
    CreatePublisherCommand,
    UpdatePublisherCommand,
)
from civicposts.domain.entities.publisher import Publisher


class CreatePublisherRequest(BaseModel):
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=320)
    password: str
    avatar: Optional[str] = None

    def to_command(self, actor: Actor) -> CreatePublisherCommand:
        return CreatePublisherCommand(
            name=self.name,
            email=self.email,
            password=self.password,
            avatar=self.avatar,
            actor=actor,
        )


class UpdatePublisherRequest(BaseModel):
    """Partial update; an empty password keeps the current one."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=320)
    avatar: Optional[str] = None
    password: Optional[str] = None

    def to_command(self, publisher_id: UUID) -> UpdatePublisherCommand:
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        for name in ("name", "email"):
            if changes.get(name, "") is None:
                del changes[name]
        return UpdatePublisherCommand(publisher_id=publisher_id, **changes)


class PublisherResponse(BaseModel):
    id: UUID
    name: str
    email: str
    avatar: Optional[str]
    created_by: Optional[UUID] = Field(alias="createdBy")
    created_by_role: str = Field(alias="createdByRole")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, entity: Publisher) -> "PublisherResponse":
        return cls(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            avatar=entity.avatar,
            created_by=entity.created_by,
            created_by_role=entity.created_by_role,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class PublisherDeletionResponse(BaseModel):
    success: bool = True
    message: str
