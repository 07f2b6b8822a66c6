"""
Pydantic schemas for the author API. The stored credential is never returned.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from civicposts.application.commands.author_commands import CreateAuthorCommand, UpdateAuthorCommand
from civicposts.application.services.author_name_resolver import AuthorDeletionResult
from civicposts.domain.entities.author import Author


class CreateAuthorRequest(BaseModel):
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=320)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    password: Optional[str] = None

    def to_command(self) -> CreateAuthorCommand:
        return CreateAuthorCommand(
            name=self.name,
            email=self.email,
            bio=self.bio,
            avatar=self.avatar,
            password=self.password,
        )


class UpdateAuthorRequest(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=320)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    password: Optional[str] = None

    def to_command(self, author_id: UUID) -> UpdateAuthorCommand:
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        for name in ("name", "email"):
            if changes.get(name, "") is None:
                del changes[name]
        return UpdateAuthorCommand(author_id=author_id, **changes)


class AuthorResponse(BaseModel):
    id: UUID
    name: str
    email: str
    bio: Optional[str]
    avatar: Optional[str]
    can_login: bool = Field(alias="canLogin")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, entity: Author) -> "AuthorResponse":
        return cls(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            bio=entity.bio,
            avatar=entity.avatar,
            can_login=entity.can_login,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class AuthorDeletionResponse(BaseModel):
    message: str
    articles_affected_count: int = Field(alias="articlesAffectedCount")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: AuthorDeletionResult) -> "AuthorDeletionResponse":
        return cls(message=result.message, articles_affected_count=result.articles_affected_count)
