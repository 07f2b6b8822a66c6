"""Application commands."""

from .actor import Actor, Role
from .article_commands import (
    UNSET,
    CreateArticleCommand,
    DeleteArticleCommand,
    SetPlacementFlagCommand,
    UpdateArticleCommand,
)
from .author_commands import CreateAuthorCommand, DeleteAuthorCommand, UpdateAuthorCommand
from .publisher_commands import (
    CreatePublisherCommand,
    DeletePublisherCommand,
    UpdatePublisherCommand,
)

__all__ = [
    "Actor",
    "Role",
    "UNSET",
    "CreateArticleCommand",
    "UpdateArticleCommand",
    "DeleteArticleCommand",
    "SetPlacementFlagCommand",
    "CreateAuthorCommand",
    "UpdateAuthorCommand",
    "DeleteAuthorCommand",
    "CreatePublisherCommand",
    "UpdatePublisherCommand",
    "DeletePublisherCommand",
]
