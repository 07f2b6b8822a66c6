"""Command handlers."""

from .article_command_handler import ArticleCommandHandler
from .author_command_handler import AuthorCommandHandler
from .publisher_command_handler import PublisherCommandHandler

__all__ = ["ArticleCommandHandler", "AuthorCommandHandler", "PublisherCommandHandler"]
