"""
Command Handler for authors (Author Identity Store).

Authors are the authoritative source of display names; renames are pushed
into articles through the AuthorNameResolver after the author is saved.
"""

import logging
from typing import List

from civicposts.application.commands.author_commands import (
    CreateAuthorCommand,
    DeleteAuthorCommand,
    UpdateAuthorCommand,
)
from civicposts.application.services.author_name_resolver import (
    AuthorDeletionResult,
    AuthorNameResolver,
)
from civicposts.application.services.credentials import hash_password
from civicposts.domain.entities.author import Author, normalize_email
from civicposts.domain.repositories.author_repository import IAuthorRepository
from civicposts.shared.exceptions.domain_exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Author with this email already exists"


class AuthorCommandHandler:
    """Create, update and delete authors."""

    def __init__(self, repository: IAuthorRepository, name_resolver: AuthorNameResolver):
        self.repository = repository
        self.name_resolver = name_resolver

    async def handle_create_author(self, command: CreateAuthorCommand) -> Author:
        """
        Create an author.

        Raises:
            DomainValidationError: missing name/email or short password
            DuplicateEntityError: email already used (case-insensitive)
        """
        email = normalize_email(command.email)
        if email and await self.repository.exists_by_email(email):
            raise DuplicateEntityError(DUPLICATE_EMAIL_MESSAGE)

        author = Author(
            name=command.name,
            email=email,
            bio=command.bio,
            avatar=command.avatar,
            credential=hash_password(command.password) if command.password else None,
        )
        saved = await self.repository.save(author)
        logger.info(f"[Authors] created '{saved.name}' <{saved.email}>")
        return saved

    async def handle_update_author(self, command: UpdateAuthorCommand) -> Author:
        """
        Apply a partial update. A rename is propagated into articles.

        Raises:
            EntityNotFoundError: unknown author
            DuplicateEntityError: email taken by another author
        """
        author = await self.repository.find_by_id(command.author_id)
        if author is None:
            raise EntityNotFoundError(f"Author {command.author_id} not found")

        provided = command.provided()
        old_name = author.name

        if "email" in provided:
            email = normalize_email(provided["email"])
            if email != author.email and await self.repository.exists_by_email(email, exclude_id=author.id):
                raise DuplicateEntityError(DUPLICATE_EMAIL_MESSAGE)
            author.email = email
        if "name" in provided:
            author.rename(provided["name"])
        if "bio" in provided:
            author.bio = (provided["bio"] or "").strip() or None
        if "avatar" in provided:
            author.avatar = provided["avatar"] or None
        if provided.get("password"):
            author.credential = hash_password(provided["password"])

        author.validate()
        saved = await self.repository.save(author)

        if saved.name != old_name:
            await self.name_resolver.propagate_name_change(saved.id, old_name, saved.name)
        return saved

    async def handle_delete_author(self, command: DeleteAuthorCommand) -> AuthorDeletionResult:
        """
        Delete an author. Articles keep the last synced author name.

        Raises:
            EntityNotFoundError: unknown author
        """
        author = await self.repository.find_by_id(command.author_id)
        if author is None:
            raise EntityNotFoundError(f"Author {command.author_id} not found")

        result = await self.name_resolver.handle_author_deletion(author.id, author.name)
        await self.repository.delete(author.id)
        logger.info(f"[Authors] deleted '{author.name}'")
        return result

    async def get_author(self, author_id) -> Author:
        author = await self.repository.find_by_id(author_id)
        if author is None:
            raise EntityNotFoundError(f"Author {author_id} not found")
        return author

    async def list_authors(self) -> List[Author]:
        return await self.repository.find_all()
