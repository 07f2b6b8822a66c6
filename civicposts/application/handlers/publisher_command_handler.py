"""
Command Handler for publishers (Publisher Identity Store).

Publishers are created by admins (or authors) and always carry a password.
"""

import logging
from typing import List

from civicposts.application.commands.actor import Role
from civicposts.application.commands.publisher_commands import (
    CreatePublisherCommand,
    DeletePublisherCommand,
    UpdatePublisherCommand,
)
from civicposts.application.services.credentials import hash_password
from civicposts.domain.entities.author import normalize_email
from civicposts.domain.entities.publisher import Publisher
from civicposts.domain.repositories.publisher_repository import IPublisherRepository
from civicposts.shared.exceptions.domain_exceptions import (
    AccessDeniedError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Publisher with this email already exists"
DELETED_MESSAGE = "Publisher deleted successfully."


class PublisherCommandHandler:
    """Create, update and delete publisher accounts."""

    def __init__(self, repository: IPublisherRepository):
        self.repository = repository

    async def handle_create_publisher(self, command: CreatePublisherCommand) -> Publisher:
        """
        Create a publisher.

        Raises:
            DomainValidationError: missing name, email or password, or a short password
            DuplicateEntityError: email already used (case-insensitive)
            AccessDeniedError: the actor is a publisher
        """
        actor = command.actor
        if actor.role is Role.PUBLISHER:
            raise AccessDeniedError("Publishers cannot create publishers")
        if not (command.name or "").strip() or not (command.email or "").strip() or not command.password:
            raise DomainValidationError("Name, email, and password are required")

        email = normalize_email(command.email)
        if await self.repository.exists_by_email(email):
            raise DuplicateEntityError(DUPLICATE_EMAIL_MESSAGE)

        publisher = Publisher(
            name=command.name,
            email=email,
            credential=hash_password(command.password),
            avatar=command.avatar or None,
            created_by=actor.id,
            created_by_role=actor.role.value,
        )
        saved = await self.repository.save(publisher)
        logger.info(f"[Publishers] created '{saved.name}' by {actor.role.value}")
        return saved

    async def handle_update_publisher(self, command: UpdatePublisherCommand) -> Publisher:
        """
        Partial update.

        Raises:
            EntityNotFoundError: unknown publisher
            DuplicateEntityError: new email already used by another publisher
        """
        publisher = await self.get_publisher(command.publisher_id)
        provided = command.provided()

        if "email" in provided:
            email = normalize_email(provided["email"])
            if email != publisher.email and await self.repository.exists_by_email(email, exclude_id=publisher.id):
                raise DuplicateEntityError(DUPLICATE_EMAIL_MESSAGE)
            publisher.email = email
        if "name" in provided:
            publisher.name = (provided["name"] or "").strip()
        if "avatar" in provided:
            publisher.avatar = provided["avatar"] or None
        if (provided.get("password") or "").strip():
            publisher.credential = hash_password(provided["password"])

        publisher.validate()
        publisher.touch()
        return await self.repository.save(publisher)

    async def handle_delete_publisher(self, command: DeletePublisherCommand) -> str:
        """
        Delete a publisher. Its articles stay in place.

        Raises:
            EntityNotFoundError: unknown publisher
        """
        publisher = await self.get_publisher(command.publisher_id)
        await self.repository.delete(publisher.id)
        logger.info(f"[Publishers] deleted '{publisher.name}'")
        return DELETED_MESSAGE

    async def get_publisher(self, publisher_id) -> Publisher:
        publisher = await self.repository.find_by_id(publisher_id)
        if publisher is None:
            raise EntityNotFoundError(f"Publisher {publisher_id} not found")
        return publisher

    async def list_publishers(self) -> List[Publisher]:
        return await self.repository.find_all()
