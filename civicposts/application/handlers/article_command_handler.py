"""
Command Handler for articles.

Every mutation captures the stored article before applying changes, then
hands (old, new) to the invalidation coordinator.
"""

import dataclasses
import logging
from typing import Any, Dict, Iterable

from civicposts.application.commands.actor import Actor, Role
from civicposts.application.commands.article_commands import (
    CreateArticleCommand,
    DeleteArticleCommand,
    SetPlacementFlagCommand,
    UpdateArticleCommand,
)
from civicposts.application.services.author_name_resolver import AuthorNameResolver
from civicposts.application.services.background import SideEffectRunner
from civicposts.application.services.cache_invalidation import CacheInvalidationCoordinator
from civicposts.domain.entities.article import Article
from civicposts.domain.ports.image_store import IImageStore
from civicposts.domain.repositories.article_repository import IArticleRepository
from civicposts.domain.repositories.author_repository import IAuthorRepository
from civicposts.domain.repositories.publisher_repository import IPublisherRepository
from civicposts.domain.services.placement import exclusive_flag_update, normalize_flag_updates
from civicposts.domain.services.slugs import generate_slug
from civicposts.domain.value_objects.placement_flag import PlacementFlag
from civicposts.shared.exceptions.domain_exceptions import (
    AccessDeniedError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)


class ArticleCommandHandler:
    """Handler for article commands from the admin, author and publisher surfaces."""

    def __init__(
        self,
        repository: IArticleRepository,
        author_repository: IAuthorRepository,
        name_resolver: AuthorNameResolver,
        coordinator: CacheInvalidationCoordinator,
        image_store: IImageStore,
        side_effects: SideEffectRunner,
        publisher_repository: IPublisherRepository,
    ):
        self.repository = repository
        self.author_repository = author_repository
        self.name_resolver = name_resolver
        self.coordinator = coordinator
        self.image_store = image_store
        self.side_effects = side_effects
        self.publisher_repository = publisher_repository

    # =========================================================================
    # Create
    # =========================================================================

    async def handle_create_article(self, command: CreateArticleCommand) -> Article:
        """
        Create an article.

        Raises:
            DomainValidationError: invalid fields or unknown author
            DuplicateEntityError: another article already has the slug
            AccessDeniedError: the acting publisher account does not exist
        """
        actor = command.actor
        if actor.role is Role.PUBLISHER and await self.publisher_repository.find_by_id(actor.id) is None:
            raise AccessDeniedError("Unknown publisher account")

        author_id = actor.id if actor.role is Role.AUTHOR else command.author_id

        author = await self.author_repository.find_by_id(author_id)
        if author is None:
            raise DomainValidationError("Author not found")

        slug = generate_slug(command.title)
        if await self.repository.exists_by_slug(slug):
            raise DuplicateEntityError(f"Article with slug '{slug}' already exists")

        article = Article(
            slug=slug,
            title=command.title,
            subtitle=command.subtitle,
            content=list(command.content),
            category=command.category,
            status=command.status,
            published_date=command.published_date,
            author_id=author.id,
            author_name=author.name,
            publisher_id=actor.id if actor.role is Role.PUBLISHER else None,
            main_image=command.main_image,
            mini_image=command.mini_image,
            youtube_link=_clean_link(command.youtube_link),
            sub_images=list(command.sub_images or []),
        )

        saved = await self.repository.save(article)
        logger.info(f"[Articles] created {saved.slug} by {actor.role.value}")
        await self.coordinator.article_mutated(None, saved)
        return saved

    # =========================================================================
    # Update
    # =========================================================================

    async def handle_update_article(self, command: UpdateArticleCommand) -> Article:
        """
        Apply a partial update.

        Raises:
            EntityNotFoundError: unknown article
            AccessDeniedError: article owned by someone else, or a field the
                surface may not change
            DomainValidationError: resulting article is invalid
            DuplicateEntityError: new title collides with another slug
        """
        old = await self._load_owned(command.article_id, command.actor)
        provided = command.provided()
        self._check_surface_permissions(command.actor, old, provided)

        changes: Dict[str, Any] = {}

        if "author_id" in provided:
            author = await self.author_repository.find_by_id(provided["author_id"])
            if author is not None:
                changes["author_name"] = author.name
            elif not old.author_name:
                raise DomainValidationError("Author not found")
            else:
                logger.warning(
                    f"[Articles] author {provided['author_id']} not found, "
                    f"keeping '{old.author_name}' on {old.slug}"
                )
            changes["author_id"] = provided["author_id"]

        if "title" in provided and provided["title"] != old.title:
            slug = generate_slug(provided["title"])
            if slug != old.slug and await self.repository.exists_by_slug(slug, exclude_id=old.id):
                raise DuplicateEntityError(f"Article with slug '{slug}' already exists")
            changes["title"] = provided["title"]
            changes["slug"] = slug

        for name in ("subtitle", "published_date", "main_image", "mini_image", "status", "category"):
            if name in provided:
                changes[name] = provided[name]
        if "content" in provided:
            changes["content"] = list(provided["content"] or [])
        if "youtube_link" in provided:
            changes["youtube_link"] = _clean_link(provided["youtube_link"])
        if "sub_images" in provided:
            changes["sub_images"] = list(provided["sub_images"] or [])

        flags = command.provided_flags()
        if flags:
            changes.update(normalize_flag_updates(flags))

        # replace() re-runs entity validation; ``old`` stays untouched.
        updated = dataclasses.replace(old, **changes)
        updated.touch()
        if not updated.author_name:
            await self.name_resolver.backfill_author_name(updated)

        saved = await self.repository.save(updated)

        if command.deleted_images:
            self._discard_images(command.deleted_images, f"article {saved.id} edit")

        await self.coordinator.article_mutated(old, saved)
        return saved

    # =========================================================================
    # Delete
    # =========================================================================

    async def handle_delete_article(self, command: DeleteArticleCommand) -> Article:
        """
        Delete an article, then release its CDN images (best-effort).

        Returns:
            The deleted article
        """
        article = await self._load_owned(command.article_id, command.actor)

        if not await self.repository.delete(article.id):
            raise EntityNotFoundError(f"Article {article.id} not found")

        self._discard_images(article.image_public_ids(), f"article {article.id} delete")
        logger.info(f"[Articles] deleted {article.slug}")
        await self.coordinator.article_mutated(article, None)
        return article

    # =========================================================================
    # Placement
    # =========================================================================

    async def handle_set_placement_flag(self, command: SetPlacementFlagCommand) -> Article:
        """
        Toggle one placement flag.

        Enabling a flag clears the other three in the same atomic update.
        """
        if not command.actor.is_admin:
            raise AccessDeniedError("Only admins can change home-page placement")

        old = await self._load_owned(command.article_id, command.actor)
        updates = exclusive_flag_update(command.flag, command.value)

        updated = await self.repository.update_fields(old.id, updates)
        if updated is None:
            raise EntityNotFoundError(f"Article {command.article_id} not found")

        logger.info(f"[Articles] {command.flag.value}={command.value} on {updated.slug}")
        await self.coordinator.article_mutated(old, updated)
        return updated

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _load_owned(self, article_id, actor: Actor) -> Article:
        article = await self.repository.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError(f"Article {article_id} not found")

        if actor.role is Role.AUTHOR and article.author_id != actor.id:
            raise AccessDeniedError("Authors can only manage their own articles")
        if actor.role is Role.PUBLISHER and article.publisher_id != actor.id:
            raise AccessDeniedError("Publishers can only manage their own articles")
        return article

    @staticmethod
    def _check_surface_permissions(actor: Actor, article: Article, provided: Dict[str, Any]) -> None:
        if actor.is_admin:
            return
        if any(name in provided for name in PlacementFlag.field_names()):
            raise AccessDeniedError(f"{actor.role.value.capitalize()}s cannot set home page flags")
        if (
            actor.role is Role.AUTHOR
            and "author_id" in provided
            and provided["author_id"] != article.author_id
        ):
            raise AccessDeniedError("Authors cannot change article author")

    def _discard_images(self, public_ids: Iterable[str], reason: str) -> None:
        for public_id in public_ids:
            self.side_effects.fire(
                self.image_store.delete_by_external_id(public_id),
                f"delete image {public_id} ({reason})",
            )


def _clean_link(link):
    if link is None:
        return None
    return link.strip() or None
