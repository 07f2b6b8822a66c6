"""
Unit tests for ArticleCommandHandler.
"""

from datetime import date
from uuid import uuid4

import pytest

from civicposts.application.commands.actor import Actor
from civicposts.application.commands.article_commands import (
    CreateArticleCommand,
    DeleteArticleCommand,
    SetPlacementFlagCommand,
    UpdateArticleCommand,
)
from civicposts.domain.entities.article import ImageRef, SubImage
from civicposts.domain.value_objects.article_status import ArticleStatus
from civicposts.domain.value_objects.category import Category
from civicposts.domain.value_objects.placement_flag import PlacementFlag
from civicposts.shared.exceptions.domain_exceptions import (
    AccessDeniedError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)

MAIN_IMAGE = ImageRef(url="https://cdn.example.com/main.jpg", public_id="articles/main")


def _create_command(author_id, **overrides):
    defaults = dict(
        title="City Council Approves Budget",
        content=["First paragraph.", "Second paragraph."],
        author_id=author_id,
        published_date=date(2024, 6, 1),
        main_image=MAIN_IMAGE,
        category=Category.NEWS,
    )
    defaults.update(overrides)
    return CreateArticleCommand(**defaults)


@pytest.fixture
def author(author_repository, make_author):
    return author_repository.add(make_author(name="Jane Doe"))


# =============================================================================
# Create
# =============================================================================


@pytest.mark.asyncio
async def test_create_article(article_handler, article_repository, author):
    article = await article_handler.handle_create_article(_create_command(author.id))

    assert article.slug == "city-council-approves-budget"
    assert article.author_name == "Jane Doe"
    assert article.status is ArticleStatus.DRAFT
    assert article.id in article_repository.articles


@pytest.mark.asyncio
async def test_create_with_unknown_author_fails(article_handler):
    with pytest.raises(DomainValidationError, match="Author not found"):
        await article_handler.handle_create_article(_create_command(uuid4()))


@pytest.mark.asyncio
async def test_create_with_one_paragraph_fails(article_handler, author):
    with pytest.raises(DomainValidationError):
        await article_handler.handle_create_article(_create_command(author.id, content=["Only one."]))


@pytest.mark.asyncio
async def test_create_duplicate_slug_fails(article_handler, author):
    await article_handler.handle_create_article(_create_command(author.id))

    with pytest.raises(DuplicateEntityError):
        await article_handler.handle_create_article(_create_command(author.id, title="City council approves budget!"))


@pytest.mark.asyncio
async def test_author_surface_forces_acting_author(article_handler, author):
    command = _create_command(uuid4(), actor=Actor.author(author.id))

    article = await article_handler.handle_create_article(command)

    assert article.author_id == author.id


@pytest.mark.asyncio
async def test_publisher_surface_stamps_publisher(article_handler, publisher_repository, make_publisher, author):
    publisher = publisher_repository.add(make_publisher())

    article = await article_handler.handle_create_article(
        _create_command(author.id, actor=Actor.publisher(publisher.id))
    )

    assert article.publisher_id == publisher.id
    assert article.author_id == author.id


@pytest.mark.asyncio
async def test_unknown_publisher_cannot_create(article_handler, article_repository, author):
    with pytest.raises(AccessDeniedError, match="Unknown publisher account"):
        await article_handler.handle_create_article(_create_command(author.id, actor=Actor.publisher(uuid4())))

    assert article_repository.articles == {}


@pytest.mark.asyncio
async def test_create_published_article_invalidates_pages(article_handler, page_invalidator, author):
    await article_handler.handle_create_article(_create_command(author.id, status=ArticleStatus.PUBLISHED))

    assert page_invalidator.paths == ["/", "/news", "/news/city-council-approves-budget"]


# =============================================================================
# Update
# =============================================================================


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(subtitle="Keep me", youtube_link="https://youtu.be/x"))

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, youtube_link="   ")
    )

    assert updated.subtitle == "Keep me"
    assert updated.youtube_link is None
    assert updated.title == stored.title


@pytest.mark.asyncio
async def test_explicit_none_clears_nullable_fields(article_handler, article_repository, make_article):
    stored = article_repository.add(
        make_article(
            subtitle="Remove me",
            sub_images=[SubImage(url="https://cdn.example.com/s.jpg", public_id="sub")],
        )
    )

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, subtitle=None, sub_images=None)
    )

    assert updated.subtitle is None
    assert updated.sub_images == []


@pytest.mark.asyncio
async def test_title_change_regenerates_slug(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(title="Old headline", slug="old-headline"))

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, title="New Headline")
    )

    assert updated.slug == "new-headline"


@pytest.mark.asyncio
async def test_title_change_to_taken_slug_fails(article_handler, article_repository, make_article):
    article_repository.add(make_article(title="Taken headline", slug="taken-headline"))
    stored = article_repository.add(make_article(title="Old headline", slug="old-headline"))

    with pytest.raises(DuplicateEntityError):
        await article_handler.handle_update_article(
            UpdateArticleCommand(article_id=stored.id, title="Taken Headline")
        )


@pytest.mark.asyncio
async def test_update_unknown_article(article_handler):
    with pytest.raises(EntityNotFoundError):
        await article_handler.handle_update_article(UpdateArticleCommand(article_id=uuid4(), title="X"))


@pytest.mark.asyncio
async def test_update_author_refreshes_author_name(
    article_handler, article_repository, author_repository, make_article, make_author
):
    new_author = author_repository.add(make_author(name="John Roe", email="john@example.com"))
    stored = article_repository.add(make_article(author_name="Jane Doe"))

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, author_id=new_author.id)
    )

    assert updated.author_id == new_author.id
    assert updated.author_name == "John Roe"


@pytest.mark.asyncio
async def test_update_unknown_author_without_stored_name_fails(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(author_name=None))

    with pytest.raises(DomainValidationError, match="Author not found"):
        await article_handler.handle_update_article(UpdateArticleCommand(article_id=stored.id, author_id=uuid4()))


@pytest.mark.asyncio
async def test_update_backfills_missing_author_name(
    article_handler, article_repository, author, make_article
):
    stored = article_repository.add(make_article(author_id=author.id, author_name=None))

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, subtitle="New subtitle")
    )

    assert updated.author_name == "Jane Doe"


@pytest.mark.asyncio
async def test_update_deletes_replaced_images(article_handler, article_repository, image_store, side_effects, make_article):
    stored = article_repository.add(make_article())

    await article_handler.handle_update_article(
        UpdateArticleCommand(
            article_id=stored.id,
            main_image=ImageRef(url="https://cdn.example.com/new.jpg", public_id="articles/new"),
            deleted_images=["articles/main"],
        )
    )
    await side_effects.drain()

    assert image_store.deleted == ["articles/main"]


@pytest.mark.asyncio
async def test_generic_update_enforces_flag_exclusivity(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(is_top_story=True))

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, is_trending=True)
    )

    assert updated.is_trending is True
    assert updated.is_top_story is False


@pytest.mark.asyncio
async def test_generic_update_rejects_two_enabled_flags(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article())

    with pytest.raises(DomainValidationError):
        await article_handler.handle_update_article(
            UpdateArticleCommand(article_id=stored.id, is_latest=True, is_trending=True)
        )


@pytest.mark.asyncio
async def test_update_uses_snapshot_for_invalidation(article_handler, article_repository, page_invalidator, make_article):
    stored = article_repository.add(make_article(slug="budget", status=ArticleStatus.DRAFT))

    await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=stored.id, status=ArticleStatus.PUBLISHED)
    )

    assert page_invalidator.paths == ["/", "/news", "/news/budget"]


# =============================================================================
# Ownership
# =============================================================================


@pytest.mark.asyncio
async def test_author_cannot_update_foreign_article(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(author_id=uuid4()))

    with pytest.raises(AccessDeniedError):
        await article_handler.handle_update_article(
            UpdateArticleCommand(article_id=stored.id, actor=Actor.author(uuid4()), title="Mine now")
        )


@pytest.mark.asyncio
async def test_author_cannot_set_flags(article_handler, article_repository, make_article):
    author_id = uuid4()
    stored = article_repository.add(make_article(author_id=author_id))

    with pytest.raises(AccessDeniedError):
        await article_handler.handle_update_article(
            UpdateArticleCommand(article_id=stored.id, actor=Actor.author(author_id), is_top_story=True)
        )


@pytest.mark.asyncio
async def test_author_cannot_reassign_article(article_handler, article_repository, make_article):
    author_id = uuid4()
    stored = article_repository.add(make_article(author_id=author_id))

    with pytest.raises(AccessDeniedError):
        await article_handler.handle_update_article(
            UpdateArticleCommand(article_id=stored.id, actor=Actor.author(author_id), author_id=uuid4())
        )


@pytest.mark.asyncio
async def test_publisher_manages_only_own_articles(article_handler, article_repository, make_article):
    publisher_id = uuid4()
    own = article_repository.add(make_article(title="Own story", publisher_id=publisher_id))
    foreign = article_repository.add(make_article(title="Foreign story", publisher_id=uuid4()))

    updated = await article_handler.handle_update_article(
        UpdateArticleCommand(article_id=own.id, actor=Actor.publisher(publisher_id), subtitle="Edited")
    )
    assert updated.subtitle == "Edited"

    with pytest.raises(AccessDeniedError):
        await article_handler.handle_delete_article(
            DeleteArticleCommand(article_id=foreign.id, actor=Actor.publisher(publisher_id))
        )


# =============================================================================
# Delete
# =============================================================================


@pytest.mark.asyncio
async def test_delete_removes_article_and_images(
    article_handler, article_repository, image_store, side_effects, page_invalidator, make_article
):
    stored = article_repository.add(
        make_article(
            slug="budget",
            mini_image=ImageRef(url="https://cdn.example.com/mini.jpg", public_id="articles/mini"),
            sub_images=[SubImage(url="https://cdn.example.com/s.jpg", public_id="articles/sub")],
        )
    )

    await article_handler.handle_delete_article(DeleteArticleCommand(article_id=stored.id))
    await side_effects.drain()

    assert stored.id not in article_repository.articles
    assert image_store.deleted == ["articles/main", "articles/mini", "articles/sub"]
    assert page_invalidator.paths == ["/", "/news", "/news/budget"]


@pytest.mark.asyncio
async def test_delete_succeeds_when_cdn_fails(article_handler, article_repository, image_store, side_effects, make_article):
    image_store.fail = True
    stored = article_repository.add(make_article())

    await article_handler.handle_delete_article(DeleteArticleCommand(article_id=stored.id))
    await side_effects.drain()

    assert stored.id not in article_repository.articles


# =============================================================================
# Placement
# =============================================================================


@pytest.mark.asyncio
async def test_set_top_story_clears_trending(article_handler, article_repository, page_invalidator, make_article):
    stored = article_repository.add(make_article(is_trending=True))

    article = await article_handler.handle_set_placement_flag(
        SetPlacementFlagCommand(article_id=stored.id, flag=PlacementFlag.TOP_STORY, value=True)
    )

    assert (article.is_top_story, article.is_mini_top_story, article.is_latest, article.is_trending) == (
        True, False, False, False,
    )
    assert "/" in page_invalidator.paths


@pytest.mark.asyncio
async def test_toggle_trending_on_top_story(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(is_top_story=True))

    article = await article_handler.handle_set_placement_flag(
        SetPlacementFlagCommand(article_id=stored.id, flag=PlacementFlag.TRENDING, value=True)
    )

    assert article.is_trending is True
    assert article.is_top_story is False


@pytest.mark.asyncio
async def test_clearing_flag_leaves_others(article_handler, article_repository, make_article):
    stored = article_repository.add(make_article(is_top_story=True, is_latest=True))

    article = await article_handler.handle_set_placement_flag(
        SetPlacementFlagCommand(article_id=stored.id, flag=PlacementFlag.TOP_STORY, value=False)
    )

    assert article.is_top_story is False
    assert article.is_latest is True


@pytest.mark.asyncio
async def test_set_flag_on_unknown_article(article_handler):
    with pytest.raises(EntityNotFoundError):
        await article_handler.handle_set_placement_flag(
            SetPlacementFlagCommand(article_id=uuid4(), flag=PlacementFlag.LATEST, value=True)
        )


@pytest.mark.asyncio
async def test_only_admin_sets_flags(article_handler, article_repository, make_article):
    author_id = uuid4()
    stored = article_repository.add(make_article(author_id=author_id))

    with pytest.raises(AccessDeniedError):
        await article_handler.handle_set_placement_flag(
            SetPlacementFlagCommand(
                article_id=stored.id, flag=PlacementFlag.LATEST, value=True, actor=Actor.author(author_id)
            )
        )
