"""
Invalidation rules

Pure decision table: given an article before and after a mutation, which
statically generated pages and which response-cache entries go stale.

The response cache is always cleared for list and lookup prefixes on every
write (cheap to rebuild); static pages are regenerated only when the
narrower rules below say a visible page changed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from civicposts.domain.entities.article import Article
from civicposts.domain.services.visibility import is_publicly_visible
from civicposts.domain.value_objects.placement_flag import PlacementFlag

HOME_PATH = "/"

RESPONSE_CACHE_PREFIXES: Tuple[str, ...] = ("article:", "author:", "articles:all:")


def single_article_cache_key(slug: str) -> str:
    return f"article:single:{slug}"


@dataclass
class InvalidationSet:
    """Everything a mutation makes stale."""

    paths: List[str] = field(default_factory=list)
    cache_keys: List[str] = field(default_factory=list)
    cache_prefixes: Tuple[str, ...] = RESPONSE_CACHE_PREFIXES

    def add_path(self, path: Optional[str]) -> None:
        if path and path not in self.paths:
            self.paths.append(path)

    def add_cache_key(self, key: str) -> None:
        if key not in self.cache_keys:
            self.cache_keys.append(key)

    @property
    def touches_home_page(self) -> bool:
        return HOME_PATH in self.paths


def _home_card(article: Article) -> tuple:
    """Fields rendered on a home-page card."""
    return (
        article.title,
        article.subtitle,
        article.main_image.url if article.main_image else None,
        article.published_date,
        article.author_name,
    )


def _flags(article: Article) -> tuple:
    return tuple(getattr(article, name) for name in PlacementFlag.field_names())


def _add_article_pages(result: InvalidationSet, article: Article) -> None:
    result.add_path(article.category.path)
    result.add_path(article.path)


def compute_article_invalidation(
    old: Optional[Article],
    new: Optional[Article],
    now: Optional[datetime] = None,
) -> InvalidationSet:
    """
    Decide what a mutation invalidates.

    Args:
        old: article as stored before the mutation (None on create)
        new: article after the mutation (None on delete)
        now: moment used to evaluate visibility

    Returns:
        InvalidationSet; cache prefixes are always included
    """
    result = InvalidationSet()
    for article in (old, new):
        if article is not None and article.slug:
            result.add_cache_key(single_article_cache_key(article.slug))

    if old is None and new is None:
        return result

    if new is None:
        result.add_path(HOME_PATH)
        _add_article_pages(result, old)
        return result

    if old is None:
        if new.status.is_published or new.has_any_placement():
            result.add_path(HOME_PATH)
            _add_article_pages(result, new)
        return result

    status_changed = old.status is not new.status
    flags_changed = _flags(old) != _flags(new)
    category_changed = old.category is not new.category
    card_changed = _home_card(old) != _home_card(new)
    on_home_page = is_publicly_visible(new, now) and new.has_any_placement()

    if not (status_changed or flags_changed or category_changed or (card_changed and on_home_page)):
        return result

    result.add_path(HOME_PATH)
    if status_changed or category_changed:
        result.add_path(old.category.path)
    _add_article_pages(result, new)
    if old.slug != new.slug:
        result.add_path(old.path)
    return result
