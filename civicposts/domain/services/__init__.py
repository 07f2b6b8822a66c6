"""Pure domain rules: visibility, placement, invalidation, slugs."""

from .invalidation import (
    HOME_PATH,
    RESPONSE_CACHE_PREFIXES,
    InvalidationSet,
    compute_article_invalidation,
    single_article_cache_key,
)
from .placement import (
    HomePageLayout,
    exclusive_flag_update,
    normalize_flag_updates,
    resolve_home_page,
)
from .slugs import generate_author_slug, generate_slug
from .visibility import filter_visible, is_publicly_visible, start_of_day, visibility_cutoff

__all__ = [
    "HOME_PATH",
    "RESPONSE_CACHE_PREFIXES",
    "InvalidationSet",
    "compute_article_invalidation",
    "single_article_cache_key",
    "HomePageLayout",
    "exclusive_flag_update",
    "normalize_flag_updates",
    "resolve_home_page",
    "generate_author_slug",
    "generate_slug",
    "filter_visible",
    "is_publicly_visible",
    "start_of_day",
    "visibility_cutoff",
]
