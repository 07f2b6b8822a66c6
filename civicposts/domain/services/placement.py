"""
Placement Resolver

Turns the visible corpus and the four placement flags into the home-page
layout. Each slot is computed independently: an article whose flags were
written directly (bypassing the exclusive toggle) may show up in more than
one slot, since every slot renders in a separate part of the page.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from civicposts.domain.entities.article import Article
from civicposts.domain.services.visibility import filter_visible
from civicposts.domain.value_objects.category import Category
from civicposts.domain.value_objects.placement_flag import PlacementFlag
from civicposts.shared.exceptions.domain_exceptions import DomainValidationError

TOP_STORIES_LIMIT = 10
MINI_TOP_STORIES_LIMIT = 6
TRENDING_LIMIT = 4
LATEST_PER_CATEGORY_LIMIT = 4


@dataclass
class HomePageLayout:
    """Ordered selections for every home-page slot."""

    top_stories: List[Article] = field(default_factory=list)
    mini_top_stories: List[Article] = field(default_factory=list)
    trending: List[Article] = field(default_factory=list)
    latest_by_category: Dict[Category, List[Article]] = field(
        default_factory=lambda: {category: [] for category in Category}
    )

    def is_empty(self) -> bool:
        return not (
            self.top_stories
            or self.mini_top_stories
            or self.trending
            or any(self.latest_by_category.values())
        )


def _select(
    corpus: List[Article],
    predicate: Callable[[Article], bool],
    limit: int,
) -> List[Article]:
    # list.sort is stable: equal created_at keeps the corpus order.
    matching = [article for article in corpus if predicate(article)]
    matching.sort(key=lambda article: article.created_at, reverse=True)
    return matching[:limit]


def resolve_home_page(
    corpus: Iterable[Article],
    now: Optional[datetime] = None,
) -> HomePageLayout:
    """
    Build the home-page layout.

    Args:
        corpus: candidate articles; anything not publicly visible at ``now``
            is dropped before selection
        now: evaluation moment (defaults to the current time)

    Returns:
        HomePageLayout with every slot ordered by created_at descending
    """
    visible = filter_visible(corpus, now)

    return HomePageLayout(
        top_stories=_select(visible, lambda a: a.is_top_story, TOP_STORIES_LIMIT),
        mini_top_stories=_select(visible, lambda a: a.is_mini_top_story, MINI_TOP_STORIES_LIMIT),
        trending=_select(visible, lambda a: a.is_trending, TRENDING_LIMIT),
        latest_by_category={
            category: _select(
                visible,
                lambda a, c=category: a.is_latest and a.category is c,
                LATEST_PER_CATEGORY_LIMIT,
            )
            for category in Category
        },
    )


def exclusive_flag_update(flag: PlacementFlag, value: bool) -> Dict[str, bool]:
    """
    Field updates for toggling one placement flag.

    Setting a flag true clears the other three in the same update; clearing a
    flag touches nothing else.
    """
    updates = {flag.field_name: bool(value)}
    if value:
        for other in flag.others():
            updates[other.field_name] = False
    return updates


def normalize_flag_updates(requested: Dict[str, bool]) -> Dict[str, bool]:
    """
    Apply the exclusivity rule to a generic article update.

    ``requested`` maps entity field names to the values carried by the
    update. One flag set true clears the other three; more than one flag set
    true at once is rejected.

    Raises:
        DomainValidationError: if the update sets several flags true
    """
    enabled = [name for name, value in requested.items() if value]
    if len(enabled) > 1:
        raise DomainValidationError(
            f"Only one home-page placement can be enabled at a time, got: {', '.join(enabled)}"
        )
    if not enabled:
        return {name: bool(value) for name, value in requested.items()}
    return exclusive_flag_update(PlacementFlag.parse(enabled[0]), True)
