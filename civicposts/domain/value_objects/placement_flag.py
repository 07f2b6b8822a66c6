"""
Value Object: PlacementFlag

Home-page placement flags carried by every article.
"""

from enum import Enum
from typing import Tuple

from civicposts.shared.exceptions.domain_exceptions import DomainValidationError


class PlacementFlag(str, Enum):
    """
    Home-page slots an article can be promoted to.

    Values are the public (API) names; ``field_name`` is the attribute on the
    Article entity.
    """

    TOP_STORY = "isTopStory"
    MINI_TOP_STORY = "isMiniTopStory"
    LATEST = "isLatest"
    TRENDING = "isTrending"

    @property
    def field_name(self) -> str:
        fields = {
            self.TOP_STORY: "is_top_story",
            self.MINI_TOP_STORY: "is_mini_top_story",
            self.LATEST: "is_latest",
            self.TRENDING: "is_trending",
        }
        return fields[self]

    def others(self) -> Tuple["PlacementFlag", ...]:
        """The three flags that are cleared when this one is set."""
        return tuple(flag for flag in PlacementFlag if flag is not self)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(flag.field_name for flag in cls)

    @classmethod
    def parse(cls, name: str) -> "PlacementFlag":
        """Accept either the API name (isTopStory) or the field name (is_top_story)."""
        for flag in cls:
            if name in (flag.value, flag.field_name):
                return flag
        raise DomainValidationError(f"Unknown placement flag: {name}")
