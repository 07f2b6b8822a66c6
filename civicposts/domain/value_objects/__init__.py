"""Domain value objects."""

from .article_status import ArticleStatus
from .category import Category
from .placement_flag import PlacementFlag

__all__ = ["ArticleStatus", "Category", "PlacementFlag"]
