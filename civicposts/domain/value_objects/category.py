"""
Value Object: Category

The fixed set of site sections. Values double as URL path segments.
"""

from enum import Enum


class Category(str, Enum):
    """Site categories."""

    NEWS = "news"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    HEALTH_FITNESS = "health-fitness"
    EDITORIAL = "editorial"
    TECHNOLOGY = "technology"
    AUTOMOBILES = "automobiles"

    @property
    def display_name(self) -> str:
        """Human readable section name."""
        names = {
            self.NEWS: "News",
            self.ENTERTAINMENT: "Entertainment",
            self.SPORTS: "Sports",
            self.HEALTH_FITNESS: "Health & Fitness",
            self.EDITORIAL: "Editorial",
            self.TECHNOLOGY: "Technology",
            self.AUTOMOBILES: "Automobiles",
        }
        return names[self]

    @property
    def path(self) -> str:
        """Path of the statically generated category page."""
        return f"/{self.value}"
