"""
Visibility Predicate

Decides whether an article is publicly visible at a given moment. There is no
scheduled publish job: visibility is evaluated on every read.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional

from civicposts.domain.entities.article import Article
from civicposts.domain.value_objects.article_status import ArticleStatus


def start_of_day(now: Optional[datetime] = None) -> datetime:
    """
    Truncate ``now`` to midnight, server local time.

    An aware datetime is converted to the server's local zone first.
    """
    now = now or datetime.now()
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def visibility_cutoff(now: Optional[datetime] = None) -> date:
    """Latest published_date that is visible at ``now``."""
    return start_of_day(now).date()


def is_publicly_visible(article: Article, now: Optional[datetime] = None) -> bool:
    """Published and dated today or earlier."""
    if article.status is not ArticleStatus.PUBLISHED:
        return False
    return article.published_date <= visibility_cutoff(now)


def filter_visible(articles: Iterable[Article], now: Optional[datetime] = None) -> List[Article]:
    cutoff_moment = now or datetime.now()
    return [article for article in articles if is_publicly_visible(article, cutoff_moment)]
