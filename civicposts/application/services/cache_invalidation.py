"""
Cache Invalidation Coordinator

Turns mutations into invalidations: the response cache is cleared for
list/lookup prefixes on every write, statically generated pages only when
the invalidation rules say a rendered page changed.
"""

import logging
from datetime import datetime
from typing import Optional

from civicposts.domain.entities.article import Article
from civicposts.domain.ports.page_invalidator import IPageInvalidator
from civicposts.domain.ports.response_cache import IResponseCache
from civicposts.domain.services.invalidation import (
    InvalidationSet,
    compute_article_invalidation,
)

logger = logging.getLogger(__name__)


class CacheInvalidationCoordinator:
    """
    Computes and applies invalidation sets.

    Failures while applying are logged and swallowed: a stale cache never
    fails the mutation that caused it.
    """

    def __init__(self, cache: IResponseCache, page_invalidator: IPageInvalidator):
        self.cache = cache
        self.page_invalidator = page_invalidator

    def on_article_mutated(
        self,
        old: Optional[Article],
        new: Optional[Article],
        now: Optional[datetime] = None,
    ) -> InvalidationSet:
        """
        Compute the invalidation set of an article create/update/delete.

        ``old`` must be captured before the update is applied.
        """
        return compute_article_invalidation(old, new, now)

    def on_author_name_changed(self) -> InvalidationSet:
        """
        Response-cache prefixes only.

        Name propagation is a raw bulk update, so statically generated
        article/category pages keep the old name until their time-based
        revalidation.
        """
        return InvalidationSet()

    async def apply(self, invalidation: InvalidationSet) -> InvalidationSet:
        for key in invalidation.cache_keys:
            try:
                self.cache.delete(key)
            except Exception as e:
                logger.error(f"[Invalidation] cache delete {key} failed: {e}")

        for prefix in invalidation.cache_prefixes:
            try:
                dropped = self.cache.clear_by_prefix(prefix)
                logger.debug(f"[Invalidation] cleared {dropped} cache entries under {prefix}")
            except Exception as e:
                logger.error(f"[Invalidation] cache clear {prefix} failed: {e}")

        for path in invalidation.paths:
            try:
                await self.page_invalidator.invalidate(path)
            except Exception as e:
                logger.error(f"[Invalidation] page {path} failed: {e}")

        if invalidation.paths:
            logger.info(f"[Invalidation] revalidated pages: {', '.join(invalidation.paths)}")
        return invalidation

    async def article_mutated(
        self,
        old: Optional[Article],
        new: Optional[Article],
        now: Optional[datetime] = None,
    ) -> InvalidationSet:
        """Compute and apply in one step."""
        return await self.apply(self.on_article_mutated(old, new, now))

    async def author_name_changed(self) -> InvalidationSet:
        return await self.apply(self.on_author_name_changed())
