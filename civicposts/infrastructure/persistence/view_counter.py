"""
View counter for fire-and-forget increments.

The increment outlives the request that scheduled it, so it never uses the
request session. Every call runs in a session of its own.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicposts.domain.ports.view_counter import IViewCounter
from civicposts.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl


class SessionScopedViewCounter(IViewCounter):
    """
    Usage:
        counter = SessionScopedViewCounter(AsyncSessionLocal)
        runner.fire(counter.increment_views(article.id), "views")
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def increment_views(self, article_id: UUID, amount: int = 1) -> None:
        async with self.session_factory() as session:
            await ArticleRepositoryImpl(session).increment_views(article_id, amount)
