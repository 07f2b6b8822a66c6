"""
Static page revalidation.

The front end exposes a webhook that regenerates one statically generated
path per call.
"""

import logging
from typing import Optional

import aiohttp

from civicposts.domain.ports.page_invalidator import IPageInvalidator
from civicposts.shared.exceptions.infrastructure_exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class HttpPageInvalidator(IPageInvalidator):
    """POSTs ``{"path": ...}`` to the revalidation webhook."""

    def __init__(
        self,
        url: str,
        secret: Optional[str] = None,
        timeout_seconds: int = 5,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.url = url
        self.secret = secret
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    async def invalidate(self, path: str) -> None:
        headers = {"x-revalidate-secret": self.secret} if self.secret else {}
        try:
            if self._session is not None:
                await self._post(self._session, path, headers)
            else:
                async with aiohttp.ClientSession(timeout=self.timeout) as session:
                    await self._post(session, path, headers)
        except aiohttp.ClientError as e:
            raise ExternalServiceError(f"Revalidation of {path} failed: {e}") from e
        logger.debug(f"[Revalidate] {path}")

    async def _post(self, session: aiohttp.ClientSession, path: str, headers: dict) -> None:
        async with session.post(self.url, json={"path": path}, headers=headers) as response:
            response.raise_for_status()


class LoggingPageInvalidator(IPageInvalidator):
    """Used when no revalidation webhook is configured."""

    async def invalidate(self, path: str) -> None:
        logger.info(f"[Revalidate] (no webhook configured) {path}")
