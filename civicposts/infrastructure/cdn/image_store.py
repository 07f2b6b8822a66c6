"""
CDN image store (Cloudinary-compatible destroy API).
"""

import hashlib
import logging
import time
from typing import Optional

import aiohttp

from civicposts.domain.ports.image_store import IImageStore
from civicposts.shared.exceptions.infrastructure_exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


def sign_params(params: dict, api_secret: str) -> str:
    """
    Request signature: sha1 of the sorted ``key=value`` pairs joined by
    ``&``, followed by the API secret.
    """
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{payload}{api_secret}".encode("utf-8")).hexdigest()


class CdnImageStore(IImageStore):
    """
    Deletes images from the CDN by public id.

    Usage:
        store = CdnImageStore("demo", "key", "secret")
        await store.delete_by_external_id("articles/cover-1")
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        timeout_seconds: int = 10,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    @property
    def destroy_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}/image/destroy"

    async def delete_by_external_id(self, public_id: str) -> None:
        params = {"public_id": public_id, "timestamp": int(time.time())}
        form = {**params, "api_key": self.api_key, "signature": sign_params(params, self.api_secret)}

        try:
            if self._session is not None:
                data = await self._post(self._session, form)
            else:
                async with aiohttp.ClientSession(timeout=self.timeout) as session:
                    data = await self._post(session, form)
        except aiohttp.ClientError as e:
            raise ExternalServiceError(f"CDN delete of {public_id} failed: {e}") from e

        result = data.get("result")
        if result == "not found":
            logger.warning(f"[CDN] image {public_id} was already gone")
        elif result != "ok":
            raise ExternalServiceError(f"CDN delete of {public_id} returned {result!r}")
        else:
            logger.info(f"[CDN] deleted image {public_id}")

    async def _post(self, session: aiohttp.ClientSession, form: dict) -> dict:
        async with session.post(self.destroy_url, data=form) as response:
            response.raise_for_status()
            return await response.json()


class DisabledImageStore(IImageStore):
    """Used when no CDN credentials are configured: logs and keeps the image."""

    async def delete_by_external_id(self, public_id: str) -> None:
        logger.warning(f"[CDN] not configured, image {public_id} left in place")
