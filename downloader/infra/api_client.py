# downloader/infra/api_client.py
"""
Client for the media aggregation API.

One call per command::

    GET {base}/{endpoint}?url={percent-encoded target}

No authentication, no retries.  The timeout is whatever the shared
``api`` session profile carries.
"""
from __future__ import annotations

import asyncio

import aiohttp

from downloader.config import settings
from downloader.core.domain import DownloadRequest
from downloader.core.errors import RemoteAPIError
from downloader.infra.http_client import get_api_session
from downloader.infra.logging_config import get_logger
from downloader.infra.metrics import DownloaderMetrics

logger = get_logger(__name__)


class AggregatorClient:
    """Fetches per-platform JSON from the aggregation API."""

    def __init__(self, base_url: str | None = None):
        self._base_url = (base_url or settings.downloader_api_base_url).rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_url(self, endpoint: str, target_url: str) -> str:
        return DownloadRequest(endpoint=endpoint, url=target_url).build_url(self._base_url)

    async def fetch(self, endpoint: str, target_url: str) -> dict:
        """
        Call one platform endpoint and return the decoded JSON body.

        Raises:
            RemoteAPIError: non-2xx status, connection failure or a body
                that is not JSON.
        """
        api_url = self.build_url(endpoint, target_url)
        session = get_api_session()

        logger.debug("Aggregation API call: endpoint=%s", endpoint)

        try:
            with DownloaderMetrics.track_upstream_time(endpoint):
                async with session.get(api_url) as resp:
                    if not 200 <= resp.status < 300:
                        DownloaderMetrics.upstream_error(endpoint, resp.status)
                        logger.warning(
                            "Aggregation API returned status %d for endpoint=%s",
                            resp.status, endpoint,
                        )
                        raise RemoteAPIError(resp.status)

                    try:
                        return await resp.json(content_type=None)
                    except ValueError as exc:
                        raise RemoteAPIError(
                            resp.status, "API returned an invalid JSON body"
                        ) from exc

        except RemoteAPIError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            DownloaderMetrics.upstream_error(endpoint, 0)
            logger.error(
                "Aggregation API connection error (endpoint=%s): %s", endpoint, exc,
            )
            raise RemoteAPIError(0, f"API request failed: {exc}") from exc
