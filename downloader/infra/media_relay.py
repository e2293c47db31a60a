# downloader/infra/media_relay.py
"""
Media relay: download media bytes and republish them to the chat.

Delivery failures never reach the caller.  Whatever goes wrong while
downloading or sending (bad status, empty body, connection error,
host send error), the relay answers with the caption plus the raw media
URL so the user can still open the content manually.

Only an invalid content kind is raised: that is a caller bug, not a
delivery problem.
"""
from __future__ import annotations

import asyncio

import aiohttp

from downloader.core.domain import ContentKind, MediaPayload, MessageContext
from downloader.core.errors import MediaDeliveryError
from downloader.core.ports import OutboundSender
from downloader.infra.http_client import get_fetcher_session
from downloader.infra.logging_config import LogContext, get_logger
from downloader.infra.metrics import DownloaderMetrics

logger = get_logger(__name__)


def relay_fallback(caption: str, media_url: str) -> str:
    return f"{caption}\n\n*Failed to send media, here's the URL instead:* {media_url}"


async def download_media(media_url: str) -> bytes:
    """
    Download raw media bytes.

    Raises:
        MediaDeliveryError: On non-2xx status, empty or truncated body,
            or any connection-level error.
    """
    session = get_fetcher_session()

    try:
        async with session.get(media_url) as resp:
            if not 200 <= resp.status < 300:
                raise MediaDeliveryError(f"Failed to fetch media: {resp.status}")

            data = await resp.read()

            if not data:
                raise MediaDeliveryError("Media download returned empty body")

            # Validate Content-Length if present
            cl_header = resp.headers.get("Content-Length")
            if cl_header and cl_header.isdigit() and len(data) < int(cl_header):
                raise MediaDeliveryError(
                    f"Incomplete download: got {len(data)} of {cl_header} bytes"
                )

            return data

    except MediaDeliveryError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise MediaDeliveryError(f"Media download failed: {exc}") from exc


class MediaRelay:
    """Sends downloaded media through the host bot's outbound channel."""

    def __init__(self, sender: OutboundSender):
        self._sender = sender

    async def relay(
        self,
        context: MessageContext,
        media_url: str,
        caption: str,
        content_kind: ContentKind | str,
    ) -> str:
        """
        Download ``media_url`` and send it to ``context.chat_id``.

        Returns:
            ``""`` when the media was delivered, otherwise the relay
            fallback text (caption + raw URL).

        Raises:
            UnsupportedMediaKind: ``content_kind`` is not video / audio / image.
        """
        kind = ContentKind.parse(content_kind)
        log = LogContext(logger, chat_id=context.chat_id)

        try:
            data = await download_media(media_url)
            payload = MediaPayload(content_kind=kind, data=data, caption=caption)
            await self._send(context.chat_id, payload)
        except MediaDeliveryError as exc:
            DownloaderMetrics.relay_fallback(kind.value)
            log.warning(
                "Error sending %s, falling back to link: %s", kind.value, exc.detail, exc_info=True
            )
            return relay_fallback(caption, media_url)

        DownloaderMetrics.media_relayed(kind.value)
        log.info("Relayed %s (%d bytes)", kind.value, len(payload.data))
        return ""

    async def _send(self, chat_id: str, payload: MediaPayload) -> None:
        try:
            await self._sender.send_message(chat_id, payload.to_message())
        except Exception as exc:
            # Host send primitives raise whatever their transport raises
            raise MediaDeliveryError(f"Send failed: {exc}") from exc
