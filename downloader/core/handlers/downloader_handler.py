# downloader/core/handlers/downloader_handler.py
"""
Downloader command handlers.

Five chat commands share one pipeline:

1. Take ``params[0]`` as the target URL (guidance text when absent).
2. Optionally edit the owner's message into a "processing" notice.
3. Call the aggregation API endpoint for the platform.
4. Parse the response into ``ParsedMedia`` (``MediaNotFoundError`` on gaps).
5. Relay the media bytes, or return a text listing for listing-only
   platforms.

Only the per-platform parts (endpoint choice, parser, wording) live in
the ``PLATFORMS`` table.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from downloader.config import settings
from downloader.core.domain import Command, MessageContext, ParsedMedia, Permission
from downloader.core.errors import (
    FAILURE_GLYPH,
    DownloaderError,
    MediaNotFoundError,
    UserInputError,
)
from downloader.core.formatting import processing_notice
from downloader.core.parsers import (
    instagram_endpoint,
    parse_facebook,
    parse_instagram,
    parse_soundcloud,
    parse_tiktok,
    parse_twitter,
)
from downloader.infra.api_client import AggregatorClient
from downloader.infra.logging_config import LogContext, get_logger
from downloader.infra.media_relay import MediaRelay
from downloader.infra.metrics import DownloaderMetrics

logger = get_logger(__name__)


@dataclass(frozen=True)
class Platform:
    """Everything that differs between the download commands."""
    name: str
    label: str              # shown in notices and errors
    article: str            # "a" / "an" for the guidance text
    url_label: str          # "TikTok", "Twitter/X", ...
    noun: str               # what failed to download: "video", "media", ...
    endpoint: Callable[[str], str]
    parse: Callable[[Any], ParsedMedia]

    @property
    def guidance(self) -> str:
        return f"Please provide {self.article} {self.url_label} URL."

    def failure(self, reason: str) -> str:
        return f"{FAILURE_GLYPH} Failed to download {self.label} {self.noun}: {reason}"


PLATFORMS: dict[str, Platform] = {
    "tiktok": Platform(
        name="tiktok", label="TikTok", article="a", url_label="TikTok",
        noun="video", endpoint=lambda url: "tiktok", parse=parse_tiktok,
    ),
    "instagram": Platform(
        name="instagram", label="Instagram", article="an", url_label="Instagram",
        noun="content", endpoint=instagram_endpoint, parse=parse_instagram,
    ),
    "soundcloud": Platform(
        name="soundcloud", label="SoundCloud", article="a", url_label="SoundCloud",
        noun="track", endpoint=lambda url: "soundcloud", parse=parse_soundcloud,
    ),
    "twitter": Platform(
        name="twitter", label="Twitter", article="a", url_label="Twitter/X",
        noun="media", endpoint=lambda url: "twitterv2", parse=parse_twitter,
    ),
    "facebook": Platform(
        name="facebook", label="Facebook", article="a", url_label="Facebook",
        noun="video", endpoint=lambda url: "facebook", parse=parse_facebook,
    ),
}


class DownloaderHandler:
    """
    Media download commands for TikTok, Instagram, SoundCloud, Twitter/X
    and Facebook.

    Relayed platforms return ``""`` once the media is delivered (the
    reply *is* the media) or the relay's link fallback.  Instagram returns
    a text listing of direct URLs instead.
    """

    name = "downloader"
    metadata = {
        "description": "Downloads media from TikTok, Instagram, SoundCloud, Twitter/X and Facebook.",
        "version": "1.0.0",
        "category": "utility",
    }

    def __init__(
        self,
        relay: MediaRelay,
        client: Optional[AggregatorClient] = None,
        processing_notice_enabled: Optional[bool] = None,
    ):
        self._relay = relay
        self._client = client or AggregatorClient()
        if processing_notice_enabled is None:
            processing_notice_enabled = settings.processing_notice_enabled
        self._notice_enabled = processing_notice_enabled

        self.commands: list[Command] = [
            Command(
                name="tiktok",
                description="Downloads a TikTok video.",
                usage=".tiktok <url>",
                permission=Permission.PUBLIC,
                handler=self.download_tiktok,
            ),
            Command(
                name="instagram",
                description="Downloads Instagram content (post or story).",
                usage=".instagram <url>",
                permission=Permission.PUBLIC,
                handler=self.download_instagram,
            ),
            Command(
                name="soundcloud",
                description="Downloads a track from SoundCloud.",
                usage=".soundcloud <url>",
                permission=Permission.PUBLIC,
                handler=self.download_soundcloud,
            ),
            Command(
                name="twitter",
                description="Downloads a video from Twitter / X.com.",
                usage=".twitter <url>",
                permission=Permission.PUBLIC,
                handler=self.download_twitter,
            ),
            Command(
                name="facebook",
                description="Downloads a video from Facebook.",
                usage=".facebook <url>",
                permission=Permission.PUBLIC,
                handler=self.download_facebook,
            ),
        ]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def download_tiktok(self, context: MessageContext, params: list[str]) -> str:
        return await self._run(PLATFORMS["tiktok"], context, params)

    async def download_instagram(self, context: MessageContext, params: list[str]) -> str:
        return await self._run(PLATFORMS["instagram"], context, params)

    async def download_soundcloud(self, context: MessageContext, params: list[str]) -> str:
        return await self._run(PLATFORMS["soundcloud"], context, params)

    async def download_twitter(self, context: MessageContext, params: list[str]) -> str:
        return await self._run(PLATFORMS["twitter"], context, params)

    async def download_facebook(self, context: MessageContext, params: list[str]) -> str:
        return await self._run(PLATFORMS["facebook"], context, params)

    # ------------------------------------------------------------------
    # Shared pipeline
    # ------------------------------------------------------------------

    async def _run(
        self,
        platform: Platform,
        context: MessageContext,
        params: list[str],
    ) -> str:
        log = LogContext(logger, chat_id=context.chat_id, command=platform.name)

        try:
            url = _target_url(params, platform)
        except UserInputError as exc:
            return exc.user_message

        DownloaderMetrics.command_executed(platform.name)
        await self._notify_processing(platform, context, log)

        try:
            result = await self._client.fetch(platform.endpoint(url), url)
            parsed = platform.parse(result)
        except MediaNotFoundError as exc:
            if exc.soft:
                log.info("No downloadable media: %s", exc.detail)
                return exc.user_message
            DownloaderMetrics.command_failed(platform.name, type(exc).__name__)
            log.warning("Download failed: %s", exc.detail)
            return platform.failure(exc.user_message)
        except DownloaderError as exc:
            DownloaderMetrics.command_failed(platform.name, type(exc).__name__)
            log.warning("Download failed: %s", exc.detail)
            return platform.failure(exc.user_message)

        if not parsed.relayable:
            return parsed.caption

        return await self._relay.relay(
            context, parsed.media_url, parsed.caption, parsed.content_kind,
        )

    async def _notify_processing(
        self,
        platform: Platform,
        context: MessageContext,
        log: LogContext,
    ) -> None:
        if not (self._notice_enabled and context.from_me and context.can_edit):
            return
        try:
            await context.editor.edit_message(
                context.chat_id, context.message_key, processing_notice(platform.label),
            )
        except Exception as exc:
            # Cosmetic only; the download goes ahead regardless
            log.debug("Processing notice failed: %s", exc)


def _target_url(params: list[str], platform: Platform) -> str:
    url = params[0].strip() if params and params[0] else ""
    if not url:
        raise UserInputError(platform.guidance)
    return url
