# downloader/core/errors.py
"""
Typed errors for the downloader commands.

Handlers catch ``DownloaderError`` subtypes and turn them into a single
line of user-facing text prefixed with ``FAILURE_GLYPH``.  Only
``UnsupportedMediaKind`` is a programming error and is never caught.
"""
from __future__ import annotations

FAILURE_GLYPH = "❌"


class DownloaderError(Exception):
    """Base class for all downloader errors."""

    def __init__(self, detail: str = "Download failed"):
        self.detail = detail
        super().__init__(detail)

    @property
    def user_message(self) -> str:
        return self.detail


class UserInputError(DownloaderError):
    """Command invoked without a usable URL argument."""


class RemoteAPIError(DownloaderError):
    """Aggregation API answered with a non-success status.

    Attributes:
        status: HTTP status code (0 for connection-level errors).
    """

    def __init__(self, status: int, detail: str | None = None):
        self.status = status
        super().__init__(detail or f"API request failed with status {status}")


class MediaNotFoundError(DownloaderError):
    """Expected media field is absent from the API response.

    Attributes:
        soft: The post exists but simply carries nothing downloadable.
              Shown to the user as-is, without the failure glyph.
    """

    def __init__(self, detail: str = "No media found", *, soft: bool = False):
        self.soft = soft
        super().__init__(detail)


class MediaDeliveryError(DownloaderError):
    """Media bytes could not be downloaded or handed to the host.

    Never reaches the user: the relay converts it into a link fallback.
    """


class UnsupportedMediaKind(ValueError):
    """Content kind outside video / audio / image."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported media type: {kind!r}")
