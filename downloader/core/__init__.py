"""
Core -- transport-agnostic command logic.

Domain types, error taxonomy, host-bot protocols (ports), caption
formatting and the per-platform response parsers.
"""
from downloader.core.domain import (  # noqa: F401
    Command,
    ContentKind,
    DownloadRequest,
    MediaLink,
    MediaPayload,
    MessageContext,
    ParsedMedia,
    Permission,
)
from downloader.core.errors import (  # noqa: F401
    DownloaderError,
    MediaDeliveryError,
    MediaNotFoundError,
    RemoteAPIError,
    UnsupportedMediaKind,
    UserInputError,
)
from downloader.core.ports import MessageEditor, OutboundSender  # noqa: F401
