from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import quote

from downloader.core.errors import UnsupportedMediaKind
from downloader.core.ports import MessageEditor


# ============================================================================
# CONTENT KINDS
# ============================================================================

class ContentKind(str, Enum):
    """Outbound media category. Decides the payload key and mimetype."""
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"

    @property
    def mimetype(self) -> str:
        return _MIMETYPES[self]

    @classmethod
    def parse(cls, value: Any) -> "ContentKind":
        """Coerce a string or ContentKind, raising UnsupportedMediaKind otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedMediaKind(value) from None


_MIMETYPES = {
    ContentKind.VIDEO: "video/mp4",
    ContentKind.AUDIO: "audio/mpeg",
    ContentKind.IMAGE: "image/jpeg",
}


class Permission(str, Enum):
    PUBLIC = "public"
    OWNER = "owner"


# ============================================================================
# INBOUND CONTEXT
# ============================================================================

@dataclass
class MessageContext:
    """
    What a handler knows about the message that triggered it.

    ``editor`` is optional: when the host can edit a previous outbound
    message, handlers use it to show a transient "processing" notice to
    the owner.  Without it no notice is sent.
    """
    chat_id: str
    message_key: Any = None  # host-specific handle of the triggering message
    from_me: bool = False
    editor: Optional[MessageEditor] = field(default=None, repr=False)

    @property
    def can_edit(self) -> bool:
        return self.editor is not None and self.message_key is not None


# ============================================================================
# COMMANDS
# ============================================================================

CommandCallable = Callable[[MessageContext, list[str]], Awaitable[str]]


@dataclass(frozen=True)
class Command:
    """A chat command exposed to the host bot. Immutable after startup."""
    name: str
    description: str
    usage: str
    permission: Permission
    handler: CommandCallable = field(repr=False, compare=False)

    async def execute(self, context: MessageContext, params: list[str]) -> str:
        return await self.handler(context, params)


# ============================================================================
# REQUESTS AND RESULTS
# ============================================================================

@dataclass(frozen=True)
class DownloadRequest:
    """One call to the aggregation API."""
    endpoint: str
    url: str

    def build_url(self, base_url: str) -> str:
        # Same unreserved set as JavaScript's encodeURIComponent
        encoded = quote(self.url, safe="-_.!~*'()")
        return f"{base_url}/{self.endpoint}?url={encoded}"


@dataclass
class ParsedMedia:
    """
    Normalized result of parsing one platform response.

    ``media_url`` is what gets relayed as ``content_kind``.  Listing-only
    platforms (Instagram) leave it empty and fill ``items`` instead.
    """
    platform: str
    caption: str
    media_url: str = ""
    content_kind: Optional[ContentKind] = None
    items: list["MediaLink"] = field(default_factory=list)

    @property
    def relayable(self) -> bool:
        return bool(self.media_url) and self.content_kind is not None


@dataclass
class MediaLink:
    """A typed direct link returned for listing-only platforms."""
    type: str
    url: str


@dataclass
class MediaPayload:
    """Bytes ready to hand to the host's send primitive."""
    content_kind: ContentKind
    data: bytes
    caption: str

    @property
    def mimetype(self) -> str:
        return self.content_kind.mimetype

    def to_message(self) -> dict:
        return {
            self.content_kind.value: self.data,
            "caption": self.caption,
            "mimetype": self.mimetype,
        }
