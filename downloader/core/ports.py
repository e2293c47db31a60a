from __future__ import annotations
from typing import Any, Protocol


# ============================================================================
# HOST BOT PROTOCOLS
# ============================================================================

class OutboundSender(Protocol):
    async def send_message(self, chat_id: str, payload: dict) -> Any:
        """
        Deliver a payload to a conversation.

        payload shape: {"video"|"audio"|"image": bytes, "caption": str, "mimetype": str}
        Raises on delivery failure.
        """
        ...


class MessageEditor(Protocol):
    async def edit_message(self, chat_id: str, message_key: Any, text: str) -> Any:
        """Replace the text of a message previously sent by the bot itself."""
        ...
