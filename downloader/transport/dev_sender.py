# downloader/transport/dev_sender.py
"""
Local stand-in for the host bot's outbound channel.

``DirectorySender`` writes every relayed media payload to a directory
instead of a chat, so commands can be exercised from a terminal without
a messaging account.  Used by ``python -m downloader``.
"""
from __future__ import annotations

import re
import time
from pathlib import Path
from typing import Any

from downloader.infra.logging_config import get_logger

logger = get_logger(__name__)

_EXTENSIONS = {
    "video/mp4": ".mp4",
    "audio/mpeg": ".mp3",
    "image/jpeg": ".jpg",
}
_KIND_KEYS = ("video", "audio", "image")
_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]+")


class DirectorySender:
    """OutboundSender that saves media files plus a caption sidecar."""

    def __init__(self, out_dir: Path | str):
        self.out_dir = Path(out_dir)
        self.sent: list[Path] = []

    async def send_message(self, chat_id: str, payload: dict) -> Path:
        kind = next((k for k in _KIND_KEYS if k in payload), None)
        if kind is None:
            raise ValueError(f"Payload carries no media (keys: {sorted(payload)})")

        self.out_dir.mkdir(parents=True, exist_ok=True)
        stem = f"{_UNSAFE.sub('_', chat_id)}_{kind}_{int(time.time() * 1000)}"
        path = self.out_dir / (stem + _EXTENSIONS.get(payload.get("mimetype", ""), ".bin"))

        path.write_bytes(payload[kind])
        if payload.get("caption"):
            path.with_suffix(".txt").write_text(payload["caption"], encoding="utf-8")

        self.sent.append(path)
        logger.info("Saved %s (%d bytes) to %s", kind, len(payload[kind]), path)
        return path


class ConsoleEditor:
    """MessageEditor that prints the edited text."""

    async def edit_message(self, chat_id: str, message_key: Any, text: str) -> None:
        print(f"[edit {message_key}] {text}")
