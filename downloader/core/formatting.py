# downloader/core/formatting.py
"""
Caption helpers shared by every platform.

Captions use WhatsApp-style markup: ``*bold*`` labels inside a
``╭  ✦ Title ✦  ╮`` frame.
"""
from __future__ import annotations

import math
from typing import Any


def convert_miles(value: Any) -> Any:
    """Render an engagement count compactly.

    ``999 -> "999"``, ``1500 -> "1.5k"``, ``2_300_000 -> "2.3M"``.
    Plain ASCII decimal strings are converted too; anything that is not a
    number (``None``, booleans, ``"n/a"``, ``"1_000"``) is returned unchanged.
    """
    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        # float() also takes digit separators and non-ASCII digits
        if "_" in text or not text.isascii():
            return value
        try:
            number = float(text)
        except ValueError:
            return value
    else:
        return value

    if isinstance(number, float) and (math.isnan(number) or math.isinf(number)):
        return value

    if number < 1000:
        if isinstance(number, float) and number.is_integer():
            return str(int(number))
        return str(number)
    if number < 1_000_000:
        return f"{number / 1000:.1f}k"
    return f"{number / 1_000_000:.1f}M"


def frame(title: str) -> str:
    return f"╭  ✦ {title} ✦  ╮\n\n"


def field_line(label: str, value: Any) -> str:
    return f"*◦ {label}:* {value}"


def caption_block(title: str, fields: list[tuple[str, Any]]) -> str:
    """Frame header followed by one ``*◦ Label:* value`` line per field."""
    return frame(title) + "\n".join(field_line(label, value) for label, value in fields)


def processing_notice(platform_label: str) -> str:
    return f"⏳ *Processing {platform_label} Download...*\n\n🔄 Working on your request..."
