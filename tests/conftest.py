"""Pytest configuration and fixtures"""
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from downloader.core.domain import MessageContext  # noqa: E402


@pytest.fixture
def chat_id():
    """Default chat ID for tests"""
    return "12345678900@s.whatsapp.net"


@pytest.fixture
def context(chat_id):
    """Message from another user (no processing notice)"""
    return MessageContext(chat_id=chat_id, message_key={"id": "MSG1"}, from_me=False)


@pytest.fixture
def owner_context(chat_id):
    """Message sent by the bot owner, with an edit-capable host"""
    editor = MagicMock()
    editor.edit_message = AsyncMock()
    return MessageContext(
        chat_id=chat_id,
        message_key={"id": "MSG1"},
        from_me=True,
        editor=editor,
    )


@pytest.fixture
def sender():
    """Host outbound send primitive"""
    mock = MagicMock()
    mock.send_message = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def tiktok_payload():
    """Aggregation API response for a TikTok video"""
    return {
        "data": {
            "author": {"nickname": "A", "username": "a"},
            "duration": 10,
            "repro": 1500,
            "like": 200,
            "share": 5,
            "comment": 3,
            "download": 10,
            "music": {"title": "T", "author": "M", "duration": 5},
            "meta": {"media": [{"hd": "http://m/hd.mp4"}]},
        }
    }


@pytest.fixture
def twitter_video_payload():
    """Aggregation API response for a tweet with a video"""
    return {
        "data": {
            "author": {"username": "jack"},
            "description": "Look at this https://t.co/abc",
            "view": 2_500_000,
            "favorite": 12_300,
            "retweet": 42,
            "media": [
                {"type": "video", "videos": [{"url": "a"}, {"url": "b"}]},
            ],
        }
    }
