"""Tests for the shared HTTP session profiles"""
from unittest.mock import patch

import aiohttp.client
import pytest

from downloader.infra import http_client


class TestSessionProfiles:
    @pytest.mark.asyncio
    async def test_unset_timeout_keeps_aiohttp_default(self):
        with patch.object(http_client.settings, "api_timeout_seconds", None):
            session = http_client.get_api_session()
        try:
            assert session.timeout == aiohttp.client.DEFAULT_TIMEOUT
        finally:
            await http_client.close_all_sessions()

    @pytest.mark.asyncio
    async def test_configured_timeout_is_applied(self):
        with patch.object(http_client.settings, "media_timeout_seconds", 45):
            session = http_client.get_fetcher_session()
        try:
            assert session.timeout.total == 45
        finally:
            await http_client.close_all_sessions()

    @pytest.mark.asyncio
    async def test_session_is_reused_until_closed(self):
        first = http_client.get_api_session()
        assert http_client.get_api_session() is first

        await http_client.close_all_sessions()

        assert first.closed
        second = http_client.get_api_session()
        assert second is not first
        await http_client.close_all_sessions()
