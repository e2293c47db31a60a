"""
Tests for the aggregation API client.

All tests mock the HTTP layer; no actual API calls.
"""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from downloader.core.errors import RemoteAPIError
from downloader.infra.api_client import AggregatorClient

BASE = "https://api.example.com/download"


def _make_mock_response(status=200, json_data=None):
    """Create a mock aiohttp response."""
    resp = AsyncMock()
    resp.status = status
    resp.json = AsyncMock(return_value=json_data if json_data is not None else {})
    return resp


def _make_mock_session(response):
    """Create a mock session whose .get() returns the given response."""
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=response)
    ctx.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.get = MagicMock(return_value=ctx)
    return session


def _make_failing_session(exc):
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(side_effect=exc)
    ctx.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.get = MagicMock(return_value=ctx)
    return session


class TestBuildUrl:
    def test_percent_encodes_target(self):
        client = AggregatorClient(BASE)

        url = client.build_url("tiktok", "https://www.tiktok.com/@user/video/1?lang=en")

        assert url == (
            f"{BASE}/tiktok?url="
            "https%3A%2F%2Fwww.tiktok.com%2F%40user%2Fvideo%2F1%3Flang%3Den"
        )

    def test_keeps_encode_uri_component_safe_chars(self):
        client = AggregatorClient(BASE)

        url = client.build_url("soundcloud", "a-b_c.d!e~f*g'h(i)")

        assert url.endswith("?url=a-b_c.d!e~f*g'h(i)")

    def test_trailing_slash_in_base_is_dropped(self):
        client = AggregatorClient(BASE + "/")

        assert client.base_url == BASE
        assert client.build_url("facebook", "x").startswith(f"{BASE}/facebook?")

    def test_default_base_from_settings(self):
        from downloader.config import settings

        assert AggregatorClient().base_url == settings.downloader_api_base_url.rstrip("/")


class TestFetch:
    @pytest.mark.asyncio
    async def test_returns_json_body(self):
        body = {"status": True, "data": {"title": "x"}}
        session = _make_mock_session(_make_mock_response(200, body))

        with patch("downloader.infra.api_client.get_api_session", return_value=session):
            result = await AggregatorClient(BASE).fetch("soundcloud", "https://soundcloud.com/a/b")

        assert result == body
        session.get.assert_called_once_with(
            f"{BASE}/soundcloud?url=https%3A%2F%2Fsoundcloud.com%2Fa%2Fb"
        )

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        session = _make_mock_session(_make_mock_response(500))

        with patch("downloader.infra.api_client.get_api_session", return_value=session):
            with pytest.raises(RemoteAPIError) as exc_info:
                await AggregatorClient(BASE).fetch("tiktok", "https://tiktok.com/x")

        assert exc_info.value.status == 500
        assert str(exc_info.value) == "API request failed with status 500"

    @pytest.mark.asyncio
    async def test_not_found_raises(self):
        session = _make_mock_session(_make_mock_response(404))

        with patch("downloader.infra.api_client.get_api_session", return_value=session):
            with pytest.raises(RemoteAPIError) as exc_info:
                await AggregatorClient(BASE).fetch("facebook", "https://fb.watch/x")

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_connection_error_raises_status_zero(self):
        session = _make_failing_session(aiohttp.ClientError("Connection refused"))

        with patch("downloader.infra.api_client.get_api_session", return_value=session):
            with pytest.raises(RemoteAPIError) as exc_info:
                await AggregatorClient(BASE).fetch("twitterv2", "https://x.com/a/status/1")

        assert exc_info.value.status == 0
        assert "Connection refused" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_timeout_raises_status_zero(self):
        session = _make_failing_session(asyncio.TimeoutError())

        with patch("downloader.infra.api_client.get_api_session", return_value=session):
            with pytest.raises(RemoteAPIError) as exc_info:
                await AggregatorClient(BASE).fetch("instagram", "https://instagram.com/p/x")

        assert exc_info.value.status == 0

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        resp = AsyncMock()
        resp.status = 200
        resp.json = AsyncMock(side_effect=ValueError("Invalid JSON"))
        session = _make_mock_session(resp)

        with patch("downloader.infra.api_client.get_api_session", return_value=session):
            with pytest.raises(RemoteAPIError, match="invalid JSON"):
                await AggregatorClient(BASE).fetch("tiktok", "https://tiktok.com/x")
