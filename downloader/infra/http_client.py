# downloader/infra/http_client.py
"""
Shared HTTP client sessions for the downloader.

Provides named, lazy-initialized aiohttp.ClientSession singletons
to avoid per-request session creation overhead and TCP connection churn.

Session profiles
~~~~~~~~~~~~~~~~
- **api**     – aggregation API metadata calls (timeout=api_timeout_seconds, pool limit=20)
- **fetcher** – raw media downloads             (timeout=media_timeout_seconds, pool limit=10)

Neither profile sets a timeout of its own: unless the setting is given,
the session keeps aiohttp's default ``ClientTimeout``.

Shutdown
~~~~~~~~
Call ``close_all_sessions()`` once when the host bot shuts down.
"""
from __future__ import annotations

import aiohttp

from downloader.config import settings
from downloader.infra.logging_config import get_logger

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Internal state
# ---------------------------------------------------------------------------

_sessions: dict[str, aiohttp.ClientSession] = {}


def _timeout(total: int | None) -> aiohttp.ClientTimeout | None:
    return None if total is None else aiohttp.ClientTimeout(total=total)


def _get_or_create(
    name: str,
    timeout: aiohttp.ClientTimeout | None = None,
    limit: int = 10,
) -> aiohttp.ClientSession:
    """Return an existing session or create a new one."""
    session = _sessions.get(name)
    if session is None or session.closed:
        kwargs = {} if timeout is None else {"timeout": timeout}
        session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(
                keepalive_timeout=30,
                limit=limit,
                enable_cleanup_closed=True,
            ),
            **kwargs,
        )
        _sessions[name] = session
        logger.debug("HTTP session '%s' created (limit=%d)", name, limit)
    return session


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_api_session() -> aiohttp.ClientSession:
    """Session for aggregation API calls."""
    return _get_or_create("api", _timeout(settings.api_timeout_seconds), limit=20)


def get_fetcher_session() -> aiohttp.ClientSession:
    """Session for media downloads ahead of a relay."""
    return _get_or_create("fetcher", _timeout(settings.media_timeout_seconds), limit=10)


async def close_all_sessions() -> None:
    """Gracefully close every managed session.  Call during bot shutdown."""
    for name in list(_sessions):
        session = _sessions.pop(name, None)
        if session is not None and not session.closed:
            await session.close()
            logger.debug("HTTP session '%s' closed", name)
