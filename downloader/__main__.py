"""
Run one downloader command from the terminal.

Usage:
    python -m downloader tiktok https://www.tiktok.com/@user/video/123
    python -m downloader .instagram https://www.instagram.com/p/abc/ --out media/
    python -m downloader twitter https://x.com/user/status/1 --owner

Relayed media is written to ``--out`` (default ``./downloads``) instead
of being sent to a chat; text replies are printed.
"""
import argparse
import asyncio
import sys

from downloader.config import settings, validate_or_warn
from downloader.core.domain import MessageContext
from downloader.core.handlers.registry import build_registry
from downloader.infra.http_client import close_all_sessions
from downloader.infra.logging_config import setup_logging
from downloader.transport.dev_sender import ConsoleEditor, DirectorySender


async def _run(args: argparse.Namespace) -> int:
    sender = DirectorySender(args.out)
    registry = build_registry(sender)

    if not registry.has_command(args.command):
        print(f"Unknown command: {args.command}\n", file=sys.stderr)
        print(registry.help_text(), file=sys.stderr)
        return 2

    context = MessageContext(
        chat_id="cli",
        message_key="cli-1",
        from_me=args.owner,
        editor=ConsoleEditor() if args.owner else None,
    )

    try:
        reply = await registry.dispatch(args.command, context, args.params)
    finally:
        await close_all_sessions()

    if reply:
        print(reply)
    for path in sender.sent:
        print(f"Saved: {path}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="python -m downloader",
        description="Run a media download command locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("command", help="Command name (tiktok, instagram, soundcloud, twitter, facebook)")
    parser.add_argument("params", nargs="*", help="Command parameters (the target URL)")
    parser.add_argument("--out", "-o", default="downloads", help="Directory for relayed media")
    parser.add_argument("--owner", action="store_true", help="Act as the bot owner (shows processing notice)")

    args = parser.parse_args()

    setup_logging(settings.log_level, use_json=settings.log_json)
    validate_or_warn(settings)

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
