# downloader/core/handlers/registry.py
"""
Command registry: the lookup table the host bot dispatches through.

Usage at startup::

    from downloader.core.handlers.registry import CommandRegistry, build_registry
    registry = build_registry(sender)
    reply = await registry.dispatch(".tiktok", context, ["https://..."])
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from downloader.core.domain import Command, MessageContext
from downloader.core.ports import OutboundSender

logger = logging.getLogger(__name__)


class CommandModule(Protocol):
    """Anything that exposes a list of commands (e.g. DownloaderHandler)."""

    name: str
    commands: list[Command]


def _normalize(name: str) -> str:
    return name.strip().lstrip(".").lower()


class CommandRegistry:
    """
    Maps command names to ``Command`` objects.

    Names are matched case-insensitively, with or without the leading
    ``.`` prefix users type in chat.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a single command. Duplicate names are rejected."""
        key = _normalize(command.name)
        if key in self._commands:
            raise ValueError(f"Command '{key}' is already registered")
        self._commands[key] = command

    def register_module(self, module: CommandModule) -> list[str]:
        """Register every command a module exposes. Returns the names."""
        registered = []
        for command in module.commands:
            self.register(command)
            registered.append(command.name)
        logger.info("Registered %d commands from module '%s'", len(registered), module.name)
        return registered

    def get(self, name: str) -> Optional[Command]:
        """Get a command by name"""
        return self._commands.get(_normalize(name))

    def has_command(self, name: str) -> bool:
        """Check if a command is registered"""
        return _normalize(name) in self._commands

    def list_commands(self) -> list[Command]:
        """All registered commands, in registration order"""
        return list(self._commands.values())

    def help_text(self) -> str:
        lines = [f"*{c.usage}* – {c.description}" for c in self.list_commands()]
        return "\n".join(lines)

    async def dispatch(
        self,
        name: str,
        context: MessageContext,
        params: Iterable[str],
    ) -> Optional[str]:
        """
        Run a command by name.

        Returns:
            The command's reply text, or *None* when no such command exists.
        """
        command = self.get(name)
        if command is None:
            logger.debug("Unknown command '%s'", name)
            return None
        return await command.execute(context, list(params))


def build_registry(sender: OutboundSender) -> CommandRegistry:
    """Wire the downloader module to a host sender and register its commands."""
    from downloader.core.handlers.downloader_handler import DownloaderHandler
    from downloader.infra.media_relay import MediaRelay

    registry = CommandRegistry()
    registry.register_module(DownloaderHandler(relay=MediaRelay(sender)))
    return registry
