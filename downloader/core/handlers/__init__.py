"""
Command Handlers Package

Each handler module exposes a ``commands`` list that the
``CommandRegistry`` registers at startup.
"""
from downloader.core.handlers.downloader_handler import DownloaderHandler, PLATFORMS
from downloader.core.handlers.registry import CommandRegistry, build_registry

__all__ = [
    "DownloaderHandler",
    "PLATFORMS",
    "CommandRegistry",
    "build_registry",
]
