"""
Media downloader commands for chat bots.

Canonical imports:
    from downloader.core.handlers import build_registry
    from downloader.core.domain import MessageContext, ContentKind
"""
__version__ = "1.0.0"
