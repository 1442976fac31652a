"""
Exception types shared by the generator and the clipboard guard.
"""

from __future__ import annotations


class SpgenError(Exception):
    """Base class for every error raised by spgen."""


class ConfigurationError(SpgenError, ValueError):
    """The generation config cannot produce a password."""


class NoUsableCharacterClass(ConfigurationError):
    """Every selected character class is empty after filtering."""


class ClipboardError(SpgenError):
    """Generic clipboard error."""


class ClipboardWriteError(ClipboardError):
    """The platform refused to write to the clipboard."""


class ClipboardClearError(ClipboardError):
    """Best-effort clearance of the clipboard failed."""
