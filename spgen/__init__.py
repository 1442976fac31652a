"""
Secure password generator with a clipboard guard.
"""

from .config import (
    DEFAULT_CONFIG,
    CharacterClass,
    GenerationConfig,
    QuantumSourceConfig,
    config_from_options,
)
from .entropy import Strength, classify_strength
from .errors import (
    ClipboardClearError,
    ClipboardWriteError,
    ConfigurationError,
    NoUsableCharacterClass,
)
from .generator import GeneratedPassword, generate, generate_password
from .guard import ClipboardEvent, ClipboardEventKind, ClipboardGuard, GuardState
from .random_source import QuantumRandomSource, SystemRandomSource

__all__ = [
    "CharacterClass",
    "GenerationConfig",
    "QuantumSourceConfig",
    "DEFAULT_CONFIG",
    "config_from_options",
    "Strength",
    "classify_strength",
    "ConfigurationError",
    "NoUsableCharacterClass",
    "ClipboardWriteError",
    "ClipboardClearError",
    "GeneratedPassword",
    "generate",
    "generate_password",
    "ClipboardEvent",
    "ClipboardEventKind",
    "ClipboardGuard",
    "GuardState",
    "SystemRandomSource",
    "QuantumRandomSource",
]
