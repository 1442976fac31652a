"""
Configuration for the secure password generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable

from .errors import ConfigurationError


class CharacterClass(Enum):
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    DIGIT = "digit"
    SYMBOL = "symbol"


# Base alphabets, in the order classes are drawn from.
BASE_ALPHABETS: dict[CharacterClass, str] = {
    CharacterClass.UPPERCASE: "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    CharacterClass.LOWERCASE: "abcdefghijklmnopqrstuvwxyz",
    CharacterClass.DIGIT: "0123456789",
    CharacterClass.SYMBOL: "!@#$%^&*()_+-=[]{}|;:,.<>?",
}

# Characters that look alike in most fonts.
AMBIGUOUS_CHARS = "0O1lI"

# Clipboard guard timing, in seconds.
CLIPBOARD_CLEAR_SECONDS = 15
STATUS_MESSAGE_SECONDS = 3


@dataclass(frozen=True)
class GenerationConfig:
    # Requested password length. The result can be longer when more
    # classes are required than characters requested.
    length: int = 16

    classes: FrozenSet[CharacterClass] = field(
        default_factory=lambda: frozenset(CharacterClass)
    )

    # Drop AMBIGUOUS_CHARS from every class.
    avoid_ambiguous: bool = False

    # Characters removed from every class, whatever the class.
    excluded_chars: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ConfigurationError(
                f"Password length must be at least 1, got {self.length}."
            )
        # Accept any iterable from callers but store frozensets.
        object.__setattr__(self, "classes", frozenset(self.classes))
        object.__setattr__(self, "excluded_chars", frozenset(self.excluded_chars))


@dataclass
class QuantumSourceConfig:
    # Each qubit gives one raw bit per sample.
    # NOTE: Keep this <= backend limit (often 20-29 for local simulators).
    num_qubits: int = 20

    # How many independent samples are XOR-combined per refill.
    streams: int = 2

    # SHA-256 rounds applied to each refill.
    entropy_rounds: int = 2


def parse_excluded(text: str | None) -> frozenset[str]:
    """
    Turn a free-text exclusion field into a set of characters.

    Every character counts, whitespace included; none of the base
    alphabets contain whitespace so it is harmless.
    """
    return frozenset(text or "")


def config_from_options(
    length: int,
    uppercase: bool = True,
    lowercase: bool = True,
    digits: bool = True,
    symbols: bool = True,
    avoid_ambiguous: bool = False,
    exclude: str | Iterable[str] | None = None,
) -> GenerationConfig:
    """
    Build a GenerationConfig from front-end control values.
    """
    flags = (
        (CharacterClass.UPPERCASE, uppercase),
        (CharacterClass.LOWERCASE, lowercase),
        (CharacterClass.DIGIT, digits),
        (CharacterClass.SYMBOL, symbols),
    )
    if exclude is None or isinstance(exclude, str):
        excluded = parse_excluded(exclude)
    else:
        excluded = frozenset(exclude)

    return GenerationConfig(
        length=length,
        classes=frozenset(cls for cls, on in flags if on),
        avoid_ambiguous=avoid_ambiguous,
        excluded_chars=excluded,
    )


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = GenerationConfig()
