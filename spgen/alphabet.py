"""
Alphabet building: turn a GenerationConfig into per-class alphabets.
"""

from __future__ import annotations

from typing import Dict

from .config import AMBIGUOUS_CHARS, BASE_ALPHABETS, CharacterClass, GenerationConfig


def build_alphabets(config: GenerationConfig) -> Dict[CharacterClass, str]:
    """
    Return the usable alphabet of every selected class.

    Each alphabet keeps the base order, minus ambiguous characters when
    config.avoid_ambiguous is set and minus config.excluded_chars.
    Classes left empty are omitted, which makes them unselected for the
    rest of generation. Keys follow the fixed class order.
    """
    removed = set(config.excluded_chars)
    if config.avoid_ambiguous:
        removed.update(AMBIGUOUS_CHARS)

    alphabets: Dict[CharacterClass, str] = {}
    for cls, base in BASE_ALPHABETS.items():
        if cls not in config.classes:
            continue
        chars = "".join(ch for ch in base if ch not in removed)
        if chars:
            alphabets[cls] = chars
    return alphabets


def combined_alphabet(alphabets: Dict[CharacterClass, str]) -> str:
    return "".join(alphabets.values())
