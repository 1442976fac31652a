"""
Constrained random password generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, MutableSequence, TypeVar

from .alphabet import build_alphabets, combined_alphabet
from .config import DEFAULT_CONFIG, GenerationConfig
from .entropy import Strength, classify_strength, entropy_bits
from .errors import NoUsableCharacterClass
from .random_source import RandomSource, SystemRandomSource, uniform_index

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GeneratedPassword:
    """
    Full result of one password generation.
    """

    text: str

    # log2(alphabet_size ** len(text))
    entropy_bits: float

    # Size of the combined alphabet the fill characters were drawn from.
    alphabet_size: int

    config: GenerationConfig

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def strength(self) -> Strength:
        return classify_strength(self.entropy_bits)


def secure_choice(alphabet: str, source: RandomSource) -> str:
    return alphabet[uniform_index(source, len(alphabet))]


def shuffle(items: MutableSequence[T], source: RandomSource) -> MutableSequence[T]:
    """
    Fisher-Yates shuffle in place, every swap index drawn from `source`.
    """
    for i in range(len(items) - 1, 0, -1):
        j = uniform_index(source, i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def generate(
    config: GenerationConfig | None = None,
    source: RandomSource | None = None,
) -> GeneratedPassword:
    """
    Generate one password:

    - Draw one character from every usable class so each appears.
    - Fill up to config.length from the combined alphabet.
    - Shuffle so the required characters are not at the front.
    - Score entropy on the actual alphabet size and final length.

    When more classes are usable than config.length allows, every
    required character is kept and the password comes out longer than
    requested.
    """
    cfg = config or DEFAULT_CONFIG
    rng = source or SystemRandomSource()

    alphabets = build_alphabets(cfg)
    if not alphabets:
        raise NoUsableCharacterClass(
            "No character class has any characters left after filtering; "
            "select another class or exclude fewer characters."
        )

    chars: List[str] = [secure_choice(alphabet, rng) for alphabet in alphabets.values()]

    pool = combined_alphabet(alphabets)
    while len(chars) < cfg.length:
        chars.append(secure_choice(pool, rng))

    shuffle(chars, rng)

    bits = entropy_bits(len(pool), len(chars))
    logger.debug(
        "Generated password: classes=%s length=%d alphabet=%d entropy=%.1f",
        ",".join(cls.value for cls in alphabets),
        len(chars),
        len(pool),
        bits,
    )
    return GeneratedPassword(
        text="".join(chars),
        entropy_bits=bits,
        alphabet_size=len(pool),
        config=cfg,
    )


def generate_password(
    config: GenerationConfig | None = None,
    source: RandomSource | None = None,
) -> str:
    """
    Compatibility helper: return only the password text.
    """
    return generate(config, source).text
