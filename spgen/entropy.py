"""
Entropy estimation, strength buckets, and SHA-256 entropy amplification.
"""

from __future__ import annotations

import hashlib
import math
from enum import Enum
from typing import List


class Strength(Enum):
    """
    Strength bucket for a password, with the label and meter percentage
    a front end should show.
    """

    WEAK = ("Weak", 25)
    FAIR = ("Fair", 50)
    GOOD = ("Good", 75)
    STRONG = ("Strong", 100)

    def __init__(self, label: str, percent: int) -> None:
        self.label = label
        self.percent = percent


# Lower bounds (inclusive) of each bucket above WEAK, in bits.
FAIR_BITS = 40.0
GOOD_BITS = 60.0
STRONG_BITS = 80.0


def entropy_bits(alphabet_size: int, length: int) -> float:
    """
    log2(alphabet_size ** length), computed without the power so long
    passwords do not overflow a float.
    """
    if alphabet_size <= 1 or length <= 0:
        return 0.0
    return length * math.log2(alphabet_size)


def classify_strength(bits: float) -> Strength:
    if bits < FAIR_BITS:
        return Strength.WEAK
    if bits < GOOD_BITS:
        return Strength.FAIR
    if bits < STRONG_BITS:
        return Strength.GOOD
    return Strength.STRONG


def bits_to_bytes(bits: List[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes (8 bits per byte).
    If bits length is not a multiple of 8, pad with zeros at the end.
    """
    if not bits:
        return b""

    pad_len = (8 - (len(bits) % 8)) % 8
    bits_padded = bits + [0] * pad_len

    byte_values = []
    for i in range(0, len(bits_padded), 8):
        byte = 0
        for bit in bits_padded[i : i + 8]:
            byte = (byte << 1) | bit
        byte_values.append(byte)

    return bytes(byte_values)


def amplify(data: bytes, rounds: int = 1) -> bytes:
    """
    Hash `data` with SHA-256 `rounds` times (at least once) and return
    the 32-byte digest.
    """
    digest = hashlib.sha256(data).digest()
    for _ in range(rounds - 1):
        digest = hashlib.sha256(digest).digest()
    return digest
