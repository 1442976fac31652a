"""
Random sources for password generation.

A source only has to hand out uniformly distributed unsigned 32-bit
integers. Everything that needs randomness takes a source as an explicit
argument so tests can swap in a deterministic one.
"""

from __future__ import annotations

import logging
import secrets
from typing import List, Optional, Protocol

from .config import QuantumSourceConfig
from .entropy import amplify, bits_to_bytes

logger = logging.getLogger(__name__)

U32_RANGE = 1 << 32


class RandomSource(Protocol):
    def next_u32(self) -> int:
        """Return a uniformly distributed integer in [0, 2**32)."""
        ...


class SystemRandomSource:
    """
    Operating-system CSPRNG via the `secrets` module.
    """

    def next_u32(self) -> int:
        return secrets.randbits(32)


class QuantumRandomSource:
    """
    Random words seeded from simulated quantum measurements.

    Each refill XOR-combines `streams` qubit samples, hashes the packed
    bits together with 32 bytes of OS entropy, and serves the digest as
    eight 32-bit words. The OS entropy keeps the output at least as
    strong as SystemRandomSource even though the simulator itself is
    pseudo-random.
    """

    def __init__(
        self,
        config: QuantumSourceConfig | None = None,
        engine=None,
    ) -> None:
        self.config = config or QuantumSourceConfig()
        if engine is None:
            # Imported lazily: building the simulator is slow and only
            # needed when this source is actually chosen.
            from .quantum_engine import QuantumEngine

            engine = QuantumEngine(self.config.num_qubits)
        self.engine = engine
        self._pool: List[int] = []
        self.refills = 0

    def next_u32(self) -> int:
        if not self._pool:
            self._refill()
        return self._pool.pop()

    def _sample_combined(self) -> List[int]:
        combined: Optional[List[int]] = None
        for _ in range(max(1, self.config.streams)):
            bits = self.engine.sample_bits()
            if combined is None:
                combined = bits[:]
                continue
            if len(bits) != len(combined):
                raise ValueError(
                    "Quantum streams produced different bit-lengths; "
                    "this should not happen."
                )
            combined = [b ^ c for b, c in zip(bits, combined)]
        assert combined is not None
        return combined

    def _refill(self) -> None:
        seed = bits_to_bytes(self._sample_combined()) + secrets.token_bytes(32)
        digest = amplify(seed, max(1, self.config.entropy_rounds))
        self._pool = [
            int.from_bytes(digest[i : i + 4], "big") for i in range(0, len(digest), 4)
        ]
        self.refills += 1
        logger.debug("Quantum source refilled (%d refills so far)", self.refills)


def uniform_index(source: RandomSource, n: int) -> int:
    """
    Draw an integer uniformly from [0, n).

    Uses rejection sampling: a 32-bit draw at or above the largest
    multiple of n that fits in 2**32 is thrown away, so reducing the
    accepted draw mod n carries no bias.
    """
    if n < 1 or n > U32_RANGE:
        raise ValueError(f"Cannot draw an index from a range of size {n}.")
    limit = U32_RANGE - (U32_RANGE % n)
    while True:
        value = source.next_u32()
        if value < limit:
            return value % n


def make_source(name: str = "system", config: QuantumSourceConfig | None = None) -> RandomSource:
    """
    Build a random source by name ("system" or "quantum").
    """
    if name == "system":
        return SystemRandomSource()
    if name == "quantum":
        return QuantumRandomSource(config)
    raise ValueError(f"Unknown random source {name!r}; use 'system' or 'quantum'.")
