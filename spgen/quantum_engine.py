"""
Quantum engine: puts qubits in superposition on a local simulator and
measures them in alternating bases to produce raw random bits.
"""

from __future__ import annotations

import logging
from typing import List

from qiskit import QuantumCircuit, transpile
from qiskit_aer import AerSimulator

logger = logging.getLogger(__name__)


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, num_qubits: int = 20) -> None:
        if num_qubits < 1:
            raise ValueError(f"num_qubits must be at least 1, got {num_qubits}.")
        self.num_qubits = num_qubits
        self.backend = AerSimulator()

        # Safety: ensure requested num_qubits does not exceed backend capability.
        max_qubits = getattr(self.backend, "num_qubits", None)
        if max_qubits and num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in QuantumSourceConfig."
            )

        circuit, self.measurement_basis = self._build_circuit()
        # The circuit never changes, so transpile it once.
        self._compiled = transpile(circuit, self.backend)

    def _build_circuit(self) -> tuple[QuantumCircuit, list[str]]:
        """
        Prepare N qubits so every measurement is a fair coin, measuring
        in alternating bases (Z, X, Z, X, ...).

        Even qubits are prepared in |+> and measured in Z. Odd qubits
        are prepared in |+i> (H then S), which is unbiased in X, and the
        final H rotates their measurement into the X basis.
        """
        n = self.num_qubits
        measurement_basis: list[str] = []
        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)

        for i in range(n):
            if i % 2 == 1:
                measurement_basis.append("X")
                qc.s(i)
                qc.h(i)
            else:
                measurement_basis.append("Z")
            qc.measure(i, i)

        return qc, measurement_basis

    def sample_bits(self) -> List[int]:
        """
        Run the circuit for a single shot and return one bit per qubit.
        """
        result = self.backend.run(self._compiled, shots=1).result()
        counts = result.get_counts()

        # counts is a dict like {'0101...': 1}
        bitstring = next(iter(counts.keys()))

        # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
        bits = [int(b) for b in bitstring[::-1]]
        logger.debug("Sampled %d quantum bits", len(bits))
        return bits
