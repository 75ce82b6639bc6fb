# reference.py
# Quantum reference for the classical engines (power-of-two sizes only):
#  - Uniform init via Hadamard on every qubit
#  - Oracle: phase-flip |target> (X on zero bits, multi-controlled Z, undo X)
#  - Diffuser: H, X, multi-controlled Z, X, H  (= -(2|s><s| - I))
#  - Probabilities from qiskit's Statevector; index = integer value of the
#    bitstring with qubit 0 as the least significant bit
# The circuit diffuser carries an extra global sign per round, so only
# probabilities are compared against the classical amplitudes.
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from qiskit import QuantumCircuit, transpile
from qiskit.quantum_info import Statevector
from qiskit_aer import AerSimulator

from classical_grover.amplitude import AmplitudeVector, InvalidSizeError, validate_index


def qubits_for_size(size: int) -> int:
    """Number of qubits spanning ``size`` basis states; size must be 2**n, n >= 1."""
    if size < 2 or size & (size - 1):
        raise InvalidSizeError(
            f"Quantum reference needs a power-of-two size >= 2, got: {size}")
    return size.bit_length() - 1


def _multi_controlled_z(qc: QuantumCircuit, qubits: List[int]) -> None:
    if len(qubits) == 1:
        qc.z(qubits[0])
        return
    target = qubits[-1]
    qc.h(target)
    qc.mcx(qubits[:-1], target)
    qc.h(target)


def grover_oracle(target_bits: str) -> QuantumCircuit:
    """Phase-flips the basis state spelled by ``target_bits`` (MSB..LSB)."""
    n = len(target_bits)
    qc = QuantumCircuit(n)
    zeros = [i for i, bit in enumerate(reversed(target_bits)) if bit == '0']
    for i in zeros:
        qc.x(i)
    _multi_controlled_z(qc, list(range(n)))
    for i in zeros:
        qc.x(i)
    return qc


def diffuser(n_qubits: int) -> QuantumCircuit:
    """Standard Grover diffuser on n qubits."""
    qc = QuantumCircuit(n_qubits)
    qc.h(range(n_qubits))
    qc.x(range(n_qubits))
    _multi_controlled_z(qc, list(range(n_qubits)))
    qc.x(range(n_qubits))
    qc.h(range(n_qubits))
    return qc


def build_grover_circuit(n_qubits: int, target: int, iterations: int) -> QuantumCircuit:
    validate_index(target, 2 ** n_qubits)
    target_bits = format(target, f'0{n_qubits}b')
    oracle = grover_oracle(target_bits).to_gate(label="oracle")
    diff = diffuser(n_qubits).to_gate(label="diffuser")

    qc = QuantumCircuit(n_qubits)
    qc.h(range(n_qubits))
    for _ in range(iterations):
        qc.append(oracle, range(n_qubits))
        qc.append(diff, range(n_qubits))
    return qc


def reference_probabilities(n_qubits: int, target: int, iterations: int) -> np.ndarray:
    qc = build_grover_circuit(n_qubits, target, iterations)
    return np.asarray(Statevector.from_instruction(qc).probabilities(), dtype=float)


def run_and_measure(qc: QuantumCircuit, shots: int = 1024, seed: Optional[int] = None) -> Dict[int, int]:
    """
    Samples the circuit on AerSimulator and returns counts keyed by the
    integer basis state.
    """
    measured = qc.copy()
    measured.measure_all()
    sim = AerSimulator()
    compiled = transpile(measured, sim)
    result = sim.run(compiled, shots=shots, seed_simulator=seed).result()
    counts = result.get_counts()
    return {int(bits.replace(' ', ''), 2): c for bits, c in counts.items()}


@dataclass
class ReferenceComparison:
    n_qubits: int
    target: int
    iterations: int
    max_deviation: float
    matches: bool
    reference: np.ndarray
    classical: np.ndarray


def compare_with_engine(engine: AmplitudeVector, target: int, iterations: int,
                        atol: float = 1e-9) -> ReferenceComparison:
    """
    Compares an engine that has already been driven through ``iterations``
    Grover rounds on ``target`` with the statevector of the same circuit.
    """
    classical = engine.probabilities()
    n_qubits = qubits_for_size(engine.size)
    reference = reference_probabilities(n_qubits, target, iterations)
    deviation = float(np.max(np.abs(reference - classical)))
    matches = deviation <= atol
    logging.info(
        f"Reference check ({engine.name}, {n_qubits} qubits, {iterations} rounds): "
        f"max deviation {deviation:.3e} -> {'OK' if matches else 'MISMATCH'}")
    return ReferenceComparison(
        n_qubits=n_qubits,
        target=target,
        iterations=iterations,
        max_deviation=deviation,
        matches=matches,
        reference=reference,
        classical=classical,
    )
