"""
Circuit Builder

This module is the entry point for describing a circuit and running a
proving or verifying session.

Key Components:
    - Gate, GateKind: two-input ADD / MUL gates over variable indices
    - CircuitBuilder: inputs, gates, outputs, artifact-path sessions

Usage:
    >>> from zkcircuit.builder import CircuitBuilder, Gate
    >>>
    >>> builder = CircuitBuilder()
    >>> x, y = builder.add_input(3), builder.add_input(4)
    >>> builder.add_gate(Gate.mul(x, y, 2))
    >>> proof = builder.generate_proof("proof.bin", "cs.bin")
    >>> builder.verify_proof("proof.bin", "cs.bin")
    True
"""

from .circuit import CircuitBuilder, Gate, GateKind

__all__ = [
    "CircuitBuilder",
    "Gate",
    "GateKind",
]
