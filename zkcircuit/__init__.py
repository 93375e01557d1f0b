"""
zkcircuit
=========

An educational toolkit that compiles arithmetic circuits into a Rank-1
Constraint System, encodes it as QAP polynomials, and produces a
commitment-bound proof that can be re-verified later against the
persisted constraint system.

The commitment scheme is a didactic placeholder: it reveals the full
witness and binds only its sum. It illustrates the shape of a proving
session, not a zero-knowledge or succinct proof.

Modules:
    - common: Field arithmetic, QAP polynomials, binary codec
    - r1cs: Constraint system bookkeeping and its artifact
    - proof: Proof generation, verification and its artifact
    - commitment: Additive combiner and Merkle commitment
    - builder: Circuit façade (inputs, gates, proving sessions)

Quick Start:
    >>> from zkcircuit.builder import CircuitBuilder, Gate
    >>> builder = CircuitBuilder()
    >>> x, y = builder.add_input(3), builder.add_input(4)
    >>> builder.add_gate(Gate.mul(x, y, 2))
    >>> # ... see README.md for full examples
"""

__version__ = "0.1.0"

from . import common
from . import r1cs
from . import proof
from . import commitment
from . import builder
from .config import ProverConfig, create_default_config, create_small_field_config
