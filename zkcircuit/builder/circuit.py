"""
Circuit Builder.

This module is the façade over the constraint system: it registers inputs,
compiles gates into unit-weight constraints, and runs a proving or
verifying session against artifact paths chosen by the caller.

Gate compilation:
    Add(a, b, out)  →  [(a, 1)] + [(b, 1)] = [(out, 1)]     tag ADD
    Mul(a, b, out)  →  [(a, 1)] * [(b, 1)] = [(out, 1)]     tag MUL

Each gate names three variable indices. When `out` is the next free index,
the builder evaluates the gate and registers the result as a derived
variable, so a circuit can be written as a straight-line program:

    >>> builder = CircuitBuilder()
    >>> x = builder.add_input(3)
    >>> y = builder.add_input(4)
    >>> builder.add_gate(Gate.mul(x, y, 2))
    >>> builder.value(2).value
    12

Proving and verifying are separate sessions that share nothing but the
two artifact files:

    >>> proof = builder.generate_proof("proof.bin", "cs.bin")
    >>> CircuitBuilder().verify_proof("proof.bin", "cs.bin")
    True
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union
from enum import Enum
import logging

from ..common.field import FieldElement
from ..config import ProverConfig, create_default_config
from ..errors import ConstraintUnsatisfied, EmptyCircuit, UnknownVariable
from ..proof.core import Proof, generate_proof, verify_proof
from ..r1cs.constraint import Operation
from ..r1cs.system import ConstraintSystem

logger = logging.getLogger(__name__)


class GateKind(Enum):
    """Kinds of gate a circuit can contain."""
    ADD = "add"   # out = a + b
    MUL = "mul"   # out = a * b


@dataclass(frozen=True)
class Gate:
    """
    A two-input gate over variable indices.

    Attributes:
        kind: ADD or MUL
        a: Index of the first operand
        b: Index of the second operand
        out: Index of the result variable
    """
    kind: GateKind
    a: int
    b: int
    out: int

    @classmethod
    def add(cls, a: int, b: int, out: int) -> 'Gate':
        return cls(GateKind.ADD, a, b, out)

    @classmethod
    def mul(cls, a: int, b: int, out: int) -> 'Gate':
        return cls(GateKind.MUL, a, b, out)

    @property
    def operation(self) -> Operation:
        """Constraint tag mirroring the gate kind."""
        return Operation.ADD if self.kind is GateKind.ADD else Operation.MUL

    def apply(self, a: FieldElement, b: FieldElement) -> FieldElement:
        """Evaluate the gate on operand values."""
        return a + b if self.kind is GateKind.ADD else a * b

    def __repr__(self) -> str:
        symbol = "+" if self.kind is GateKind.ADD else "*"
        return f"w{self.out} = w{self.a} {symbol} w{self.b}"


class CircuitBuilder:
    """
    Collects inputs and gates, then proves or verifies.

    Attributes:
        config: Field context for this circuit
        values: Inputs and derived values, position == variable index
        gates: Gates in insertion order
        outputs: Declared public outputs
    """

    def __init__(self, config: Optional[ProverConfig] = None):
        self.config = config or create_default_config()
        self.field = self.config.field
        self.values: List[FieldElement] = []
        self.num_inputs = 0
        self.gates: List[Gate] = []
        self.outputs: List[FieldElement] = []

    def __repr__(self) -> str:
        return (f"CircuitBuilder(inputs={self.num_inputs}, gates={len(self.gates)}, "
                f"variables={len(self.values)}, mod {self.field.prime})")

    # --- Circuit description ---

    def add_input(self, value: Union[FieldElement, int]) -> int:
        """Register an input value and return its variable index."""
        index = len(self.values)
        self.values.append(self.field.element(value))
        self.num_inputs += 1
        return index

    def add_gate(self, gate: Gate) -> None:
        """
        Add a gate.

        Raises:
            UnknownVariable: If an operand is unregistered, or `out` is
                neither registered nor the next free index
        """
        for index in (gate.a, gate.b):
            self._check_index(index)

        if gate.out == len(self.values):
            self.values.append(gate.apply(self.values[gate.a], self.values[gate.b]))
        else:
            self._check_index(gate.out)

        self.gates.append(gate)
        logger.debug("gate %d: %r", len(self.gates) - 1, gate)

    def set_output(self, value: Union[FieldElement, int]) -> None:
        """Declare a public output; it must match some gate's result."""
        self.outputs.append(self.field.element(value))

    def get_input(self, index: int) -> Optional[FieldElement]:
        """Value at index if it exists, otherwise None."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return None

    def value(self, index: int) -> FieldElement:
        """Value at index; raises UnknownVariable if absent."""
        self._check_index(index)
        return self.values[index]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.values):
            raise UnknownVariable(index, len(self.values))

    def _check_outputs(self) -> None:
        produced = {self.values[gate.out] for gate in self.gates}
        for position, output in enumerate(self.outputs):
            if output not in produced:
                raise ConstraintUnsatisfied(
                    f"Declared output {position} ({output}) is not produced by any gate"
                )

    # --- Compilation ---

    def build(self) -> ConstraintSystem:
        """
        Compile into a constraint system, one unit-weight constraint per gate.

        Raises:
            EmptyCircuit: If no inputs were registered
        """
        if self.num_inputs == 0:
            raise EmptyCircuit("No inputs available to generate proof")

        cs = ConstraintSystem(self.field)
        for value in self.values:
            cs.add_variable(value)

        one = self.field.one()
        for gate in self.gates:
            cs.add_constraint(
                [(gate.a, one)],
                [(gate.b, one)],
                [(gate.out, one)],
                operation=gate.operation,
                modulus=self.field.prime,
            )

        logger.debug("compiled %r", cs)
        return cs

    # --- Sessions ---

    def generate_proof(self, proof_path: Union[str, Path],
                       constraint_system_path: Union[str, Path]) -> Proof:
        """
        Prove the circuit and persist both artifacts.

        Raises:
            EmptyCircuit: If no inputs were registered
            ConstraintUnsatisfied: If a declared output is not produced
            IoFailure: If an artifact cannot be written
        """
        cs = self.build()
        self._check_outputs()
        cs.save(constraint_system_path)

        proof = generate_proof(cs, cs.generate_witness(), self.config.commitment_prime)
        proof.save(proof_path)
        return proof

    def verify_proof(self, proof_path: Union[str, Path],
                     constraint_system_path: Union[str, Path]) -> bool:
        """
        Verify persisted artifacts, independently of this builder's state.

        Raises:
            IoFailure: If an artifact cannot be read
            DeserializationFailure: If an artifact is malformed
            UnsupportedOperation: If a HASH constraint is stored
        """
        proof = Proof.load(proof_path)
        cs = ConstraintSystem.load(constraint_system_path)
        is_valid = verify_proof(proof, cs, self.config.commitment_prime)
        logger.info("proof verification result: %s", is_valid)
        return is_valid
