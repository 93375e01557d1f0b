"""
Constraint-System Artifact.

Layout (see common/codec.py for the primitive encodings):

    header      "ZKCS" + version
    modulus     int
    variables   seq of Variable
    constraints seq of Constraint
    qap         Polynomial left, Polynomial right, Polynomial output

    FieldElement = value int, modulus int
    Variable     = index u64, FieldElement
    Term         = Variable, coefficient FieldElement
    Constraint   = seq Term left, seq Term right, seq Term output, operation u8
    Polynomial   = seq of (index u64, FieldElement), ascending index

Every FieldElement carries its modulus; decoding rejects any modulus that
differs from the header's.
"""

from __future__ import annotations
from typing import Tuple

from ..common.codec import BinaryReader, BinaryWriter
from ..common.field import PrimeField, FieldElement
from ..common.polynomial import Polynomial, QAP
from ..errors import DeserializationFailure
from .constraint import Constraint, Operation, Term, Variable
from .system import ConstraintSystem

MAGIC = b"ZKCS"

OPERATION_TAGS = {
    Operation.ADD: 0,
    Operation.MUL: 1,
    Operation.HASH: 2,
}
TAG_OPERATIONS = {tag: op for op, tag in OPERATION_TAGS.items()}


# --- Encoding ---

def _write_element(writer: BinaryWriter, element: FieldElement) -> None:
    writer.write_int(element.value)
    writer.write_int(element.modulus)


def _write_variable(writer: BinaryWriter, variable: Variable) -> None:
    writer.write_u64(variable.index)
    _write_element(writer, variable.value)


def _write_term(writer: BinaryWriter, term: Term) -> None:
    _write_variable(writer, term.variable)
    _write_element(writer, term.coefficient)


def _write_constraint(writer: BinaryWriter, constraint: Constraint) -> None:
    for side in constraint.sides:
        writer.write_sequence(list(side), lambda t: _write_term(writer, t))
    writer.write_u8(OPERATION_TAGS[constraint.operation])


def _write_polynomial(writer: BinaryWriter, polynomial: Polynomial) -> None:
    def write_entry(entry: Tuple[int, FieldElement]) -> None:
        writer.write_u64(entry[0])
        _write_element(writer, entry[1])

    writer.write_sequence(list(polynomial), write_entry)


def encode_constraint_system(cs: ConstraintSystem) -> bytes:
    """Serialize variables, constraints and QAP into one artifact."""
    writer = BinaryWriter()
    writer.write_header(MAGIC)
    writer.write_int(cs.modulus)
    writer.write_sequence(cs.variables, lambda v: _write_variable(writer, v))
    writer.write_sequence(cs.constraints, lambda c: _write_constraint(writer, c))
    for polynomial in (cs.qap.left, cs.qap.right, cs.qap.output):
        _write_polynomial(writer, polynomial)
    return writer.getvalue()


# --- Decoding ---

class _Decoder:
    """Reads one artifact against the field named in its header."""

    def __init__(self, data: bytes):
        self.reader = BinaryReader(data)
        self.reader.read_header(MAGIC)
        modulus = self.reader.read_int()
        if modulus < 2:
            raise DeserializationFailure(f"Invalid field modulus {modulus}")
        self.field = PrimeField(modulus)

    def element(self) -> FieldElement:
        value = self.reader.read_int()
        modulus = self.reader.read_int()
        if modulus != self.field.prime:
            raise DeserializationFailure(
                f"Element modulus {modulus} does not match field {self.field.prime}"
            )
        if value >= modulus:
            raise DeserializationFailure(f"Element {value} not reduced mod {modulus}")
        return FieldElement(value, self.field)

    def variable(self) -> Variable:
        index = self.reader.read_u64()
        return Variable(index, self.element())

    def term(self) -> Term:
        variable = self.variable()
        return Term(variable, self.element())

    def constraint(self) -> Constraint:
        left, right, output = (tuple(self.reader.read_sequence(self.term)) for _ in range(3))
        tag = self.reader.read_u8()
        if tag not in TAG_OPERATIONS:
            raise DeserializationFailure(f"Unknown operation tag {tag}")
        return Constraint(left, right, output, TAG_OPERATIONS[tag])

    def polynomial(self) -> Polynomial:
        polynomial = Polynomial(self.field)
        for index, coefficient in self.reader.read_sequence(
                lambda: (self.reader.read_u64(), self.element())):
            if index in polynomial:
                raise DeserializationFailure(f"Duplicate polynomial key {index}")
            polynomial.add_term(index, coefficient)
        return polynomial


def decode_constraint_system(data: bytes) -> ConstraintSystem:
    """
    Rebuild a ConstraintSystem from its artifact.

    Raises:
        DeserializationFailure: On malformed or truncated data, or when a
            stored index breaks the variable-table invariant
    """
    decoder = _Decoder(data)
    cs = ConstraintSystem(decoder.field)

    cs.variables = decoder.reader.read_sequence(decoder.variable)
    for position, variable in enumerate(cs.variables):
        if variable.index != position:
            raise DeserializationFailure(
                f"Variable at position {position} has index {variable.index}"
            )

    cs.constraints = decoder.reader.read_sequence(decoder.constraint)
    cs.qap = QAP(decoder.polynomial(), decoder.polynomial(), decoder.polynomial())
    decoder.reader.expect_end()

    referenced = [i for c in cs.constraints for i in c.indices]
    referenced += [i for p in (cs.qap.left, cs.qap.right, cs.qap.output) for i in p.coefficients]
    for index in referenced:
        if index >= cs.num_variables:
            raise DeserializationFailure(
                f"Index {index} references a missing variable ({cs.num_variables} stored)"
            )

    return cs
