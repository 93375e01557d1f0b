"""
Binary Artifact Encoding.

Both persisted artifacts (constraint system and proof) are written with
the same primitive encoding, so a verifier in a later process can read
exactly what the prover wrote.

Wire format (little-endian throughout):
    - Header: 4-byte magic + u8 format version
    - Unsigned big integer: u32 byte length + little-endian magnitude
      (zero is encoded with length 0)
    - Index: u64
    - Sequence: u32 element count, then the elements
    - Enum tag: u8

Structures are written field by field in declaration order. Readers raise
DeserializationFailure on truncation, bad magic, unknown version or
trailing bytes. File access errors surface as IoFailure.
"""

from __future__ import annotations
from pathlib import Path
from typing import Callable, List, TypeVar, Union
import logging
import struct

from ..errors import DeserializationFailure, IoFailure

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

T = TypeVar("T")


class BinaryWriter:
    """Accumulates an artifact in memory."""

    def __init__(self):
        self._parts: List[bytes] = []

    def write_header(self, magic: bytes) -> None:
        """Write magic bytes followed by the format version."""
        if len(magic) != 4:
            raise ValueError(f"Magic must be 4 bytes, got {len(magic)}")
        self._parts.append(magic)
        self.write_u8(FORMAT_VERSION)

    def write_u8(self, value: int) -> None:
        self._parts.append(struct.pack('<B', value))

    def write_u32(self, value: int) -> None:
        self._parts.append(struct.pack('<I', value))

    def write_u64(self, value: int) -> None:
        self._parts.append(struct.pack('<Q', value))

    def write_int(self, value: int) -> None:
        """Write an arbitrary-precision non-negative integer."""
        if value < 0:
            raise ValueError(f"Cannot encode negative integer {value}")
        length = (value.bit_length() + 7) // 8
        self.write_u32(length)
        self._parts.append(value.to_bytes(length, 'little'))

    def write_sequence(self, items: List[T], write_item: Callable[[T], None]) -> None:
        """Write a count-prefixed sequence."""
        self.write_u32(len(items))
        for item in items:
            write_item(item)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


class BinaryReader:
    """
    Cursor over an artifact buffer.

    Every read checks bounds first, so a truncated file fails with
    DeserializationFailure instead of returning short data.
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def read_bytes(self, n: int) -> bytes:
        """Read n raw bytes."""
        if n > self.remaining:
            raise DeserializationFailure(
                f"Truncated artifact: need {n} bytes at offset {self.pos}, "
                f"{self.remaining} left"
            )
        result = self.data[self.pos:self.pos + n]
        self.pos += n
        return result

    def read_header(self, magic: bytes) -> None:
        """Check magic bytes and format version."""
        found = self.read_bytes(len(magic))
        if found != magic:
            raise DeserializationFailure(
                f"Bad magic: expected {magic!r}, got {found!r}"
            )
        version = self.read_u8()
        if version != FORMAT_VERSION:
            raise DeserializationFailure(
                f"Unsupported version: expected {FORMAT_VERSION}, got {version}"
            )

    def read_u8(self) -> int:
        return struct.unpack('<B', self.read_bytes(1))[0]

    def read_u32(self) -> int:
        return struct.unpack('<I', self.read_bytes(4))[0]

    def read_u64(self) -> int:
        return struct.unpack('<Q', self.read_bytes(8))[0]

    def read_int(self) -> int:
        """Read an arbitrary-precision non-negative integer."""
        length = self.read_u32()
        return int.from_bytes(self.read_bytes(length), 'little')

    def read_sequence(self, read_item: Callable[[], T]) -> List[T]:
        """Read a count-prefixed sequence."""
        count = self.read_u32()
        return [read_item() for _ in range(count)]

    def expect_end(self) -> None:
        """Fail if bytes are left over after the last structure."""
        if self.remaining:
            raise DeserializationFailure(
                f"{self.remaining} trailing bytes after offset {self.pos}"
            )


def write_artifact(path: Union[str, Path], data: bytes) -> None:
    """
    Write an artifact in one create-then-write step.

    There is no atomic rename: a crash mid-write leaves a corrupt file,
    which the matching load rejects with DeserializationFailure.
    """
    path = Path(path)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise IoFailure(path, f"could not write artifact ({e.strerror or e})") from e
    logger.debug("wrote %d bytes to %s", len(data), path)


def read_artifact(path: Union[str, Path]) -> bytes:
    """Read a whole artifact file."""
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise IoFailure(path, f"could not read artifact ({e.strerror or e})") from e
    logger.debug("read %d bytes from %s", len(data), path)
    return data
