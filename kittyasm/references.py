"""Deferred label references and their resolution to ROM bytes.

A reference records where in the ROM an instruction was assembled and
which label it points at. Once every label is defined, resolving it
gives the ROM address to patch and the bytes to write there.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple, Union

_ADDRESS_WIDTH = 4


class AssemblyError(ValueError):
    """Raised when a program cannot be assembled."""


class LabelNotFoundError(AssemblyError, LookupError):
    """Raised when a referenced label was never defined."""

    def __init__(self, label):
        self.label = label
        super().__init__(f"Label not found: '{label}'")


class ByteRangeError(AssemblyError):
    """Raised when a label byte selection does not fit the immediate."""


@dataclass(frozen=True)
class Absolute16:
    """`length` bytes of a label address from `byte_index`, for `let`."""

    address: int
    label: str
    byte_index: int
    length: int


@dataclass(frozen=True)
class Absolute8:
    """One byte of a label address at `byte_index`, for R-instructions."""

    address: int
    label: str
    byte_index: int


@dataclass(frozen=True)
class Relative16:
    """Signed 16-bit offset from the instruction to a label, for `if`."""

    address: int
    label: str


Reference = Union[Absolute16, Absolute8, Relative16]


def _lookup(label, label_addresses):
    try:
        return label_addresses[label]
    except KeyError:
        raise LabelNotFoundError(label) from None


def _address_byte(label_address, byte_index, selection):
    """Byte `byte_index` of the 24-bit address, skipping the unused top byte."""
    address_bytes = label_address.to_bytes(_ADDRESS_WIDTH, "big")
    position = byte_index + 1
    if not 0 <= position < _ADDRESS_WIDTH:
        raise ByteRangeError(f"Byte index out of range: {selection}")
    return address_bytes[position]


def _resolve_absolute16(reference, label_addresses):
    label_address = _lookup(reference.label, label_addresses)
    index, length = reference.byte_index, reference.length
    selection = f"[{index}:{index + length - 1}]"
    if length == 1:
        data = bytes([0, _address_byte(label_address, index, selection)])
    elif length == 2:
        data = bytes(
            [
                _address_byte(label_address, index, selection),
                _address_byte(label_address, index + 1, selection),
            ]
        )
    else:
        raise ByteRangeError(f"Too large byte range: {selection}")
    # Skip the opcode and destination register byte.
    return reference.address + 1, data


def _resolve_absolute8(reference, label_addresses):
    label_address = _lookup(reference.label, label_addresses)
    selection = f"[{reference.byte_index}]"
    data = bytes([_address_byte(label_address, reference.byte_index, selection)])
    # Skip the opcode, destination, source and target register bytes.
    return reference.address + 2, data


def _resolve_relative16(reference, label_addresses):
    label_address = _lookup(reference.label, label_addresses)
    offset = (label_address - reference.address) & 0xFFFF
    return reference.address + 1, offset.to_bytes(2, "big")


def resolve_reference(
    reference: Reference, label_addresses: Mapping[str, int]
) -> Tuple[int, bytes]:
    """Return the ROM address to patch and the bytes to write there."""
    if isinstance(reference, Absolute16):
        return _resolve_absolute16(reference, label_addresses)
    if isinstance(reference, Absolute8):
        return _resolve_absolute8(reference, label_addresses)
    if isinstance(reference, Relative16):
        return _resolve_relative16(reference, label_addresses)
    raise TypeError(f"Not a label reference: {reference!r}")