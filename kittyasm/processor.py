"""Processor operations and their 4-bit opcodes."""

from enum import IntEnum


class Op(IntEnum):
    """Operations numbered by opcode."""

    OR = 0x0
    NOR = 0x1
    AND = 0x2
    XOR = 0x3
    ADD = 0x4
    SUB = 0x5
    MUL = 0x6
    SHIFT = 0x7
    LESS = 0x8
    SIGNED_LESS = 0x9
    IF = 0xA
    LET = 0xB
    LOAD = 0xC
    STORE = 0xD
    POP = 0xE
    PUSH = 0xF


def decode_op(value):
    """Return the operation for an opcode, raising ValueError for unknown ones."""
    try:
        return Op(value)
    except ValueError:
        raise ValueError(f"Unknown opcode: {value}") from None