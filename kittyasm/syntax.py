"""Syntax tree of an assembly program."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Union

from .processor import Op


class Register(IntEnum):
    """The sixteen general purpose registers."""

    R0 = 0x0
    R1 = 0x1
    R2 = 0x2
    R3 = 0x3
    R4 = 0x4
    R5 = 0x5
    R6 = 0x6
    R7 = 0x7
    R8 = 0x8
    R9 = 0x9
    RA = 0xA
    RB = 0xB
    RC = 0xC
    RD = 0xD
    RE = 0xE
    RF = 0xF


class Shift(IntEnum):
    """Kind codes of the shift operation."""

    SHIFT_LEFT = 0b000
    SHIFT_RIGHT = 0b001
    ROTATE_LEFT = 0b010
    ROTATE_RIGHT = 0b011
    ARITHMETIC_SHIFT_RIGHT = 0b101


@dataclass(frozen=True)
class Label:
    """A label name; local labels belong to the preceding global label."""

    name: str
    local: bool = False

    def qualified(self, scope):
        """Return the lookup name, prefixing local labels with the scope."""
        return f"{scope}.{self.name}" if self.local else self.name


@dataclass(frozen=True)
class LabelByte:
    """One byte of a label address, used as an R-instruction immediate."""

    label: Label
    byte_index: int


@dataclass(frozen=True)
class LabelBytes:
    """`length` bytes of a label address from `byte_index`, used by `let`."""

    label: Label
    byte_index: int
    length: int


@dataclass(frozen=True)
class RFormat:
    """Register-register operands with an 8-bit immediate."""

    destination: Register
    source: Register
    target: Register
    immediate: Union[int, LabelByte]


@dataclass(frozen=True)
class RSFormat:
    """Register-register shift operands with a 5-bit immediate."""

    destination: Register
    source: Register
    target: Register
    immediate: int


@dataclass(frozen=True)
class IFormat:
    """Destination register and a 16-bit immediate."""

    destination: Register
    immediate: Union[int, LabelBytes]


@dataclass(frozen=True)
class IFFormat:
    """Condition register and a 16-bit relative branch target."""

    destination: Register
    immediate: Union[int, Label]


@dataclass(frozen=True)
class MFormat:
    """Memory access operands."""

    destination: Register
    source: Register
    byte_count: int
    immediate: int


class Mnemonic(Enum):
    """Instructions of the assembly language."""

    OR = "or"
    NOR = "nor"
    AND = "and"
    XOR = "xor"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    SHIFT_LEFT = "shift_left"
    SHIFT_RIGHT = "shift_right"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    ARITHMETIC_SHIFT_RIGHT = "arithmetic_shift_right"
    SIGNED_LESS = "signed_less"
    LESS = "less"
    IF = "if"
    LET = "let"
    LOAD = "load"
    STORE = "store"
    POP = "pop"
    PUSH = "push"
    DATA = "data"

    @property
    def op(self) -> Optional[Op]:
        """The operation this instruction encodes, or None for raw data."""
        if self is Mnemonic.DATA:
            return None
        if self.shift is not None:
            return Op.SHIFT
        return Op[self.name]

    @property
    def shift(self) -> Optional[Shift]:
        """The shift kind for shift instructions, otherwise None."""
        return Shift.__members__.get(self.name)

    @property
    def operand_type(self) -> type:
        """The operand class this instruction takes."""
        if self is Mnemonic.DATA:
            return bytes
        if self.shift is not None:
            return RSFormat
        return {
            Op.IF: IFFormat,
            Op.LET: IFormat,
            Op.LOAD: MFormat,
            Op.STORE: MFormat,
            Op.POP: MFormat,
            Op.PUSH: MFormat,
        }.get(self.op, RFormat)


Operands = Union[RFormat, RSFormat, IFormat, IFFormat, MFormat, bytes]


@dataclass(frozen=True)
class Instruction:
    """An instruction with operands of the matching format."""

    mnemonic: Mnemonic
    operands: Operands

    def __post_init__(self):
        expected = self.mnemonic.operand_type
        operands = self.operands
        if expected is bytes and isinstance(operands, (bytearray, list, tuple)):
            operands = bytes(operands)
            object.__setattr__(self, "operands", operands)
        if not isinstance(operands, expected):
            raise TypeError(
                f"{self.mnemonic.value} takes {expected.__name__} operands, "
                f"not {type(operands).__name__}"
            )


Statement = Union[Instruction, Label]


@dataclass
class Program:
    """A sequence of instructions and label definitions."""

    statements: list = field(default_factory=list)

    def __iter__(self):
        return iter(self.statements)

    def __len__(self):
        return len(self.statements)

    def instructions(self):
        """Yield the instructions, skipping label definitions."""
        return (s for s in self.statements if isinstance(s, Instruction))

    def labels(self):
        """Yield the label definitions in order."""
        return (s for s in self.statements if isinstance(s, Label))