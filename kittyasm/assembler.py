"""Assembler turning assembly programs into machine code ROM."""

from __future__ import annotations

from typing import Dict, List

from .parser import parse_program
from .processor import Op
from .references import (
    Absolute8,
    Absolute16,
    Reference,
    Relative16,
    resolve_reference,
)
from .syntax import (
    IFFormat,
    IFormat,
    Instruction,
    Label,
    LabelByte,
    LabelBytes,
    MFormat,
    Program,
    RFormat,
    RSFormat,
)


class Assembler:
    """Builds ROM from a program, resolving label references afterwards.

    Local labels are looked up with the most recent global label prepended,
    so `.loop` after `main:` is known as `main.loop`. Local labels defined
    before any global label get no prefix.
    """

    def __init__(self):
        self.address = 0
        self.scope = ""
        self.label_addresses: Dict[str, int] = {}
        self.label_references: List[Reference] = []

    def _reset(self):
        self.address = 0
        self.scope = ""
        self.label_addresses = {}
        self.label_references = []

    def assemble_program(self, program: Program) -> bytes:
        """Assemble `program` into ROM bytes.

        Raises LabelNotFoundError for undefined labels and ByteRangeError
        for label byte selections that do not fit their immediate.
        """
        self._reset()
        rom = bytearray()
        for statement in program:
            if isinstance(statement, Label):
                self._define(statement)
            elif isinstance(statement, Instruction):
                rom += self._instruction(statement)
                self.address = len(rom)
            else:
                raise TypeError(f"Not a statement: {statement!r}")

        for reference in self.label_references:
            address, data = resolve_reference(reference, self.label_addresses)
            rom[address:address + len(data)] = data
        return bytes(rom)

    def _define(self, label: Label):
        if not label.local:
            self.scope = label.name
        self.label_addresses[label.qualified(self.scope)] = self.address

    def _qualify(self, label: Label) -> str:
        return label.qualified(self.scope)

    def _instruction(self, instruction: Instruction) -> bytes:
        mnemonic = instruction.mnemonic
        operands = instruction.operands
        if isinstance(operands, bytes):
            return operands
        if isinstance(operands, RSFormat):
            return self._rs(operands, mnemonic.shift)
        if isinstance(operands, RFormat):
            return self._r(operands, mnemonic.op)
        if isinstance(operands, IFormat):
            return self._i(operands)
        if isinstance(operands, IFFormat):
            return self._if(operands)
        if isinstance(operands, MFormat):
            return self._m(operands, mnemonic.op)
        raise TypeError(f"Unsupported operands: {operands!r}")

    def _i(self, operands: IFormat) -> bytes:
        immediate = operands.immediate
        if isinstance(immediate, LabelBytes):
            self.label_references.append(
                Absolute16(
                    self.address,
                    self._qualify(immediate.label),
                    immediate.byte_index,
                    immediate.length,
                )
            )
            immediate = 0
        return bytes(
            [Op.LET << 4 | operands.destination, (immediate >> 8) & 0xFF, immediate & 0xFF]
        )

    def _if(self, operands: IFFormat) -> bytes:
        immediate = operands.immediate
        if isinstance(immediate, Label):
            self.label_references.append(
                Relative16(self.address, self._qualify(immediate))
            )
            immediate = 0
        return bytes(
            [Op.IF << 4 | operands.destination, (immediate >> 8) & 0xFF, immediate & 0xFF]
        )

    def _m(self, operands: MFormat, op: Op) -> bytes:
        # `ld` and `pop` swap the register fields to ease decoding.
        if op in (Op.LOAD, Op.POP):
            first, second = operands.source, operands.destination
        else:
            first, second = operands.destination, operands.source
        immediate = operands.immediate
        return bytes(
            [
                op << 4 | first,
                (second << 4 | operands.byte_count << 2 | (immediate >> 8) & 0b11) & 0xFF,
                immediate & 0xFF,
            ]
        )

    def _r(self, operands: RFormat, op: Op) -> bytes:
        immediate = operands.immediate
        if isinstance(immediate, LabelByte):
            self.label_references.append(
                Absolute8(self.address, self._qualify(immediate.label), immediate.byte_index)
            )
            immediate = 0
        return bytes(
            [
                op << 4 | operands.destination,
                operands.source << 4 | operands.target,
                immediate & 0xFF,
            ]
        )

    def _rs(self, operands: RSFormat, shift) -> bytes:
        return bytes(
            [
                Op.SHIFT << 4 | operands.destination,
                operands.source << 4 | operands.target,
                (shift << 5 | operands.immediate) & 0xFF,
            ]
        )


def assemble(source: str) -> bytes:
    """Parse and assemble ROM from assembly source text."""
    return Assembler().assemble_program(parse_program(source))