"""Parser turning assembly source text into a syntax tree.

Source is line oriented. A line holds an optional label definition
(``name:`` or ``.local:``) followed by an optional instruction. Comments
start with ``;`` or ``//`` and run to the end of the line. Operands are
separated by commas; numbers are ``$hex``, ``%binary`` or decimal.
"""

from __future__ import annotations

import re
from typing import Optional

from .syntax import (
    IFFormat,
    IFormat,
    Instruction,
    Label,
    LabelByte,
    LabelBytes,
    MFormat,
    Mnemonic,
    Program,
    Register,
    RFormat,
    RSFormat,
)

DEFAULT_BYTE_COUNT = 3

_NAME = r"[A-Za-z_][A-Za-z0-9_.]*"
_REGISTER = re.compile(r"[rR][0-9a-fA-F]")
_LABEL = re.compile(rf"(?P<dot>\.)?(?P<name>{_NAME})")
_SELECTOR = re.compile(
    rf"(?P<dot>\.)?(?P<name>{_NAME})"
    r"\[\s*(?P<first>\d+)\s*(?::\s*(?P<last>\d+)\s*)?\]"
)
_DEFINITION = re.compile(rf"\s*(?P<dot>\.)?(?P<name>{_NAME})\s*:(?P<rest>.*)")
_COMMENT = re.compile(r"(;|//).*")
_HEX = re.compile(r"[0-9a-fA-F]+")
_BINARY = re.compile(r"[01]+")
_DECIMAL = re.compile(r"\d+")
_SIGNED_DECIMAL = re.compile(r"-?\d+")

_MNEMONICS = {
    "or": Mnemonic.OR,
    "nor": Mnemonic.NOR,
    "and": Mnemonic.AND,
    "xor": Mnemonic.XOR,
    "add": Mnemonic.ADD,
    "sub": Mnemonic.SUB,
    "mul": Mnemonic.MUL,
    "shl": Mnemonic.SHIFT_LEFT,
    "shr": Mnemonic.SHIFT_RIGHT,
    "rotl": Mnemonic.ROTATE_LEFT,
    "rotr": Mnemonic.ROTATE_RIGHT,
    "ashr": Mnemonic.ARITHMETIC_SHIFT_RIGHT,
    "lt": Mnemonic.LESS,
    "slt": Mnemonic.SIGNED_LESS,
    "if": Mnemonic.IF,
    "let": Mnemonic.LET,
    "ld": Mnemonic.LOAD,
    "st": Mnemonic.STORE,
    "pop": Mnemonic.POP,
    "push": Mnemonic.PUSH,
    "data": Mnemonic.DATA,
}


class ParseError(ValueError):
    """Raised for source text that is not valid assembly."""

    def __init__(self, message, line=None):
        self.message = message
        self.line = line
        super().__init__(message if line is None else f"line {line}: {message}")


def parse_register(text):
    """Return the register named by `text`, ignoring case."""
    token = text.strip()
    if not _REGISTER.fullmatch(token):
        raise ParseError(f"Not a register: {text}")
    return Register(int(token[1], 16))


def _is_register(token):
    return _REGISTER.fullmatch(token) is not None


def _number(token, bits, signed=False):
    """Parse `$hex`, `%binary` or decimal within `bits`; negatives wrap to 16 bits."""
    if token.startswith("$"):
        digits, base, pattern = token[1:], 16, _HEX
    elif token.startswith("%"):
        digits, base, pattern = token[1:], 2, _BINARY
    else:
        digits, base = token, 10
        pattern = _SIGNED_DECIMAL if signed else _DECIMAL
    if not pattern.fullmatch(digits):
        raise ParseError(f"Expected a number, found '{token}'")
    value = int(digits, base)
    if value < 0:
        if value < -(1 << (bits - 1)):
            raise ParseError(f"Number out of range: {token}")
        return value & 0xFFFF
    if value >= 1 << bits:
        raise ParseError(f"Number out of range: {token}")
    return value


def _byte_index(text):
    value = int(text)
    if value > 0xFF:
        raise ParseError(f"Byte index out of range: {text}")
    return value


def _label(match):
    return Label(match["name"], local=match["dot"] is not None)


def _r_immediate(token):
    selector = _SELECTOR.fullmatch(token)
    if selector:
        if selector["last"] is not None:
            raise ParseError(f"Expected a single byte index: {token}")
        return LabelByte(_label(selector), _byte_index(selector["first"]))
    return _number(token, 8)


def _i_immediate(token):
    selector = _SELECTOR.fullmatch(token)
    if selector:
        index = _byte_index(selector["first"])
        if selector["last"] is None:
            return LabelBytes(_label(selector), index, index)
        last = _byte_index(selector["last"])
        if last < index:
            raise ParseError(f"Invalid byte range: {token}")
        return LabelBytes(_label(selector), index, last - index + 1)
    return _number(token, 16)


def _if_immediate(token):
    if not _is_register(token):
        match = _LABEL.fullmatch(token)
        if match:
            return _label(match)
    return _number(token, 16, signed=True)


def _check_count(args, text, low, high):
    if len(args) < low:
        raise ParseError(f"Too few arguments to {text}")
    if len(args) > high:
        raise ParseError(f"Too many arguments to {text}")


def _r(args, text, default):
    _check_count(args, text, 2, 4)
    destination = parse_register(args[0])
    source: Optional[Register] = None
    target: Optional[Register] = None
    immediate = None
    for token in args[1:3]:
        if _is_register(token):
            register = parse_register(token)
            if token is args[1]:
                source = register
            else:
                target = register
        else:
            immediate = _r_immediate(token)
    if len(args) > 3:
        immediate = _r_immediate(args[3])
    return RFormat(
        destination=destination,
        source=destination if source is None else source,
        target=Register.R0 if target is None else target,
        immediate=default if immediate is None else immediate,
    )


def _rs(args, text):
    _check_count(args, text, 2, 4)
    destination = parse_register(args[0])
    source: Optional[Register] = None
    target: Optional[Register] = None
    immediate = None
    for position, token in enumerate(args[1:3], start=1):
        if _is_register(token):
            if position == 1:
                source = parse_register(token)
            else:
                target = parse_register(token)
        else:
            immediate = _number(token, 5)
    if len(args) > 3:
        immediate = _number(args[3], 5)
    return RSFormat(
        destination=destination,
        source=destination if source is None else source,
        target=Register.R0 if target is None else target,
        immediate=0 if immediate is None else immediate,
    )


def _i(args, text):
    _check_count(args, text, 2, 2)
    return IFormat(parse_register(args[0]), _i_immediate(args[1]))


def _if(args, text):
    _check_count(args, text, 1, 2)
    first = args[0]
    if _is_register(first):
        _check_count(args, text, 2, 2)
        return IFFormat(parse_register(first), _if_immediate(args[1]))
    _check_count(args, text, 1, 1)
    return IFFormat(Register.R0, _if_immediate(first))


def _m(args, text):
    _check_count(args, text, 1, 4)
    destination = parse_register(args[0])
    rest = iter(args[1:])
    source = immediate = byte_count = None

    second = next(rest, None)
    if second is None:
        source, immediate, byte_count = destination, 0, DEFAULT_BYTE_COUNT
    elif _is_register(second):
        source = parse_register(second)
    else:
        immediate = _number(second, 10, signed=True)

    if immediate is not None and byte_count is None:
        third = next(rest, None)
        byte_count = 0 if third is None else _number(third, 2)
    else:
        third = next(rest, None)
        if third is not None:
            immediate = _number(third, 10, signed=True)
        else:
            immediate, byte_count = 0, DEFAULT_BYTE_COUNT

    fourth = next(rest, None)
    if fourth is not None:
        byte_count = _number(fourth, 2)
    elif byte_count is None:
        byte_count = DEFAULT_BYTE_COUNT

    return MFormat(
        destination=destination,
        source=destination if source is None else source,
        byte_count=byte_count,
        immediate=immediate,
    )


def _data(rest):
    values = []
    for token in filter(None, re.split(r"[\s,]+", rest.strip())):
        digits = token[1:] if token.startswith("$") else token
        if not _HEX.fullmatch(digits) or len(digits) > 2:
            raise ParseError(f"Not a hexadecimal byte: {token}")
        values.append(int(digits, 16))
    return bytes(values)


def _instruction(text):
    head, _, rest = text.strip().partition(" ")
    mnemonic = _MNEMONICS.get(head.lower())
    if mnemonic is None:
        raise ParseError(f"Unknown instruction: {head}")
    if mnemonic is Mnemonic.DATA:
        return Instruction(mnemonic, _data(rest))

    args = [arg.strip() for arg in rest.split(",")] if rest.strip() else []
    if any(not arg for arg in args):
        raise ParseError(f"Empty argument in {text.strip()}")

    operand_type = mnemonic.operand_type
    if operand_type is RFormat:
        default = 1 if mnemonic is Mnemonic.MUL else 0
        operands = _r(args, text.strip(), default)
    elif operand_type is RSFormat:
        operands = _rs(args, text.strip())
    elif mnemonic is Mnemonic.LET:
        operands = _i(args, text.strip())
    elif mnemonic is Mnemonic.IF:
        operands = _if(args, text.strip())
    else:
        operands = _m(args, text.strip())
    return Instruction(mnemonic, operands)


def _line_statements(line):
    text = _COMMENT.sub("", line)
    definition = _DEFINITION.fullmatch(text)
    if definition:
        yield _label(definition)
        text = definition["rest"]
    if text.strip():
        yield _instruction(text)


def parse_program(source):
    """Parse assembly source into a Program, raising ParseError on bad input."""
    statements = []
    for number, line in enumerate(source.splitlines(), start=1):
        try:
            statements.extend(_line_statements(line))
        except ParseError as error:
            raise ParseError(error.message, line=number) from None
    return Program(statements)