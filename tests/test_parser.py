import pytest

from kittyasm.parser import DEFAULT_BYTE_COUNT, ParseError, parse_program, parse_register
from kittyasm.syntax import (
    IFFormat,
    IFormat,
    Instruction,
    Label,
    LabelByte,
    LabelBytes,
    MFormat,
    Mnemonic,
    Register,
    RFormat,
    RSFormat,
)


def only(source):
    statements = parse_program(source).statements
    assert len(statements) == 1
    return statements[0]


@pytest.mark.parametrize(
    "text, register",
    [("r0", Register.R0), ("r9", Register.R9), ("rA", Register.RA), ("RF", Register.RF), ("rc", Register.RC)],
)
def test_parse_register(text, register):
    assert parse_register(text) is register


@pytest.mark.parametrize("text", ["r", "r10", "rg", "x1", ""])
def test_parse_register_rejects(text):
    with pytest.raises(ParseError):
        parse_register(text)


def test_r_defaults():
    assert only("add r1, r2") == Instruction(
        Mnemonic.ADD, RFormat(Register.R1, Register.R2, Register.R0, 0)
    )


def test_mul_default_immediate_is_one():
    assert only("mul r3, r4").operands.immediate == 1


def test_and_default_immediate_is_zero():
    assert only("and r3, r4").operands.immediate == 0


def test_r_immediate_only_uses_destination_as_source():
    assert only("sub r5, $10").operands == RFormat(Register.R5, Register.R5, Register.R0, 0x10)


def test_r_full_form():
    assert only("xor r1, r2, r3, %101").operands == RFormat(
        Register.R1, Register.R2, Register.R3, 0b101
    )


def test_r_label_byte():
    assert only("or r1, r2, .table[1]").operands.immediate == LabelByte(Label("table", local=True), 1)


@pytest.mark.parametrize("source", ["add r1", "add r1, 256", "add r1, r2, foo[0:1]", "add r1, r2, r3, 4, 5"])
def test_r_errors(source):
    with pytest.raises(ParseError):
        parse_program(source)


@pytest.mark.parametrize(
    "mnemonic, expected",
    [
        ("shl", Mnemonic.SHIFT_LEFT),
        ("shr", Mnemonic.SHIFT_RIGHT),
        ("rotl", Mnemonic.ROTATE_LEFT),
        ("rotr", Mnemonic.ROTATE_RIGHT),
        ("ashr", Mnemonic.ARITHMETIC_SHIFT_RIGHT),
    ],
)
def test_shift_mnemonics(mnemonic, expected):
    assert only(f"{mnemonic} r1, r2, r3, 8") == Instruction(
        expected, RSFormat(Register.R1, Register.R2, Register.R3, 8)
    )


def test_shift_immediate_out_of_range():
    with pytest.raises(ParseError):
        parse_program("shl r1, 32")


def test_let_constant():
    assert only("let r1, $FC84") == Instruction(Mnemonic.LET, IFormat(Register.R1, 0xFC84))


def test_let_byte_range():
    assert only("let r2, main[0:1]").operands.immediate == LabelBytes(Label("main"), 0, 2)


def test_let_single_byte_length_follows_index():
    assert only("let r2, main[1]").operands.immediate == LabelBytes(Label("main"), 1, 1)


@pytest.mark.parametrize("source", ["let r1, -1", "let r1, 65536", "let r1, main", "let r1"])
def test_let_errors(source):
    with pytest.raises(ParseError):
        parse_program(source)


def test_if_with_register_and_label():
    assert only("if r4, .loop") == Instruction(Mnemonic.IF, IFFormat(Register.R4, Label("loop", local=True)))


def test_if_without_register_uses_r0():
    assert only("if done").operands == IFFormat(Register.R0, Label("done"))


def test_if_negative_number_wraps():
    assert only("if r1, -1").operands.immediate == 0xFFFF


def test_load_no_arguments():
    assert only("ld r1") == Instruction(Mnemonic.LOAD, MFormat(Register.R1, Register.R1, DEFAULT_BYTE_COUNT, 0))


def test_load_source_only():
    assert only("ld r1, r2").operands == MFormat(Register.R1, Register.R2, DEFAULT_BYTE_COUNT, 0)


def test_store_full_form():
    assert only("st r1, r4, 15, 2").operands == MFormat(Register.R1, Register.R4, 2, 15)


def test_load_immediate_only_gives_zero_byte_count():
    operands = only("ld r1, -4").operands
    assert operands.source is Register.R1
    assert operands.byte_count == 0
    assert operands.immediate == (-4) & 0xFFFF


def test_data_bytes():
    assert only("data $01, FF 7f") == Instruction(Mnemonic.DATA, bytes([0x01, 0xFF, 0x7F]))


def test_data_rejects_non_hex():
    with pytest.raises(ParseError):
        parse_program("data 1G")


def test_program_with_labels_and_comments():
    program = parse_program(
        "main: ; entry\n"
        "  add r1, r2 // sum\n"
        ".loop:\n"
        "  if r1, .loop\n"
    )
    assert program.statements == [
        Label("main"),
        Instruction(Mnemonic.ADD, RFormat(Register.R1, Register.R2, Register.R0, 0)),
        Label("loop", local=True),
        Instruction(Mnemonic.IF, IFFormat(Register.R1, Label("loop", local=True))),
    ]
    assert list(program.labels()) == [Label("main"), Label("loop", local=True)]


def test_label_and_instruction_on_one_line():
    statements = parse_program("start: let r1, 5").statements
    assert statements == [Label("start"), Instruction(Mnemonic.LET, IFormat(Register.R1, 5))]


def test_mnemonics_are_case_insensitive():
    assert only("ADD r1, r2").mnemonic is Mnemonic.ADD


def test_error_reports_line_number():
    with pytest.raises(ParseError) as info:
        parse_program("add r1, r2\nbogus r1\n")
    assert info.value.line == 2


def test_empty_source_gives_empty_program():
    assert len(parse_program("\n; nothing\n")) == 0