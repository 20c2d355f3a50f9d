import pytest

from kittyasm.references import (
    Absolute16,
    Absolute8,
    AssemblyError,
    ByteRangeError,
    LabelNotFoundError,
    Relative16,
    resolve_reference,
)

LABELS = {"main": 0x123456, "main.loop": 0x000030, "start": 0}


def test_absolute16_two_bytes_low_word():
    address, data = resolve_reference(Absolute16(6, "main", 1, 2), LABELS)
    assert address == 7
    assert data == bytes([0x34, 0x56])


def test_absolute16_two_bytes_high_word():
    address, data = resolve_reference(Absolute16(0, "main", 0, 2), LABELS)
    assert address == 1
    assert data == bytes([0x12, 0x34])


def test_absolute16_single_byte_zeroes_high_byte():
    address, data = resolve_reference(Absolute16(3, "main", 1, 1), LABELS)
    assert address == 4
    assert data == bytes([0, 0x34])


def test_absolute16_rejects_long_range():
    with pytest.raises(ByteRangeError, match=r"Too large byte range: \[0:2\]"):
        resolve_reference(Absolute16(0, "main", 0, 3), LABELS)


def test_absolute16_rejects_index_past_address():
    with pytest.raises(ByteRangeError):
        resolve_reference(Absolute16(0, "main", 2, 2), LABELS)


def test_absolute8_selects_each_byte():
    label_address = LABELS["main"]
    expected = label_address.to_bytes(3, "big")
    for index in range(3):
        address, data = resolve_reference(Absolute8(9, "main", index), LABELS)
        assert address == 11
        assert data == expected[index : index + 1]


def test_absolute8_rejects_out_of_range_index():
    with pytest.raises(ByteRangeError):
        resolve_reference(Absolute8(0, "main", 3), LABELS)


@pytest.mark.parametrize("instruction_address", [0, 3, 0x30, 0x60, 0x1000])
def test_relative16_offset_round_trip(instruction_address):
    address, data = resolve_reference(Relative16(instruction_address, "main.loop"), LABELS)
    assert address == instruction_address + 1
    assert len(data) == 2
    assert int.from_bytes(data, "big", signed=True) == 0x30 - instruction_address


def test_relative16_backward_branch_is_twos_complement():
    _, data = resolve_reference(Relative16(1, "start"), LABELS)
    assert data == b"\xff\xff"


@pytest.mark.parametrize(
    "reference",
    [
        Absolute16(0, "missing", 0, 2),
        Absolute8(0, "missing", 0),
        Relative16(0, "missing"),
    ],
)
def test_missing_label(reference):
    with pytest.raises(LabelNotFoundError, match="Label not found: 'missing'") as info:
        resolve_reference(reference, LABELS)
    assert info.value.label == "missing"


def test_error_hierarchy():
    with pytest.raises(AssemblyError):
        resolve_reference(Relative16(0, "nowhere"), {})
    with pytest.raises(LookupError):
        resolve_reference(Relative16(0, "nowhere"), {})


def test_rejects_non_reference():
    with pytest.raises(TypeError):
        resolve_reference(("main", 0), LABELS)