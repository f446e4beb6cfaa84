import pytest

from qrsymbol.qrinput import QRInput
from qrsymbol.segments import InputTooLargeError, append_num, bits_to_bytes
from qrsymbol.spec import ECLevel, Mode, get_data_length


def _bits(text):
    return [int(c) for c in text if c != " "]


def test_numeric_worked_example_bits():
    q = QRInput(1, ECLevel.M)
    q.append(Mode.NUM, b"01234567")
    bits = q.merge_bit_stream()
    assert bits == _bits("0001 0000001000 0000001100 0101011001 1000011")


def test_numeric_worked_example_codewords():
    q = QRInput(1, ECLevel.M)
    q.append(Mode.NUM, b"01234567")
    data = q.get_byte_stream()
    expected = bytes([0x10, 0x20, 0x0C, 0x56, 0x61, 0x80]) + bytes([0xEC, 0x11] * 5)
    assert data == expected


def test_estimate_matches_encoded_length():
    q = QRInput()
    q.append(Mode.NUM, b"01234567")
    assert q.estimate_bit_stream_size(1) == len(q.merge_bit_stream())


def test_estimate_version_small_input():
    q = QRInput()
    q.append(Mode.AN, b"HELLO WORLD")
    assert q.estimate_version() == 1


def test_bit_stream_fills_symbol():
    q = QRInput(0, ECLevel.Q)
    q.append(Mode.EIGHT, b"some arbitrary text")
    bits = q.get_bit_stream()
    assert len(bits) == get_data_length(q.version, q.level) * 8


def test_version_raised_automatically():
    q = QRInput(1, ECLevel.L)
    q.append(Mode.EIGHT, bytes(range(100)))
    bits = q.get_bit_stream()
    assert q.version > 1
    assert len(bits) == get_data_length(q.version, q.level) * 8


def test_input_too_large():
    q = QRInput(0, ECLevel.H)
    q.append(Mode.EIGHT, bytes(2000))
    with pytest.raises(InputTooLargeError):
        q.get_bit_stream()


def test_invalid_version_and_level():
    with pytest.raises(ValueError):
        QRInput(41)
    with pytest.raises(ValueError):
        QRInput(-1)
    with pytest.raises(ValueError):
        QRInput(1, 4)
    q = QRInput()
    with pytest.raises(ValueError):
        q.version = 50


def test_append_rejects_invalid_data():
    q = QRInput()
    with pytest.raises(ValueError):
        q.append(Mode.NUM, b"12a")
    with pytest.raises(ValueError):
        q.append(Mode.AN, b"abc")
    with pytest.raises(ValueError):
        q.append(Mode.KANJI, b"\x81")
    with pytest.raises(ValueError):
        q.append(Mode.EIGHT, b"")
    assert q.entries == []


def test_eci_header_bits():
    q = QRInput()
    q.append_eci_header(9)
    q.append(Mode.EIGHT, b"A")
    bits = q.merge_bit_stream()
    expected = []
    append_num(expected, 4, 7)
    append_num(expected, 8, 9)
    assert bits[:12] == expected


def test_eci_header_range():
    q = QRInput()
    with pytest.raises(ValueError):
        q.append_eci_header(1000000)
    with pytest.raises(ValueError):
        q.append_eci_header(-1)


def test_structured_append_header_bits():
    q = QRInput()
    q.append(Mode.EIGHT, b"x")
    q.insert_structured_append_header(4, 2, 0xAB)
    assert q.entries[0].mode == Mode.STRUCTURE
    bits = q.merge_bit_stream()
    expected = []
    append_num(expected, 4, 3)
    append_num(expected, 4, 1)
    append_num(expected, 4, 3)
    append_num(expected, 8, 0xAB)
    assert bits[:20] == expected


@pytest.mark.parametrize("size,number", [(17, 1), (4, 0), (4, 5)])
def test_structured_append_header_invalid(size, number):
    q = QRInput()
    with pytest.raises(ValueError):
        q.insert_structured_append_header(size, number, 0)


def test_parity_ignores_structure_header():
    q = QRInput()
    q.append(Mode.EIGHT, b"\x01\x02")
    q.append(Mode.NUM, b"0")
    before = q.parity()
    assert before == 0x01 ^ 0x02 ^ ord("0")
    q.insert_structured_append_header(2, 1, 0xFF)
    assert q.parity() == before


def test_fnc1_second_placed_after_eci():
    q = QRInput()
    q.append_eci_header(9)
    q.append(Mode.EIGHT, b"A")
    q.set_fnc1_second(0x25)
    bits = q.merge_bit_stream()
    expected = []
    append_num(expected, 4, 9)
    append_num(expected, 8, 0x25)
    assert bits[12:24] == expected


def test_fnc1_second_placed_first():
    q = QRInput()
    q.append(Mode.EIGHT, b"A")
    q.set_fnc1_second(0x25)
    bits = q.merge_bit_stream()
    assert bits_to_bytes(bits[:12] + [0, 0, 0, 0]) == bytes([0x92, 0x50])


def test_fnc1_not_inserted_twice():
    q = QRInput()
    q.append(Mode.EIGHT, b"data")
    q.set_fnc1_second(1)
    first = q.merge_bit_stream()
    second = q.merge_bit_stream()
    assert first == second
    assert len(q.entries) == 1


def test_fnc1_second_invalid_appid():
    q = QRInput()
    with pytest.raises(ValueError):
        q.set_fnc1_second(256)


def test_copy_is_independent_and_drops_fnc1():
    q = QRInput(3, ECLevel.H)
    q.append(Mode.EIGHT, b"abc")
    q.set_fnc1_second(7)
    dup = q.copy()
    assert dup.version == 3
    assert dup.level == ECLevel.H
    assert dup.entries == q.entries
    dup.append(Mode.NUM, b"1")
    assert len(q.entries) == 1
    plain = QRInput(3, ECLevel.H)
    plain.append(Mode.EIGHT, b"abc")
    assert dup.copy().merge_bit_stream() == plain.copy().merge_bit_stream() + dup.entries[1].encode(3)


def test_empty_input_is_all_padding():
    q = QRInput(1, ECLevel.L)
    data = q.get_byte_stream()
    assert data[0] == 0
    assert len(data) == get_data_length(1, ECLevel.L)
    assert data[1:3] == bytes([0xEC, 0x11])