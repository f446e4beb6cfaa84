import pytest

from qrsymbol.qrinput import QRInput
from qrsymbol.segments import MAX_STRUCTURED_SYMBOLS, InputTooLargeError
from qrsymbol.spec import ECLevel, Mode, get_data_length
from qrsymbol.structured import StructuredInput, split_to_structured


def _input(data, mode=Mode.EIGHT, version=1, level=ECLevel.L):
    qr = QRInput(version, level)
    qr.append(mode, data)
    return qr


def _payload(part):
    return b"".join(e.data for e in part.entries if e.mode != Mode.STRUCTURE)


def test_empty_set():
    s = StructuredInput()
    assert len(s) == 0
    assert list(s) == []
    assert s.parity is None


def test_append_input_returns_count_and_keeps_order():
    s = StructuredInput()
    a = _input(b"abc")
    b = _input(b"def")
    assert s.append_input(a) == 1
    assert s.append_input(b) == 2
    assert list(s) == [a, b]


def test_calc_parity_xors_inputs():
    s = StructuredInput()
    a = _input(b"\x01\x02")
    b = _input(b"\x04")
    s.append_input(a)
    s.append_input(b)
    result = s.calc_parity()
    assert result == a.parity() ^ b.parity()
    assert s.parity == result


def test_headers_not_inserted_for_single_input():
    s = StructuredInput()
    a = _input(b"abc")
    s.append_input(a)
    s.insert_structured_append_headers()
    assert [e.mode for e in a.entries] == [Mode.EIGHT]


def test_headers_inserted_with_size_number_and_parity():
    s = StructuredInput()
    inputs = [_input(b"ab"), _input(b"cd"), _input(b"ef")]
    for qr in inputs:
        s.append_input(qr)
    s.insert_structured_append_headers()
    expected_parity = inputs[0].parity() ^ inputs[1].parity() ^ inputs[2].parity()
    assert s.parity == expected_parity
    for number, qr in enumerate(inputs, start=1):
        head = qr.entries[0]
        assert head.mode == Mode.STRUCTURE
        assert head.data == bytes((3, number, expected_parity))


def test_headers_use_preset_parity():
    s = StructuredInput()
    a, b = _input(b"ab"), _input(b"cd")
    s.append_input(a)
    s.append_input(b)
    s.parity = 0x5A
    s.insert_structured_append_headers()
    assert a.entries[0].data[2] == 0x5A
    assert b.entries[0].data[2] == 0x5A


def test_headers_rejected_for_too_many_inputs():
    s = StructuredInput()
    for _ in range(MAX_STRUCTURED_SYMBOLS + 1):
        s.append_input(_input(b"x"))
    with pytest.raises(ValueError):
        s.insert_structured_append_headers()


def test_split_requires_fixed_version():
    with pytest.raises(ValueError):
        split_to_structured(_input(b"abc", version=0))


def test_split_small_input_gives_single_symbol():
    qr = _input(b"hello")
    s = split_to_structured(qr)
    assert len(s) == 1
    (part,) = list(s)
    assert part.entries == qr.entries
    assert part.version == qr.version


@pytest.mark.parametrize(
    "mode,data,level",
    [
        (Mode.EIGHT, bytes(range(100)), ECLevel.L),
        (Mode.NUM, b"0123456789" * 30, ECLevel.M),
        (Mode.AN, b"HELLO WORLD $%*+-./:" * 8, ECLevel.Q),
        (Mode.KANJI, b"\x93\x5f" * 100, ECLevel.L),
    ],
)
def test_split_preserves_data_and_version(mode, data, level):
    qr = _input(data, mode=mode, level=level)
    original = list(qr.entries)
    s = split_to_structured(qr)

    assert len(s) > 1
    assert b"".join(_payload(part) for part in s) == data
    assert qr.entries == original
    assert qr.version == 1

    capacity = get_data_length(1, level) * 8
    for number, part in enumerate(s, start=1):
        head = part.entries[0]
        assert head.mode == Mode.STRUCTURE
        assert head.data == bytes((len(s), number, qr.parity()))
        bits = part.get_bit_stream()
        assert part.version == 1
        assert len(bits) == capacity


def test_split_keeps_multiple_segments_in_order():
    qr = QRInput(2, ECLevel.L)
    qr.append(Mode.NUM, b"12345678901234567890")
    qr.append(Mode.EIGHT, b"abcdefghijklmnopqrstuvwxyz" * 3)
    qr.append(Mode.AN, b"ABCDEFGHIJ")
    s = split_to_structured(qr)
    joined = b"".join(_payload(part) for part in s)
    assert joined == b"".join(e.data for e in qr.entries)
    assert all(part.version == 2 for part in s)


def test_split_too_large_raises():
    qr = _input(bytes(2000), level=ECLevel.H)
    with pytest.raises(InputTooLargeError):
        split_to_structured(qr)
    assert issubclass(InputTooLargeError, ValueError)