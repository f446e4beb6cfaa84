"""Data segments of a QR Code input and their conversion to bit sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from .spec import (
    MODEID_8,
    MODEID_AN,
    MODEID_ECI,
    MODEID_FNC1SECOND,
    MODEID_KANJI,
    MODEID_NUM,
    MODEID_STRUCTURE,
    Mode,
    length_indicator,
    maximum_words,
)

MODE_INDICATOR_SIZE = 4
STRUCTURE_HEADER_SIZE = 20
MAX_STRUCTURED_SYMBOLS = 16

AN_CHARACTERS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_AN_INDEX = {ord(ch): i for i, ch in enumerate(AN_CHARACTERS)}


class InputTooLargeError(ValueError):
    """The input data does not fit in the symbol."""


def look_an_table(c: int | str) -> int:
    """Alphanumeric code of a character, or -1 if it has none."""
    if isinstance(c, str):
        c = ord(c)
    if c < 0 or c & 0x80:
        return -1
    return _AN_INDEX.get(c, -1)


def append_num(bits: list[int], width: int, value: int) -> None:
    """Append the low ``width`` bits of ``value`` to ``bits``, MSB first."""
    bits.extend((value >> i) & 1 for i in range(width - 1, -1, -1))


def bits_to_bytes(bits: Iterable[int]) -> bytes:
    """Pack bits MSB first into bytes, zero-padding the last byte."""
    bits = list(bits)
    out = bytearray()
    for start in range(0, len(bits), 8):
        chunk = bits[start:start + 8]
        byte = 0
        for b in chunk:
            byte = (byte << 1) | (b & 1)
        out.append(byte << (8 - len(chunk)))
    return bytes(out)


def _check_kanji(data: bytes) -> bool:
    if len(data) % 2:
        return False
    for hi, lo in zip(data[::2], data[1::2]):
        val = (hi << 8) | lo
        if val < 0x8140 or 0x9FFC < val < 0xE040 or val > 0xEBBF:
            return False
    return True


def check(mode: int, data: bytes) -> bool:
    """True if ``data`` is valid for ``mode``."""
    size = len(data)
    if mode == Mode.FNC1FIRST:
        return True
    if size <= 0:
        return False
    if mode == Mode.NUM:
        return all(0x30 <= c <= 0x39 for c in data)
    if mode == Mode.AN:
        return all(look_an_table(c) >= 0 for c in data)
    if mode == Mode.KANJI:
        return _check_kanji(data)
    if mode in (Mode.EIGHT, Mode.STRUCTURE, Mode.ECI):
        return True
    if mode == Mode.FNC1SECOND:
        return size == 1
    return False


def estimate_bits_mode_num(size: int) -> int:
    """Bits needed for ``size`` numeric digits (without header)."""
    words, rest = divmod(size, 3)
    return words * 10 + {1: 4, 2: 7}.get(rest, 0)


def estimate_bits_mode_an(size: int) -> int:
    """Bits needed for ``size`` alphanumeric characters (without header)."""
    return (size // 2) * 11 + (6 if size & 1 else 0)


def estimate_bits_mode_8(size: int) -> int:
    """Bits needed for ``size`` bytes of 8-bit data (without header)."""
    return size * 8


def estimate_bits_mode_kanji(size: int) -> int:
    """Bits needed for ``size`` bytes of Shift-JIS kanji (without header)."""
    return (size // 2) * 13


def _decode_eci(data: bytes) -> int:
    return int.from_bytes(data[:4], "little")


def _estimate_bits_eci(data: bytes) -> int:
    ecinum = _decode_eci(data)
    if ecinum < 128:
        return MODE_INDICATOR_SIZE + 8
    if ecinum < 16384:
        return MODE_INDICATOR_SIZE + 16
    return MODE_INDICATOR_SIZE + 24


def length_of_code(mode: int, version: int, bits: int) -> int:
    """Largest data length in bytes of a ``mode`` segment fitting in ``bits``."""
    payload = bits - 4 - length_indicator(mode, version)
    if mode == Mode.NUM:
        chunks, remain = divmod(payload, 10)
        size = chunks * 3
        if remain >= 7:
            size += 2
        elif remain >= 4:
            size += 1
    elif mode == Mode.AN:
        chunks, remain = divmod(payload, 11)
        size = chunks * 2 + (1 if remain >= 6 else 0)
    elif mode in (Mode.EIGHT, Mode.STRUCTURE):
        size = payload // 8
    elif mode == Mode.KANJI:
        size = (payload // 13) * 2
    else:
        size = 0
    size = max(size, 0)
    maxsize = maximum_words(mode, version)
    if maxsize > 0:
        size = min(size, maxsize)
    return size


def _header(bits: list[int], mode_id: int, mode: Mode, version: int, count: int) -> None:
    append_num(bits, 4, mode_id)
    append_num(bits, length_indicator(mode, version), count)


def _encode_num(entry: Entry, bits: list[int], version: int) -> None:
    data = entry.data
    _header(bits, MODEID_NUM, Mode.NUM, version, len(data))
    full = len(data) - len(data) % 3
    for i in range(0, full, 3):
        append_num(bits, 10, int(data[i:i + 3]))
    rest = data[full:]
    if len(rest) == 1:
        append_num(bits, 4, int(rest))
    elif len(rest) == 2:
        append_num(bits, 7, int(rest))


def _encode_an(entry: Entry, bits: list[int], version: int) -> None:
    data = entry.data
    _header(bits, MODEID_AN, Mode.AN, version, len(data))
    for first, second in zip(data[::2], data[1::2]):
        append_num(bits, 11, look_an_table(first) * 45 + look_an_table(second))
    if len(data) & 1:
        append_num(bits, 6, look_an_table(data[-1]))


def _encode_8(entry: Entry, bits: list[int], version: int) -> None:
    _header(bits, MODEID_8, Mode.EIGHT, version, len(entry.data))
    for byte in entry.data:
        append_num(bits, 8, byte)


def _encode_kanji(entry: Entry, bits: list[int], version: int) -> None:
    data = entry.data
    _header(bits, MODEID_KANJI, Mode.KANJI, version, len(data) // 2)
    for hi, lo in zip(data[::2], data[1::2]):
        val = (hi << 8) | lo
        val -= 0x8140 if val <= 0x9FFC else 0xC140
        append_num(bits, 13, (val >> 8) * 0xC0 + (val & 0xFF))


def _encode_structure(entry: Entry, bits: list[int], version: int) -> None:
    size, number, parity = entry.data[0], entry.data[1], entry.data[2]
    append_num(bits, 4, MODEID_STRUCTURE)
    append_num(bits, 4, number - 1)
    append_num(bits, 4, size - 1)
    append_num(bits, 8, parity)


def _encode_eci(entry: Entry, bits: list[int], version: int) -> None:
    ecinum = _decode_eci(entry.data)
    if ecinum < 128:
        words, code = 1, ecinum
    elif ecinum < 16384:
        words, code = 2, 0x8000 + ecinum
    else:
        words, code = 3, 0xC0000 + ecinum
    append_num(bits, 4, MODEID_ECI)
    append_num(bits, words * 8, code)


def _encode_fnc1_second(entry: Entry, bits: list[int], version: int) -> None:
    append_num(bits, 4, MODEID_FNC1SECOND)
    append_num(bits, 8, entry.data[0])


_ENCODERS: dict[Mode, Callable[["Entry", list[int], int], None]] = {
    Mode.NUM: _encode_num,
    Mode.AN: _encode_an,
    Mode.EIGHT: _encode_8,
    Mode.KANJI: _encode_kanji,
    Mode.STRUCTURE: _encode_structure,
    Mode.ECI: _encode_eci,
    Mode.FNC1SECOND: _encode_fnc1_second,
}


@dataclass(frozen=True)
class Entry:
    """One data segment: an encoding mode and its raw bytes."""

    mode: Mode
    data: bytes

    def __post_init__(self) -> None:
        try:
            mode = Mode(self.mode)
        except ValueError:
            raise ValueError(f"invalid mode: {self.mode}") from None
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "data", bytes(self.data))
        if not check(mode, self.data):
            raise ValueError(f"invalid data for mode {mode.name}")

    @property
    def size(self) -> int:
        return len(self.data)

    def estimate_bits(self, version: int) -> int:
        """Estimated length in bits of this segment encoded at ``version``."""
        if version == 0:
            version = 1
        mode = self.mode
        if mode == Mode.NUM:
            bits = estimate_bits_mode_num(self.size)
        elif mode == Mode.AN:
            bits = estimate_bits_mode_an(self.size)
        elif mode == Mode.EIGHT:
            bits = estimate_bits_mode_8(self.size)
        elif mode == Mode.KANJI:
            bits = estimate_bits_mode_kanji(self.size)
        elif mode == Mode.STRUCTURE:
            return STRUCTURE_HEADER_SIZE
        elif mode == Mode.ECI:
            bits = _estimate_bits_eci(self.data)
        elif mode == Mode.FNC1FIRST:
            return MODE_INDICATOR_SIZE
        elif mode == Mode.FNC1SECOND:
            return MODE_INDICATOR_SIZE + 8
        else:
            return 0

        l = length_indicator(mode, version)
        m = 1 << l
        count = self.size // 2 if mode == Mode.KANJI else self.size
        chunks = (count + m - 1) // m
        return bits + chunks * (MODE_INDICATOR_SIZE + l)

    def encode(self, version: int) -> list[int]:
        """Encode this segment at ``version``, splitting it if it is too long."""
        words = maximum_words(self.mode, version)
        if words and self.size > words:
            head, tail = self.split(words)
            return head.encode(version) + tail.encode(version)
        bits: list[int] = []
        encoder = _ENCODERS.get(self.mode)
        if encoder is not None:
            encoder(self, bits, version)
        return bits

    def split(self, nbytes: int) -> tuple[Entry, Entry]:
        """Split into two segments of the same mode at byte ``nbytes``."""
        if not 0 < nbytes < self.size:
            raise ValueError(f"cannot split {self.size} bytes at {nbytes}")
        return (
            Entry(self.mode, self.data[:nbytes]),
            Entry(self.mode, self.data[nbytes:]),
        )