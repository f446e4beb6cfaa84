"""Input data of a QR Code symbol: segments, headers and bit stream assembly."""

from __future__ import annotations

from .segments import (
    MAX_STRUCTURED_SYMBOLS,
    Entry,
    InputTooLargeError,
    append_num,
    bits_to_bytes,
)
from .spec import (
    VERSION_MAX,
    ECLevel,
    Mode,
    get_data_length,
    get_minimum_version,
)

_PAD_WORDS = (0xEC, 0x11)
_MAX_ECI = 999999


class QRInput:
    """A sequence of data segments plus the symbol version and ECC level.

    A version of 0 lets the encoder choose the smallest version that fits;
    a given version is raised automatically when the data needs more room.
    """

    def __init__(self, version: int = 0, level: int = ECLevel.L) -> None:
        self.version = version
        self.level = level
        self.entries: list[Entry] = []
        self._fnc1: Entry | None = None

    def __repr__(self) -> str:
        return (
            f"QRInput(version={self.version}, level={self.level.name}, "
            f"entries={len(self.entries)})"
        )

    @property
    def version(self) -> int:
        return self._version

    @version.setter
    def version(self, version: int) -> None:
        if not 0 <= version <= VERSION_MAX:
            raise ValueError(f"invalid version: {version}")
        self._version = version

    @property
    def level(self) -> ECLevel:
        return self._level

    @level.setter
    def level(self, level: int) -> None:
        try:
            self._level = ECLevel(level)
        except ValueError:
            raise ValueError(f"invalid error correction level: {level}") from None

    def append(self, mode: int, data: bytes) -> None:
        """Append a data segment; raise ValueError if the data is invalid for the mode."""
        self.entries.append(Entry(mode, data))

    def append_eci_header(self, ecinum: int) -> None:
        """Append an ECI header with designator ``ecinum`` (0 to 999999)."""
        if not 0 <= ecinum <= _MAX_ECI:
            raise ValueError(f"invalid ECI designator: {ecinum}")
        self.entries.append(Entry(Mode.ECI, ecinum.to_bytes(4, "little")))

    def insert_structured_append_header(self, size: int, number: int, parity: int) -> None:
        """Put a structured-append header in front of the data.

        ``size`` is the number of symbols in the set and ``number`` the
        1-based index of this symbol in it.
        """
        if size > MAX_STRUCTURED_SYMBOLS:
            raise ValueError(f"too many structured symbols: {size}")
        if number <= 0 or number > size:
            raise ValueError(f"invalid symbol number {number} of {size}")
        if not 0 <= parity <= 0xFF:
            raise ValueError(f"invalid parity: {parity}")
        self.entries.insert(0, Entry(Mode.STRUCTURE, bytes((size, number, parity))))

    def set_fnc1_first(self) -> None:
        """Mark the data as GS1 formatted (FNC1 in first position)."""
        self._fnc1 = Entry(Mode.FNC1FIRST, b"")

    def set_fnc1_second(self, appid: int) -> None:
        """Mark the data with FNC1 in second position and application id ``appid``."""
        if not 0 <= appid <= 0xFF:
            raise ValueError(f"invalid application indicator: {appid}")
        self._fnc1 = Entry(Mode.FNC1SECOND, bytes((appid,)))

    def copy(self) -> QRInput:
        """Copy version, level and segments; FNC1 settings are not carried over."""
        dup = QRInput(self.version, self.level)
        dup.entries = list(self.entries)
        return dup

    def parity(self) -> int:
        """XOR of every data byte, structured-append headers excluded."""
        value = 0
        for entry in self.entries:
            if entry.mode != Mode.STRUCTURE:
                for byte in entry.data:
                    value ^= byte
        return value

    def _entries_with_fnc1(self) -> list[Entry]:
        entries = list(self.entries)
        if self._fnc1 is None:
            return entries
        if entries and entries[0].mode in (Mode.STRUCTURE, Mode.ECI):
            entries.insert(1, self._fnc1)
        else:
            entries.insert(0, self._fnc1)
        return entries

    @staticmethod
    def _estimate(entries: list[Entry], version: int) -> int:
        return sum(entry.estimate_bits(version) for entry in entries)

    def _estimate_version(self, entries: list[Entry]) -> int:
        version = 0
        while True:
            prev = version
            bits = self._estimate(entries, prev)
            version = get_minimum_version((bits + 7) // 8, self.level)
            if prev == 0 and version > 1:
                version -= 1
            if version <= prev:
                return version

    def estimate_bit_stream_size(self, version: int) -> int:
        """Estimated length in bits of all segments encoded at ``version``."""
        return self._estimate(self.entries, version)

    def estimate_version(self) -> int:
        """Estimated minimum version needed for the segments."""
        return self._estimate_version(self.entries)

    def merge_bit_stream(self) -> list[int]:
        """Encode all segments into one bit list, raising the version as needed."""
        entries = self._entries_with_fnc1()
        estimated = self._estimate_version(entries)
        if estimated > self.version:
            self.version = estimated

        while True:
            bits: list[int] = []
            for entry in entries:
                bits.extend(entry.encode(self.version))
            needed = get_minimum_version((len(bits) + 7) // 8, self.level)
            if needed > self.version:
                self.version = needed
            else:
                return bits

    def _append_padding(self, bits: list[int]) -> None:
        maxwords = get_data_length(self.version, self.level)
        maxbits = maxwords * 8
        length = len(bits)
        if maxbits < length:
            raise InputTooLargeError(
                f"input needs {length} bits but the symbol holds {maxbits}"
            )
        if maxbits == length:
            return
        if maxbits - length <= 4:
            append_num(bits, maxbits - length, 0)
            return
        words = (length + 4 + 7) // 8
        append_num(bits, words * 8 - length, 0)
        for i in range(maxwords - words):
            append_num(bits, 8, _PAD_WORDS[i & 1])

    def get_bit_stream(self) -> list[int]:
        """Merged bit stream with terminator and pad codewords filling the symbol."""
        bits = self.merge_bit_stream()
        self._append_padding(bits)
        return bits

    def get_byte_stream(self) -> bytes:
        """Padded bit stream packed into data codewords."""
        return bits_to_bytes(self.get_bit_stream())