"""QR Code symbol specification: capacities, ECC blocks, patterns and frames."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

VERSION_MAX = 40
WIDTH_MAX = 177

MODEID_ECI = 7
MODEID_NUM = 1
MODEID_AN = 2
MODEID_8 = 4
MODEID_KANJI = 8
MODEID_FNC1FIRST = 5
MODEID_FNC1SECOND = 9
MODEID_STRUCTURE = 3
MODEID_TERMINATOR = 0


class Mode(IntEnum):
    """Encoding mode of a data segment."""

    NUL = -1
    NUM = 0
    AN = 1
    EIGHT = 2
    KANJI = 3
    STRUCTURE = 4
    ECI = 5
    FNC1FIRST = 6
    FNC1SECOND = 7


class ECLevel(IntEnum):
    """Error correction level."""

    L = 0
    M = 1
    Q = 2
    H = 3


# (width, data capacity in bytes, remainder bits, ECC bytes per level)
_CAPACITY: tuple[tuple[int, int, int, tuple[int, int, int, int]], ...] = (
    (0, 0, 0, (0, 0, 0, 0)),
    (21, 26, 0, (7, 10, 13, 17)),
    (25, 44, 7, (10, 16, 22, 28)),
    (29, 70, 7, (15, 26, 36, 44)),
    (33, 100, 7, (20, 36, 52, 64)),
    (37, 134, 7, (26, 48, 72, 88)),
    (41, 172, 7, (36, 64, 96, 112)),
    (45, 196, 0, (40, 72, 108, 130)),
    (49, 242, 0, (48, 88, 132, 156)),
    (53, 292, 0, (60, 110, 160, 192)),
    (57, 346, 0, (72, 130, 192, 224)),
    (61, 404, 0, (80, 150, 224, 264)),
    (65, 466, 0, (96, 176, 260, 308)),
    (69, 532, 0, (104, 198, 288, 352)),
    (73, 581, 3, (120, 216, 320, 384)),
    (77, 655, 3, (132, 240, 360, 432)),
    (81, 733, 3, (144, 280, 408, 480)),
    (85, 815, 3, (168, 308, 448, 532)),
    (89, 901, 3, (180, 338, 504, 588)),
    (93, 991, 3, (196, 364, 546, 650)),
    (97, 1085, 3, (224, 416, 600, 700)),
    (101, 1156, 4, (224, 442, 644, 750)),
    (105, 1258, 4, (252, 476, 690, 816)),
    (109, 1364, 4, (270, 504, 750, 900)),
    (113, 1474, 4, (300, 560, 810, 960)),
    (117, 1588, 4, (312, 588, 870, 1050)),
    (121, 1706, 4, (336, 644, 952, 1110)),
    (125, 1828, 4, (360, 700, 1020, 1200)),
    (129, 1921, 3, (390, 728, 1050, 1260)),
    (133, 2051, 3, (420, 784, 1140, 1350)),
    (137, 2185, 3, (450, 812, 1200, 1440)),
    (141, 2323, 3, (480, 868, 1290, 1530)),
    (145, 2465, 3, (510, 924, 1350, 1620)),
    (149, 2611, 3, (540, 980, 1440, 1710)),
    (153, 2761, 3, (570, 1036, 1530, 1800)),
    (157, 2876, 0, (570, 1064, 1590, 1890)),
    (161, 3034, 0, (600, 1120, 1680, 1980)),
    (165, 3196, 0, (630, 1204, 1770, 2100)),
    (169, 3362, 0, (660, 1260, 1860, 2220)),
    (173, 3532, 0, (720, 1316, 1950, 2310)),
    (177, 3706, 0, (750, 1372, 2040, 2430)),
)

_LENGTH_TABLE_BITS = (
    (10, 12, 14),
    (9, 11, 13),
    (8, 16, 16),
    (8, 10, 12),
)

# Number of type-1 and type-2 Reed-Solomon blocks per version and level.
_ECC_TABLE: tuple[tuple[tuple[int, int], ...], ...] = (
    ((0, 0), (0, 0), (0, 0), (0, 0)),
    ((1, 0), (1, 0), (1, 0), (1, 0)),
    ((1, 0), (1, 0), (1, 0), (1, 0)),
    ((1, 0), (1, 0), (2, 0), (2, 0)),
    ((1, 0), (2, 0), (2, 0), (4, 0)),
    ((1, 0), (2, 0), (2, 2), (2, 2)),
    ((2, 0), (4, 0), (4, 0), (4, 0)),
    ((2, 0), (4, 0), (2, 4), (4, 1)),
    ((2, 0), (2, 2), (4, 2), (4, 2)),
    ((2, 0), (3, 2), (4, 4), (4, 4)),
    ((2, 2), (4, 1), (6, 2), (6, 2)),
    ((4, 0), (1, 4), (4, 4), (3, 8)),
    ((2, 2), (6, 2), (4, 6), (7, 4)),
    ((4, 0), (8, 1), (8, 4), (12, 4)),
    ((3, 1), (4, 5), (11, 5), (11, 5)),
    ((5, 1), (5, 5), (5, 7), (11, 7)),
    ((5, 1), (7, 3), (15, 2), (3, 13)),
    ((1, 5), (10, 1), (1, 15), (2, 17)),
    ((5, 1), (9, 4), (17, 1), (2, 19)),
    ((3, 4), (3, 11), (17, 4), (9, 16)),
    ((3, 5), (3, 13), (15, 5), (15, 10)),
    ((4, 4), (17, 0), (17, 6), (19, 6)),
    ((2, 7), (17, 0), (7, 16), (34, 0)),
    ((4, 5), (4, 14), (11, 14), (16, 14)),
    ((6, 4), (6, 14), (11, 16), (30, 2)),
    ((8, 4), (8, 13), (7, 22), (22, 13)),
    ((10, 2), (19, 4), (28, 6), (33, 4)),
    ((8, 4), (22, 3), (8, 26), (12, 28)),
    ((3, 10), (3, 23), (4, 31), (11, 31)),
    ((7, 7), (21, 7), (1, 37), (19, 26)),
    ((5, 10), (19, 10), (15, 25), (23, 25)),
    ((13, 3), (2, 29), (42, 1), (23, 28)),
    ((17, 0), (10, 23), (10, 35), (19, 35)),
    ((17, 1), (14, 21), (29, 19), (11, 46)),
    ((13, 6), (14, 23), (44, 7), (59, 1)),
    ((12, 7), (12, 26), (39, 14), (22, 41)),
    ((6, 14), (6, 34), (46, 10), (2, 64)),
    ((17, 4), (29, 14), (49, 10), (24, 46)),
    ((4, 18), (13, 32), (48, 14), (42, 32)),
    ((20, 4), (40, 7), (43, 22), (10, 67)),
    ((19, 6), (18, 31), (34, 34), (20, 61)),
)

# Second and third alignment pattern positions; the rest follow by spacing.
_ALIGNMENT_PATTERN: tuple[tuple[int, int], ...] = (
    (0, 0),
    (0, 0), (18, 0), (22, 0), (26, 0), (30, 0),
    (34, 0), (22, 38), (24, 42), (26, 46), (28, 50),
    (30, 54), (32, 58), (34, 62), (26, 46), (26, 48),
    (26, 50), (30, 54), (30, 56), (30, 58), (34, 62),
    (28, 50), (26, 50), (30, 54), (28, 54), (32, 58),
    (30, 58), (34, 62), (26, 50), (30, 54), (26, 52),
    (30, 56), (34, 60), (30, 58), (34, 62), (30, 54),
    (24, 50), (28, 54), (32, 58), (26, 54), (30, 58),
)

_VERSION_PATTERN = (
    0x07C94, 0x085BC, 0x09A99, 0x0A4D3, 0x0BBF6, 0x0C762, 0x0D847, 0x0E60D,
    0x0F928, 0x10B78, 0x1145D, 0x12A17, 0x13532, 0x149A6, 0x15683, 0x168C9,
    0x177EC, 0x18EC4, 0x191E1, 0x1AFAB, 0x1B08E, 0x1CC1A, 0x1D33F, 0x1ED75,
    0x1F250, 0x209D5, 0x216F0, 0x228BA, 0x2379F, 0x24B0B, 0x2542E, 0x26A64,
    0x27541, 0x28C69,
)

_FORMAT_INFO = (
    (0x77C4, 0x72F3, 0x7DAA, 0x789D, 0x662F, 0x6318, 0x6C41, 0x6976),
    (0x5412, 0x5125, 0x5E7C, 0x5B4B, 0x45F9, 0x40CE, 0x4F97, 0x4AA0),
    (0x355F, 0x3068, 0x3F31, 0x3A06, 0x24B4, 0x2183, 0x2EDA, 0x2BED),
    (0x1689, 0x13BE, 0x1CE7, 0x19D0, 0x0762, 0x0255, 0x0D0C, 0x083B),
)

_FINDER = (
    (0xC1, 0xC1, 0xC1, 0xC1, 0xC1, 0xC1, 0xC1),
    (0xC1, 0xC0, 0xC0, 0xC0, 0xC0, 0xC0, 0xC1),
    (0xC1, 0xC0, 0xC1, 0xC1, 0xC1, 0xC0, 0xC1),
    (0xC1, 0xC0, 0xC1, 0xC1, 0xC1, 0xC0, 0xC1),
    (0xC1, 0xC0, 0xC1, 0xC1, 0xC1, 0xC0, 0xC1),
    (0xC1, 0xC0, 0xC0, 0xC0, 0xC0, 0xC0, 0xC1),
    (0xC1, 0xC1, 0xC1, 0xC1, 0xC1, 0xC1, 0xC1),
)

_ALIGNMENT_MARKER = (
    (0xA1, 0xA1, 0xA1, 0xA1, 0xA1),
    (0xA1, 0xA0, 0xA0, 0xA0, 0xA1),
    (0xA1, 0xA0, 0xA1, 0xA0, 0xA1),
    (0xA1, 0xA0, 0xA0, 0xA0, 0xA1),
    (0xA1, 0xA1, 0xA1, 0xA1, 0xA1),
)


@dataclass(frozen=True)
class EccSpec:
    """Reed-Solomon block layout of a symbol."""

    b1: int
    data1: int
    ecc: int
    b2: int
    data2: int

    @property
    def ecc1(self) -> int:
        return self.ecc

    @property
    def ecc2(self) -> int:
        return self.ecc

    def block_num(self) -> int:
        """Total number of RS blocks."""
        return self.b1 + self.b2

    def data_length(self) -> int:
        """Total number of data codewords."""
        return self.b1 * self.data1 + self.b2 * self.data2

    def ecc_length(self) -> int:
        """Total number of ECC codewords."""
        return self.block_num() * self.ecc


def _check_version(version: int) -> int:
    if not 0 <= version <= VERSION_MAX:
        raise ValueError(f"invalid version: {version}")
    return version


def _level(level: int) -> ECLevel:
    try:
        return ECLevel(level)
    except ValueError:
        raise ValueError(f"invalid error correction level: {level}") from None


def is_splittable_mode(mode: int) -> bool:
    """True for the modes that carry a length indicator (NUM to KANJI)."""
    return Mode.NUM <= mode <= Mode.KANJI


def get_data_length(version: int, level: int) -> int:
    """Maximum number of data codewords for a version and level."""
    width, words, _, ec = _CAPACITY[_check_version(version)]
    return words - ec[_level(level)]


def get_ecc_length(version: int, level: int) -> int:
    """Number of ECC codewords for a version and level."""
    return _CAPACITY[_check_version(version)][3][_level(level)]


def get_minimum_version(size: int, level: int) -> int:
    """Smallest version holding ``size`` data bytes; the maximum if none does."""
    lv = _level(level)
    for version in range(1, VERSION_MAX + 1):
        _, words, _, ec = _CAPACITY[version]
        if words - ec[lv] >= size:
            return version
    return VERSION_MAX


def get_width(version: int) -> int:
    """Edge length of the symbol in modules."""
    return _CAPACITY[_check_version(version)][0]


def get_remainder(version: int) -> int:
    """Number of remainder bits."""
    return _CAPACITY[_check_version(version)][2]


def _length_bits(mode: int, version: int) -> int:
    if version <= 9:
        column = 0
    elif version <= 26:
        column = 1
    else:
        column = 2
    return _LENGTH_TABLE_BITS[mode][column]


def length_indicator(mode: int, version: int) -> int:
    """Size in bits of the length indicator; 0 for non-splittable modes."""
    if not is_splittable_mode(mode):
        return 0
    return _length_bits(mode, version)


def maximum_words(mode: int, version: int) -> int:
    """Maximum segment length in bytes; 0 for non-splittable modes."""
    if not is_splittable_mode(mode):
        return 0
    words = (1 << _length_bits(mode, version)) - 1
    if mode == Mode.KANJI:
        words *= 2
    return words


def get_ecc_spec(version: int, level: int) -> EccSpec:
    """RS block layout for a version and level."""
    lv = _level(level)
    b1, b2 = _ECC_TABLE[_check_version(version)][lv]
    data = get_data_length(version, lv)
    ecc = get_ecc_length(version, lv)
    if b2 == 0:
        return EccSpec(b1, data // b1, ecc // b1, 0, 0)
    data1 = data // (b1 + b2)
    return EccSpec(b1, data1, ecc // (b1 + b2), b2, data1 + 1)


def get_version_pattern(version: int) -> int:
    """BCH-coded version information (18 bits); 0 below version 7."""
    if version < 7 or version > VERSION_MAX:
        return 0
    return _VERSION_PATTERN[version - 7]


def get_format_info(mask: int, level: int) -> int:
    """BCH-coded format information; 0 for an invalid mask."""
    if mask < 0 or mask > 7:
        return 0
    return _FORMAT_INFO[_level(level)][mask]


def _put_block(frame: bytearray, width: int, ox: int, oy: int, block) -> None:
    for dy, row in enumerate(block):
        start = (oy + dy) * width + ox
        frame[start:start + len(row)] = bytes(row)


def _put_alignment_marker(frame: bytearray, width: int, cx: int, cy: int) -> None:
    _put_block(frame, width, cx - 2, cy - 2, _ALIGNMENT_MARKER)


def _put_alignment_pattern(version: int, frame: bytearray, width: int) -> None:
    if version < 2:
        return
    first, second = _ALIGNMENT_PATTERN[version]
    d = second - first
    w = 2 if d < 0 else (width - first) // d + 2

    if w * w - 3 == 1:
        _put_alignment_marker(frame, width, first, first)
        return

    for c in range(first, first + d * (w - 2), d):
        _put_alignment_marker(frame, width, 6, c)
        _put_alignment_marker(frame, width, c, 6)

    positions = [first + d * k for k in range(w - 1)]
    for cy in positions:
        for cx in positions:
            _put_alignment_marker(frame, width, cx, cy)


def new_frame(version: int) -> bytearray:
    """Return a fresh frame with function patterns laid out, row-major."""
    if not 1 <= version <= VERSION_MAX:
        raise ValueError(f"invalid version: {version}")

    width = _CAPACITY[version][0]
    frame = bytearray(width * width)

    # Finder patterns
    _put_block(frame, width, 0, 0, _FINDER)
    _put_block(frame, width, width - 7, 0, _FINDER)
    _put_block(frame, width, 0, width - 7, _FINDER)

    # Separators
    for y in range(7):
        frame[y * width + 7] = 0xC0
        frame[y * width + width - 8] = 0xC0
        frame[(width - 7 + y) * width + 7] = 0xC0
    frame[width * 7:width * 7 + 8] = b"\xc0" * 8
    frame[width * 8 - 8:width * 8] = b"\xc0" * 8
    frame[width * (width - 8):width * (width - 8) + 8] = b"\xc0" * 8

    # Reserve format information area
    frame[width * 8:width * 8 + 9] = b"\x84" * 9
    frame[width * 9 - 8:width * 9] = b"\x84" * 8
    for y in range(8):
        frame[y * width + 8] = 0x84
    for y in range(width - 7, width):
        frame[y * width + 8] = 0x84

    # Timing patterns
    for x in range(1, width - 15):
        value = 0x90 | (x & 1)
        frame[width * 6 + 7 + x] = value
        frame[(7 + x) * width + 6] = value

    _put_alignment_pattern(version, frame, width)

    # Version information
    if version >= 7:
        verinfo = get_version_pattern(version)
        v = verinfo
        for x in range(6):
            for y in range(3):
                frame[(width - 11 + y) * width + x] = 0x88 | (v & 1)
                v >>= 1
        v = verinfo
        for y in range(6):
            for x in range(3):
                frame[y * width + width - 11 + x] = 0x88 | (v & 1)
                v >>= 1

    # Dark module
    frame[width * (width - 8) + 8] = 0x81

    return frame