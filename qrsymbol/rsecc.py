"""Reed-Solomon error correction encoder specialised for QR Code (GF(2^8), 0x11d)."""

from __future__ import annotations

from functools import lru_cache

_SYMBOLS = 255
_PRIMITIVE = 0x11D  # x^8 + x^4 + x^3 + x^2 + 1
_MIN_LENGTH = 2
_MAX_LENGTH = 30


def _build_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    alpha = [0] * (_SYMBOLS + 1)
    index = [0] * (_SYMBOLS + 1)
    index[0] = _SYMBOLS
    b = 1
    for i in range(_SYMBOLS):
        alpha[i] = b
        index[b] = i
        b <<= 1
        if b & (_SYMBOLS + 1):
            b ^= _PRIMITIVE
        b &= _SYMBOLS
    return tuple(alpha), tuple(index)


_ALPHA, _INDEX = _build_tables()


@lru_cache(maxsize=None)
def _generator(length: int) -> tuple[int, ...]:
    """Generator polynomial coefficients in index (log) form, lowest first."""
    g = [0] * (length + 1)
    g[0] = 1
    for i in range(length):
        g[i + 1] = 1
        for j in range(i, 0, -1):
            g[j] = g[j - 1] ^ _ALPHA[(_INDEX[g[j]] + i) % _SYMBOLS]
        g[0] = _ALPHA[(_INDEX[g[0]] + i) % _SYMBOLS]
    return tuple(_INDEX[c] for c in g)


def encode(data: bytes, ecc_length: int) -> bytes:
    """Return ``ecc_length`` error correction codewords for ``data``."""
    if not _MIN_LENGTH <= ecc_length <= _MAX_LENGTH:
        raise ValueError(
            f"ECC length must be between {_MIN_LENGTH} and {_MAX_LENGTH}: {ecc_length}"
        )
    gen = _generator(ecc_length)
    ecc = [0] * ecc_length
    for value in data:
        feedback = _INDEX[value ^ ecc[0]]
        if feedback != _SYMBOLS:
            for j in range(1, ecc_length):
                ecc[j] ^= _ALPHA[(feedback + gen[ecc_length - j]) % _SYMBOLS]
            last = _ALPHA[(feedback + gen[0]) % _SYMBOLS]
        else:
            last = 0
        ecc = ecc[1:] + [last]
    return bytes(ecc)