import random

import pytest

from qrsymbol import rsecc


def _decoder_tables():
    alpha = [0] * 256
    index = [0] * 256
    index[0] = 255
    b = 1
    for i in range(255):
        alpha[i] = b
        index[b] = i
        b <<= 1
        if b & 256:
            b ^= 0x11D
        b &= 255
    return alpha, index


_ALPHA, _INDEX = _decoder_tables()


def _syndrome_ok(data, ecc):
    for i in range(len(ecc)):
        s = data[0]
        for sym in list(data[1:]) + list(ecc):
            s = sym if s == 0 else sym ^ _ALPHA[(_INDEX[s] + i) % 255]
        if s != 0:
            return False
    return True


def test_known_version1_m_block():
    data = bytes([32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17])
    assert list(rsecc.encode(data, 10)) == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


@pytest.mark.parametrize("ecc_length", [2, 7, 10, 17, 22, 30])
def test_syndromes_vanish(ecc_length):
    rng = random.Random(ecc_length)
    for _ in range(20):
        data = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 120)))
        ecc = rsecc.encode(data, ecc_length)
        assert len(ecc) == ecc_length
        assert _syndrome_ok(data, ecc)


def test_corrupted_data_fails_syndrome():
    data = bytes(range(1, 20))
    ecc = rsecc.encode(data, 10)
    assert _syndrome_ok(data, ecc)
    damaged = bytes([data[0] ^ 0x01]) + data[1:]
    assert not _syndrome_ok(damaged, ecc)
    damaged_ecc = rsecc.encode(damaged, 10)
    assert _syndrome_ok(damaged, damaged_ecc)
    assert damaged_ecc != ecc


def test_zero_data_gives_zero_ecc():
    assert rsecc.encode(bytes(16), 10) == bytes(10)


def test_linearity():
    rng = random.Random(5)
    a = bytes(rng.randrange(256) for _ in range(40))
    b = bytes(rng.randrange(256) for _ in range(40))
    xored = bytes(x ^ y for x, y in zip(a, b))
    ea, eb = rsecc.encode(a, 18), rsecc.encode(b, 18)
    assert rsecc.encode(xored, 18) == bytes(x ^ y for x, y in zip(ea, eb))


@pytest.mark.parametrize("ecc_length", [0, 1, 31])
def test_invalid_length(ecc_length):
    with pytest.raises(ValueError):
        rsecc.encode(b"abc", ecc_length)