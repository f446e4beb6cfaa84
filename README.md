# qrsymbol

The data-encoding core of a QR Code generator. It is written in plain Python
and needs nothing outside the standard library.

## Modules

- **`qrsymbol.spec`** holds the QR Code specification tables for versions 1 to 40:
  - `get_width`, `get_data_length`, `get_ecc_length` and `get_remainder` give
    symbol sizes and capacities.
  - `get_minimum_version` returns the smallest version that holds a given number
    of data bytes.
  - `length_indicator` and `maximum_words` give the length indicator size and
    the largest segment length for each mode.
  - `get_ecc_spec` returns the Reed-Solomon block layout as an `EccSpec`, which
    has `block_num()`, `data_length()` and `ecc_length()`.
  - `get_version_pattern` and `get_format_info` return the BCH-coded version and
    format information.
  - `new_frame(version)` returns a `bytearray` of width × width modules, row by
    row. The finder, separator, timing, alignment and version patterns are
    drawn, and the format area and dark module are reserved. Each function
    module has its high bit set, and its low bit holds the module colour.
  - The enums `Mode` (`NUM`, `AN`, `EIGHT`, `KANJI`, `STRUCTURE`, `ECI`,
    `FNC1FIRST`, `FNC1SECOND`) and `ECLevel` (`L`, `M`, `Q`, `H`).
- **`qrsymbol.rsecc`** has `encode(data, ecc_length)`, which returns the
  Reed-Solomon error correction codewords over GF(256) with polynomial 0x11d.
  `ecc_length` must be between 2 and 30.
- **`qrsymbol.segments`** has `Entry`, one data segment of a mode and its bytes.
  The data is checked against the mode when the segment is created.
  - `Entry.estimate_bits(version)` estimates the encoded length.
  - `Entry.encode(version)` returns the bits as a list of 0/1 integers. A segment
    longer than the mode allows is split into several.
  - `Entry.split(nbytes)` divides a segment in two.
  - The helper functions are `check`, `look_an_table`, the
    `estimate_bits_mode_*` functions, `length_of_code`, `append_num` and
    `bits_to_bytes`.
- **`qrsymbol.qrinput`** has `QRInput(version=0, level=ECLevel.L)`, an ordered
  list of segments.
  - Version 0 means "smallest version that fits". A version that is too small is
    raised automatically during encoding.
  - Segments are added with `append(mode, data)`, `append_eci_header(ecinum)`,
    `insert_structured_append_header(size, number, parity)`, `set_fnc1_first()`
    and `set_fnc1_second(appid)`.
  - `merge_bit_stream()` returns the encoded bits. `get_bit_stream()` adds the
    terminator and the 0xEC/0x11 pad codewords. `get_byte_stream()` packs the
    result into data codewords.
  - `copy()` duplicates version, level and segments, but not the FNC1 setting.
- **`qrsymbol.structured`** has `split_to_structured(qrinput)`. It spreads an
  input over up to 16 symbols of the input's own version and returns a
  `StructuredInput` that is iterable and has a length. Each part carries a
  structured-append header with a shared parity. The input given to it is not
  changed.

## Installation

```
pip install .
```

## Usage

```python
from qrsymbol.spec import Mode, ECLevel
from qrsymbol.qrinput import QRInput
from qrsymbol import rsecc

qr = QRInput(0, ECLevel.M)          # version 0: pick the smallest version that fits
qr.append(Mode.NUM, b"01234567")
qr.append(Mode.AN, b"HELLO WORLD")
data = qr.get_byte_stream()         # padded data codewords
print(qr.version, data.hex())

ecc = rsecc.encode(data[:16], 10)   # error correction codewords for one block
```

### Structured append

```python
from qrsymbol.structured import split_to_structured

big = QRInput(1, ECLevel.L)
big.append(Mode.EIGHT, bytes(range(60)))
symbols = split_to_structured(big)
print(len(symbols), symbols.parity)
for part in symbols:
    print(part.get_byte_stream().hex())
```

## Errors

- Invalid data for a mode raises `ValueError`, and so does an out-of-range
  version, level, ECI designator, parity or symbol number.
- `InputTooLargeError` is a subclass of `ValueError` and is defined in
  `qrsymbol.segments`. It is raised when the data does not fit the symbol, or
  when a structured split would need more than 16 symbols.

## What this package does not do

This package produces data codewords, error correction codewords and blank
function-pattern frames. It does not do the following:

- split a text string into modes automatically;
- interleave the Reed-Solomon blocks;
- place the modules in the frame;
- choose or apply a mask;
- write format information into a frame;
- render images;
- encode Micro QR symbols.

It has no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```