"""Structured-append sets: one input spread over several linked symbols."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from .qrinput import QRInput
from .segments import (
    MAX_STRUCTURED_SYMBOLS,
    STRUCTURE_HEADER_SIZE,
    Entry,
    InputTooLargeError,
    length_of_code,
)
from .spec import get_data_length


class StructuredInput:
    """An ordered set of inputs, each becoming one symbol of a structured-append set.

    ``parity`` is None until it is set or calculated.
    """

    def __init__(self) -> None:
        self.inputs: list[QRInput] = []
        self.parity: int | None = None

    def __repr__(self) -> str:
        return f"StructuredInput(size={len(self.inputs)}, parity={self.parity})"

    def __len__(self) -> int:
        return len(self.inputs)

    def __iter__(self) -> Iterator[QRInput]:
        return iter(self.inputs)

    def append_input(self, qrinput: QRInput) -> int:
        """Add an input at the end of the set and return the new number of inputs."""
        self.inputs.append(qrinput)
        return len(self.inputs)

    def calc_parity(self) -> int:
        """XOR the parities of all inputs, store the result and return it."""
        parity = 0
        for qrinput in self.inputs:
            parity ^= qrinput.parity()
        self.parity = parity
        return parity

    def insert_structured_append_headers(self) -> None:
        """Put a structured-append header in front of every input.

        A set of a single input needs no header and is left alone.
        """
        size = len(self.inputs)
        if size == 1:
            return
        if self.parity is None:
            self.calc_parity()
        for number, qrinput in enumerate(self.inputs, start=1):
            qrinput.insert_structured_append_header(size, number, self.parity)


def _new_part(source: QRInput, entries: list[Entry]) -> QRInput:
    part = QRInput(source.version, source.level)
    part.entries = entries
    return part


def split_to_structured(qrinput: QRInput) -> StructuredInput:
    """Split an input into a structured-append set of symbols of its version.

    The input itself is left unchanged. Raises ValueError if the input has no
    fixed version or a segment cannot be placed, and InputTooLargeError if
    more than the maximum number of symbols would be needed.
    """
    source = qrinput.copy()
    result = StructuredInput()
    result.parity = source.parity()

    version = source.version
    maxbits = get_data_length(version, source.level) * 8 - STRUCTURE_HEADER_SIZE
    if maxbits <= 0:
        raise ValueError(f"version {version} leaves no room for structured data")

    pending: deque[Entry] = deque(source.entries)
    current: list[Entry] = []
    bits = 0
    while pending:
        entry = pending[0]
        nextbits = entry.estimate_bits(version)
        if bits + nextbits <= maxbits:
            bits += len(entry.encode(version))
            current.append(pending.popleft())
            continue

        nbytes = length_of_code(entry.mode, version, maxbits - bits)
        if nbytes > 0:
            head, tail = entry.split(nbytes)
            pending.popleft()
            pending.appendleft(tail)
            current.append(head)
        elif not current:
            raise ValueError(
                f"a {entry.mode.name} segment does not fit in a version {version} symbol"
            )
        result.append_input(_new_part(source, current))
        current = []
        bits = 0

    result.append_input(_new_part(source, current))
    if len(result) > MAX_STRUCTURED_SYMBOLS:
        raise InputTooLargeError(
            f"input needs {len(result)} symbols, at most {MAX_STRUCTURED_SYMBOLS} allowed"
        )
    result.insert_structured_append_headers()
    return result