"""Line readers that split catalog data into fixed-width record spans."""

from __future__ import annotations

import io
from collections.abc import Iterator
from typing import BinaryIO


def iter_lines(stream: BinaryIO) -> Iterator[bytes]:
    """Yield each line of a binary stream without its terminator.

    Lines end at ``\\n``; a ``\\r`` just before it is dropped too. A final line
    without a terminator is yielded, a trailing terminator adds no empty line.
    """
    for line in stream:
        if line.endswith(b"\n"):
            line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
        yield line


def split_lines(data: bytes) -> list[bytes]:
    """Split an in-memory catalog the same way ``iter_lines`` splits a stream."""
    return list(iter_lines(io.BytesIO(data)))
