"""Cursor handling for writable buffers used in vectored reads.

A vectored read fills buffers only up to their capacity, so it needs no
bound. It still needs a way to move past bytes already filled after a
partial read. :func:`advance` does that without copying data.
"""

from __future__ import annotations

from typing import Iterable, Union

WritableBuffer = Union[bytearray, memoryview]


def advance(bufs: Iterable[WritableBuffer], n: int) -> list[memoryview]:
    """Return the buffers that remain after skipping the first ``n`` bytes.

    Whole buffers covered by ``n`` are dropped. If ``n`` ends inside a buffer,
    that buffer is returned as a view starting just past the skipped bytes.
    The views share memory with the originals, so reading into them fills the
    original buffers. Skipping more bytes than the buffers hold leaves nothing.

    Raises ``ValueError`` if ``n`` is negative.
    """
    if n < 0:
        raise ValueError("cannot advance buffers by a negative count")

    views = [memoryview(b) for b in bufs]

    removed_len = 0
    remove_count = 0
    for buf in views:
        if removed_len + len(buf) > n:
            break
        removed_len += len(buf)
        remove_count += 1

    remaining = views[remove_count:]
    if remaining:
        remaining[0] = remaining[0][n - removed_len :]
    return remaining