"""Bounded views over a sequence of byte buffers for vectored IO.

An :class:`IoVecs` limits a list of buffers to a byte count without copying
data. Where the limit falls inside a buffer, that buffer is shortened, and the
cut-off part is kept so that :meth:`IoVecs.into_tail` can hand back the
remainder. :meth:`IoVecs.advance` moves the cursor forward after a partial
write.

Example: blocks of 16 and 16 bytes bounded to a 25 byte file slice give a first
half of bytes ``[0, 25)`` and a tail of bytes ``[25, 32)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

Buffer = Union[bytes, bytearray, memoryview]


@dataclass
class _Split:
    """Where the buffers were cut in two.

    ``pos`` is the index of the last buffer of the first half. If the cut fell
    inside that buffer, ``second_half`` holds the part of it that lies past
    the bound.
    """

    pos: int
    second_half: Optional[memoryview] = None


class IoVecs:
    """A list of buffers, optionally bounded to a maximum total byte count."""

    def __init__(
        self, bufs: Iterable[Buffer], split: Optional[_Split] = None
    ) -> None:
        self._bufs: list[memoryview] = [memoryview(b) for b in bufs]
        self._split = split
        self._consumed = False

    def __repr__(self) -> str:
        return f"IoVecs(lens={[len(b) for b in self._bufs]}, split={self._split})"

    @classmethod
    def bounded(cls, bufs: Iterable[Buffer], max_len: int) -> "IoVecs":
        """Bound the buffers to ``max_len`` bytes, splitting them if they exceed it.

        Raises ``ValueError`` if ``max_len`` is not positive.
        """
        if max_len <= 0:
            raise ValueError("IoVecs max length should be larger than 0")

        views = [memoryview(b) for b in bufs]

        total = 0
        split_pos = None
        for pos, buf in enumerate(views):
            total += len(buf)
            if total >= max_len:
                split_pos = pos
                break

        if split_pos is None:
            return cls(views)

        if total == max_len:
            # the bound lies on a buffer boundary
            if split_pos + 1 == len(views):
                return cls(views)
            return cls(views, _Split(pos=split_pos))

        # the bound lies inside the buffer at `split_pos`: shorten it and keep
        # the remainder for the tail
        buf = views[split_pos]
        buf_offset = total - len(buf)
        cut = max_len - buf_offset
        views[split_pos] = buf[:cut]
        return cls(views, _Split(pos=split_pos, second_half=buf[cut:]))

    @classmethod
    def unbounded(cls, bufs: Iterable[Buffer]) -> "IoVecs":
        """Wrap the buffers without any bound."""
        return cls(bufs)

    def _check_live(self) -> None:
        if self._consumed:
            raise RuntimeError("IoVecs was already consumed by into_tail")

    def as_slice(self) -> list[memoryview]:
        """Return the buffers of the first half of the split (all if unsplit)."""
        self._check_live()
        split = self._split
        if split is None:
            return list(self._bufs)
        # after advancing through the whole first half, an empty buffer at the
        # split position marks it as exhausted
        if split.pos == 0 and self._bufs and len(self._bufs[0]) == 0:
            return []
        return self._bufs[: split.pos + 1]

    def advance(self, n: int) -> None:
        """Move the cursor ``n`` bytes forward within the first half.

        Raises ``ValueError`` if ``n`` is negative or exceeds the bytes left in
        the first half.
        """
        self._check_live()
        if n < 0:
            raise ValueError("cannot advance iovecs by a negative count")

        first_half = self.as_slice()
        remove_count = 0
        removed_len = 0
        for buf in first_half:
            if removed_len + len(buf) > n:
                break
            removed_len += len(buf)
            remove_count += 1

        split = self._split
        if split is not None and remove_count == split.pos + 1:
            if n > removed_len:
                raise ValueError("cannot advance iovecs by more than buffers length")
            # keep the buffer at the split position: it is either partly in
            # the tail or serves as the empty marker
            remove_count -= 1
            removed_len -= len(first_half[-1]) if first_half else 0
        elif remove_count == len(first_half) and n > removed_len:
            raise ValueError("cannot advance iovecs by more than buffers length")

        self._bufs = self._bufs[remove_count:]

        if split is not None:
            split.pos = 0 if remove_count >= split.pos else split.pos - remove_count

        if self._bufs:
            offset = n - removed_len
            if offset > 0:
                first = self._bufs[0]
                if len(first) < offset:
                    raise ValueError("cannot advance iovecs by more than buffers length")
                self._bufs[0] = first[offset:]

    def into_tail(self) -> list[memoryview]:
        """Return the buffers past the bound, restoring a buffer cut in two.

        This consumes the instance; it cannot be used afterwards.
        """
        self._check_live()
        self._consumed = True
        split = self._split
        if split is None:
            return []
        bufs = self._bufs
        if split.second_half is not None:
            bufs[split.pos] = split.second_half
        return bufs[split.pos :]