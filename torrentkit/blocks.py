"""Torrent identifiers, block metadata and block length arithmetic.

Downloads happen at the granularity of blocks: fixed size chunks of a piece,
which in turn is a fixed size chunk of the torrent. All blocks are
:data:`BLOCK_LEN` bytes long, except possibly the last block of a piece.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

BLOCK_LEN = 0x4000
"""The canonical block length of 16 KiB."""

BlockData = Union[bytes, bytearray, memoryview]

_id_counter = itertools.count()
_id_lock = threading.Lock()


@dataclass(frozen=True, order=True)
class TorrentId:
    """A process-wide unique identifier of a torrent."""

    value: int

    @classmethod
    def new(cls) -> "TorrentId":
        """Produce a new unique torrent id."""
        with _id_lock:
            return cls(next(_id_counter))

    def __str__(self) -> str:
        return f"t#{self.value}"


class Side(IntEnum):
    """Whether a torrent or peer connection is a seed or a leech."""

    LEECH = 0
    SEED = 1


@dataclass(frozen=True, order=True)
class BlockInfo:
    """Location and length of a block within its piece."""

    piece_index: int
    offset: int
    length: int

    def index_in_piece(self) -> int:
        """Return the index of the block within its piece.

        Raises ``ValueError`` if the block length is not in ``(0, BLOCK_LEN]``.
        """
        if not 0 < self.length <= BLOCK_LEN:
            raise ValueError(f"invalid block length: {self.length}")
        return self.offset // BLOCK_LEN

    def __str__(self) -> str:
        return (
            f"(piece: {self.piece_index} offset: {self.offset} "
            f"len: {self.length})"
        )


@dataclass
class Block:
    """A piece block: its location and its data."""

    piece_index: int
    offset: int
    data: BlockData

    @classmethod
    def from_info(cls, info: BlockInfo, data: BlockData) -> "Block":
        """Build a block from its metadata and data."""
        return cls(piece_index=info.piece_index, offset=info.offset, data=data)

    def info(self) -> BlockInfo:
        """Return the metadata of this block."""
        return BlockInfo(
            piece_index=self.piece_index,
            offset=self.offset,
            length=len(self.data),
        )


def block_len(piece_len: int, block_index: int) -> int:
    """Return the length of the block at ``block_index`` in a piece.

    Raises ``ValueError`` if the block would start at or past the end of the
    piece.
    """
    if block_index < 0:
        raise ValueError(f"invalid block index: {block_index}")
    block_offset = block_index * BLOCK_LEN
    if piece_len <= block_offset:
        raise ValueError(
            f"block {block_index} is out of bounds for piece of length {piece_len}"
        )
    return min(piece_len - block_offset, BLOCK_LEN)


def block_count(piece_len: int) -> int:
    """Return the number of blocks in a piece of the given length."""
    return (piece_len + BLOCK_LEN - 1) // BLOCK_LEN