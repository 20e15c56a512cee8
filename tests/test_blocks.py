import pytest

from torrentkit.blocks import (
    BLOCK_LEN,
    Block,
    BlockInfo,
    TorrentId,
    block_count,
    block_len,
)

BLOCK_LEN_MULTIPLE_PIECE_LEN = 2 * BLOCK_LEN
OVERLAP = 234
UNEVEN_PIECE_LEN = 2 * BLOCK_LEN + OVERLAP


def test_block_len_constant_is_16_kib():
    assert block_len(10 * BLOCK_LEN, 0) == 16384


def test_block_len():
    assert block_len(BLOCK_LEN_MULTIPLE_PIECE_LEN, 0) == BLOCK_LEN
    assert block_len(BLOCK_LEN_MULTIPLE_PIECE_LEN, 1) == BLOCK_LEN

    assert block_len(UNEVEN_PIECE_LEN, 0) == BLOCK_LEN
    assert block_len(UNEVEN_PIECE_LEN, 1) == BLOCK_LEN
    assert block_len(UNEVEN_PIECE_LEN, 2) == OVERLAP


def test_block_len_invalid_index_raises():
    with pytest.raises(ValueError):
        block_len(BLOCK_LEN_MULTIPLE_PIECE_LEN, 2)


def test_block_len_negative_index_raises():
    with pytest.raises(ValueError):
        block_len(BLOCK_LEN_MULTIPLE_PIECE_LEN, -1)


def test_block_count():
    assert block_count(BLOCK_LEN_MULTIPLE_PIECE_LEN) == 2
    assert block_count(UNEVEN_PIECE_LEN) == 3


def test_block_count_small_piece():
    assert block_count(1) == 1
    assert block_count(0) == 0


def test_torrent_ids_are_unique_and_increasing():
    first = TorrentId.new()
    second = TorrentId.new()
    assert first != second
    assert first < second


def test_torrent_id_display():
    assert str(TorrentId(7)) == "t#7"


def test_block_info_display():
    info = BlockInfo(piece_index=3, offset=16384, length=100)
    assert str(info) == "(piece: 3 offset: 16384 len: 100)"


def test_block_info_index_in_piece():
    assert BlockInfo(0, 0, BLOCK_LEN).index_in_piece() == 0
    assert BlockInfo(0, 2 * BLOCK_LEN, OVERLAP).index_in_piece() == 2


@pytest.mark.parametrize("length", [0, BLOCK_LEN + 1])
def test_block_info_index_in_piece_invalid_length(length):
    with pytest.raises(ValueError):
        BlockInfo(0, 0, length).index_in_piece()


def test_block_info_hashable_in_set():
    requests = {BlockInfo(1, 0, 10), BlockInfo(1, 0, 10), BlockInfo(1, 10, 10)}
    assert len(requests) == 2


def test_block_round_trip_info():
    info = BlockInfo(piece_index=5, offset=BLOCK_LEN, length=4)
    block = Block.from_info(info, b"\x00\x01\x02\x03")
    assert block.piece_index == 5
    assert block.offset == BLOCK_LEN
    assert block.info() == info


def test_block_info_uses_data_length():
    block = Block(piece_index=1, offset=0, data=bytearray(10))
    assert block.info() == BlockInfo(1, 0, 10)