# torrentkit

Building blocks for BitTorrent v1 clients:

- `torrentkit.metainfo`: `Metainfo.from_bytes` parses and validates
  `.torrent` metainfo. It computes the SHA-1 info hash, builds the file list
  with each file's offset in the torrent, and keeps only the HTTP and HTTPS
  trackers. Errors raise `MetainfoError` or one of its subclasses:
  `InvalidMetainfo`, `InvalidPieces` and `InvalidTrackerUrl`.
- `torrentkit.bencode`: `encode` and `decode` for bencode. Malformed input
  raises `BencodeError`, which is a `ValueError`.
- `torrentkit.blocks`: piece and block arithmetic (`block_len`, `block_count`,
  `BLOCK_LEN` of 16 KiB), together with `BlockInfo`, `Block`, `TorrentId` and
  `Side`.
- `torrentkit.iovecs`: `IoVecs` caps a list of buffers at a byte count, so a
  vectored write never passes the end of a file slice. It does this without
  copying the data. `advance` moves the cursor forward after a partial write,
  and `into_tail` returns the buffers that lie past the bound.
- `torrentkit.readbufs`: `advance` skips bytes that have already been filled
  in a list of writable buffers. The views it returns share memory with the
  original buffers.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Parsing a torrent

```python
from pathlib import Path
from torrentkit.metainfo import Metainfo, MetainfoError

try:
    meta = Metainfo.from_bytes(Path("example.torrent").read_bytes())
except MetainfoError as exc:
    print(f"bad torrent: {exc}")
else:
    print(meta.name, meta.info_hash.hex())
    print("pieces:", meta.piece_count(), "size:", meta.download_len())
    print("archive" if meta.is_archive() else "single file")
    for f in meta.files:
        print(f.path, f.length, f.torrent_offset)
    print("trackers:", meta.trackers)
```

## Bencode

```python
from torrentkit.bencode import decode, encode

encode({"b": 1, "a": [b"x", "y"]})   # b'd1:al1:x1:ye1:bi1ee'
decode(b"d1:ai42ee")                 # {b'a': 42}
```

## Splitting write buffers at a file boundary

```python
from torrentkit.iovecs import IoVecs

blocks = [bytes(range(16)), bytes(range(16, 32))]
bufs = IoVecs.bounded(blocks, 25)      # only the first 25 bytes are writable

with open("slice.bin", "wb") as out:
    while bufs.as_slice():
        written = out.write(b"".join(bufs.as_slice()))
        bufs.advance(written)

rest = bufs.into_tail()                # the remaining 7 bytes
```

`IoVecs.bounded` raises `ValueError` if the bound is not positive, and
`advance` raises `ValueError` when asked to move past the bound. After
`into_tail` the instance can no longer be used.

## Advancing read buffers

```python
from torrentkit.readbufs import advance

bufs = [bytearray(3), bytearray(3)]
rest = advance(bufs, 2)   # one byte left of the first buffer, then the second
```

## Blocks

```python
from torrentkit.blocks import BLOCK_LEN, block_count, block_len

block_count(2 * BLOCK_LEN + 234)      # 3
block_len(2 * BLOCK_LEN + 234, 2)     # 234
```

`block_len` raises `ValueError` for a block that would start at or past the
end of the piece.

## What this package does not do

It is a library of parts, not a client. It does not connect to peers, speak
the peer wire protocol, announce to trackers, pick pieces or write downloads
to disk, and it has no command-line program.