"""BitTorrent building blocks: metainfo, bencode, blocks and IO buffer helpers."""

__version__ = "0.1.0"
__all__ = ["bencode", "blocks", "iovecs", "metainfo", "readbufs"]