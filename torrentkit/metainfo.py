"""Parsed and validated torrent metainfo."""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Optional
from urllib.parse import urlsplit

from torrentkit.bencode import BencodeError, decode, encode

_log = logging.getLogger(__name__)

_U8_MAX = 2**8 - 1
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")


class MetainfoError(ValueError):
    """The metainfo could not be decoded or is not valid."""


class InvalidMetainfo(MetainfoError):
    """The metainfo is structurally valid bencode but semantically invalid."""


class InvalidPieces(MetainfoError):
    """The piece hashes are not a whole number of 20 byte SHA-1 digests."""


class InvalidTrackerUrl(MetainfoError):
    """A tracker URL is not a valid URL."""


@dataclass(frozen=True)
class FileInfo:
    """A file in the torrent: its relative path, length and torrent offset."""

    path: PurePosixPath
    length: int
    torrent_offset: int


@dataclass
class _RawFile:
    path: list[str]
    length: int

    def to_bencode(self) -> dict:
        return {"path": self.path, "length": self.length}


@dataclass
class _RawInfo:
    name: str
    pieces: bytes
    piece_len: int
    length: Optional[int]
    files: Optional[list[_RawFile]]
    private: Optional[int]

    def to_bencode(self) -> dict:
        """Return the info dictionary holding only the fields known here."""
        info: dict[str, Any] = {
            "name": self.name,
            "pieces": self.pieces,
            "piece length": self.piece_len,
        }
        if self.length is not None:
            info["length"] = self.length
        if self.files is not None:
            info["files"] = [f.to_bencode() for f in self.files]
        if self.private is not None:
            info["private"] = self.private
        return info


def _expect_dict(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise MetainfoError(f"{what} must be a dictionary")
    return value


def _expect_list(value: Any, what: str) -> list:
    if not isinstance(value, list):
        raise MetainfoError(f"{what} must be a list")
    return value


def _expect_str(value: Any, what: str) -> str:
    if not isinstance(value, bytes):
        raise MetainfoError(f"{what} must be a string")
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MetainfoError(f"{what} is not valid UTF-8") from exc


def _expect_uint(value: Any, what: str, max_value: int) -> int:
    if not isinstance(value, int) or not 0 <= value <= max_value:
        raise MetainfoError(f"{what} must be an integer in [0, {max_value}]")
    return value


def _required(d: dict, key: bytes) -> Any:
    if key not in d:
        raise MetainfoError(f"missing field {key.decode()!r}")
    return d[key]


def _parse_file(value: Any) -> _RawFile:
    d = _expect_dict(value, "file entry")
    path = [
        _expect_str(part, "path component")
        for part in _expect_list(_required(d, b"path"), "path")
    ]
    length = _expect_uint(_required(d, b"length"), "file length", _U64_MAX)
    return _RawFile(path=path, length=length)


def _parse_info(value: Any) -> _RawInfo:
    d = _expect_dict(value, "info")
    name = _expect_str(_required(d, b"name"), "name")
    pieces = _required(d, b"pieces")
    if not isinstance(pieces, bytes):
        raise MetainfoError("pieces must be a byte string")
    piece_len = _expect_uint(_required(d, b"piece length"), "piece length", _U32_MAX)
    length = d.get(b"length")
    if length is not None:
        length = _expect_uint(length, "length", _U64_MAX)
    files = d.get(b"files")
    if files is not None:
        files = [_parse_file(f) for f in _expect_list(files, "files")]
    private = d.get(b"private")
    if private is not None:
        private = _expect_uint(private, "private", _U8_MAX)
    return _RawInfo(
        name=name,
        pieces=pieces,
        piece_len=piece_len,
        length=length,
        files=files,
        private=private,
    )


def _parse_announce_list(value: Any) -> list[list[str]]:
    return [
        [_expect_str(url, "tracker") for url in _expect_list(tier, "announce tier")]
        for tier in _expect_list(value, "announce-list")
    ]


def _tracker_scheme(url: str) -> str:
    """Validate ``url`` and return its lower-cased scheme."""
    match = _SCHEME_RE.match(url)
    if not match:
        raise InvalidTrackerUrl(f"invalid tracker URL: {url!r}")
    scheme = match.group(1).lower()
    if scheme in ("http", "https"):
        try:
            parts = urlsplit(url)
            host = parts.hostname
            parts.port
        except ValueError as exc:
            raise InvalidTrackerUrl(f"invalid tracker URL: {url!r}") from exc
        if not host:
            raise InvalidTrackerUrl(f"invalid tracker URL: {url!r}")
    return scheme


def _collect_files(info: _RawInfo) -> list[FileInfo]:
    if info.length is not None:
        if info.files is not None:
            _log.warning("Metainfo cannot contain both `length` and `files`")
            raise InvalidMetainfo("metainfo contains both length and files")
        if info.length == 0:
            _log.warning("File length is 0")
            raise InvalidMetainfo("file length is 0")
        return [FileInfo(path=PurePosixPath(info.name), length=info.length, torrent_offset=0)]

    if info.files is None:
        _log.warning("No `length` or `files` key present in metainfo")
        raise InvalidMetainfo("metainfo has neither length nor files")

    if not info.files:
        _log.warning("Metainfo files must not be empty")
        raise InvalidMetainfo("metainfo files list is empty")

    files = []
    torrent_offset = 0
    for raw in info.files:
        if raw.length == 0:
            _log.warning("File %r length is 0", raw.path)
            raise InvalidMetainfo(f"file {raw.path!r} has length 0")
        if not any(raw.path):
            _log.warning("Path in metainfo is empty")
            raise InvalidMetainfo("file path is empty")
        path = PurePosixPath(*raw.path)
        if path.is_absolute():
            _log.warning("Path %r is absolute", str(path))
            raise InvalidMetainfo(f"file path {str(path)!r} is absolute")
        files.append(FileInfo(path=path, length=raw.length, torrent_offset=torrent_offset))
        torrent_offset += raw.length
    return files


@dataclass
class Metainfo:
    """The parsed and validated metainfo needed to start a torrent.

    ``trackers`` holds only HTTP and HTTPS tracker URLs, without tier
    information.
    """

    name: str
    info_hash: bytes
    pieces: bytes
    piece_len: int
    files: list[FileInfo]
    trackers: list[str]

    @classmethod
    def from_bytes(cls, buf: bytes) -> "Metainfo":
        """Parse and validate bencoded metainfo.

        Raises :class:`MetainfoError` (or one of its subclasses) if the data is
        not valid bencode or not a valid torrent.
        """
        try:
            root = decode(buf)
        except BencodeError as exc:
            raise MetainfoError(f"invalid bencode: {exc}") from exc

        root = _expect_dict(root, "metainfo")
        info = _parse_info(_required(root, b"info"))
        announce = root.get(b"announce")
        if announce is not None:
            announce = _expect_str(announce, "announce")
        announce_list = _parse_announce_list(root.get(b"announce-list", []))

        if len(info.pieces) % 20 != 0:
            raise InvalidPieces("pieces length is not a multiple of 20")

        files = _collect_files(info)

        if announce_list:
            candidates = [url for tier in announce_list for url in tier]
        elif announce is not None:
            candidates = [announce]
        else:
            candidates = []
        trackers = [
            url for url in candidates if _tracker_scheme(url) in ("http", "https")
        ]
        if not trackers:
            _log.warning("No HTTP trackers in metainfo")

        info_hash = hashlib.sha1(encode(info.to_bencode())).digest()

        return cls(
            name=info.name,
            info_hash=info_hash,
            pieces=info.pieces,
            piece_len=info.piece_len,
            files=files,
            trackers=trackers,
        )

    def is_archive(self) -> bool:
        """Return whether the torrent holds more than one file."""
        return len(self.files) > 1

    def download_len(self) -> int:
        """Return the total download size in bytes."""
        return sum(f.length for f in self.files)

    def piece_count(self) -> int:
        """Return the number of pieces in the torrent."""
        return len(self.pieces) // 20

    def __repr__(self) -> str:
        return (
            f"Metainfo(name={self.name!r}, info_hash={self.info_hash.hex()}, "
            f"pieces=<pieces...>, piece_len={self.piece_len}, "
            f"structure={self.files!r})"
        )