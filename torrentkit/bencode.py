"""Encoding and decoding of bencoded data.

Decoded values are ``int``, ``bytes``, ``list`` and ``dict`` with ``bytes``
keys. When encoding, ``str`` values and keys are written as UTF-8, tuples are
written as lists, and dictionary keys are sorted by their raw bytes.
"""

from __future__ import annotations

import re
from typing import Any, Union

BencodeValue = Union[int, bytes, list, dict]

_INT_RE = re.compile(rb"-?(0|[1-9][0-9]*)")
_LEN_RE = re.compile(rb"0|[1-9][0-9]*")


class BencodeError(ValueError):
    """Raised when data cannot be bencoded or is not valid bencode."""


def decode(data: Union[bytes, bytearray, memoryview]) -> BencodeValue:
    """Decode a single bencoded value that spans all of ``data``."""
    buf = bytes(data)
    try:
        value, end = _decode_at(buf, 0)
    except RecursionError as exc:
        raise BencodeError("bencode nesting is too deep") from exc
    if end != len(buf):
        raise BencodeError(f"trailing data at offset {end}")
    return value


def _decode_at(buf: bytes, pos: int) -> tuple[Any, int]:
    if pos >= len(buf):
        raise BencodeError("unexpected end of data")
    lead = buf[pos : pos + 1]

    if lead == b"i":
        end = buf.find(b"e", pos + 1)
        if end < 0:
            raise BencodeError(f"unterminated integer at offset {pos}")
        digits = buf[pos + 1 : end]
        if not _INT_RE.fullmatch(digits) or digits == b"-0":
            raise BencodeError(f"invalid integer {digits!r} at offset {pos}")
        return int(digits), end + 1

    if lead == b"l":
        items = []
        pos += 1
        while True:
            if pos >= len(buf):
                raise BencodeError("unterminated list")
            if buf[pos : pos + 1] == b"e":
                return items, pos + 1
            item, pos = _decode_at(buf, pos)
            items.append(item)

    if lead == b"d":
        result: dict[bytes, Any] = {}
        pos += 1
        while True:
            if pos >= len(buf):
                raise BencodeError("unterminated dictionary")
            if buf[pos : pos + 1] == b"e":
                return result, pos + 1
            key, pos = _decode_at(buf, pos)
            if not isinstance(key, bytes):
                raise BencodeError(f"dictionary key must be a string, not {key!r}")
            value, pos = _decode_at(buf, pos)
            result[key] = value

    if lead.isdigit():
        colon = buf.find(b":", pos)
        if colon < 0:
            raise BencodeError(f"missing ':' in string length at offset {pos}")
        digits = buf[pos:colon]
        if not _LEN_RE.fullmatch(digits):
            raise BencodeError(f"invalid string length {digits!r} at offset {pos}")
        start = colon + 1
        end = start + int(digits)
        if end > len(buf):
            raise BencodeError(f"string at offset {pos} runs past end of data")
        return buf[start:end], end

    raise BencodeError(f"unexpected byte {lead!r} at offset {pos}")


def encode(value: Any) -> bytes:
    """Bencode ``value``.

    Raises :class:`BencodeError` for values that have no bencoded form.
    """
    out: list[bytes] = []
    _encode_into(value, out)
    return b"".join(out)


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _encode_into(value: Any, out: list[bytes]) -> None:
    if isinstance(value, bool):
        raise BencodeError("booleans cannot be bencoded")
    if isinstance(value, int):
        out.append(b"i%de" % value)
    elif isinstance(value, (bytes, bytearray, memoryview, str)):
        raw = _as_bytes(value)
        out.append(b"%d:" % len(raw))
        out.append(raw)
    elif isinstance(value, (list, tuple)):
        out.append(b"l")
        for item in value:
            _encode_into(item, out)
        out.append(b"e")
    elif isinstance(value, dict):
        entries: dict[bytes, Any] = {}
        for key, item in value.items():
            if not isinstance(key, (bytes, bytearray, memoryview, str)):
                raise BencodeError(f"dictionary key must be a string, not {key!r}")
            raw_key = _as_bytes(key)
            if raw_key in entries:
                raise BencodeError(f"duplicate dictionary key {raw_key!r}")
            entries[raw_key] = item
        out.append(b"d")
        for raw_key in sorted(entries):
            _encode_into(raw_key, out)
            _encode_into(entries[raw_key], out)
        out.append(b"e")
    else:
        raise BencodeError(f"cannot bencode value of type {type(value).__name__}")