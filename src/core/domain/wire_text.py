"""Text codec for values as they travel on the wire.

Registry names and values are stored as hex-encoded UTF-8, usually in fixed
width `bytes32` slots padded with NUL bytes. Both the reader and the
aggregator go through these two helpers so that a name decoded here can be
re-encoded and used as a lookup key.
"""

from __future__ import annotations

from typing import Union

from core.domain.errors import DecodeFailure

RawText = Union[str, bytes]


def _strip_hex_prefix(value: str) -> str:
    value = value.strip()
    if value[:2].lower() == "0x":
        return value[2:]
    return value


def decode_wire_text(raw: RawText) -> str:
    """Decode a hex string or raw bytes into text.

    Leading and trailing NUL bytes are dropped. Raises `DecodeFailure` on
    non-hex input or invalid UTF-8.
    """

    if isinstance(raw, (bytes, bytearray)):
        data = bytes(raw)
    elif isinstance(raw, str):
        hex_part = _strip_hex_prefix(raw)
        try:
            data = bytes.fromhex(hex_part)
        except ValueError as exc:
            raise DecodeFailure(f"not a hex string: {raw!r}", raw=raw) from exc
    else:
        raise DecodeFailure(f"unsupported raw value type: {type(raw).__name__}", raw=raw)

    try:
        return data.strip(b"\x00").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeFailure(f"invalid UTF-8 in {raw!r}", raw=raw) from exc


def encode_wire_text(text: str, *, width: int | None = None) -> str:
    """Encode text as `0x`-prefixed hex, optionally NUL padded to `width` bytes."""

    data = text.encode("utf-8")
    if width is not None:
        if len(data) > width:
            raise ValueError(f"{text!r} does not fit in {width} bytes")
        data = data.ljust(width, b"\x00")
    return "0x" + data.hex()
