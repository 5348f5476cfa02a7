"""
Canonical encoding for everything the rebalancer hashes or parses as hex.

Hashes (orders, trading params) are `sha256(domain_sep(label) || json)`,
where `json` is compact, key-sorted UTF-8 JSON restricted to values with a
single obvious encoding: no floats, no non-string keys, no lone surrogates.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any


CANONICAL_ENCODING_VERSION = 1
DOMAIN_PREFIX = b"rebalancer:"

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def _check_text(s: str) -> None:
    if any(0xD800 <= ord(ch) <= 0xDFFF for ch in s):
        raise TypeError("surrogate code points are not allowed in canonical encoding")


def _check_encodable(value: Any) -> None:
    """Walk `value` and reject anything without a unique JSON form."""
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, str):
        _check_text(value)
    elif isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _check_text(k)
            _check_encodable(v)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_encodable(item)


def canonical_json_bytes(value: Any) -> bytes:
    _check_encodable(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = CANONICAL_ENCODING_VERSION) -> bytes:
    """`rebalancer:<label>:v<version>` followed by a NUL terminator."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label or not label.isascii():
        raise ValueError(f"label must be NUL-free ASCII: {label!r}")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return DOMAIN_PREFIX + f"{label}:v{version}".encode("ascii") + b"\x00"


def hash_canonical(label: str, value: Any) -> str:
    """`0x`-prefixed sha256 of `domain_sep(label) || canonical_json(value)`."""
    return sha256_hex(domain_sep_bytes(label) + canonical_json_bytes(value))


def bytes_to_hex(value: bytes) -> str:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError("value must be bytes")
    return "0x" + bytes(value).hex()


def hex_to_bytes(hex_str: str, *, name: str) -> bytes:
    """Variable-length hex (0x prefix optional, even length)."""
    if not isinstance(hex_str, str):
        raise TypeError(f"{name} must be a str")
    s = hex_str.strip()
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    if len(s) % 2 or not _HEX_RE.match(s):
        raise ValueError(f"{name} must be valid hex")
    return bytes.fromhex(s)


def hex_to_bytes_fixed(hex_str: str, *, nbytes: int, name: str) -> bytes:
    out = hex_to_bytes(hex_str, name=name)
    if len(out) != nbytes:
        raise ValueError(f"{name} must decode to exactly {nbytes} bytes")
    return out


def canonical_hex_fixed_allow_0x(hex_str: str, *, nbytes: int, name: str) -> str:
    """Lowercase, `0x`-prefixed form of a fixed-size hex value."""
    return bytes_to_hex(hex_to_bytes_fixed(hex_str, nbytes=nbytes, name=name))
