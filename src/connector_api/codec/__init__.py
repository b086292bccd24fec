"""Wire encodings used for contract arguments and results."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .binary import BorshReader, BorshSerializable, BorshWriter, encode_binary
from .structured import decode_structured, encode_structured


class Encoding(str, Enum):
    """The two argument encodings understood by the contract."""

    STRUCTURED = "json"
    BINARY = "borsh"


def encode(encoding: Encoding, value: Any) -> bytes:
    if encoding is Encoding.STRUCTURED:
        return encode_structured(value)
    return encode_binary(value)


__all__ = [
    "BorshReader",
    "BorshSerializable",
    "BorshWriter",
    "Encoding",
    "decode_structured",
    "encode",
    "encode_binary",
    "encode_structured",
]
