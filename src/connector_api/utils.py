"""Value validation helpers shared by the argument and result types."""

from __future__ import annotations

import base64
import binascii
import math
import re
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import Web3

from .exceptions import EncodingError

U8_MAX = 2**8 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

ADDRESS_LENGTH = 20

ACCOUNT_ID_MIN_LENGTH = 2
ACCOUNT_ID_MAX_LENGTH = 64
_ACCOUNT_ID_PATTERN = re.compile(r"^(([a-z\d]+[-_])*[a-z\d]+\.)*([a-z\d]+[-_])*[a-z\d]+$")


def to_unsigned(value: Any, bits: int, field: str = "value") -> int:
    """Convert ``value`` to an unsigned integer that fits in ``bits`` bits."""
    if isinstance(value, bool):
        raise EncodingError("Boolean is not a valid integer amount", field=field, value=value)

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise EncodingError("Amount must be a finite whole number", field=field, value=value)
        value = int(value)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise EncodingError("Amount must be a finite whole number", field=field, value=value)
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value, 16) if value.startswith("0x") else int(value)
        except ValueError:
            raise EncodingError(
                "Amount must be a valid integer string", field=field, value=value
            ) from None
    elif not isinstance(value, int):
        raise EncodingError(
            f"Unsupported amount type: {type(value).__name__}", field=field, value=value
        )

    if value < 0:
        raise EncodingError("Amount cannot be negative", field=field, value=value)

    if value > 2**bits - 1:
        raise EncodingError(f"Amount exceeds u{bits} maximum", field=field, value=value)

    return int(value)


def to_u8(value: Any, field: str = "value") -> int:
    return to_unsigned(value, 8, field)


def to_u64(value: Any, field: str = "value") -> int:
    return to_unsigned(value, 64, field)


def to_u128(value: Any, field: str = "amount") -> int:
    """Convert a token amount to the 128-bit balance representation."""
    return to_unsigned(value, 128, field)


def is_valid_account_id(account_id: str) -> bool:
    if not ACCOUNT_ID_MIN_LENGTH <= len(account_id) <= ACCOUNT_ID_MAX_LENGTH:
        return False
    return _ACCOUNT_ID_PATTERN.match(account_id) is not None


def validate_account_id(value: Any, field: str = "account_id") -> str:
    """Return ``value`` if it is a well-formed account id, else raise."""
    if not isinstance(value, str):
        raise EncodingError("Account id must be a string", field=field, value=value)

    if not is_valid_account_id(value):
        raise EncodingError(f"Malformed account id: {value!r}", field=field, value=value)

    return value


def to_address_bytes(value: Any, field: str = "address") -> bytes:
    """Normalise an Ethereum address (hex string or raw bytes) to 20 bytes."""
    if isinstance(value, bytes | bytearray | memoryview):
        raw = bytes(value)
    elif isinstance(value, str):
        hexstr = value if value.lower().startswith("0x") else f"0x{value}"
        try:
            raw = Web3.to_bytes(hexstr=HexStr(hexstr))
        except (ValueError, binascii.Error):
            raise EncodingError("Address is not valid hex", field=field, value=value) from None
    else:
        raise EncodingError(
            f"Unsupported address type: {type(value).__name__}", field=field, value=value
        )

    if len(raw) != ADDRESS_LENGTH:
        raise EncodingError(
            f"Address must be exactly {ADDRESS_LENGTH} bytes, got {len(raw)}",
            field=field,
            value=value,
        )

    return raw


def to_checksum_address(raw: bytes) -> str:
    """Render 20 address bytes as an EIP-55 checksummed string."""
    return Web3.to_checksum_address(HexBytes(raw).to_0x_hex())


def coerce_bytes(value: Any, field: str = "data") -> bytes:
    """Accept raw bytes, 0x-hex strings, base64 strings or int sequences."""
    if value is None:
        raise EncodingError(f"{field} is required", field=field, value=value)

    if isinstance(value, bytes):
        return value

    if isinstance(value, bytearray | memoryview):
        return bytes(value)

    if isinstance(value, str):
        if value.lower().startswith("0x"):
            try:
                return bytes(HexBytes(value))
            except ValueError:
                raise EncodingError("Invalid hex payload", field=field, value=value) from None

        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error:
            raise EncodingError("Invalid base64 payload", field=field, value=value) from None

    if isinstance(value, Iterable):
        try:
            return bytes(value)
        except (TypeError, ValueError):
            raise EncodingError("Invalid byte sequence", field=field, value=value) from None

    raise EncodingError(
        f"Unsupported type for byte coercion: {type(value).__name__}", field=field, value=value
    )
