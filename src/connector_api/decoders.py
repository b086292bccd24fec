"""Result decoders, one per (encoding, result shape) pair."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from .codec import BorshReader, Encoding, decode_structured
from .exceptions import DecodingError
from .types import (
    FungibleTokenMetadata,
    MigrationCheckResult,
    PausedMask,
    StorageBalance,
    StorageBalanceBounds,
    WithdrawResult,
    parse_u128,
)
from .utils import U8_MAX, is_valid_account_id


class ResultShape(str, Enum):
    """Shapes of values returned by the contract."""

    UNIT = "unit"
    BOOL = "bool"
    U128 = "u128"
    ACCOUNT_ID = "account_id"
    METADATA = "metadata"
    STORAGE_BALANCE = "storage_balance"
    OPTIONAL_STORAGE_BALANCE = "optional_storage_balance"
    STORAGE_BALANCE_BOUNDS = "storage_balance_bounds"
    PAUSED_MASK = "paused_mask"
    WITHDRAW_RESULT = "withdraw_result"
    MIGRATION_CHECK = "migration_check"


Decoder = Callable[[bytes], Any]


# ----------------------------------------------------------------------
# Structured (JSON) results
# ----------------------------------------------------------------------
def _json_value(
    shape: ResultShape, convert: Callable[[Any], Any], *, allow_empty: bool = False
) -> Decoder:
    def decode(raw: bytes) -> Any:
        if allow_empty and len(raw) == 0:
            return None

        value = decode_structured(raw, shape.value)
        try:
            return convert(value)
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodingError(
                f"Response does not match {shape.value} shape",
                expected=shape.value,
                raw=raw,
                details={"error": str(exc)},
            ) from exc

    return decode


def _unit(value: Any) -> None:
    if value is not None:
        raise ValueError(f"Expected no return value, got {type(value).__name__}")
    return None


def _bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"Expected boolean, got {type(value).__name__}")
    return value


def _account_id(value: Any) -> str:
    if not isinstance(value, str) or not is_valid_account_id(value):
        raise ValueError(f"Invalid account id: {value!r}")
    return value


def _mapping(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"Expected object, got {type(value).__name__}")
    return value


def _paused_mask(value: Any) -> PausedMask:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U8_MAX:
        raise ValueError(f"Invalid paused mask: {value!r}")
    return PausedMask(value)


def _optional_storage_balance(value: Any) -> StorageBalance | None:
    if value is None:
        return None
    return StorageBalance.from_json(_mapping(value))


# ----------------------------------------------------------------------
# Binary (Borsh) results
# ----------------------------------------------------------------------
def _borsh_value(shape: ResultShape, read: Callable[[BorshReader], Any]) -> Decoder:
    def decode(raw: bytes) -> Any:
        reader = BorshReader(raw, shape.value)
        try:
            value = read(reader)
        except ValueError as exc:
            raise DecodingError(
                f"Response does not match {shape.value} shape",
                expected=shape.value,
                raw=raw,
                details={"error": str(exc)},
            ) from exc
        reader.finish()
        return value

    return decode


def _borsh_unit(raw: bytes) -> None:
    if len(raw) != 0:
        raise DecodingError(
            "Expected empty response for unit result", expected=ResultShape.UNIT.value, raw=raw
        )
    return None


_DECODERS: dict[tuple[Encoding, ResultShape], Decoder] = {
    (Encoding.STRUCTURED, ResultShape.UNIT): _json_value(
        ResultShape.UNIT, _unit, allow_empty=True
    ),
    (Encoding.STRUCTURED, ResultShape.BOOL): _json_value(ResultShape.BOOL, _bool),
    (Encoding.STRUCTURED, ResultShape.U128): _json_value(ResultShape.U128, parse_u128),
    (Encoding.STRUCTURED, ResultShape.ACCOUNT_ID): _json_value(
        ResultShape.ACCOUNT_ID, _account_id
    ),
    (Encoding.STRUCTURED, ResultShape.METADATA): _json_value(
        ResultShape.METADATA, lambda value: FungibleTokenMetadata.from_json(_mapping(value))
    ),
    (Encoding.STRUCTURED, ResultShape.STORAGE_BALANCE): _json_value(
        ResultShape.STORAGE_BALANCE, lambda value: StorageBalance.from_json(_mapping(value))
    ),
    (Encoding.STRUCTURED, ResultShape.OPTIONAL_STORAGE_BALANCE): _json_value(
        ResultShape.OPTIONAL_STORAGE_BALANCE, _optional_storage_balance
    ),
    (Encoding.STRUCTURED, ResultShape.STORAGE_BALANCE_BOUNDS): _json_value(
        ResultShape.STORAGE_BALANCE_BOUNDS,
        lambda value: StorageBalanceBounds.from_json(_mapping(value)),
    ),
    (Encoding.STRUCTURED, ResultShape.PAUSED_MASK): _json_value(
        ResultShape.PAUSED_MASK, _paused_mask
    ),
    (Encoding.BINARY, ResultShape.UNIT): _borsh_unit,
    (Encoding.BINARY, ResultShape.BOOL): _borsh_value(
        ResultShape.BOOL, lambda reader: reader.read_bool()
    ),
    (Encoding.BINARY, ResultShape.WITHDRAW_RESULT): _borsh_value(
        ResultShape.WITHDRAW_RESULT, WithdrawResult.read_borsh
    ),
    (Encoding.BINARY, ResultShape.MIGRATION_CHECK): _borsh_value(
        ResultShape.MIGRATION_CHECK, MigrationCheckResult.read_borsh
    ),
}


def has_decoder(encoding: Encoding, shape: ResultShape) -> bool:
    return (encoding, shape) in _DECODERS


def decoder_for(encoding: Encoding, shape: ResultShape) -> Decoder:
    try:
        return _DECODERS[(encoding, shape)]
    except KeyError:
        raise LookupError(f"No {encoding.value} decoder for {shape.value} results") from None


def decode_result(encoding: Encoding, shape: ResultShape, raw: bytes) -> Any:
    """Decode raw response bytes into the typed value for ``shape``."""
    if not isinstance(raw, bytes | bytearray):
        raise DecodingError(
            f"Expected response bytes, got {type(raw).__name__}", expected=shape.value
        )
    return decoder_for(encoding, shape)(bytes(raw))
