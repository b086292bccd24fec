"""Type definitions and data models for the eth-connector contract."""

from __future__ import annotations

import base64
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any

from .codec import BorshReader, BorshWriter
from .exceptions import EncodingError
from .utils import ADDRESS_LENGTH, U128_MAX, coerce_bytes, to_checksum_address, to_u64

FT_METADATA_SPEC = "ft-1.0.0"

AccountId = str  # NEAR account id, e.g. "alice.near"
Balance = int  # u128 amount in the token's smallest unit


class PausedMask(IntFlag):
    """Bitmask of paused contract operations."""

    UNPAUSE_ALL = 0
    PAUSE_DEPOSIT = 1 << 0
    PAUSE_WITHDRAW = 1 << 1


def parse_u128(value: Any) -> int:
    """Parse a u128 carried as a JSON decimal string (or plain integer)."""
    if isinstance(value, bool) or not isinstance(value, str | int):
        raise TypeError(f"Expected u128 string, got {type(value).__name__}")
    if isinstance(value, str) and not (value.isascii() and value.isdigit()):
        raise ValueError(f"Invalid u128 string: {value!r}")
    amount = int(value)
    if not 0 <= amount <= U128_MAX:
        raise ValueError(f"Value out of u128 range: {value!r}")
    return amount


def _text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
    return value


def _optional_text(value: Any, field: str) -> str | None:
    return None if value is None else _text(value, field)


@dataclass(frozen=True)
class FungibleTokenMetadata:
    """NEP-148 fungible token metadata."""

    name: str
    symbol: str
    decimals: int
    spec: str = FT_METADATA_SPEC
    icon: str | None = None
    reference: str | None = None
    reference_hash: bytes | None = None

    def as_json(self) -> dict[str, Any]:
        reference_hash = None
        if self.reference_hash is not None:
            if not isinstance(self.reference_hash, bytes):
                raise EncodingError(
                    "reference_hash must be bytes",
                    field="reference_hash",
                    value=self.reference_hash,
                )
            reference_hash = base64.b64encode(self.reference_hash).decode("ascii")

        return {
            "spec": self.spec,
            "name": self.name,
            "symbol": self.symbol,
            "icon": self.icon,
            "reference": self.reference,
            "reference_hash": reference_hash,
            "decimals": self.decimals,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> FungibleTokenMetadata:
        decimals = data["decimals"]
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise TypeError("decimals must be an integer")

        reference_hash = data.get("reference_hash")
        return cls(
            spec=_text(data["spec"], "spec"),
            name=_text(data["name"], "name"),
            symbol=_text(data["symbol"], "symbol"),
            icon=_optional_text(data.get("icon"), "icon"),
            reference=_optional_text(data.get("reference"), "reference"),
            reference_hash=base64.b64decode(reference_hash, validate=True)
            if reference_hash is not None
            else None,
            decimals=decimals,
        )


@dataclass(frozen=True)
class StorageBalance:
    """NEP-145 storage balance of an account."""

    total: Balance
    available: Balance

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> StorageBalance:
        return cls(total=parse_u128(data["total"]), available=parse_u128(data["available"]))


@dataclass(frozen=True)
class StorageBalanceBounds:
    """NEP-145 minimum and optional maximum storage deposit."""

    min: Balance
    max: Balance | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> StorageBalanceBounds:
        maximum = data.get("max")
        return cls(
            min=parse_u128(data["min"]),
            max=parse_u128(maximum) if maximum is not None else None,
        )


_PROOF_FIELDS = ("log_index", "log_entry_data", "receipt_index", "receipt_data", "header_data")


@dataclass(frozen=True)
class Proof:
    """Inbound deposit proof: a receipt log entry plus its Merkle-Patricia proof."""

    log_index: int
    log_entry_data: bytes
    receipt_index: int
    receipt_data: bytes
    header_data: bytes
    proof: tuple[bytes, ...] = ()

    def write_borsh(self, writer: BorshWriter) -> None:
        writer.write_u64(self.log_index, "log_index")
        writer.write_bytes(self.log_entry_data, "log_entry_data")
        writer.write_u64(self.receipt_index, "receipt_index")
        writer.write_bytes(self.receipt_data, "receipt_data")
        writer.write_bytes(self.header_data, "header_data")
        writer.write_vec(self.proof, lambda node: writer.write_bytes(node, "proof"), "proof")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Proof:
        """Construct a proof from a JSON-like mapping of hex/base64 fields."""

        missing = [name for name in _PROOF_FIELDS if data.get(name) is None]
        if missing:
            raise EncodingError(
                f"Proof is missing {', '.join(missing)}", field=missing[0], value=dict(data)
            )

        nodes = data.get("proof") or []
        if isinstance(nodes, str | bytes):
            nodes = [nodes]

        return cls(
            log_index=to_u64(data["log_index"], "log_index"),
            log_entry_data=coerce_bytes(data["log_entry_data"], "log_entry_data"),
            receipt_index=to_u64(data["receipt_index"], "receipt_index"),
            receipt_data=coerce_bytes(data["receipt_data"], "receipt_data"),
            header_data=coerce_bytes(data["header_data"], "header_data"),
            proof=tuple(coerce_bytes(node, "proof") for node in nodes),
        )


@dataclass(frozen=True)
class MigrationInputData:
    """State snapshot pushed to (or checked against) the contract during migration."""

    accounts: Mapping[AccountId, Balance] = field(default_factory=dict)
    total_supply: Balance | None = None
    account_storage_usage: int | None = None
    statistics_aurora_accounts_counter: int | None = None
    used_proofs: Sequence[str] = ()

    def write_borsh(self, writer: BorshWriter) -> None:
        writer.write_map(
            self.accounts, lambda amount: writer.write_u128(amount, "accounts"), "accounts"
        )
        writer.write_option(
            self.total_supply, lambda value: writer.write_u128(value, "total_supply")
        )
        writer.write_option(
            self.account_storage_usage,
            lambda value: writer.write_u64(value, "account_storage_usage"),
        )
        writer.write_option(
            self.statistics_aurora_accounts_counter,
            lambda value: writer.write_u64(value, "statistics_aurora_accounts_counter"),
        )
        writer.write_vec(
            self.used_proofs, lambda key: writer.write_string(key, "used_proofs"), "used_proofs"
        )


@dataclass(frozen=True)
class WithdrawResult:
    """Outcome of a withdraw call, consumed by the Ethereum-side relayer."""

    amount: Balance
    recipient_id: bytes
    eth_custodian_address: bytes

    @property
    def recipient_address(self) -> str:
        return to_checksum_address(self.recipient_id)

    @property
    def custodian_address(self) -> str:
        return to_checksum_address(self.eth_custodian_address)

    @classmethod
    def read_borsh(cls, reader: BorshReader) -> WithdrawResult:
        return cls(
            amount=reader.read_u128(),
            recipient_id=reader.read_fixed(ADDRESS_LENGTH),
            eth_custodian_address=reader.read_fixed(ADDRESS_LENGTH),
        )


class MigrationCheckKind(IntEnum):
    """Variant tags of the migration correctness check."""

    SUCCESS = 0
    ACCOUNT_NOT_EXIST = 1
    ACCOUNT_AMOUNT = 2
    TOTAL_SUPPLY = 3
    STORAGE_USAGE = 4
    STATISTICS_COUNTER = 5
    PROOF = 6


@dataclass(frozen=True)
class MigrationCheckResult:
    """Result of ``check_migration_correctness``; ``payload`` holds the mismatch."""

    kind: MigrationCheckKind
    payload: Any = None

    @property
    def is_success(self) -> bool:
        return self.kind is MigrationCheckKind.SUCCESS

    @classmethod
    def read_borsh(cls, reader: BorshReader) -> MigrationCheckResult:
        tag = reader.read_u8()
        try:
            kind = MigrationCheckKind(tag)
        except ValueError:
            raise ValueError(f"Unknown migration check variant {tag}") from None

        payload: Any
        if kind is MigrationCheckKind.SUCCESS:
            payload = None
        elif kind in (MigrationCheckKind.ACCOUNT_NOT_EXIST, MigrationCheckKind.PROOF):
            payload = reader.read_vec(reader.read_string)
        elif kind is MigrationCheckKind.ACCOUNT_AMOUNT:
            payload = reader.read_map(reader.read_u128)
        elif kind is MigrationCheckKind.TOTAL_SUPPLY:
            payload = reader.read_u128()
        else:
            payload = reader.read_u64()

        return cls(kind=kind, payload=payload)
