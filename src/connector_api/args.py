"""Argument shapes for every contract operation.

Structured shapes expose ``as_json()``; binary shapes expose
``write_borsh(writer)``. Engine-scoped operations wrap a base shape in
:class:`EngineScoped` instead of defining a parallel set of arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .codec import BorshWriter
from .exceptions import EncodingError
from .types import AccountId, Balance, FungibleTokenMetadata, PausedMask
from .utils import ADDRESS_LENGTH, to_address_bytes, to_u128, validate_account_id


def _optional_account(value: AccountId | None, field: str) -> AccountId | None:
    return None if value is None else validate_account_id(value, field)


def _optional_amount(value: Balance | None, field: str) -> str | None:
    return None if value is None else str(to_u128(value, field))


def _optional_flag(value: bool | None, field: str) -> bool | None:
    if value is not None and not isinstance(value, bool):
        raise EncodingError(f"{field} must be a boolean", field=field, value=value)
    return value


def _optional_text(value: str | None, field: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise EncodingError(f"{field} must be a string", field=field, value=value)
    return value


@dataclass(frozen=True)
class NoArgs:
    def as_json(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class InitArgs:
    prover_account: AccountId
    eth_custodian_address: str
    metadata: FungibleTokenMetadata
    account_with_access_right: AccountId
    owner_id: AccountId

    def as_json(self) -> dict[str, Any]:
        if not isinstance(self.metadata, FungibleTokenMetadata):
            raise EncodingError(
                "metadata must be FungibleTokenMetadata", field="metadata", value=self.metadata
            )
        to_address_bytes(self.eth_custodian_address, "eth_custodian_address")

        return {
            "prover_account": validate_account_id(self.prover_account, "prover_account"),
            "account_with_access_right": validate_account_id(
                self.account_with_access_right, "account_with_access_right"
            ),
            "owner_id": validate_account_id(self.owner_id, "owner_id"),
            "eth_custodian_address": self.eth_custodian_address,
            "metadata": self.metadata.as_json(),
        }


@dataclass(frozen=True)
class FtTransferArgs:
    receiver_id: AccountId
    amount: Balance
    memo: str | None = None

    def as_json(self) -> dict[str, Any]:
        return {
            "receiver_id": validate_account_id(self.receiver_id, "receiver_id"),
            "amount": str(to_u128(self.amount)),
            "memo": _optional_text(self.memo, "memo"),
        }


@dataclass(frozen=True)
class FtTransferCallArgs:
    receiver_id: AccountId
    amount: Balance
    memo: str | None
    msg: str

    def as_json(self) -> dict[str, Any]:
        if not isinstance(self.msg, str):
            raise EncodingError("msg must be a string", field="msg", value=self.msg)

        return {
            **FtTransferArgs(self.receiver_id, self.amount, self.memo).as_json(),
            "msg": self.msg,
        }


@dataclass(frozen=True)
class EngineAccountArgs:
    engine_account: AccountId

    def as_json(self) -> dict[str, Any]:
        return {"engine_account": validate_account_id(self.engine_account, "engine_account")}


@dataclass(frozen=True)
class StorageDepositArgs:
    account_id: AccountId | None = None
    registration_only: bool | None = None

    def as_json(self) -> dict[str, Any]:
        return {
            "account_id": _optional_account(self.account_id, "account_id"),
            "registration_only": _optional_flag(self.registration_only, "registration_only"),
        }


@dataclass(frozen=True)
class StorageWithdrawArgs:
    amount: Balance | None = None

    def as_json(self) -> dict[str, Any]:
        return {"amount": _optional_amount(self.amount, "amount")}


@dataclass(frozen=True)
class StorageUnregisterArgs:
    force: bool | None = None

    def as_json(self) -> dict[str, Any]:
        return {"force": _optional_flag(self.force, "force")}


@dataclass(frozen=True)
class AccountArgs:
    account: AccountId

    def as_json(self) -> dict[str, Any]:
        return {"account": validate_account_id(self.account, "account")}


@dataclass(frozen=True)
class AccountIdArgs:
    account_id: AccountId

    def as_json(self) -> dict[str, Any]:
        return {"account_id": validate_account_id(self.account_id, "account_id")}


@dataclass(frozen=True)
class PausedFlagsArgs:
    paused: PausedMask | int

    def write_borsh(self, writer: BorshWriter) -> None:
        writer.write_u8(self.paused, "paused")


@dataclass(frozen=True)
class WithdrawArgs:
    recipient_address: str | bytes
    amount: Balance

    def write_borsh(self, writer: BorshWriter) -> None:
        writer.write_fixed(
            to_address_bytes(self.recipient_address, "recipient_address"),
            ADDRESS_LENGTH,
            "recipient_address",
        )
        writer.write_u128(self.amount)


@dataclass(frozen=True)
class EngineScoped:
    """Base arguments executed by the engine on behalf of ``sender_id``."""

    sender_id: AccountId
    inner: Any

    def as_json(self) -> dict[str, Any]:
        as_json = getattr(self.inner, "as_json", None)
        if as_json is None:
            raise EncodingError(
                "Inner arguments have no structured form", field="args", value=self.inner
            )
        inner = as_json()
        if "sender_id" in inner:
            raise EncodingError(
                "Engine-scoped arguments already carry a sender_id",
                field="sender_id",
                value=inner["sender_id"],
            )
        return {"sender_id": validate_account_id(self.sender_id, "sender_id"), **inner}

    def write_borsh(self, writer: BorshWriter) -> None:
        write = getattr(self.inner, "write_borsh", None)
        if write is None:
            raise EncodingError(
                "Inner arguments have no binary form", field="args", value=self.inner
            )
        writer.write_string(validate_account_id(self.sender_id, "sender_id"), "sender_id")
        write(writer)
