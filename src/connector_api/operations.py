"""Static catalog of contract operations.

Each :class:`Operation` member carries an immutable descriptor fixing the
method name, whether the call mutates state, the argument encoding and
the result shape. Request encoding and response decoding both read the
same descriptor, so the two halves cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .codec import Encoding
from .constants import ONE_YOCTO
from .decoders import ResultShape, has_decoder


@dataclass(frozen=True)
class OperationDescriptor:
    method_name: str
    mutates: bool
    encoding: Encoding
    result: ResultShape
    attached_deposit: int = 0

    def __post_init__(self) -> None:
        if not has_decoder(self.encoding, self.result):
            raise ValueError(
                f"{self.method_name}: no {self.encoding.value} decoder for {self.result.value}"
            )
        if not self.mutates and self.attached_deposit:
            raise ValueError(f"{self.method_name}: view operations cannot attach a deposit")


def _call(
    method_name: str,
    encoding: Encoding,
    result: ResultShape = ResultShape.UNIT,
    *,
    deposit: int = 0,
) -> OperationDescriptor:
    return OperationDescriptor(method_name, True, encoding, result, deposit)


def _view(method_name: str, encoding: Encoding, result: ResultShape) -> OperationDescriptor:
    return OperationDescriptor(method_name, False, encoding, result)


_JSON = Encoding.STRUCTURED
_BORSH = Encoding.BINARY


class Operation(Enum):
    """Every call and view the contract exposes."""

    # Calls
    NEW = _call("new", _JSON)
    FT_TRANSFER = _call("ft_transfer", _JSON, deposit=ONE_YOCTO)
    FT_TRANSFER_CALL = _call("ft_transfer_call", _JSON, ResultShape.U128, deposit=ONE_YOCTO)
    ENGINE_FT_TRANSFER = _call("engine_ft_transfer", _JSON, deposit=ONE_YOCTO)
    ENGINE_FT_TRANSFER_CALL = _call(
        "engine_ft_transfer_call", _JSON, ResultShape.U128, deposit=ONE_YOCTO
    )
    SET_ENGINE_ACCOUNT = _call("set_engine_account", _JSON)
    REMOVE_ENGINE_ACCOUNT = _call("remove_engine_account", _JSON)
    STORAGE_DEPOSIT = _call("storage_deposit", _JSON, ResultShape.STORAGE_BALANCE)
    STORAGE_WITHDRAW = _call(
        "storage_withdraw", _JSON, ResultShape.STORAGE_BALANCE, deposit=ONE_YOCTO
    )
    STORAGE_UNREGISTER = _call("storage_unregister", _JSON, ResultShape.BOOL, deposit=ONE_YOCTO)
    ENGINE_STORAGE_DEPOSIT = _call("engine_storage_deposit", _JSON, ResultShape.STORAGE_BALANCE)
    ENGINE_STORAGE_WITHDRAW = _call(
        "engine_storage_withdraw", _JSON, ResultShape.STORAGE_BALANCE, deposit=ONE_YOCTO
    )
    ENGINE_STORAGE_UNREGISTER = _call(
        "engine_storage_unregister", _JSON, ResultShape.BOOL, deposit=ONE_YOCTO
    )
    SET_PAUSED_FLAGS = _call("set_paused_flags", _BORSH)
    SET_ACCESS_RIGHT = _call("set_access_right", _JSON)
    WITHDRAW = _call("withdraw", _BORSH, ResultShape.WITHDRAW_RESULT)
    ENGINE_WITHDRAW = _call("engine_withdraw", _BORSH, ResultShape.WITHDRAW_RESULT)
    DEPOSIT = _call("deposit", _BORSH)
    MIGRATE = _call("migrate", _BORSH)

    # Views
    GET_BRIDGE_PROVER = _view("get_bridge_prover", _JSON, ResultShape.ACCOUNT_ID)
    CHECK_MIGRATION_CORRECTNESS = _view(
        "check_migration_correctness", _BORSH, ResultShape.MIGRATION_CHECK
    )
    FT_METADATA = _view("ft_metadata", _JSON, ResultShape.METADATA)
    GET_PAUSED_FLAGS = _view("get_paused_flags", _JSON, ResultShape.PAUSED_MASK)
    GET_ACCOUNT_WITH_ACCESS_RIGHT = _view(
        "get_account_with_access_right", _JSON, ResultShape.ACCOUNT_ID
    )
    IS_OWNER = _view("is_owner", _JSON, ResultShape.BOOL)
    IS_USED_PROOF = _view("is_used_proof", _BORSH, ResultShape.BOOL)
    STORAGE_BALANCE_OF = _view(
        "storage_balance_of", _JSON, ResultShape.OPTIONAL_STORAGE_BALANCE
    )
    STORAGE_BALANCE_BOUNDS = _view(
        "storage_balance_bounds", _JSON, ResultShape.STORAGE_BALANCE_BOUNDS
    )
    IS_ENGINE_ACCOUNT_EXIST = _view("is_engine_account_exist", _JSON, ResultShape.BOOL)
    FT_TOTAL_SUPPLY = _view("ft_total_supply", _JSON, ResultShape.U128)
    FT_BALANCE_OF = _view("ft_balance_of", _JSON, ResultShape.U128)

    @property
    def descriptor(self) -> OperationDescriptor:
        return self.value

    @property
    def method_name(self) -> str:
        return self.value.method_name

    @property
    def mutates(self) -> bool:
        return self.value.mutates

    @property
    def encoding(self) -> Encoding:
        return self.value.encoding

    @property
    def result(self) -> ResultShape:
        return self.value.result

    @classmethod
    def by_method(cls, method_name: str) -> Operation:
        for operation in cls:
            if operation.method_name == method_name:
                return operation
        raise LookupError(f"Unknown contract method: {method_name}")


CALL_OPERATIONS = tuple(operation for operation in Operation if operation.mutates)
VIEW_OPERATIONS = tuple(operation for operation in Operation if not operation.mutates)
