"""Tests for the operation catalog."""

import pytest

from connector_api.codec import Encoding
from connector_api.constants import ONE_YOCTO
from connector_api.decoders import ResultShape
from connector_api.operations import (
    CALL_OPERATIONS,
    VIEW_OPERATIONS,
    Operation,
    OperationDescriptor,
)

BINARY_METHODS = {
    "set_paused_flags",
    "withdraw",
    "engine_withdraw",
    "deposit",
    "migrate",
    "check_migration_correctness",
    "is_used_proof",
}


def test_catalog_size() -> None:
    assert len(CALL_OPERATIONS) == 19
    assert len(VIEW_OPERATIONS) == 12
    assert len(Operation) == 31


def test_method_names_are_unique() -> None:
    names = [operation.method_name for operation in Operation]
    assert len(names) == len(set(names))


def test_binary_encoding_is_reserved_for_binary_payloads() -> None:
    binary = {op.method_name for op in Operation if op.encoding is Encoding.BINARY}
    assert binary == BINARY_METHODS


def test_views_never_attach_deposits() -> None:
    assert all(op.descriptor.attached_deposit == 0 for op in VIEW_OPERATIONS)


@pytest.mark.parametrize(
    "operation",
    [
        Operation.FT_TRANSFER,
        Operation.FT_TRANSFER_CALL,
        Operation.ENGINE_FT_TRANSFER,
        Operation.ENGINE_FT_TRANSFER_CALL,
        Operation.STORAGE_WITHDRAW,
        Operation.STORAGE_UNREGISTER,
    ],
)
def test_one_yocto_operations(operation: Operation) -> None:
    assert operation.descriptor.attached_deposit == ONE_YOCTO


def test_engine_variants_share_encoding_and_result() -> None:
    pairs = [
        (Operation.FT_TRANSFER, Operation.ENGINE_FT_TRANSFER),
        (Operation.FT_TRANSFER_CALL, Operation.ENGINE_FT_TRANSFER_CALL),
        (Operation.STORAGE_DEPOSIT, Operation.ENGINE_STORAGE_DEPOSIT),
        (Operation.STORAGE_WITHDRAW, Operation.ENGINE_STORAGE_WITHDRAW),
        (Operation.STORAGE_UNREGISTER, Operation.ENGINE_STORAGE_UNREGISTER),
        (Operation.WITHDRAW, Operation.ENGINE_WITHDRAW),
    ]
    for base, engine in pairs:
        assert engine.method_name == f"engine_{base.method_name}"
        assert engine.encoding is base.encoding
        assert engine.result is base.result


def test_by_method() -> None:
    assert Operation.by_method("ft_transfer") is Operation.FT_TRANSFER
    with pytest.raises(LookupError):
        Operation.by_method("ft_burn")


def test_descriptor_rejects_mismatched_decoder() -> None:
    with pytest.raises(ValueError):
        OperationDescriptor("bad", True, Encoding.BINARY, ResultShape.METADATA)


def test_descriptor_rejects_view_deposit() -> None:
    with pytest.raises(ValueError):
        OperationDescriptor("bad", False, Encoding.STRUCTURED, ResultShape.BOOL, 1)


def test_descriptors_are_immutable() -> None:
    with pytest.raises(AttributeError):
        Operation.FT_TRANSFER.descriptor.method_name = "ft_burn"  # type: ignore[misc]
