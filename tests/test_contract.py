"""Tests for request building through the contract facade."""

from __future__ import annotations

import json
import struct
from collections.abc import Callable
from typing import Any

import pytest

from connector_api.calls import ContractRequest
from connector_api.codec import Encoding, encode_binary
from connector_api.constants import DEFAULT_GAS, MAX_GAS, ONE_YOCTO
from connector_api.contract import EthConnectorContract
from connector_api.exceptions import EncodingError
from connector_api.operations import Operation
from connector_api.types import FungibleTokenMetadata, MigrationInputData, PausedMask, Proof

CONTRACT_ID = "eth-connector.test.near"
RECIPIENT = "0x" + "ab" * 20
CUSTODIAN = "096DE9C2B8A5B8c22cEe3289B101f6960d68E51E"


@pytest.fixture
def contract() -> EthConnectorContract:
    return EthConnectorContract(CONTRACT_ID)


def _proof() -> Proof:
    return Proof(
        log_index=1,
        log_entry_data=b"\x01\x02",
        receipt_index=0,
        receipt_data=b"\x03",
        header_data=b"\x04",
        proof=(b"\x05",),
    )


def _metadata() -> FungibleTokenMetadata:
    return FungibleTokenMetadata(name="Ether", symbol="ETH", decimals=18)


BUILDERS: dict[Operation, Callable[[EthConnectorContract], ContractRequest[Any]]] = {
    Operation.NEW: lambda c: c.init(
        "prover.near", CUSTODIAN, _metadata(), "relayer.near", "owner.near"
    ),
    Operation.FT_TRANSFER: lambda c: c.ft_transfer("alice", 100),
    Operation.FT_TRANSFER_CALL: lambda c: c.ft_transfer_call("alice", 100, None, "msg"),
    Operation.ENGINE_FT_TRANSFER: lambda c: c.engine_ft_transfer("aurora", "alice", 100),
    Operation.ENGINE_FT_TRANSFER_CALL: lambda c: c.engine_ft_transfer_call(
        "aurora", "alice", 100, None, "msg"
    ),
    Operation.SET_ENGINE_ACCOUNT: lambda c: c.set_engine_account("aurora"),
    Operation.REMOVE_ENGINE_ACCOUNT: lambda c: c.remove_engine_account("aurora"),
    Operation.STORAGE_DEPOSIT: lambda c: c.storage_deposit(),
    Operation.STORAGE_WITHDRAW: lambda c: c.storage_withdraw(),
    Operation.STORAGE_UNREGISTER: lambda c: c.storage_unregister(),
    Operation.ENGINE_STORAGE_DEPOSIT: lambda c: c.engine_storage_deposit("aurora"),
    Operation.ENGINE_STORAGE_WITHDRAW: lambda c: c.engine_storage_withdraw("aurora"),
    Operation.ENGINE_STORAGE_UNREGISTER: lambda c: c.engine_storage_unregister("aurora"),
    Operation.SET_PAUSED_FLAGS: lambda c: c.set_paused_flags(PausedMask.PAUSE_DEPOSIT),
    Operation.SET_ACCESS_RIGHT: lambda c: c.set_access_right("relayer.near"),
    Operation.WITHDRAW: lambda c: c.withdraw(RECIPIENT, 500),
    Operation.ENGINE_WITHDRAW: lambda c: c.engine_withdraw("aurora", RECIPIENT, 500),
    Operation.DEPOSIT: lambda c: c.deposit(_proof()),
    Operation.MIGRATE: lambda c: c.migrate(MigrationInputData(accounts={"alice": 1})),
    Operation.GET_BRIDGE_PROVER: lambda c: c.get_bridge_prover(),
    Operation.CHECK_MIGRATION_CORRECTNESS: lambda c: c.check_migration_correctness(
        MigrationInputData(accounts={"alice": 1})
    ),
    Operation.FT_METADATA: lambda c: c.ft_metadata(),
    Operation.GET_PAUSED_FLAGS: lambda c: c.get_paused_flags(),
    Operation.GET_ACCOUNT_WITH_ACCESS_RIGHT: lambda c: c.get_account_with_access_right(),
    Operation.IS_OWNER: lambda c: c.is_owner(),
    Operation.IS_USED_PROOF: lambda c: c.is_used_proof(_proof()),
    Operation.STORAGE_BALANCE_OF: lambda c: c.storage_balance_of("alice"),
    Operation.STORAGE_BALANCE_BOUNDS: lambda c: c.storage_balance_bounds(),
    Operation.IS_ENGINE_ACCOUNT_EXIST: lambda c: c.is_engine_account_exist("aurora"),
    Operation.FT_TOTAL_SUPPLY: lambda c: c.ft_total_supply(),
    Operation.FT_BALANCE_OF: lambda c: c.ft_balance_of("alice"),
}


def test_every_operation_has_a_builder() -> None:
    assert set(BUILDERS) == set(Operation)


@pytest.mark.parametrize("operation", list(Operation), ids=lambda op: op.method_name)
def test_request_encoding_matches_descriptor(
    contract: EthConnectorContract, operation: Operation
) -> None:
    request = BUILDERS[operation](contract)

    assert request.operation is operation
    assert request.contract_id == CONTRACT_ID
    assert request.method_name == operation.method_name
    assert request.encoding is operation.encoding
    assert request.mutates is operation.mutates

    if request.encoding is Encoding.STRUCTURED:
        assert isinstance(json.loads(request.args), dict)

    if request.mutates:
        assert request.gas == DEFAULT_GAS
        assert request.deposit == operation.descriptor.attached_deposit
    else:
        assert request.gas is None
        assert request.deposit is None


@pytest.mark.parametrize("operation", list(Operation), ids=lambda op: op.method_name)
def test_builds_are_deterministic(contract: EthConnectorContract, operation: Operation) -> None:
    assert BUILDERS[operation](contract) == BUILDERS[operation](contract)


def test_ft_transfer_scenario(contract: EthConnectorContract) -> None:
    request = contract.ft_transfer("alice", amount=100, memo=None)

    assert request.method_name == "ft_transfer"
    assert request.encoding is Encoding.STRUCTURED
    assert request.args == b'{"receiver_id":"alice","amount":"100","memo":null}'
    assert json.loads(request.args) == {"receiver_id": "alice", "amount": "100", "memo": None}
    assert request.deposit == ONE_YOCTO


def test_amounts_keep_128_bit_precision(contract: EthConnectorContract) -> None:
    request = contract.ft_transfer("alice", 2**128 - 1)
    assert json.loads(request.args)["amount"] == "340282366920938463463374607431768211455"


def test_ft_transfer_call_carries_message(contract: EthConnectorContract) -> None:
    request = contract.ft_transfer_call("alice", 5, "memo", "0x1234")
    assert json.loads(request.args) == {
        "receiver_id": "alice",
        "amount": "5",
        "memo": "memo",
        "msg": "0x1234",
    }


def test_engine_transfer_wraps_base_arguments(contract: EthConnectorContract) -> None:
    request = contract.engine_ft_transfer("aurora", "alice", 100)
    assert request.args == (
        b'{"sender_id":"aurora","receiver_id":"alice","amount":"100","memo":null}'
    )


def test_init_arguments(contract: EthConnectorContract) -> None:
    request = contract.init("prover.near", CUSTODIAN, _metadata(), "relayer.near", "owner.near")
    payload = json.loads(request.args)

    assert payload["prover_account"] == "prover.near"
    assert payload["eth_custodian_address"] == CUSTODIAN
    assert payload["account_with_access_right"] == "relayer.near"
    assert payload["owner_id"] == "owner.near"
    assert payload["metadata"]["symbol"] == "ETH"


def test_init_rejects_bad_custodian(contract: EthConnectorContract) -> None:
    with pytest.raises(EncodingError) as excinfo:
        contract.init("prover.near", "0x1234", _metadata(), "relayer.near", "owner.near")
    assert excinfo.value.field == "eth_custodian_address"


def test_init_rejects_text_reference_hash(contract: EthConnectorContract) -> None:
    metadata = FungibleTokenMetadata(
        name="Ether", symbol="ETH", decimals=18, reference_hash="ab" * 32  # type: ignore[arg-type]
    )

    with pytest.raises(EncodingError) as excinfo:
        contract.init("prover.near", CUSTODIAN, metadata, "relayer.near", "owner.near")
    assert excinfo.value.field == "reference_hash"


def test_migrate_rejects_non_string_account_keys(contract: EthConnectorContract) -> None:
    data = MigrationInputData(accounts={"alice": 1, 2: 3})  # type: ignore[dict-item]

    with pytest.raises(EncodingError) as excinfo:
        contract.migrate(data)
    assert excinfo.value.field == "accounts"


def test_omitted_optionals_serialize_as_null(contract: EthConnectorContract) -> None:
    assert contract.storage_deposit().args == b'{"account_id":null,"registration_only":null}'
    assert contract.storage_withdraw().args == b'{"amount":null}'
    assert contract.storage_unregister().args == b'{"force":null}'
    assert contract.engine_storage_deposit("aurora").args == (
        b'{"sender_id":"aurora","account_id":null,"registration_only":null}'
    )


def test_storage_deposit_with_values(contract: EthConnectorContract) -> None:
    request = contract.storage_deposit("bob.near", registration_only=True)
    assert json.loads(request.args) == {"account_id": "bob.near", "registration_only": True}
    assert json.loads(contract.storage_withdraw(10).args) == {"amount": "10"}


def test_named_field_account_arguments(contract: EthConnectorContract) -> None:
    assert json.loads(contract.set_access_right("relayer.near").args) == {
        "account": "relayer.near"
    }
    assert json.loads(contract.ft_balance_of("alice").args) == {"account_id": "alice"}
    assert json.loads(contract.is_engine_account_exist("aurora").args) == {
        "engine_account": "aurora"
    }


def test_argumentless_views_send_empty_object(contract: EthConnectorContract) -> None:
    assert contract.ft_metadata().args == b"{}"
    assert contract.get_paused_flags().args == b"{}"


def test_withdraw_scenario(contract: EthConnectorContract) -> None:
    request = contract.withdraw(RECIPIENT, amount=500)

    assert request.encoding is Encoding.BINARY
    assert request.args == bytes.fromhex("ab" * 20) + (500).to_bytes(16, "little")


@pytest.mark.parametrize("address", ["0xabcdef", "0x" + "ab" * 19, "0x" + "ab" * 21, b"\x00" * 32])
def test_withdraw_rejects_addresses_not_20_bytes(
    contract: EthConnectorContract, address: Any
) -> None:
    with pytest.raises(EncodingError) as excinfo:
        contract.withdraw(address, 500)
    assert excinfo.value.field == "recipient_address"


def test_engine_withdraw_prefixes_sender(contract: EthConnectorContract) -> None:
    base = contract.withdraw(RECIPIENT, 500).args
    request = contract.engine_withdraw("aurora", RECIPIENT, 500)
    assert request.args == struct.pack("<I", 6) + b"aurora" + base


def test_set_paused_flags_is_single_byte(contract: EthConnectorContract) -> None:
    request = contract.set_paused_flags(PausedMask.PAUSE_DEPOSIT | PausedMask.PAUSE_WITHDRAW)
    assert request.args == b"\x03"
    assert contract.set_paused_flags(PausedMask.UNPAUSE_ALL).args == b"\x00"
    with pytest.raises(EncodingError):
        contract.set_paused_flags(256)


def test_is_used_proof_encodes_exact_proof(contract: EthConnectorContract) -> None:
    proof = _proof()
    request = contract.is_used_proof(proof)

    assert request.encoding is Encoding.BINARY
    assert request.args == encode_binary(proof)
    assert request.decode(b"\x01") is True
    assert request.decode(b"\x00") is False


def test_deposit_requires_proof_shape(contract: EthConnectorContract) -> None:
    with pytest.raises(EncodingError):
        contract.deposit({"log_index": 1})  # type: ignore[arg-type]


def test_malformed_account_rejected_before_io(contract: EthConnectorContract) -> None:
    with pytest.raises(EncodingError) as excinfo:
        contract.ft_transfer("Alice!", 1)
    assert excinfo.value.field == "receiver_id"


def test_engine_sender_is_validated(contract: EthConnectorContract) -> None:
    with pytest.raises(EncodingError) as excinfo:
        contract.engine_withdraw("", RECIPIENT, 1)
    assert excinfo.value.field == "sender_id"


def test_with_gas_and_deposit(contract: EthConnectorContract) -> None:
    request = contract.storage_deposit("alice")
    funded = request.with_deposit(1_250_000_000_000_000_000_000).with_gas(MAX_GAS)

    assert funded.deposit == 1_250_000_000_000_000_000_000
    assert funded.gas == MAX_GAS
    assert funded.args == request.args
    assert request.deposit == 0

    with pytest.raises(EncodingError):
        request.with_gas(MAX_GAS + 1)


def test_views_reject_gas_and_deposit(contract: EthConnectorContract) -> None:
    request = contract.ft_total_supply()
    with pytest.raises(EncodingError):
        request.with_deposit(1)
    with pytest.raises(EncodingError):
        request.with_gas(DEFAULT_GAS)


def test_describe(contract: EthConnectorContract) -> None:
    assert contract.ft_balance_of("alice").describe() == {
        "contract_id": CONTRACT_ID,
        "method_name": "ft_balance_of",
        "kind": "view",
        "encoding": "json",
        "args_length": len(b'{"account_id":"alice"}'),
    }


def test_custom_default_gas() -> None:
    contract = EthConnectorContract(CONTRACT_ID, default_gas=42)
    assert contract.ft_transfer("alice", 1).gas == 42
    assert contract.contract_id == CONTRACT_ID
