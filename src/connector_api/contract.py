"""Typed facade over the eth-connector contract."""

from __future__ import annotations

from .args import (
    AccountArgs,
    AccountIdArgs,
    EngineAccountArgs,
    EngineScoped,
    FtTransferArgs,
    FtTransferCallArgs,
    InitArgs,
    NoArgs,
    PausedFlagsArgs,
    StorageDepositArgs,
    StorageUnregisterArgs,
    StorageWithdrawArgs,
    WithdrawArgs,
)
from .calls import ContractRequest, RequestBuilder
from .constants import DEFAULT_GAS
from .operations import Operation
from .types import (
    AccountId,
    Balance,
    FungibleTokenMetadata,
    MigrationCheckResult,
    MigrationInputData,
    PausedMask,
    Proof,
    StorageBalance,
    StorageBalanceBounds,
    WithdrawResult,
)


class EthConnectorContract:
    """Build requests against one deployed eth-connector contract.

    Every method is a pure factory: it encodes its arguments and returns a
    :class:`ContractRequest` without touching the network.
    """

    def __init__(self, contract_id: str, *, default_gas: int = DEFAULT_GAS) -> None:
        self._builder = RequestBuilder(contract_id, default_gas=default_gas)

    @property
    def contract_id(self) -> str:
        return self._builder.contract_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.contract_id!r})"

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------
    def init(
        self,
        prover_account: AccountId,
        eth_custodian_address: str,
        metadata: FungibleTokenMetadata,
        account_with_access_right: AccountId,
        owner_id: AccountId,
    ) -> ContractRequest[None]:
        return self._builder.build(
            Operation.NEW,
            InitArgs(
                prover_account=prover_account,
                eth_custodian_address=eth_custodian_address,
                metadata=metadata,
                account_with_access_right=account_with_access_right,
                owner_id=owner_id,
            ),
        )

    def ft_transfer(
        self, receiver_id: AccountId, amount: Balance, memo: str | None = None
    ) -> ContractRequest[None]:
        return self._builder.build(Operation.FT_TRANSFER, FtTransferArgs(receiver_id, amount, memo))

    def ft_transfer_call(
        self, receiver_id: AccountId, amount: Balance, memo: str | None, msg: str
    ) -> ContractRequest[Balance]:
        return self._builder.build(
            Operation.FT_TRANSFER_CALL, FtTransferCallArgs(receiver_id, amount, memo, msg)
        )

    def engine_ft_transfer(
        self,
        sender_id: AccountId,
        receiver_id: AccountId,
        amount: Balance,
        memo: str | None = None,
    ) -> ContractRequest[None]:
        return self._builder.build(
            Operation.ENGINE_FT_TRANSFER,
            EngineScoped(sender_id, FtTransferArgs(receiver_id, amount, memo)),
        )

    def engine_ft_transfer_call(
        self,
        sender_id: AccountId,
        receiver_id: AccountId,
        amount: Balance,
        memo: str | None,
        msg: str,
    ) -> ContractRequest[Balance]:
        return self._builder.build(
            Operation.ENGINE_FT_TRANSFER_CALL,
            EngineScoped(sender_id, FtTransferCallArgs(receiver_id, amount, memo, msg)),
        )

    def set_engine_account(self, engine_account: AccountId) -> ContractRequest[None]:
        return self._builder.build(Operation.SET_ENGINE_ACCOUNT, EngineAccountArgs(engine_account))

    def remove_engine_account(self, engine_account: AccountId) -> ContractRequest[None]:
        return self._builder.build(
            Operation.REMOVE_ENGINE_ACCOUNT, EngineAccountArgs(engine_account)
        )

    def storage_deposit(
        self, account_id: AccountId | None = None, registration_only: bool | None = None
    ) -> ContractRequest[StorageBalance]:
        return self._builder.build(
            Operation.STORAGE_DEPOSIT, StorageDepositArgs(account_id, registration_only)
        )

    def storage_withdraw(self, amount: Balance | None = None) -> ContractRequest[StorageBalance]:
        return self._builder.build(Operation.STORAGE_WITHDRAW, StorageWithdrawArgs(amount))

    def storage_unregister(self, force: bool | None = None) -> ContractRequest[bool]:
        return self._builder.build(Operation.STORAGE_UNREGISTER, StorageUnregisterArgs(force))

    def engine_storage_deposit(
        self,
        sender_id: AccountId,
        account_id: AccountId | None = None,
        registration_only: bool | None = None,
    ) -> ContractRequest[StorageBalance]:
        return self._builder.build(
            Operation.ENGINE_STORAGE_DEPOSIT,
            EngineScoped(sender_id, StorageDepositArgs(account_id, registration_only)),
        )

    def engine_storage_withdraw(
        self, sender_id: AccountId, amount: Balance | None = None
    ) -> ContractRequest[StorageBalance]:
        return self._builder.build(
            Operation.ENGINE_STORAGE_WITHDRAW,
            EngineScoped(sender_id, StorageWithdrawArgs(amount)),
        )

    def engine_storage_unregister(
        self, sender_id: AccountId, force: bool | None = None
    ) -> ContractRequest[bool]:
        return self._builder.build(
            Operation.ENGINE_STORAGE_UNREGISTER,
            EngineScoped(sender_id, StorageUnregisterArgs(force)),
        )

    def set_paused_flags(self, paused: PausedMask | int) -> ContractRequest[None]:
        return self._builder.build(Operation.SET_PAUSED_FLAGS, PausedFlagsArgs(paused))

    def set_access_right(self, account: AccountId) -> ContractRequest[None]:
        return self._builder.build(Operation.SET_ACCESS_RIGHT, AccountArgs(account))

    def withdraw(
        self, recipient_address: str | bytes, amount: Balance
    ) -> ContractRequest[WithdrawResult]:
        return self._builder.build(Operation.WITHDRAW, WithdrawArgs(recipient_address, amount))

    def engine_withdraw(
        self, sender_id: AccountId, recipient_address: str | bytes, amount: Balance
    ) -> ContractRequest[WithdrawResult]:
        return self._builder.build(
            Operation.ENGINE_WITHDRAW,
            EngineScoped(sender_id, WithdrawArgs(recipient_address, amount)),
        )

    def deposit(self, raw_proof: Proof) -> ContractRequest[None]:
        return self._builder.build(Operation.DEPOSIT, raw_proof)

    def migrate(self, data: MigrationInputData) -> ContractRequest[None]:
        return self._builder.build(Operation.MIGRATE, data)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def get_bridge_prover(self) -> ContractRequest[AccountId]:
        return self._builder.build(Operation.GET_BRIDGE_PROVER, NoArgs())

    def check_migration_correctness(
        self, data: MigrationInputData
    ) -> ContractRequest[MigrationCheckResult]:
        return self._builder.build(Operation.CHECK_MIGRATION_CORRECTNESS, data)

    def ft_metadata(self) -> ContractRequest[FungibleTokenMetadata]:
        return self._builder.build(Operation.FT_METADATA, NoArgs())

    def get_paused_flags(self) -> ContractRequest[PausedMask]:
        return self._builder.build(Operation.GET_PAUSED_FLAGS, NoArgs())

    def get_account_with_access_right(self) -> ContractRequest[AccountId]:
        return self._builder.build(Operation.GET_ACCOUNT_WITH_ACCESS_RIGHT, NoArgs())

    def is_owner(self) -> ContractRequest[bool]:
        return self._builder.build(Operation.IS_OWNER, NoArgs())

    def is_used_proof(self, proof: Proof) -> ContractRequest[bool]:
        return self._builder.build(Operation.IS_USED_PROOF, proof)

    def storage_balance_of(self, account_id: AccountId) -> ContractRequest[StorageBalance | None]:
        return self._builder.build(Operation.STORAGE_BALANCE_OF, AccountIdArgs(account_id))

    def storage_balance_bounds(self) -> ContractRequest[StorageBalanceBounds]:
        return self._builder.build(Operation.STORAGE_BALANCE_BOUNDS, NoArgs())

    def is_engine_account_exist(self, engine_account: AccountId) -> ContractRequest[bool]:
        return self._builder.build(
            Operation.IS_ENGINE_ACCOUNT_EXIST, EngineAccountArgs(engine_account)
        )

    def ft_total_supply(self) -> ContractRequest[Balance]:
        return self._builder.build(Operation.FT_TOTAL_SUPPLY, NoArgs())

    def ft_balance_of(self, account_id: AccountId) -> ContractRequest[Balance]:
        return self._builder.build(Operation.FT_BALANCE_OF, AccountIdArgs(account_id))
