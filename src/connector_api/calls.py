"""Typed, ready-to-submit contract requests and the builder that encodes them."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .codec import Encoding, encode
from .constants import DEFAULT_GAS, MAX_GAS
from .decoders import decode_result
from .exceptions import EncodingError
from .operations import Operation
from .utils import to_u64, to_u128

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class ContractRequest(Generic[ResultT]):
    """Encoded call or view bound to one contract and one expected result type.

    Building a request performs no I/O; it can be inspected, logged or
    batched before it is handed to a transport.
    """

    contract_id: str
    operation: Operation
    args: bytes
    gas: int | None = None
    deposit: int | None = None

    @property
    def method_name(self) -> str:
        return self.operation.method_name

    @property
    def encoding(self) -> Encoding:
        return self.operation.encoding

    @property
    def mutates(self) -> bool:
        return self.operation.mutates

    def with_gas(self, gas: int) -> ContractRequest[ResultT]:
        """Return a copy of this call with a different prepaid gas limit."""
        self._require_call("gas")
        gas = to_u64(gas, "gas")
        if gas > MAX_GAS:
            raise EncodingError("Gas exceeds the per-call maximum", field="gas", value=gas)
        return dataclasses.replace(self, gas=gas)

    def with_deposit(self, deposit: int) -> ContractRequest[ResultT]:
        """Return a copy of this call with a different attached deposit."""
        self._require_call("deposit")
        return dataclasses.replace(self, deposit=to_u128(deposit, "deposit"))

    def decode(self, raw: bytes) -> ResultT:
        return decode_result(self.operation.encoding, self.operation.result, raw)

    def describe(self) -> dict[str, Any]:
        description: dict[str, Any] = {
            "contract_id": self.contract_id,
            "method_name": self.method_name,
            "kind": "call" if self.mutates else "view",
            "encoding": self.encoding.value,
            "args_length": len(self.args),
        }
        if self.mutates:
            description["gas"] = self.gas
            description["deposit"] = self.deposit
        return description

    def _require_call(self, field: str) -> None:
        if not self.mutates:
            raise EncodingError(
                f"{self.method_name} is a view; {field} cannot be attached",
                field=field,
                value=self.method_name,
            )


class RequestBuilder:
    """Encode operation arguments with the encoding fixed by the operation."""

    def __init__(self, contract_id: str, *, default_gas: int = DEFAULT_GAS) -> None:
        self._contract_id = contract_id
        self._default_gas = default_gas

    @property
    def contract_id(self) -> str:
        return self._contract_id

    def build(self, operation: Operation, args: Any) -> ContractRequest[Any]:
        payload = encode(operation.encoding, args)
        logger.debug(
            "Built %s request for %s (%d bytes)",
            operation.encoding.value,
            operation.method_name,
            len(payload),
        )

        if not operation.mutates:
            return ContractRequest(self._contract_id, operation, payload)

        return ContractRequest(
            self._contract_id,
            operation,
            payload,
            gas=self._default_gas,
            deposit=operation.descriptor.attached_deposit,
        )
