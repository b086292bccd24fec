"""Transport interface and a NEAR JSON-RPC implementation on top of requests."""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from .exceptions import TransportError

logger = logging.getLogger(__name__)

_RPC_ID = "connector-api"


class Transport(Protocol):
    """Submit encoded calls and views; return the raw result bytes."""

    def call(
        self,
        contract_id: str,
        method_name: str,
        args: bytes,
        *,
        gas: int,
        deposit: int,
    ) -> bytes: ...

    def view(self, contract_id: str, method_name: str, args: bytes) -> bytes: ...


@dataclass(frozen=True)
class FunctionCallAction:
    """Unsigned function call handed to the external signer."""

    receiver_id: str
    method_name: str
    args: bytes
    gas: int
    deposit: int


Signer = Callable[[FunctionCallAction], str]
"""Returns the base64-encoded signed transaction for an action."""


class JsonRpcTransport:
    """Talk to a NEAR RPC node; signing is delegated to ``signer``."""

    def __init__(
        self,
        rpc_url: str,
        session: requests.Session,
        *,
        request_timeout: float,
        finality: str = "final",
        signer: Signer | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._session = session
        self._request_timeout = request_timeout
        self._finality = finality
        self._signer = signer

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    # ------------------------------------------------------------------
    # Transport interface
    # ------------------------------------------------------------------
    def view(self, contract_id: str, method_name: str, args: bytes) -> bytes:
        result = self._rpc(
            "query",
            {
                "request_type": "call_function",
                "finality": self._finality,
                "account_id": contract_id,
                "method_name": method_name,
                "args_base64": base64.b64encode(args).decode("ascii"),
            },
        )

        if not isinstance(result, Mapping):
            raise TransportError(
                "Malformed view response", endpoint=self._rpc_url, details={"result": result}
            )

        if "error" in result:
            raise TransportError(
                f"View {method_name} failed",
                endpoint=self._rpc_url,
                details={"error": result["error"], "logs": result.get("logs", [])},
            )

        payload = result.get("result")
        if not isinstance(payload, list):
            raise TransportError(
                "View response carries no result bytes",
                endpoint=self._rpc_url,
                details={"result": payload},
            )

        try:
            return bytes(payload)
        except (TypeError, ValueError) as exc:
            raise TransportError(
                "View response carries malformed result bytes",
                endpoint=self._rpc_url,
                details={"error": str(exc)},
            ) from exc

    def call(
        self,
        contract_id: str,
        method_name: str,
        args: bytes,
        *,
        gas: int,
        deposit: int,
    ) -> bytes:
        if self._signer is None:
            raise TransportError(
                "No signer configured; cannot submit state-changing calls",
                endpoint=self._rpc_url,
                details={"method_name": method_name},
            )

        action = FunctionCallAction(
            receiver_id=contract_id,
            method_name=method_name,
            args=args,
            gas=gas,
            deposit=deposit,
        )
        signed_tx = self._signer(action)
        result = self._rpc("broadcast_tx_commit", [signed_tx])

        status = result.get("status") if isinstance(result, Mapping) else None
        if not isinstance(status, Mapping):
            raise TransportError(
                "Transaction outcome carries no status",
                endpoint=self._rpc_url,
                details={"result": result},
            )

        if "Failure" in status:
            raise TransportError(
                f"Call {method_name} failed",
                endpoint=self._rpc_url,
                details={
                    "failure": status["Failure"],
                    "transaction_hash": _transaction_hash(result),
                },
            )

        if "SuccessValue" not in status:
            raise TransportError(
                "Transaction did not complete",
                endpoint=self._rpc_url,
                details={"status": dict(status)},
            )

        logger.info(
            "Call %s confirmed hash=%s", method_name, _transaction_hash(result) or "unknown"
        )
        try:
            return base64.b64decode(status["SuccessValue"] or "", validate=True)
        except (binascii.Error, TypeError) as exc:
            raise TransportError(
                "Transaction returned a malformed success value",
                endpoint=self._rpc_url,
                details={"error": str(exc)},
            ) from exc

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _rpc(self, method: str, params: Any) -> Any:
        payload = {"jsonrpc": "2.0", "id": _RPC_ID, "method": method, "params": params}
        logger.debug("RPC %s -> %s", method, self._rpc_url)

        try:
            response = self._session.post(
                self._rpc_url, json=payload, timeout=self._request_timeout
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(
                f"RPC request {method} failed",
                endpoint=self._rpc_url,
                status_code=getattr(exc.response, "status_code", None),
                details={"error": str(exc)},
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                "RPC response is not JSON",
                endpoint=self._rpc_url,
                status_code=response.status_code,
                details={"error": str(exc)},
            ) from exc

        if not isinstance(body, Mapping):
            raise TransportError(
                "RPC response is not a JSON object",
                endpoint=self._rpc_url,
                status_code=response.status_code,
            )

        error = body.get("error")
        if error is not None:
            raise TransportError(
                f"RPC {method} returned an error",
                endpoint=self._rpc_url,
                status_code=response.status_code,
                details={"error": error},
            )

        if "result" not in body:
            raise TransportError(
                "RPC response carries no result",
                endpoint=self._rpc_url,
                status_code=response.status_code,
            )

        return body["result"]


def _transaction_hash(result: Mapping[str, Any]) -> str | None:
    transaction = result.get("transaction")
    if isinstance(transaction, Mapping):
        return transaction.get("hash")
    return None
