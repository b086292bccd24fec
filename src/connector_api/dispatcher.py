"""Request submission and result decoding."""

from __future__ import annotations

import logging
from typing import TypeVar

from .calls import ContractRequest
from .constants import DEFAULT_GAS
from .exceptions import ConnectorError, TransportError
from .transport import Transport

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class RequestDispatcher:
    """Hand built requests to a transport and decode what comes back.

    Failures are surfaced as-is; retry policy belongs to the transport.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def submit(self, request: ContractRequest[ResultT]) -> ResultT:
        raw = self._send(request)
        result = request.decode(raw)
        logger.debug(
            "Decoded %s result for %s", request.operation.result.value, request.method_name
        )
        return result

    def _send(self, request: ContractRequest[ResultT]) -> bytes:
        kind = "call" if request.mutates else "view"
        logger.info("Dispatching %s %s on %s", kind, request.method_name, request.contract_id)

        try:
            if request.mutates:
                raw = self._transport.call(
                    request.contract_id,
                    request.method_name,
                    request.args,
                    gas=request.gas if request.gas is not None else DEFAULT_GAS,
                    deposit=request.deposit or 0,
                )
            else:
                raw = self._transport.view(request.contract_id, request.method_name, request.args)
        except ConnectorError:
            raise
        except Exception as exc:
            raise TransportError(
                f"Failed to submit {kind} {request.method_name}",
                endpoint=request.contract_id,
                details={"request": request.describe(), "error": str(exc)},
            ) from exc

        if isinstance(raw, bytes | bytearray):
            logger.info("Received %d bytes for %s %s", len(raw), kind, request.method_name)
        return raw
