"""High-level client wiring the contract facade to an RPC transport."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TypeVar

import requests

from .calls import ContractRequest
from .config import ConnectorClientConfig
from .contract import EthConnectorContract
from .dispatcher import RequestDispatcher
from .transport import JsonRpcTransport, Signer, Transport

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class EthConnectorClient:
    """Build requests with :attr:`contract` and run them with :meth:`submit`."""

    def __init__(
        self,
        config: ConnectorClientConfig,
        *,
        signer: Signer | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._session: requests.Session | None = None

        if transport is None:
            self._session = requests.Session()
            transport = JsonRpcTransport(
                config.rpc_url,
                self._session,
                request_timeout=config.request_timeout,
                finality=config.finality,
                signer=signer,
            )
            logger.info("Using NEAR RPC at %s", config.rpc_url)

        self._contract = EthConnectorContract(config.contract_id, default_gas=config.default_gas)
        self._dispatcher = RequestDispatcher(transport)

    @classmethod
    def from_env(cls, *, signer: Signer | None = None) -> EthConnectorClient:
        return cls(ConnectorClientConfig.from_env(), signer=signer)

    @property
    def config(self) -> ConnectorClientConfig:
        return self._config

    @property
    def contract(self) -> EthConnectorContract:
        return self._contract

    def submit(self, request: ContractRequest[ResultT]) -> ResultT:
        return self._dispatcher.submit(request)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> EthConnectorClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
