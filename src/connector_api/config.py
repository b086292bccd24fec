"""Configuration container for the eth-connector client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import DEFAULT_GAS, MAX_GAS
from .exceptions import ConfigurationError

DEFAULT_RPC_URL = "https://rpc.testnet.near.org"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_FINALITY = "final"
FINALITY_OPTIONS = ("optimistic", "near-final", "final")

ENV_CONTRACT_ID = "CONNECTOR_CONTRACT_ID"
ENV_RPC_URL = "NEAR_RPC_URL"
ENV_REQUEST_TIMEOUT = "CONNECTOR_REQUEST_TIMEOUT"
ENV_FINALITY = "CONNECTOR_FINALITY"
ENV_DEFAULT_GAS = "CONNECTOR_DEFAULT_GAS"


@dataclass(frozen=True)
class ConnectorClientConfig:
    """Settings needed to address the contract and reach an RPC node."""

    contract_id: str
    rpc_url: str = DEFAULT_RPC_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    finality: str = DEFAULT_FINALITY
    default_gas: int = DEFAULT_GAS

    def __post_init__(self) -> None:
        if not self.contract_id:
            raise ConfigurationError("Contract id is required", field="contract_id")
        if self.request_timeout <= 0:
            raise ConfigurationError("Request timeout must be positive", field="request_timeout")
        if self.finality not in FINALITY_OPTIONS:
            raise ConfigurationError(
                f"Finality must be one of {', '.join(FINALITY_OPTIONS)}", field="finality"
            )
        if not 0 < self.default_gas <= MAX_GAS:
            raise ConfigurationError("Default gas is out of range", field="default_gas")

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> ConnectorClientConfig:
        """Build a config from environment variables, loading ``.env`` first."""

        load_dotenv(dotenv_path)

        contract_id = os.getenv(ENV_CONTRACT_ID)
        if not contract_id:
            raise ConfigurationError(f"{ENV_CONTRACT_ID} is not set", field="contract_id")

        try:
            request_timeout = float(os.getenv(ENV_REQUEST_TIMEOUT, str(DEFAULT_REQUEST_TIMEOUT)))
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_REQUEST_TIMEOUT} must be a number", field="request_timeout"
            ) from exc

        try:
            default_gas = int(os.getenv(ENV_DEFAULT_GAS, str(DEFAULT_GAS)))
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_DEFAULT_GAS} must be an integer", field="default_gas"
            ) from exc

        return cls(
            contract_id=contract_id,
            rpc_url=os.getenv(ENV_RPC_URL, DEFAULT_RPC_URL).rstrip("/"),
            request_timeout=request_timeout,
            finality=os.getenv(ENV_FINALITY, DEFAULT_FINALITY),
            default_gas=default_gas,
        )
