"""Eth-connector API - typed requests for the eth-connector contract.

This library maps the contract's calls and views onto typed request
objects, encodes their arguments with the encoding each method expects,
and decodes the raw results returned over NEAR JSON-RPC.
"""

from .calls import ContractRequest, RequestBuilder
from .client import EthConnectorClient
from .codec import Encoding, encode_binary, encode_structured
from .config import ConnectorClientConfig
from .constants import DEFAULT_GAS, MAX_GAS, ONE_YOCTO
from .contract import EthConnectorContract
from .decoders import ResultShape, decode_result
from .dispatcher import RequestDispatcher
from .exceptions import (
    ConfigurationError,
    ConnectorError,
    DecodingError,
    EncodingError,
    TransportError,
)
from .operations import Operation, OperationDescriptor
from .transport import FunctionCallAction, JsonRpcTransport, Transport
from .types import (
    FungibleTokenMetadata,
    MigrationCheckKind,
    MigrationCheckResult,
    MigrationInputData,
    PausedMask,
    Proof,
    StorageBalance,
    StorageBalanceBounds,
    WithdrawResult,
)

__version__ = "0.1.0"

__all__ = [
    # Client surface
    "EthConnectorClient",
    "EthConnectorContract",
    "ConnectorClientConfig",
    "ContractRequest",
    "RequestBuilder",
    "RequestDispatcher",
    "Transport",
    "JsonRpcTransport",
    "FunctionCallAction",
    # Catalog and encodings
    "Operation",
    "OperationDescriptor",
    "Encoding",
    "ResultShape",
    "encode_structured",
    "encode_binary",
    "decode_result",
    # Types
    "FungibleTokenMetadata",
    "MigrationCheckKind",
    "MigrationCheckResult",
    "MigrationInputData",
    "PausedMask",
    "Proof",
    "StorageBalance",
    "StorageBalanceBounds",
    "WithdrawResult",
    # Constants
    "DEFAULT_GAS",
    "MAX_GAS",
    "ONE_YOCTO",
    # Exceptions
    "ConnectorError",
    "EncodingError",
    "TransportError",
    "DecodingError",
    "ConfigurationError",
]
