"""
Exception definitions for Staking Adapter
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional


class ErrorCode(Enum):
    """
    Unified error codes for staking operations

    1xxx - Upstream (RPC/HTTP) errors
    2xxx - Transaction errors
    7xxx - Operation / parameter errors
    9xxx - Configuration errors
    """
    # Upstream errors
    UPSTREAM_CONNECTION_FAILED = "1001"
    UPSTREAM_TIMEOUT = "1002"
    UPSTREAM_BAD_STATUS = "1003"
    UPSTREAM_INVALID_RESPONSE = "1004"
    UPSTREAM_QUERY_FAILED = "1005"

    # Transaction errors
    TX_BROADCAST_REJECTED = "2001"
    TX_MALFORMED = "2002"

    # Operation errors
    OPERATION_NOT_SUPPORTED = "7001"
    OPERATION_FAILED = "7002"
    PARAMETER_MISSING = "7003"
    PARAMETER_INVALID = "7004"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"
    CHAIN_UNKNOWN = "9003"
    PROVIDER_NOT_INITIALIZED = "9004"


class StakingAdapterError(Exception):
    """
    Base exception for all staking adapter errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for boundary layers (HTTP handlers, CLI)"""
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(StakingAdapterError):
    """
    Configuration-related errors

    Raised when:
    - Required provider configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)


class NotInitializedError(ConfigurationError):
    """Provider method called before initialize()"""

    def __init__(self, chain: str):
        super().__init__(
            f"{chain} provider used before initialize()",
            ErrorCode.PROVIDER_NOT_INITIALIZED,
        )
        self.chain = chain


class UnknownChainError(StakingAdapterError):
    """
    Registry miss - caller error, not recoverable
    """

    def __init__(self, chain_id: str, available: Iterable[str] = ()):
        available = sorted(available)
        super().__init__(
            f"No provider registered for chain '{chain_id}'. "
            f"Available chains: {', '.join(available) or 'none'}",
            ErrorCode.CHAIN_UNKNOWN,
            recoverable=False,
            details={"chain_id": chain_id, "available": available},
        )
        self.chain_id = chain_id
        self.available = available


class MissingParameterError(StakingAdapterError):
    """
    A chain-required per-operation option is absent

    Raised when:
    - Cosmos delegate/undelegate called without a denom
    - Stacks delegate/claim called without a public key
    """

    def __init__(self, message: str, parameter: Optional[str] = None, chain: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.PARAMETER_MISSING,
            recoverable=False,
            details={"parameter": parameter, "chain": chain},
        )
        self.parameter = parameter
        self.chain = chain

    @classmethod
    def option(cls, parameter: str, chain: str) -> "MissingParameterError":
        return cls(
            f"Option '{parameter}' is required for {chain}",
            parameter=parameter,
            chain=chain,
        )


class InvalidParameterError(StakingAdapterError):
    """
    A per-operation value is malformed

    Raised when:
    - Amount is negative or not representable in the chain's base unit
    - Hex payloads, addresses or public keys fail to decode
    """

    def __init__(self, message: str, parameter: Optional[str] = None, value: Any = None):
        super().__init__(
            message,
            ErrorCode.PARAMETER_INVALID,
            recoverable=False,
            details={"parameter": parameter, "value": str(value) if value is not None else None},
        )
        self.parameter = parameter
        self.value = value

    @classmethod
    def invalid(cls, parameter: str, value: Any, reason: str) -> "InvalidParameterError":
        return cls(f"Invalid {parameter} {value!r}: {reason}", parameter=parameter, value=value)


class UpstreamQueryError(StakingAdapterError):
    """
    Chain RPC/HTTP call failed or returned a non-success status

    The upstream status (HTTP status code or ABCI result code) is kept verbatim.
    Transport failures are flagged recoverable; the adapters never retry on their own.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UPSTREAM_QUERY_FAILED,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        upstream_code: Optional[int] = None,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            original_error=original_error,
            details={
                "endpoint": endpoint,
                "status_code": status_code,
                "upstream_code": upstream_code,
            },
        )
        self.endpoint = endpoint
        self.status_code = status_code
        self.upstream_code = upstream_code

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "UpstreamQueryError":
        return cls(
            f"Failed to connect to {endpoint}: {error}",
            ErrorCode.UPSTREAM_CONNECTION_FAILED,
            endpoint=endpoint,
            recoverable=True,
            original_error=error,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float, error: Exception = None) -> "UpstreamQueryError":
        return cls(
            f"Request to {endpoint} timed out after {timeout_seconds}s",
            ErrorCode.UPSTREAM_TIMEOUT,
            endpoint=endpoint,
            recoverable=True,
            original_error=error,
        )

    @classmethod
    def bad_status(cls, endpoint: str, status_code: int, reason: str = "") -> "UpstreamQueryError":
        message = f"{endpoint} returned HTTP {status_code}"
        if reason:
            message = f"{message}: {reason}"
        return cls(
            message,
            ErrorCode.UPSTREAM_BAD_STATUS,
            endpoint=endpoint,
            status_code=status_code,
        )

    @classmethod
    def invalid_response(cls, endpoint: str, reason: str) -> "UpstreamQueryError":
        return cls(
            f"Invalid response from {endpoint}: {reason}",
            ErrorCode.UPSTREAM_INVALID_RESPONSE,
            endpoint=endpoint,
        )

    @classmethod
    def query_failed(cls, endpoint: str, path: str, upstream_code: int, log: str = "") -> "UpstreamQueryError":
        return cls(
            f"Query {path} failed with code {upstream_code}: {log}",
            ErrorCode.UPSTREAM_QUERY_FAILED,
            endpoint=endpoint,
            upstream_code=upstream_code,
        )


class UnsupportedOperationError(StakingAdapterError):
    """
    Operation not meaningful for a given chain

    Chains that silently ignore part of a request (e.g. the amount of a Stacks
    revoke) document that instead of raising; anything truly unsupported raises.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        chain: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.OPERATION_NOT_SUPPORTED,
            recoverable=False,
            details={"operation": operation, "chain": chain},
        )
        self.operation = operation
        self.chain = chain

    @classmethod
    def not_supported(cls, operation: str, chain: str) -> "UnsupportedOperationError":
        return cls(
            f"Operation '{operation}' is not supported by {chain} provider",
            operation=operation,
            chain=chain,
        )


class TransactionError(StakingAdapterError):
    """
    Signed payload problems detected before or during broadcast

    Raised when:
    - The signed payload is not valid hex or targets a different network
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_MALFORMED,
        txid: Optional[str] = None,
    ):
        super().__init__(message, code, recoverable=False, details={"txid": txid})
        self.txid = txid

    @classmethod
    def malformed(cls, reason: str) -> "TransactionError":
        return cls(f"Malformed signed transaction: {reason}", ErrorCode.TX_MALFORMED)

    @classmethod
    def rejected(cls, reason: str, txid: Optional[str] = None) -> "TransactionError":
        return cls(f"Transaction rejected: {reason}", ErrorCode.TX_BROADCAST_REJECTED, txid=txid)
