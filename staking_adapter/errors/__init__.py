"""
Error definitions for Staking Adapter
"""

from .exceptions import (
    ErrorCode,
    StakingAdapterError,
    ConfigurationError,
    NotInitializedError,
    UnknownChainError,
    MissingParameterError,
    InvalidParameterError,
    UpstreamQueryError,
    UnsupportedOperationError,
    TransactionError,
)

__all__ = [
    "ErrorCode",
    "StakingAdapterError",
    "ConfigurationError",
    "NotInitializedError",
    "UnknownChainError",
    "MissingParameterError",
    "InvalidParameterError",
    "UpstreamQueryError",
    "UnsupportedOperationError",
    "TransactionError",
]
