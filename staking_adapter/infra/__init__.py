"""
Infrastructure layer for Staking Adapter

Provides:
- HttpClient: REST + JSON wrapper with bounded timeouts
- TendermintRpcClient: JSON-RPC (abci_query, broadcast_tx_sync)
- CorrelationContext: correlation IDs for request-scoped logging
"""

from .http import HttpClient
from .rpc import TendermintRpcClient
from .tracing import (
    CorrelationContext,
    generate_correlation_id,
    get_correlation_id,
    log_with_correlation,
)

__all__ = [
    "HttpClient",
    "TendermintRpcClient",
    "CorrelationContext",
    "generate_correlation_id",
    "get_correlation_id",
    "log_with_correlation",
]
