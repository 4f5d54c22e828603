"""
Functional modules

Provides high-level operations:
- StakingService: per-request provider resolution and staking operations
"""

from .staking import StakingService

__all__ = [
    "StakingService",
]
