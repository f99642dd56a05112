"""
Decision Providers Package
==========================

Provider implementations for routing decisions.

Available providers:
- MockProvider: Deterministic mock for testing

Hosted-model providers live outside this repository and implement
DecisionProvider.
"""

from .base import (
    DecisionProvider,
    ProviderResponse,
    ProviderErrorCode,
)
from .mock import MockProvider

__all__ = [
    'DecisionProvider',
    'ProviderResponse',
    'ProviderErrorCode',
    'MockProvider',
]
