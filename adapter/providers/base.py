"""
Decision Provider Abstraction Layer
===================================

Abstract interface for the collaborator that turns request text into a
structured routing decision (a hosted language model in production).

BOUNDARY ENFORCEMENT:
- Providers are stateless invocation handlers
- Providers return raw JSON text; parsing belongs to the router
- Failures are explicit, never silent
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..contracts import RoutingRequest


class ProviderErrorCode(Enum):
    """Explicit failure codes for provider invocations."""
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class ProviderResponse:
    """
    Immutable response from a decision provider.

    INVARIANT: Either (success=True, content set) or (success=False, error set)
    """
    success: bool
    content: Optional[str] = None

    # Failure info (only set if success=False)
    error_code: Optional[ProviderErrorCode] = None
    error_message: Optional[str] = None

    provider_id: str = ""
    invoked_at: Optional[datetime] = None
    latency_ms: float = 0.0

    def __post_init__(self):
        if self.success and self.content is None:
            raise ValueError("Successful response must have content")
        if not self.success and self.error_code is None:
            raise ValueError("Failed response must have error_code")


class DecisionProvider(ABC):
    """
    Abstract decision provider interface.

    GUARANTEES:
    - Invocations are stateless
    - Failures are explicit ProviderResponse with error_code

    Timeouts are enforced by the caller, not the provider.
    """

    @abstractmethod
    async def decide(self, request: RoutingRequest) -> ProviderResponse:
        """
        Produce a RoutingDecision as JSON text for `request`.

        MUST return ProviderResponse; all failures become error responses.
        """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique provider identifier."""
