"""
Routing Executor

Asynchronous round trip to the decision collaborator, with a timeout and
a deterministic local fallback.

BOUNDARY ENFORCEMENT:
=====================
- No side effects on graph or view state
- Explicit error handling (no silent retries)
- Every failure is an Error in a Result; route_or_fallback is total

WHY THIS EXISTS:
================
The core accepts only a fully parsed RoutingDecision. This executor owns
the waiting, the timeout, and the parse, so nothing else has to.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import asyncio
import logging

from pydantic import ValidationError

from backend.contracts.base import Error, ErrorCode, Result

from .contracts import RoutingDecision, RoutingRequest, SearchPlan
from .fallback import fallback_decision, fallback_search_plan
from .providers.base import DecisionProvider


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class RouterConfig:
    """
    Configuration for decision routing.

    WHY FROZEN:
    Config should not change during invocation.
    Changes require new config instance.
    """
    timeout_seconds: float = 10.0
    max_keywords: int = 8

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.max_keywords < 1:
            raise ValueError(f"max_keywords must be at least 1, got {self.max_keywords}")


# =============================================================================
# EXECUTOR
# =============================================================================

class RoutingExecutor:
    """
    Obtains routing decisions from a provider.

    GUARANTEES:
    ===========
    1. route() never raises for provider failures; it returns Result
    2. route() never waits longer than timeout_seconds
    3. route_or_fallback() always returns a RoutingDecision
    """

    def __init__(
        self,
        provider: Optional[DecisionProvider] = None,
        config: Optional[RouterConfig] = None
    ):
        self._provider = provider
        self._config = config or RouterConfig()

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    async def route(self, request: RoutingRequest) -> Result:
        """
        Ask the provider for a decision.

        Returns:
            Result with a RoutingDecision, or an Error coded
            ROUTING_TIMEOUT / ROUTING_PROVIDER_FAILED / ROUTING_INVALID_DECISION
        """
        if self._provider is None:
            return Result.failure(Error.create(
                ErrorCode.ROUTING_PROVIDER_FAILED, "No decision provider configured"
            ))

        try:
            response = await asyncio.wait_for(
                self._provider.decide(request),
                timeout=self._config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            return Result.failure(Error.create(
                ErrorCode.ROUTING_TIMEOUT,
                f"Provider {self._provider.provider_id} exceeded {self._config.timeout_seconds}s",
            ))
        except Exception as e:
            error = Error.create(ErrorCode.ROUTING_PROVIDER_FAILED, str(e) or type(e).__name__)
            return Result.failure(error.with_context('exception', type(e).__name__))

        if not response.success:
            error = Error.create(
                ErrorCode.ROUTING_PROVIDER_FAILED,
                response.error_message or "Provider failed",
            )
            return Result.failure(error.with_context('provider_error', response.error_code.value))

        try:
            decision = RoutingDecision.model_validate_json(response.content)
        except ValidationError as e:
            return Result.failure(Error.create(
                ErrorCode.ROUTING_INVALID_DECISION,
                f"Unparseable decision: {e.error_count()} validation error(s)",
            ))

        if not decision.query:
            decision = decision.model_copy(update={'query': request.query})
        return Result.success(decision)

    async def route_or_fallback(self, request: RoutingRequest) -> RoutingDecision:
        """Provider decision, or the local heuristic when that fails."""
        if self._provider is not None:
            result = await self.route(request)
            if result.is_success:
                return result.value
            logger.warning(
                "Routing failed (%s): %s", result.error.code.name, result.error.message
            )

        decision = fallback_decision(request.query, self._config.max_keywords)
        logger.info("Fallback routing: %s for %r", decision.action.value, request.query)
        return decision

    def search_plan(self, decision: RoutingDecision) -> SearchPlan:
        return fallback_search_plan(decision, self._config.max_keywords)
