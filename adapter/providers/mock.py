"""
Mock Decision Provider
======================

Deterministic mock provider for testing.

GUARANTEES:
- Same request -> identical response
- Explicit failure modes can be triggered
- No external dependencies
"""

from __future__ import annotations
import asyncio
import json
from datetime import datetime, timezone
from typing import Optional

from ..contracts import RoutingDecision, RoutingRequest
from ..fallback import fallback_decision
from .base import DecisionProvider, ProviderErrorCode, ProviderResponse


class MockProvider(DecisionProvider):
    """
    Deterministic mock provider.

    Without a canned decision, the keyword heuristic classifies the text
    and any known name / company mentioned verbatim is filled in.
    """

    def __init__(
        self,
        latency_ms: float = 0.0,
        failure_mode: Optional[ProviderErrorCode] = None,
        decision: Optional[RoutingDecision] = None,
        raw_content: Optional[str] = None
    ):
        """
        Args:
            latency_ms: Simulated latency (use to trigger router timeouts)
            failure_mode: If set, all invocations fail with this error
            decision: Canned decision returned for every request
            raw_content: Canned raw text, bypassing serialization
        """
        self._latency_ms = latency_ms
        self._failure_mode = failure_mode
        self._decision = decision
        self._raw_content = raw_content
        self.calls = 0

    @property
    def provider_id(self) -> str:
        return "mock"

    async def decide(self, request: RoutingRequest) -> ProviderResponse:
        self.calls += 1
        invoked_at = datetime.now(timezone.utc)

        if self._latency_ms:
            await asyncio.sleep(self._latency_ms / 1000.0)

        if self._failure_mode is not None:
            return ProviderResponse(
                success=False,
                error_code=self._failure_mode,
                error_message=f"Mock provider configured to fail: {self._failure_mode.value}",
                provider_id=self.provider_id,
                invoked_at=invoked_at,
                latency_ms=self._latency_ms,
            )

        if self._raw_content is not None:
            content = self._raw_content
        else:
            decision = self._decision or self._derive(request)
            content = json.dumps(decision.to_wire(), sort_keys=True)

        return ProviderResponse(
            success=True,
            content=content,
            provider_id=self.provider_id,
            invoked_at=invoked_at,
            latency_ms=self._latency_ms,
        )

    @staticmethod
    def _derive(request: RoutingRequest) -> RoutingDecision:
        base = fallback_decision(request.query)
        text = request.query.lower()
        name = next((n for n in request.known_names if n and n.lower() in text), None)
        company = next((c for c in request.known_companies if c and c.lower() in text), None)
        return base.model_copy(update={
            'target_name': name,
            'target_company': company,
            'reason': "mock decision",
        })
