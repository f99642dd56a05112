"""
Adapter Contracts

Structured results exchanged with the external decision collaborator
(the language model that classifies a free-text request).

BOUNDARY ENFORCEMENT:
=====================
- Decisions are FROZEN once parsed; the core never mutates them
- Unknown fields are rejected (strict structured output)
- Wire names are camelCase; Python attributes are snake_case

WHY PYDANTIC HERE:
==================
Collaborator output arrives as JSON text. Parsing and validation happen
in one step, and a malformed payload becomes a single ValidationError
that the router turns into an explicit error.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class RoutingAction(str, Enum):
    """What a natural-language request asks for."""
    PATH = "path"
    SEARCH = "search"


class RoutingDecision(BaseModel):
    """
    Classification of one request.

    PATH: find a route to a known person (or company) in the graph.
    SEARCH: broaden beyond the current graph.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    action: RoutingAction
    reason: str = ""
    target_name: Optional[str] = Field(default=None, alias="targetName")
    target_company: Optional[str] = Field(default=None, alias="targetCompany")
    keywords: Tuple[str, ...] = ()
    query: str = ""

    @property
    def is_path(self) -> bool:
        return self.action == RoutingAction.PATH

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SearchPlan(BaseModel):
    """External people-search plan produced for SEARCH decisions."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    keywords: Tuple[str, ...] = ()
    companies: Tuple[str, ...] = ()
    titles: Tuple[str, ...] = ()
    locations: Tuple[str, ...] = ()
    seniorities: Tuple[str, ...] = ()
    linkedin_query: str = Field(default="", alias="linkedinQuery")
    reason: str = ""

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class RoutingRequest:
    """
    What a provider sees: the request text plus the vocabulary of the
    current graph, so it can name people and companies that exist.
    """
    query: str
    known_names: Tuple[str, ...] = field(default_factory=tuple)
    known_companies: Tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def create(query: str, names: List[str] = (), companies: List[str] = ()) -> RoutingRequest:
        return RoutingRequest(query=query, known_names=tuple(names), known_companies=tuple(companies))
