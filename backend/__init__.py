"""
Connection Path Explorer Backend

This package implements a layered backend with hard boundaries between
system responsibilities. Each layer communicates only through explicit
contracts, never through shared mutable state.

LAYER STRUCTURE:
================

1. INGESTION LAYER (ingestion/, top-level package)
   - Responsibility: Turn loosely-structured scraped records into Person entities
   - Allowed inputs: Raw record dictionaries
   - Outputs: NormalizationReport (people + excluded records)
   - MUST NOT: Build edges, resolve queries

2. CONTRACTS (contracts/)
   - Responsibility: Immutable data model shared by every layer
   - Outputs: Person, Edge, Graph, PathResult, MultiPathResult, Error, Result

3. CORE GRAPH ENGINE (core/)
   - Responsibility: Graph synthesis, path search, structural analysis
   - Allowed inputs: Person lists from the ingestion layer
   - Outputs: Graph, PathResult, MultiPathResult, GraphMetrics
   - MUST NOT: Hold view state, call external collaborators

4. QUERY & RESOLUTION INTERFACES (query/)
   - Responsibility: Map fuzzy hints onto graph entities
   - Outputs: Person / company name, or None
   - MUST NOT: Mutate the graph

5. ORCHESTRATION (engine.py) and HTTP SURFACE (api/)
   - Responsibility: Wire the layers into one session and expose it

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: entities and results are frozen
- Append-only graph: synthesized once, then only read
- Deterministic: synthesis randomness is injected
- Explicit empties: "no path" and "no match" are values, not exceptions
"""
