"""
Connection Path Explorer: API Server
====================================

HTTP surface for the rendering and interaction collaborators.
The server never calls a language model itself: /route accepts an
already-parsed RoutingDecision.

Endpoints:
- GET  /api/v1/graph                 -> Graph + view flags
- GET  /api/v1/path/{target_id}      -> Strongest introduction chain
- GET  /api/v1/company-paths         -> Paths to everyone at a company
- GET  /api/v1/view                  -> Current view state
- POST /api/v1/view/...              -> View transitions
- POST /api/v1/records               -> Replace graph from raw records
- POST /api/v1/search                -> Quick name / company search
- POST /api/v1/route                 -> Apply a routing decision

Usage:
    uvicorn backend.api.server:app --reload
"""
import json
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from adapter.contracts import RoutingDecision
from frontend.presentation import summarize_view

from ..core.synthesis import SynthesisConfig
from ..engine import BackendConfig, NetworkExplorer
from .mapper import map_graph_to_dto

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

# Global Explorer Instance
explorer_instance: Optional[NetworkExplorer] = None


def _load_records(path: str) -> List[Dict[str, Any]]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of records")
    return data


def create_explorer() -> NetworkExplorer:
    """Explorer configured from EXPLORER_SEED / EXPLORER_RECORDS_PATH."""
    seed = os.environ.get("EXPLORER_SEED")
    config = BackendConfig(synthesis=SynthesisConfig(seed=int(seed) if seed else None))
    explorer = NetworkExplorer(config)

    records_path = os.environ.get("EXPLORER_RECORDS_PATH")
    if records_path and os.path.exists(records_path):
        print(f"[*] Loading records from: {records_path}")
        report = explorer.load_records(_load_records(records_path))
        print(f"[*] {report.success_count} people loaded, {report.excluded_count} excluded.")
    else:
        print("[*] No records file, using sample graph.")
    return explorer


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the explorer on startup."""
    global explorer_instance

    try:
        explorer_instance = create_explorer()
        print("[*] Explorer initialized successfully.")
    except Exception as e:
        print(f"[!] FAILED to initialize explorer: {e}")
        raise

    yield

    print("[*] Shutting down explorer.")
    explorer_instance = None

app = FastAPI(
    title="Connection Path Explorer API",
    version="0.1.0",
    description="Relationship graph, introduction paths and view state",
    lifespan=lifespan
)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST BODIES
# =============================================================================

class TargetRequest(BaseModel):
    target_id: str


class CompanyRequest(BaseModel):
    company: str


class PathOnlyRequest(BaseModel):
    enabled: Optional[bool] = None  # None toggles


class ModeRequest(BaseModel):
    is_3d_mode: bool


class RecordsRequest(BaseModel):
    records: List[Dict[str, Any]]


class SearchRequest(BaseModel):
    term: str


def _explorer() -> NetworkExplorer:
    if not explorer_instance:
        raise HTTPException(status_code=503, detail="Explorer not initialized")
    return explorer_instance


def _view_dto(explorer: NetworkExplorer) -> Dict[str, Any]:
    dto = explorer.view.to_dict()
    dto["summaries"] = [s.to_dict() for s in summarize_view(explorer.view)]
    return dto


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """System status."""
    explorer = _explorer()
    return {"status": "online", "nodes": len(explorer.graph), "edges": len(explorer.graph.edges)}


@app.get("/api/v1/graph")
async def get_graph():
    explorer = _explorer()
    return map_graph_to_dto(explorer.graph, explorer.view)


@app.get("/api/v1/path/{target_id}")
async def get_path(target_id: str):
    """Strongest chain of introductions to one person."""
    explorer = _explorer()
    if target_id not in explorer.graph:
        raise HTTPException(404, detail=f"Unknown person: {target_id}")
    return explorer.find_path(target_id).to_dict()


@app.get("/api/v1/company-paths")
async def get_company_paths(company: str = Query(..., min_length=1)):
    """Paths to everyone whose company contains `company`; empty when none."""
    return _explorer().find_company_paths(company).to_dict()


@app.get("/api/v1/view")
async def get_view():
    return _view_dto(_explorer())


@app.post("/api/v1/view/target")
async def set_view_target(body: TargetRequest):
    explorer = _explorer()
    explorer.view.set_single_path_target(body.target_id)
    return _view_dto(explorer)


@app.post("/api/v1/view/company")
async def set_view_company(body: CompanyRequest):
    explorer = _explorer()
    explorer.view.set_multi_path_company(body.company)
    return _view_dto(explorer)


@app.post("/api/v1/view/path-only")
async def set_path_only(body: PathOnlyRequest):
    explorer = _explorer()
    if body.enabled is None:
        explorer.view.toggle_path_only_mode()
    else:
        explorer.view.set_path_only_mode(body.enabled)
    return _view_dto(explorer)


@app.post("/api/v1/view/mode")
async def set_mode(body: ModeRequest):
    explorer = _explorer()
    explorer.view.set_is_3d_mode(body.is_3d_mode)
    return _view_dto(explorer)


@app.post("/api/v1/view/clear")
async def clear_view():
    explorer = _explorer()
    explorer.view.clear()
    return _view_dto(explorer)


@app.post("/api/v1/records")
async def load_records(body: RecordsRequest):
    """Replace the session graph; the view resets."""
    report = _explorer().load_records(body.records)
    return report.to_dict()


@app.post("/api/v1/search")
async def quick_search(body: SearchRequest):
    return _explorer().quick_search(body.term).to_dict()


@app.post("/api/v1/route")
async def route(decision: RoutingDecision):
    """Apply an already-parsed routing decision."""
    return _explorer().handle_decision(decision).to_dict()
