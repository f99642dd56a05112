"""
End-to-End Integration Demo

Verifies the complete pipeline:
Ingestion (records) → Backend (Graph + Paths) → Adapter (Routing) → Frontend (View)
"""

import asyncio
import json
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from adapter.providers import MockProvider
from backend.core.synthesis import SynthesisConfig
from backend.engine import BackendConfig, NetworkExplorer
from frontend.presentation import summarize_view


DEMO_RECORDS = [
    {'full_name': 'Alex Chen • 1st', 'description': 'Software Engineer at Stripe',
     'profile_url': 'https://www.linkedin.com/in/alexchen/', 'education': ['University of Toronto']},
    {'full_name': 'Bianca Patel', 'current_company': 'Meta', 'current_title': 'Product Manager',
     'profile_url': 'https://www.linkedin.com/in/biancapatel/'},
    {'full_name': 'Priya Nair', 'description': 'Engineering Manager @ Google',
     'profile_url': 'https://www.linkedin.com/in/priyanair/', 'location': 'Boston, MA'},
    {'full_name': 'Sarah Kim', 'description': 'Apple • Designer',
     'profile_url': 'https://www.linkedin.com/in/sarahkim/'},
    {'full_name': 'Mike Johnson', 'current_company': 'Microsoft',
     'profile_url': 'https://www.linkedin.com/in/mikejohnson/'},
    {'full_name': 'Dana Lee', 'current_company': 'Google',
     'profile_url': 'https://www.linkedin.com/in/danalee/'},
    {'full_name': 'Alex Chen', 'profile_url': 'https://www.linkedin.com/in/alexchen'},
    {'name': 'x'},
]


def banner(title: str):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def load_records(path: Path = None):
    if path and path.exists():
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    return DEMO_RECORDS


def run_ingestion(explorer: NetworkExplorer, records):
    banner("LAYER 1: INGESTION & SYNTHESIS")
    report = explorer.load_records(records)
    print(f"Records: {report.processed_count} | kept: {report.success_count} | "
          f"dropped: {report.dropped_count} | duplicates: {report.duplicate_count}")
    metrics = explorer.metrics()
    print(f"Graph: {metrics.node_count} nodes, {metrics.edge_count} edges, "
          f"fully reachable: {metrics.fully_reachable}, depth: {metrics.max_depth}")


def run_paths(explorer: NetworkExplorer):
    banner("LAYER 2: PATHS")
    for person in explorer.graph.people():
        result = explorer.find_path(person.id)
        print(f"  {person.name:<14} weight {result.weight:.2f} via {' -> '.join(result.path)}")
    cluster = explorer.largest_industry_cluster()
    print(f"Largest industry: {cluster.industry} ({cluster.count})")


def run_routing(explorer: NetworkExplorer):
    banner("LAYER 3: ROUTING")
    for text in ("Can you introduce me to Sarah Kim?", "who do I know at google", "senior designers in Lisbon"):
        outcome = asyncio.run(explorer.ask(text, provider=MockProvider()))
        print(f"  {text!r} -> {outcome.kind.value}")
        for line in summarize_view(explorer.view):
            print(f"      {line.text}")
        if outcome.search_plan:
            print(f"      search: {outcome.search_plan.linkedin_query!r}")


def run_view(explorer: NetworkExplorer):
    banner("LAYER 4: VIEW STATE")
    explorer.view.set_multi_path_company("google")
    explorer.view.toggle_path_only_mode()
    print(f"Highlighted: {sorted(explorer.view.highlighted)}")
    print(f"Hidden nodes: {sorted(explorer.view.hidden_nodes)}")
    explorer.view.clear()
    print(f"Idle after clear: {explorer.view.is_idle}")


if __name__ == "__main__":
    records_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    explorer = NetworkExplorer(BackendConfig(synthesis=SynthesisConfig(seed=7)))

    run_ingestion(explorer, load_records(records_path))
    run_paths(explorer)
    run_routing(explorer)
    run_view(explorer)
