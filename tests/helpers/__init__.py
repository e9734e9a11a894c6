"""
Test helpers for ConopsPilot needs-analysis tests.

Modules:
- contract: Scenario and Expected dataclasses
- facts: Fact set builders
- runner: Analyzer execution wrapper
- assertions: Contract verification helpers
"""
from .contract import Expected, Scenario
from .facts import BASELINE_SELECTIONS, fact_set, only, selections
from .runner import run_scenario
from .assertions import (
    assert_contract,
    assert_documents,
    assert_equipment,
    assert_pathway,
    assert_provenance,
)

__all__ = [
    # Contract
    "Expected",
    "Scenario",
    # Facts
    "BASELINE_SELECTIONS",
    "fact_set",
    "only",
    "selections",
    # Runner
    "run_scenario",
    # Assertions
    "assert_contract",
    "assert_documents",
    "assert_equipment",
    "assert_pathway",
    "assert_provenance",
]
