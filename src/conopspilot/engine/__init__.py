"""
ConopsPilot Engine

Pure functions that turn a fact set into a needs analysis.

Services:
- normalize_fact_input / to_fact_set: Input boundary
- check_completeness: Gate on required input sections
- classify_pathway: Regulatory pathway (ordered rules, first match)
- estimate_risk_level: SAIL estimate
- derive_crew / derive_aircraft / derive_equipment / derive_documentation
- build_mission_briefing: Descriptive guidance
- NeedsAnalyzer: The whole pipeline

Usage:
    from conopspilot.engine import NeedsAnalyzer, run_needs_analysis

    outcome = run_needs_analysis({"missionProfiles": ["inspection"], ...})
"""
from __future__ import annotations

from .aircraft_deriver import (
    derive_aircraft,
    most_demanding_coverage,
    payload_weight_class,
)
from .boundary import (
    FactInput,
    normalize_fact_input,
    to_fact_set,
)
from .completeness import (
    check_completeness,
    percent_complete,
)
from .crew_deriver import derive_crew
from .documentation_deriver import derive_documentation
from .equipment_deriver import (
    CONDITIONS,
    derive_equipment,
)
from .mission_briefing import build_mission_briefing
from .needs_analyzer import (
    NeedsAnalyzer,
    get_default_analyzer,
    run_needs_analysis,
)
from .pathway_classifier import (
    PATHWAY_RULES,
    ClassificationFacts,
    PathwayRule,
    bvlos_eligibility,
    classify_pathway,
    first_match,
)
from .risk_estimator import (
    clamp_sail,
    estimate_risk_level,
)

__all__ = [
    # Boundary
    "FactInput",
    "normalize_fact_input",
    "to_fact_set",
    # Completeness
    "check_completeness",
    "percent_complete",
    # Pathway
    "PATHWAY_RULES",
    "ClassificationFacts",
    "PathwayRule",
    "bvlos_eligibility",
    "classify_pathway",
    "first_match",
    # Risk
    "clamp_sail",
    "estimate_risk_level",
    # Derivers
    "CONDITIONS",
    "derive_aircraft",
    "derive_crew",
    "derive_documentation",
    "derive_equipment",
    "most_demanding_coverage",
    "payload_weight_class",
    # Briefing
    "build_mission_briefing",
    # Analyzer
    "NeedsAnalyzer",
    "get_default_analyzer",
    "run_needs_analysis",
]
