"""
ConopsPilot Needs Analyzer

Runs the full needs-analysis pipeline for one fact set.

Pipeline:
1. Normalize and validate the input at the boundary
2. Check completeness; stop here if anything is missing
3. Classify the regulatory pathway and estimate the SAIL
4. Run the four requirement derivers
5. Bundle everything into one immutable result

Results are never cached or stored: every call recomputes from the
fact set. fact_set_hash and catalog_hash let a caller cache outcomes
keyed on exactly what produced them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models import (
    AnalysisOutcome,
    CompletenessReport,
    FactCatalogs,
    FactSet,
    MissionBriefing,
    NeedsAnalysisResult,
)
from ..packs import get_default_catalogs
from .aircraft_deriver import derive_aircraft
from .boundary import FactInput, to_fact_set
from .completeness import check_completeness
from .crew_deriver import derive_crew
from .documentation_deriver import derive_documentation
from .equipment_deriver import derive_equipment
from .mission_briefing import build_mission_briefing
from .pathway_classifier import classify_pathway
from .risk_estimator import estimate_risk_level

logger = logging.getLogger(__name__)


@dataclass
class NeedsAnalyzer:
    """
    Entry point for needs analysis.

    Holds only the read-only catalogs, so one instance can serve
    concurrent callers.

    Usage:
        analyzer = NeedsAnalyzer()

        outcome = analyzer.analyze({
            "missionProfiles": ["inspection"],
            "environments": ["remote"],
            ...
        })
        if outcome.is_complete:
            print(outcome.result.regulatory_pathway.label)
        else:
            print(outcome.completeness.missing)
    """
    catalogs: FactCatalogs = field(default_factory=get_default_catalogs)

    def fact_set(self, facts: FactInput) -> FactSet:
        """Get the validated, frozen fact set for any accepted input form."""
        return to_fact_set(facts, self.catalogs)

    def completeness(self, facts: FactInput) -> CompletenessReport:
        """Check which input requirements are satisfied."""
        return check_completeness(self.fact_set(facts), self.catalogs.completeness_requirements)

    def briefing(self, facts: FactInput) -> MissionBriefing:
        """Build the mission briefing, complete or not."""
        return build_mission_briefing(self.fact_set(facts), self.catalogs)

    def derive(self, facts: FactInput) -> NeedsAnalysisResult:
        """
        Run classification and every deriver without the completeness gate.

        Raises:
            UnknownFactError: If the fact set holds an unknown id
        """
        fact_set = self.fact_set(facts)
        pathway = classify_pathway(fact_set, self.catalogs)
        risk_level = estimate_risk_level(fact_set, self.catalogs)

        result = NeedsAnalysisResult(
            regulatory_pathway=pathway,
            risk_level=risk_level,
            crew=derive_crew(fact_set, self.catalogs),
            aircraft=derive_aircraft(fact_set, self.catalogs),
            equipment=derive_equipment(fact_set, self.catalogs, pathway),
            documentation=derive_documentation(fact_set, self.catalogs, pathway),
        )
        logger.debug(
            "Derived needs analysis",
            extra={"pathway": pathway.pathway.value, "sail": risk_level.level},
        )
        return result

    def analyze(self, facts: FactInput) -> AnalysisOutcome:
        """
        Run the gated analysis.

        An incomplete fact set is not an error: the outcome carries the
        completeness report and a briefing, and result is None.

        Raises:
            InvalidCategoryError: Unknown category key in a mapping
            UnknownFactError: Unknown id
        """
        fact_set = self.fact_set(facts)
        completeness = check_completeness(fact_set, self.catalogs.completeness_requirements)
        fact_set_hash = fact_set.fingerprint()

        result = None
        if completeness.is_complete:
            result = self.derive(fact_set)
        else:
            logger.info(
                "Needs analysis incomplete (%d%%)",
                completeness.percent,
                extra={
                    "fact_set_hash": fact_set_hash,
                    "missing": completeness.missing,
                    "percent": completeness.percent,
                },
            )

        return AnalysisOutcome(
            completeness=completeness,
            result=result,
            briefing=build_mission_briefing(fact_set, self.catalogs),
            fact_set_hash=fact_set_hash,
            catalog_hash=self.catalogs.content_hash,
        )


# =============================================================================
# Module-level Convenience
# =============================================================================

_default_analyzer: Optional[NeedsAnalyzer] = None


def get_default_analyzer() -> NeedsAnalyzer:
    """Get or create the analyzer backed by the bundled catalog pack."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = NeedsAnalyzer()
    return _default_analyzer


def run_needs_analysis(facts: FactInput) -> AnalysisOutcome:
    """
    Analyze a fact set with the default analyzer.

    Convenience function for simple use cases.
    """
    return get_default_analyzer().analyze(facts)
