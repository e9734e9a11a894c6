"""
ConopsPilot Mission Briefing

Gathers descriptive guidance from the selected facts: payloads the
chosen missions usually carry, mission considerations, deliverables and
the operating conditions in plain names. Works on partial fact sets.
"""
from __future__ import annotations

from typing import Iterable

from ..models import (
    FactCatalogs,
    FactSet,
    MissionBriefing,
    PlatformCategory,
    RecommendedPayload,
)
from .aircraft_deriver import payload_weight_class


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def build_mission_briefing(fact_set: FactSet, catalogs: FactCatalogs) -> MissionBriefing:
    """
    Build the briefing for a (possibly incomplete) fact set.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
    """
    profiles = catalogs.mission_profiles.select(fact_set.mission_profiles)
    payloads = catalogs.payloads.select(fact_set.payloads)
    coverages = catalogs.coverages.select(fact_set.coverages)

    # Payloads the selected missions typically carry, in catalog order
    recommended = []
    for payload in catalogs.payloads:
        suggested_by = tuple(p.id for p in profiles if payload.id in p.typical_payloads)
        if suggested_by:
            recommended.append(RecommendedPayload(
                id=payload.id,
                name=payload.name,
                selected=payload.id in fact_set.payloads,
                suggested_by=suggested_by,
            ))

    present = {p.platform_category for p in profiles}
    coverage_summary = tuple(
        f"{c.name} ({c.area_range}, {c.flight_estimate})" if c.area_range else c.name
        for c in coverages
    )

    return MissionBriefing(
        platform_categories=tuple(c.value for c in PlatformCategory if c in present),
        recommended_payloads=tuple(recommended),
        considerations=_dedupe(c for p in profiles for c in p.considerations),
        deliverables=_dedupe(d for p in profiles for d in p.deliverables),
        risk_factors=_dedupe(r for p in profiles for r in p.risk_factors),
        regulatory_notes=_dedupe(p.regulatory_notes for p in profiles if p.regulatory_notes),
        payload_weight_class=payload_weight_class(payloads),
        coverage_summary=coverage_summary,
        weather_conditions=tuple(
            w.name for w in catalogs.weather_conditions.select(fact_set.weather_conditions)
        ),
        seasons=tuple(s.name for s in catalogs.seasons.select(fact_set.seasons)),
        times_of_day=tuple(t.name for t in catalogs.times_of_day.select(fact_set.times_of_day)),
    )
