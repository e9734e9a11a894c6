"""
ConopsPilot Aircraft Deriver

Derives the minimum aircraft capability profile.

Key features:
- Platform class from the most demanding selected coverage
- Payload weight class and the matching minimum capacity
- Endurance from coverage extent
- Feature list from lighting, line of sight, payloads and missions
"""
from __future__ import annotations

from typing import Iterable, Optional

from ..models import (
    AircraftRequirements,
    CoverageType,
    FactCatalogs,
    FactSet,
    LineOfSight,
    Lighting,
    PayloadType,
    PayloadWeight,
    PlatformClass,
)


MIN_CAPACITY = {
    "light": "250g",
    "medium": "500g",
    "heavy": "1kg+",
}

STANDARD_FLIGHT_TIME = "20 min"
EXTENDED_FLIGHT_TIME = "30+ min"

LIGHTING_FEATURES = ("Anti-collision lighting",)
BVLOS_FEATURES = ("Redundant C2 link", "Return-to-home", "Geofencing")


def payload_weight_class(payloads: Iterable[PayloadType]) -> str:
    """
    Combined weight class of a payload selection.

    Any heavy payload, or two medium ones, makes the set heavy. Payloads
    of varying weight count as light.
    """
    weights = [p.weight for p in payloads]
    medium = weights.count(PayloadWeight.MEDIUM)
    if PayloadWeight.HEAVY in weights or medium >= 2:
        return "heavy"
    if medium:
        return "medium"
    return "light"


def most_demanding_coverage(coverages: Iterable[CoverageType]) -> Optional[CoverageType]:
    """Highest platform class; catalog order breaks ties."""
    best = None
    for coverage in coverages:
        if best is None or coverage.platform_class.rank > best.platform_class.rank:
            best = coverage
    return best


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def derive_aircraft(fact_set: FactSet, catalogs: FactCatalogs) -> AircraftRequirements:
    """
    Derive aircraft requirements.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
    """
    profiles = catalogs.mission_profiles.select(fact_set.mission_profiles)
    operations = catalogs.operation_types.select(fact_set.operation_types)
    coverages = catalogs.coverages.select(fact_set.coverages)
    payloads = catalogs.payloads.select(fact_set.payloads)

    primary = most_demanding_coverage(coverages)
    platform_class = primary.platform_class if primary else PlatformClass.MULTIROTOR
    recommendation = (primary.platform_suggestion if primary else None) or platform_class.label

    weight_class = payload_weight_class(payloads)
    flight_time = (
        EXTENDED_FLIGHT_TIME if any(c.extended for c in coverages) else STANDARD_FLIGHT_TIME
    )

    features: list[str] = []
    if any(o.lighting in (Lighting.NIGHT, Lighting.TWILIGHT) for o in operations):
        features.extend(LIGHTING_FEATURES)
    if any(o.line_of_sight == LineOfSight.BVLOS for o in operations):
        features.extend(BVLOS_FEATURES)
    for payload in payloads:
        features.extend(payload.platform_features)
    for profile in profiles:
        features.extend(profile.platform_features)

    return AircraftRequirements(
        platform_type=platform_class.label,
        min_capacity=MIN_CAPACITY[weight_class],
        min_flight_time=flight_time,
        features=_dedupe(features),
        recommendation=recommendation,
        weight_class=weight_class,
    )
