"""
ConopsPilot Crew Deriver

Derives crew roles from the fact set.

Baseline: one pilot in command. Each trigger below is independent;
notes accumulate and counts combine with max, never sum.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..models import (
    CrewRequirements,
    FactCatalogs,
    FactSet,
    LineOfSight,
    OperatorDemand,
    PopulationCategory,
    RoleRequirement,
)


# Complex payloads flown together before an operator is recommended
COMPLEX_PAYLOAD_THRESHOLD = 2

GROUND_SUPPORT_POPULATIONS = frozenset({PopulationCategory.POPULATED, PopulationCategory.GATHERING})


@dataclass
class _Role:
    required: bool = False
    count: int = 0
    notes: list[str] = field(default_factory=list)

    def require(self, count: int, note: str) -> None:
        self.required = True
        self.raise_count(count, note)

    def raise_count(self, count: int, note: str) -> None:
        self.count = max(self.count, count)
        self.notes.append(note)

    def freeze(self) -> RoleRequirement:
        return RoleRequirement(required=self.required, count=self.count, notes=tuple(self.notes))


def derive_crew(fact_set: FactSet, catalogs: FactCatalogs) -> CrewRequirements:
    """
    Derive crew requirements.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
    """
    profiles = catalogs.mission_profiles.select(fact_set.mission_profiles)
    environments = catalogs.environments.select(fact_set.environments)
    operations = catalogs.operation_types.select(fact_set.operation_types)
    coverages = catalogs.coverages.select(fact_set.coverages)
    payloads = catalogs.payloads.select(fact_set.payloads)

    pic = _Role(required=True, count=1)
    vo = _Role()
    payload_operator = _Role()
    ground_support = _Role()

    # Visual observers
    if any(o.line_of_sight == LineOfSight.EVLOS for o in operations):
        vo.require(1, "Required for EVLOS operations")
    if any(c.extended for c in coverages):
        vo.require(2, "Recommended for large area operations")

    # Payload operator
    complex_payloads = [p for p in payloads if p.operator_demand == OperatorDemand.COMPLEX]
    if any(p.operator_demand == OperatorDemand.DEDICATED for p in payloads):
        payload_operator.require(1, "Cinema/gimbal operator for professional film work")
    elif len(complex_payloads) >= COMPLEX_PAYLOAD_THRESHOLD:
        payload_operator.raise_count(
            1, "Recommended when operating multiple sensor payloads simultaneously"
        )

    # Ground support
    if any(e.population_category in GROUND_SUPPORT_POPULATIONS for e in environments):
        ground_support.require(1, "Crowd/traffic management in populated areas")
    if any(p.agency_coordination for p in profiles):
        ground_support.raise_count(2, "Coordination with emergency/security services")

    return CrewRequirements(
        pic=pic.freeze(),
        vo=vo.freeze(),
        payload_operator=payload_operator.freeze(),
        ground_support=ground_support.freeze(),
    )
