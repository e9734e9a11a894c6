"""
ConopsPilot Result Models

Immutable outputs of the needs-analysis pipeline.

NeedsAnalysisResult is a projection of a fact set: it is recomputed on
demand and never stored as a source of truth. to_dict() produces the
stable boundary shape consumed by the UI and export layers:

    {
        "regulatoryPathway": {...},
        "riskLevel": {...},
        "crew": {...},
        "aircraft": {...},
        "equipment": {...},
        "documentation": {...},
    }
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import AnalysisIncompleteError
from .enums import PathwayId, SAIL_LABELS


# =============================================================================
# Completeness
# =============================================================================

@dataclass(frozen=True)
class CompletenessReport:
    """Which input requirements are satisfied, and how many."""
    checks: dict[str, bool]
    completed: int
    total: int
    percent: int

    @property
    def is_complete(self) -> bool:
        return self.completed == self.total

    @property
    def missing(self) -> list[str]:
        """Keys of unsatisfied requirements, in requirement order."""
        return [key for key, ok in self.checks.items() if not ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "isComplete": self.is_complete,
            "checks": dict(self.checks),
            "completed": self.completed,
            "total": self.total,
            "percent": self.percent,
        }


# =============================================================================
# Pathway Classification
# =============================================================================

@dataclass(frozen=True)
class PathwayClassification:
    """
    The regulatory pathway an operation falls under.

    triggers lists the sub-conditions that caused the winning rule to
    match; reason is the auditable sentence built from them.
    """
    pathway: PathwayId
    name: str
    label: str
    reason: str
    complexity: str
    requirements: tuple[str, ...] = ()
    triggers: tuple[str, ...] = ()
    rule: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "pathway": self.pathway.value,
            "name": self.name,
            "pathwayFull": self.label,
            "reason": self.reason,
            "complexity": self.complexity,
            "requirements": list(self.requirements),
            "triggers": list(self.triggers),
            "rule": self.rule,
        }


# =============================================================================
# Risk Level (SAIL)
# =============================================================================

@dataclass(frozen=True)
class RiskLevel:
    """Estimated SAIL and the three contributions that produced it."""
    numeric: int
    environment: int
    airspace: int
    operation_type: int

    @property
    def level(self) -> str:
        return SAIL_LABELS[self.numeric - 1]

    @property
    def unclamped(self) -> int:
        return self.environment + self.airspace + self.operation_type

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "numeric": self.numeric,
            "factors": {
                "environment": self.environment,
                "airspace": self.airspace,
                "operationType": self.operation_type,
            },
        }


# =============================================================================
# Crew
# =============================================================================

@dataclass(frozen=True)
class RoleRequirement:
    """Requirement for one crew role."""
    required: bool = False
    count: int = 0
    notes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"required": self.required, "count": self.count, "notes": list(self.notes)}


@dataclass(frozen=True)
class CrewRequirements:
    """Crew roles needed for the operation."""
    pic: RoleRequirement
    vo: RoleRequirement
    payload_operator: RoleRequirement
    ground_support: RoleRequirement

    @property
    def minimum_crew(self) -> int:
        """Headcount of required roles."""
        return sum(
            role.count
            for role in (self.pic, self.vo, self.payload_operator, self.ground_support)
            if role.required
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "pic": self.pic.to_dict(),
            "vo": self.vo.to_dict(),
            "payloadOperator": self.payload_operator.to_dict(),
            "groundSupport": self.ground_support.to_dict(),
        }


# =============================================================================
# Aircraft
# =============================================================================

@dataclass(frozen=True)
class AircraftRequirements:
    """Minimum aircraft capability profile."""
    platform_type: str
    min_capacity: str
    min_flight_time: str
    features: tuple[str, ...] = ()
    recommendation: str = ""
    weight_class: str = "light"

    def to_dict(self) -> dict[str, Any]:
        return {
            "platformType": self.platform_type,
            "minCapacity": self.min_capacity,
            "minFlightTime": self.min_flight_time,
            "features": list(self.features),
            "recommendation": self.recommendation,
            "weightClass": self.weight_class,
        }


# =============================================================================
# Equipment
# =============================================================================

@dataclass(frozen=True)
class ChecklistItem:
    """
    One checklist line.

    Items are always present; required flips with the facts, and
    triggered_by names the selected ids that activated a conditional item.
    """
    item: str
    required: bool
    triggered_by: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "item": self.item,
            "required": self.required,
            "triggeredBy": list(self.triggered_by),
        }


EQUIPMENT_SECTIONS = (
    ("flight", "flightEquipment"),
    ("safety", "safetyEquipment"),
    ("communication", "communicationEquipment"),
    ("documentation", "documentationEquipment"),
    ("payload", "payloadEquipment"),
    ("additional", "additionalEquipment"),
)


@dataclass(frozen=True)
class EquipmentChecklist:
    """Equipment checklist grouped by section."""
    flight: tuple[ChecklistItem, ...] = ()
    safety: tuple[ChecklistItem, ...] = ()
    communication: tuple[ChecklistItem, ...] = ()
    documentation: tuple[ChecklistItem, ...] = ()
    payload: tuple[ChecklistItem, ...] = ()
    additional: tuple[ChecklistItem, ...] = ()

    def items(self) -> list[ChecklistItem]:
        """All items across sections, in section order."""
        return [item for attr, _ in EQUIPMENT_SECTIONS for item in getattr(self, attr)]

    def required_items(self) -> list[str]:
        return [i.item for i in self.items() if i.required]

    def find(self, item: str) -> Optional[ChecklistItem]:
        """Find the first item with a given name."""
        for entry in self.items():
            if entry.item == item:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            key: [i.to_dict() for i in getattr(self, attr)]
            for attr, key in EQUIPMENT_SECTIONS
        }


# =============================================================================
# Documentation
# =============================================================================

@dataclass(frozen=True)
class DocumentationChecklist:
    """Documents to prepare, in three buckets."""
    required: tuple[str, ...] = ()
    recommended: tuple[str, ...] = ()
    operational: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "required": list(self.required),
            "recommended": list(self.recommended),
            "operational": list(self.operational),
        }


# =============================================================================
# Mission Briefing
# =============================================================================

@dataclass(frozen=True)
class RecommendedPayload:
    """A payload suggested by the selected mission profiles."""
    id: str
    name: str
    selected: bool
    suggested_by: tuple[str, ...] = ()


@dataclass(frozen=True)
class MissionBriefing:
    """
    Descriptive context gathered from the selected facts.

    Available even while the analysis is incomplete, so the UI can show
    guidance before every section is filled in.
    """
    platform_categories: tuple[str, ...] = ()
    recommended_payloads: tuple[RecommendedPayload, ...] = ()
    considerations: tuple[str, ...] = ()
    deliverables: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()
    regulatory_notes: tuple[str, ...] = ()
    payload_weight_class: str = "light"
    coverage_summary: tuple[str, ...] = ()
    weather_conditions: tuple[str, ...] = ()
    seasons: tuple[str, ...] = ()
    times_of_day: tuple[str, ...] = ()

    @property
    def unselected_recommendations(self) -> list[str]:
        return [p.id for p in self.recommended_payloads if not p.selected]

    def to_dict(self) -> dict[str, Any]:
        return {
            "platformCategories": list(self.platform_categories),
            "recommendedPayloads": [
                {
                    "id": p.id,
                    "name": p.name,
                    "selected": p.selected,
                    "suggestedBy": list(p.suggested_by),
                }
                for p in self.recommended_payloads
            ],
            "considerations": list(self.considerations),
            "deliverables": list(self.deliverables),
            "riskFactors": list(self.risk_factors),
            "regulatoryNotes": list(self.regulatory_notes),
            "payloadWeightClass": self.payload_weight_class,
            "coverageSummary": list(self.coverage_summary),
            "operatingConditions": {
                "weatherConditions": list(self.weather_conditions),
                "seasons": list(self.seasons),
                "timesOfDay": list(self.times_of_day),
            },
        }


# =============================================================================
# Aggregated Result
# =============================================================================

@dataclass(frozen=True)
class NeedsAnalysisResult:
    """Everything derived from one complete fact set."""
    regulatory_pathway: PathwayClassification
    risk_level: RiskLevel
    crew: CrewRequirements
    aircraft: AircraftRequirements
    equipment: EquipmentChecklist
    documentation: DocumentationChecklist

    def to_dict(self) -> dict[str, Any]:
        return {
            "regulatoryPathway": self.regulatory_pathway.to_dict(),
            "riskLevel": self.risk_level.to_dict(),
            "crew": self.crew.to_dict(),
            "aircraft": self.aircraft.to_dict(),
            "equipment": self.equipment.to_dict(),
            "documentation": self.documentation.to_dict(),
        }


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    Outcome of a gated analysis run.

    result is None when the completeness check failed; completeness then
    tells the caller which sections to prompt for.
    """
    completeness: CompletenessReport
    result: Optional[NeedsAnalysisResult]
    briefing: MissionBriefing = field(default_factory=MissionBriefing)
    fact_set_hash: str = ""
    catalog_hash: str = ""

    @property
    def is_complete(self) -> bool:
        return self.result is not None

    def require_result(self) -> NeedsAnalysisResult:
        """
        Get the result, raising if the analysis was incomplete.

        Raises:
            AnalysisIncompleteError: Listing the unsatisfied requirements
        """
        if self.result is None:
            raise AnalysisIncompleteError(
                message="Needs analysis is incomplete: " + ", ".join(self.completeness.missing),
                details={
                    "missing": self.completeness.missing,
                    "percent": self.completeness.percent,
                },
            )
        return self.result

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "complete" if self.is_complete else "incomplete",
            "completeness": self.completeness.to_dict(),
            "result": self.result.to_dict() if self.result is not None else None,
            "briefing": self.briefing.to_dict(),
            "factSetHash": self.fact_set_hash,
            "catalogHash": self.catalog_hash,
        }
