"""
ConopsPilot Models

All domain models for the CONOPS needs-analysis engine.

    from conopspilot.models import (
        # Enums
        Category, PathwayId, PlatformCategory,
        # Catalogs
        FactCatalogs, CategoryCatalog, MissionProfile,
        # Fact sets
        AnalysisFactSet, FactSet,
        # Results
        NeedsAnalysisResult, PathwayClassification, RiskLevel,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    LEGACY_SCALAR_KEYS,
    SAIL_LABELS,
    SAIL_MAX,
    SAIL_MIN,
    AirspaceKind,
    Category,
    ComplexityTier,
    LineOfSight,
    Lighting,
    OperatorDemand,
    PathwayId,
    PayloadWeight,
    PlatformCategory,
    PlatformClass,
    PopulationCategory,
)

# =============================================================================
# Catalogs
# =============================================================================
from .catalog import (
    AirspaceScenario,
    BaselineItem,
    CategoryCatalog,
    CategoryDefinition,
    CompletenessRequirement,
    CoverageType,
    DocumentationBaseline,
    EquipmentBaseline,
    FactCatalogs,
    KitItem,
    MissionProfile,
    OperatingEnvironment,
    OperationType,
    PathwayDefinition,
    PayloadType,
    Season,
    TimeOfDay,
    WeatherCondition,
)

# =============================================================================
# Fact Sets
# =============================================================================
from .facts import (
    AnalysisFactSet,
    FactSet,
    coerce_category,
    validate_selection,
)

# =============================================================================
# Results
# =============================================================================
from .results import (
    EQUIPMENT_SECTIONS,
    AircraftRequirements,
    AnalysisOutcome,
    ChecklistItem,
    CompletenessReport,
    CrewRequirements,
    DocumentationChecklist,
    EquipmentChecklist,
    MissionBriefing,
    NeedsAnalysisResult,
    PathwayClassification,
    RecommendedPayload,
    RiskLevel,
    RoleRequirement,
)


__all__ = [
    # Enums
    "LEGACY_SCALAR_KEYS",
    "SAIL_LABELS",
    "SAIL_MAX",
    "SAIL_MIN",
    "AirspaceKind",
    "Category",
    "ComplexityTier",
    "LineOfSight",
    "Lighting",
    "OperatorDemand",
    "PathwayId",
    "PayloadWeight",
    "PlatformCategory",
    "PlatformClass",
    "PopulationCategory",
    # Catalogs
    "AirspaceScenario",
    "BaselineItem",
    "CategoryCatalog",
    "CategoryDefinition",
    "CompletenessRequirement",
    "CoverageType",
    "DocumentationBaseline",
    "EquipmentBaseline",
    "FactCatalogs",
    "KitItem",
    "MissionProfile",
    "OperatingEnvironment",
    "OperationType",
    "PathwayDefinition",
    "PayloadType",
    "Season",
    "TimeOfDay",
    "WeatherCondition",
    # Fact sets
    "AnalysisFactSet",
    "FactSet",
    "coerce_category",
    "validate_selection",
    # Results
    "EQUIPMENT_SECTIONS",
    "AircraftRequirements",
    "AnalysisOutcome",
    "ChecklistItem",
    "CompletenessReport",
    "CrewRequirements",
    "DocumentationChecklist",
    "EquipmentChecklist",
    "MissionBriefing",
    "NeedsAnalysisResult",
    "PathwayClassification",
    "RecommendedPayload",
    "RiskLevel",
    "RoleRequirement",
]
