"""
ConopsPilot Catalog Pack Schemas

Pydantic models for validating catalog pack YAML/JSON files.

These schemas define the structure of catalog packs loaded at startup.
They map to the frozen domain models in conopspilot.models.catalog.
A pack that fails validation is a startup error: a definition missing
an attribute a deriver needs (e.g. an operation type without its
sail_modifier) never reaches the engine.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check version compatibility
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

PlatformCategoryValue = Literal["aerial", "marine", "ground"]

PopulationCategoryValue = Literal["controlled", "sparse", "moderate", "populated", "gathering", "mixed"]

AirspaceKindValue = Literal["uncontrolled", "controlled", "control_zone", "restricted"]

ComplexityTierValue = Literal["low", "medium", "high"]

LineOfSightValue = Literal["vlos", "evlos", "bvlos"]

LightingValue = Literal["day", "twilight", "night"]

PayloadWeightValue = Literal["light", "medium", "heavy", "varies"]

OperatorDemandValue = Literal["none", "complex", "dedicated"]

PlatformClassValue = Literal["multirotor", "multirotor_or_vtol", "fixed_wing_or_vtol"]

PathwayIdValue = Literal[
    "basic", "advanced", "complex", "level1_complex", "sfoc", "marine", "ground"
]

CategoryKeyValue = Literal[
    "missionProfiles", "environments", "airspaces", "operationTypes",
    "coverages", "payloads", "weatherConditions", "seasons", "timesOfDay",
]

BaselineConditionValue = Literal[
    "not_isolated",
    "hazardous_site",
    "atc_airspace",
    "uncontrolled_site",
    "sfoc_pathway",
    "night_operations",
]


class _Strict(BaseModel):
    """Reject unknown keys so typos in a pack fail loudly."""
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Shared Schemas
# =============================================================================

class KitItemSchema(_Strict):
    """Schema for a mission- or payload-specific equipment item."""
    item: str = Field(..., min_length=1)
    required: bool = False
    required_at_night: bool = False


class DefinitionSchema(_Strict):
    """Fields shared by every category definition."""
    id: str = Field(..., min_length=1, pattern=r"^[a-z0-9_]+$")
    name: str = Field(..., min_length=1)
    description: str = ""


# =============================================================================
# Category Schemas
# =============================================================================

class MissionProfileSchema(DefinitionSchema):
    platform_category: PlatformCategoryValue
    typical_payloads: list[str] = Field(default_factory=list)
    considerations: list[str] = Field(default_factory=list)
    deliverables: list[str] = Field(default_factory=list)
    typical_altitude: Optional[str] = None
    typical_duration: Optional[str] = None
    recommended_operation_type: Optional[str] = None
    risk_factors: list[str] = Field(default_factory=list)
    regulatory_notes: Optional[str] = None
    hazardous_site: bool = False
    agency_coordination: bool = False
    platform_features: list[str] = Field(default_factory=list)
    equipment: list[KitItemSchema] = Field(default_factory=list)


class OperatingEnvironmentSchema(DefinitionSchema):
    population_category: PopulationCategoryValue
    sail_weight: int = Field(..., ge=1, le=6)
    sora_category: Optional[str] = None
    typical_sail: Optional[str] = None
    isolated: bool = False
    characteristics: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)


class AirspaceScenarioSchema(DefinitionSchema):
    airspace_class: str = Field(..., min_length=1)
    kind: AirspaceKindValue
    complexity: ComplexityTierValue
    arc_base: Optional[str] = None
    requirements: list[str] = Field(default_factory=list)


class OperationTypeSchema(DefinitionSchema):
    line_of_sight: LineOfSightValue
    lighting: LightingValue
    sail_modifier: int = Field(..., ge=0, le=5)
    complexity: Optional[str] = None
    reduced_restriction: bool = False
    requirements: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def reduced_restriction_is_bvlos(self) -> "OperationTypeSchema":
        if self.reduced_restriction and self.line_of_sight != "bvlos":
            raise ValueError(
                f"Operation type '{self.id}' is reduced_restriction but not BVLOS"
            )
        return self


class CoverageTypeSchema(DefinitionSchema):
    area_range: Optional[str] = None
    flight_estimate: Optional[str] = None
    platform_suggestion: Optional[str] = None
    platform_class: PlatformClassValue
    extended: bool = False


class PayloadTypeSchema(DefinitionSchema):
    weight: PayloadWeightValue
    typical_weight: Optional[str] = None
    applications: list[str] = Field(default_factory=list)
    data_output: Optional[str] = None
    platform_category: PlatformCategoryValue = "aerial"
    operator_demand: OperatorDemandValue = "none"
    platform_features: list[str] = Field(default_factory=list)
    equipment: list[KitItemSchema] = Field(default_factory=list)


class DescriptiveSchema(DefinitionSchema):
    """Weather conditions, seasons and times of day."""


# =============================================================================
# Pathway / Baseline / Completeness Schemas
# =============================================================================

class PathwaySchema(_Strict):
    """Schema for a regulatory pathway definition."""
    id: PathwayIdValue
    name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    complexity: str
    reason: str = ""
    reason_prefix: str = ""
    requirements: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def has_reason(self) -> "PathwaySchema":
        if not self.reason and not self.reason_prefix:
            raise ValueError(f"Pathway '{self.id}' needs a reason or reason_prefix")
        return self


class BaselineItemSchema(_Strict):
    item: str = Field(..., min_length=1)
    required: bool = True
    condition: Optional[BaselineConditionValue] = None


class EquipmentBaselineSchema(_Strict):
    flight: list[BaselineItemSchema] = Field(default_factory=list)
    safety: list[BaselineItemSchema] = Field(default_factory=list)
    communication: list[BaselineItemSchema] = Field(default_factory=list)
    documentation: list[BaselineItemSchema] = Field(default_factory=list)
    night: list[BaselineItemSchema] = Field(default_factory=list)


class DocumentationBaselineSchema(_Strict):
    required: list[str] = Field(default_factory=list)
    recommended: list[str] = Field(default_factory=list)
    operational: list[str] = Field(default_factory=list)
    controlled_airspace: list[str] = Field(default_factory=list)
    bvlos: list[str] = Field(default_factory=list)


class CompletenessRequirementSchema(_Strict):
    key: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    categories: list[CategoryKeyValue] = Field(..., min_length=1)


# =============================================================================
# Catalog Pack (root)
# =============================================================================

class CatalogPackSchema(_Strict):
    """
    Root schema for a catalog pack file.

    Category lists keep their file order; that order is the catalog order
    the engine uses for deterministic output.
    """
    schema_version: str = SCHEMA_VERSION
    id: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)
    jurisdiction: str = Field(..., min_length=1)
    name: str = ""

    mission_profiles: list[MissionProfileSchema] = Field(..., min_length=1)
    environments: list[OperatingEnvironmentSchema] = Field(..., min_length=1)
    airspaces: list[AirspaceScenarioSchema] = Field(..., min_length=1)
    operation_types: list[OperationTypeSchema] = Field(..., min_length=1)
    coverages: list[CoverageTypeSchema] = Field(..., min_length=1)
    payloads: list[PayloadTypeSchema] = Field(..., min_length=1)
    weather_conditions: list[DescriptiveSchema] = Field(default_factory=list)
    seasons: list[DescriptiveSchema] = Field(default_factory=list)
    times_of_day: list[DescriptiveSchema] = Field(default_factory=list)

    pathways: list[PathwaySchema] = Field(..., min_length=1)
    completeness: list[CompletenessRequirementSchema] = Field(..., min_length=1)
    documentation: DocumentationBaselineSchema = Field(default_factory=DocumentationBaselineSchema)
    equipment: EquipmentBaselineSchema = Field(default_factory=EquipmentBaselineSchema)

    @field_validator("schema_version")
    @classmethod
    def known_major_version(cls, value: str) -> str:
        if not check_schema_version(value):
            raise ValueError(
                f"Unsupported schema_version {value}; expected {SCHEMA_VERSION.split('.')[0]}.x"
            )
        return value


def check_schema_version(version: str) -> bool:
    """Check that a pack's schema version shares our major version."""
    return version.split(".")[0] == SCHEMA_VERSION.split(".")[0]


def validate_catalog_pack(data: dict) -> CatalogPackSchema:
    """
    Validate raw pack data.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return CatalogPackSchema.model_validate(data)
