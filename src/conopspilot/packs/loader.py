"""
ConopsPilot Catalog Pack Loader

Loads and validates catalog packs from YAML or JSON files.

Converts Pydantic schema models to ConopsPilot catalog models and checks
the cross-references the schema alone cannot see (payload ids named by
mission profiles, one definition per pathway, and so on). Every failure
is raised here, at load time, never during an analysis.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..canon import compute_catalog_hash
from ..config import load_settings
from ..exceptions import CatalogLoadError, CatalogValidationError
from ..models import (
    AirspaceKind,
    AirspaceScenario,
    BaselineItem,
    Category,
    CategoryCatalog,
    ComplexityTier,
    CompletenessRequirement,
    CoverageType,
    DocumentationBaseline,
    EquipmentBaseline,
    FactCatalogs,
    KitItem,
    LineOfSight,
    Lighting,
    MissionProfile,
    OperatingEnvironment,
    OperationType,
    OperatorDemand,
    PathwayDefinition,
    PathwayId,
    PayloadType,
    PayloadWeight,
    PlatformCategory,
    PlatformClass,
    PopulationCategory,
    Season,
    TimeOfDay,
    WeatherCondition,
)
from .schema import (
    SCHEMA_VERSION,
    AirspaceScenarioSchema,
    BaselineItemSchema,
    CatalogPackSchema,
    CoverageTypeSchema,
    DescriptiveSchema,
    KitItemSchema,
    MissionProfileSchema,
    OperatingEnvironmentSchema,
    OperationTypeSchema,
    PathwaySchema,
    PayloadTypeSchema,
    check_schema_version,
    validate_catalog_pack,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_reference_integrity(schema: CatalogPackSchema, path: str = "") -> None:
    """
    Validate internal references are consistent.

    Catches:
    - Duplicate ids within a category
    - Mission profiles naming payloads or operation types that do not exist
    - Pathways missing or defined twice
    - Duplicate completeness requirement keys

    Args:
        schema: The validated pack schema
        path: File path for error messages

    Raises:
        ValueError: If reference integrity errors are found
    """
    errors = []

    categories = {
        "mission_profiles": schema.mission_profiles,
        "environments": schema.environments,
        "airspaces": schema.airspaces,
        "operation_types": schema.operation_types,
        "coverages": schema.coverages,
        "payloads": schema.payloads,
        "weather_conditions": schema.weather_conditions,
        "seasons": schema.seasons,
        "times_of_day": schema.times_of_day,
    }

    # Check for duplicate ids per category
    for name, definitions in categories.items():
        seen: set[str] = set()
        for definition in definitions:
            if definition.id in seen:
                errors.append(f"Duplicate {name} ID: '{definition.id}'")
            seen.add(definition.id)

    # Check mission profile references
    payload_ids = {p.id for p in schema.payloads}
    operation_ids = {o.id for o in schema.operation_types}
    for profile in schema.mission_profiles:
        for payload_id in profile.typical_payloads:
            if payload_id not in payload_ids:
                errors.append(
                    f"Mission profile '{profile.id}' references non-existent payload '{payload_id}'"
                )
        recommended = profile.recommended_operation_type
        if recommended is not None and recommended not in operation_ids:
            errors.append(
                f"Mission profile '{profile.id}' references non-existent operation type '{recommended}'"
            )

    # Every pathway defined exactly once
    pathway_ids = [p.id for p in schema.pathways]
    for pathway_id in PathwayId:
        count = pathway_ids.count(pathway_id.value)
        if count == 0:
            errors.append(f"Missing pathway definition: '{pathway_id.value}'")
        elif count > 1:
            errors.append(f"Duplicate pathway definition: '{pathway_id.value}'")

    # Completeness keys are unique
    seen_keys: set[str] = set()
    for requirement in schema.completeness:
        if requirement.key in seen_keys:
            errors.append(f"Duplicate completeness requirement: '{requirement.key}'")
        seen_keys.add(requirement.key)

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_kit(items: list[KitItemSchema]) -> tuple[KitItem, ...]:
    return tuple(
        KitItem(item=i.item, required=i.required, required_at_night=i.required_at_night)
        for i in items
    )


def _convert_mission_profile(schema: MissionProfileSchema) -> MissionProfile:
    """Convert MissionProfileSchema to MissionProfile model."""
    return MissionProfile(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        platform_category=PlatformCategory(schema.platform_category),
        typical_payloads=tuple(schema.typical_payloads),
        considerations=tuple(schema.considerations),
        deliverables=tuple(schema.deliverables),
        typical_altitude=schema.typical_altitude,
        typical_duration=schema.typical_duration,
        recommended_operation_type=schema.recommended_operation_type,
        risk_factors=tuple(schema.risk_factors),
        regulatory_notes=schema.regulatory_notes,
        hazardous_site=schema.hazardous_site,
        agency_coordination=schema.agency_coordination,
        platform_features=tuple(schema.platform_features),
        equipment=_convert_kit(schema.equipment),
    )


def _convert_environment(schema: OperatingEnvironmentSchema) -> OperatingEnvironment:
    """Convert OperatingEnvironmentSchema to OperatingEnvironment model."""
    return OperatingEnvironment(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        population_category=PopulationCategory(schema.population_category),
        sail_weight=schema.sail_weight,
        sora_category=schema.sora_category,
        typical_sail=schema.typical_sail,
        isolated=schema.isolated,
        characteristics=tuple(schema.characteristics),
        examples=tuple(schema.examples),
    )


def _convert_airspace(schema: AirspaceScenarioSchema) -> AirspaceScenario:
    """Convert AirspaceScenarioSchema to AirspaceScenario model."""
    return AirspaceScenario(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        airspace_class=schema.airspace_class,
        kind=AirspaceKind(schema.kind),
        complexity=ComplexityTier(schema.complexity),
        arc_base=schema.arc_base,
        requirements=tuple(schema.requirements),
    )


def _convert_operation_type(schema: OperationTypeSchema) -> OperationType:
    """Convert OperationTypeSchema to OperationType model."""
    return OperationType(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        line_of_sight=LineOfSight(schema.line_of_sight),
        lighting=Lighting(schema.lighting),
        sail_modifier=schema.sail_modifier,
        complexity=schema.complexity,
        reduced_restriction=schema.reduced_restriction,
        requirements=tuple(schema.requirements),
    )


def _convert_coverage(schema: CoverageTypeSchema) -> CoverageType:
    """Convert CoverageTypeSchema to CoverageType model."""
    return CoverageType(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        area_range=schema.area_range,
        flight_estimate=schema.flight_estimate,
        platform_suggestion=schema.platform_suggestion,
        platform_class=PlatformClass(schema.platform_class),
        extended=schema.extended,
    )


def _convert_payload(schema: PayloadTypeSchema) -> PayloadType:
    """Convert PayloadTypeSchema to PayloadType model."""
    return PayloadType(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        weight=PayloadWeight(schema.weight),
        typical_weight=schema.typical_weight,
        applications=tuple(schema.applications),
        data_output=schema.data_output,
        platform_category=PlatformCategory(schema.platform_category),
        operator_demand=OperatorDemand(schema.operator_demand),
        platform_features=tuple(schema.platform_features),
        equipment=_convert_kit(schema.equipment),
    )


def _convert_descriptive(schema: DescriptiveSchema, model: type) -> Any:
    return model(id=schema.id, name=schema.name, description=schema.description)


def _convert_pathway(schema: PathwaySchema) -> PathwayDefinition:
    """Convert PathwaySchema to PathwayDefinition model."""
    return PathwayDefinition(
        id=PathwayId(schema.id),
        name=schema.name,
        label=schema.label,
        complexity=schema.complexity,
        reason=schema.reason,
        reason_prefix=schema.reason_prefix,
        requirements=tuple(schema.requirements),
        documents=tuple(schema.documents),
    )


def _convert_baseline(items: list[BaselineItemSchema]) -> tuple[BaselineItem, ...]:
    return tuple(
        BaselineItem(item=i.item, required=i.required, condition=i.condition)
        for i in items
    )


def _convert_catalog_pack(schema: CatalogPackSchema, content_hash: str = "") -> FactCatalogs:
    """Convert CatalogPackSchema to FactCatalogs."""
    return FactCatalogs(
        pack_id=schema.id,
        version=schema.version,
        jurisdiction=schema.jurisdiction,
        mission_profiles=CategoryCatalog(
            Category.MISSION_PROFILES,
            tuple(_convert_mission_profile(s) for s in schema.mission_profiles),
        ),
        environments=CategoryCatalog(
            Category.ENVIRONMENTS,
            tuple(_convert_environment(s) for s in schema.environments),
        ),
        airspaces=CategoryCatalog(
            Category.AIRSPACES,
            tuple(_convert_airspace(s) for s in schema.airspaces),
        ),
        operation_types=CategoryCatalog(
            Category.OPERATION_TYPES,
            tuple(_convert_operation_type(s) for s in schema.operation_types),
        ),
        coverages=CategoryCatalog(
            Category.COVERAGES,
            tuple(_convert_coverage(s) for s in schema.coverages),
        ),
        payloads=CategoryCatalog(
            Category.PAYLOADS,
            tuple(_convert_payload(s) for s in schema.payloads),
        ),
        weather_conditions=CategoryCatalog(
            Category.WEATHER_CONDITIONS,
            tuple(_convert_descriptive(s, WeatherCondition) for s in schema.weather_conditions),
        ),
        seasons=CategoryCatalog(
            Category.SEASONS,
            tuple(_convert_descriptive(s, Season) for s in schema.seasons),
        ),
        times_of_day=CategoryCatalog(
            Category.TIMES_OF_DAY,
            tuple(_convert_descriptive(s, TimeOfDay) for s in schema.times_of_day),
        ),
        pathways={p.id: p for p in (_convert_pathway(s) for s in schema.pathways)},
        completeness_requirements=tuple(
            CompletenessRequirement(
                key=r.key,
                label=r.label,
                categories=tuple(Category(c) for c in r.categories),
            )
            for r in schema.completeness
        ),
        documentation=DocumentationBaseline(
            required=tuple(schema.documentation.required),
            recommended=tuple(schema.documentation.recommended),
            operational=tuple(schema.documentation.operational),
            controlled_airspace=tuple(schema.documentation.controlled_airspace),
            bvlos=tuple(schema.documentation.bvlos),
        ),
        equipment=EquipmentBaseline(
            flight=_convert_baseline(schema.equipment.flight),
            safety=_convert_baseline(schema.equipment.safety),
            communication=_convert_baseline(schema.equipment.communication),
            documentation=_convert_baseline(schema.equipment.documentation),
            night=_convert_baseline(schema.equipment.night),
        ),
        content_hash=content_hash,
    )


# =============================================================================
# Catalog Pack Loader
# =============================================================================

class CatalogPackLoader:
    """
    Loads catalog packs from files or parsed data.

    Usage:
        loader = CatalogPackLoader()
        catalogs = loader.load("path/to/canada_part_ix.yaml")

        # Loaded packs are cached by pack id
        same = loader.get_catalogs(catalogs.pack_id)
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize loader.

        Args:
            strict_version: If True, reject packs with a different schema major version
        """
        self.strict_version = strict_version
        self._catalogs: dict[str, FactCatalogs] = {}

    def load(self, path: Union[str, Path]) -> FactCatalogs:
        """
        Load a catalog pack from a file.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Loaded FactCatalogs

        Raises:
            CatalogLoadError: If the file is missing or cannot be parsed
            CatalogValidationError: If the pack fails validation
        """
        path = Path(path)

        if not path.exists():
            raise CatalogLoadError(
                message=f"Catalog pack not found: {path}",
                details={"path": str(path)},
            )

        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                message=f"Failed to load catalog pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        catalogs = self.load_data(data, source=str(path))
        logger.info(
            "Loaded catalog pack %s v%s",
            catalogs.pack_id,
            catalogs.version,
            extra={"catalog_path": str(path), "catalog_hash": catalogs.content_hash},
        )
        return catalogs

    def load_data(self, data: Any, source: str = "") -> FactCatalogs:
        """
        Validate and convert already-parsed pack data.

        Raises:
            CatalogValidationError: If the pack fails validation
        """
        if not isinstance(data, dict):
            raise CatalogValidationError(
                message="Catalog pack must be a mapping at the top level",
                details={"path": source, "type": type(data).__name__},
            )

        # Check schema version
        pack_version = str(data.get("schema_version", SCHEMA_VERSION))
        if self.strict_version and not check_schema_version(pack_version):
            raise CatalogValidationError(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "path": source,
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        # Validate against schema
        try:
            schema = validate_catalog_pack(data)
        except ValidationError as e:
            raise CatalogValidationError(
                message=f"Catalog pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
            ) from e

        # Validate reference integrity
        try:
            validate_reference_integrity(schema, source)
        except ValueError as e:
            raise CatalogValidationError(
                message="Reference integrity validation failed",
                details={"errors": str(e), "path": source},
            ) from e

        catalogs = _convert_catalog_pack(schema, content_hash=compute_catalog_hash(data))
        self._catalogs[catalogs.pack_id] = catalogs
        return catalogs

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def get_catalogs(self, pack_id: str) -> Optional[FactCatalogs]:
        """Get cached catalogs by pack ID."""
        return self._catalogs.get(pack_id)

    def list_packs(self) -> list[str]:
        """List IDs of all loaded packs."""
        return list(self._catalogs.keys())


# =============================================================================
# Convenience Functions
# =============================================================================

def load_catalogs(path: Union[str, Path]) -> FactCatalogs:
    """
    Load a catalog pack from a file.

    Convenience function that creates a temporary loader.
    """
    return CatalogPackLoader().load(path)


def load_catalogs_from_string(content: str, format: str = "yaml") -> FactCatalogs:
    """
    Load a catalog pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"

    Raises:
        CatalogLoadError: If the string cannot be parsed
        CatalogValidationError: If the pack fails validation
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CatalogLoadError(
            message=f"Failed to parse catalog pack: {e}",
            details={"format": format, "error": str(e)},
        ) from e

    return CatalogPackLoader().load_data(data, source=f"<{format} string>")


@lru_cache(maxsize=1)
def get_default_catalogs() -> FactCatalogs:
    """
    Load the configured catalog pack once per process.

    The path comes from CONOPSPILOT_CATALOG_PATH, falling back to the
    bundled pack.

    Raises:
        CatalogLoadError: If the configured file is missing or unreadable
        CatalogValidationError: If the pack fails validation
    """
    return load_catalogs(load_settings().catalog_path)
