"""
ConopsPilot Fact Catalogs

Immutable category definitions and the catalog containers that hold them.

Catalogs are loaded once from a catalog pack (see conopspilot.packs) and
never mutated. They are the single source of truth for valid fact ids:
every lookup goes through CategoryCatalog.get, which raises
UnknownFactError instead of returning None.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Iterable, Iterator, Mapping, Optional, TypeVar, Union

from ..exceptions import UnknownFactError
from .enums import (
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
# Checklist Kit Items
# =============================================================================

@dataclass(frozen=True)
class KitItem:
    """
    An equipment item contributed by a mission profile or payload.

    required_at_night marks items that only become required when a night
    operation type is also selected.
    """
    item: str
    required: bool = False
    required_at_night: bool = False


# =============================================================================
# Category Definitions
# =============================================================================

@dataclass(frozen=True)
class CategoryDefinition:
    """Fields shared by every selectable fact."""
    id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class MissionProfile(CategoryDefinition):
    """A mission type (inspection, survey, bathymetry, ...)."""
    platform_category: PlatformCategory = PlatformCategory.AERIAL
    typical_payloads: tuple[str, ...] = ()
    considerations: tuple[str, ...] = ()
    deliverables: tuple[str, ...] = ()
    typical_altitude: Optional[str] = None
    typical_duration: Optional[str] = None
    recommended_operation_type: Optional[str] = None
    risk_factors: tuple[str, ...] = ()
    regulatory_notes: Optional[str] = None
    hazardous_site: bool = False
    agency_coordination: bool = False
    platform_features: tuple[str, ...] = ()
    equipment: tuple[KitItem, ...] = ()

    @property
    def is_aerial(self) -> bool:
        return self.platform_category == PlatformCategory.AERIAL


@dataclass(frozen=True)
class OperatingEnvironment(CategoryDefinition):
    """Ground environment beneath the operation."""
    population_category: PopulationCategory = PopulationCategory.SPARSE
    sail_weight: int = 1
    sora_category: Optional[str] = None
    typical_sail: Optional[str] = None
    isolated: bool = False
    characteristics: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class AirspaceScenario(CategoryDefinition):
    """Airspace the operation takes place in."""
    airspace_class: str = "G"
    kind: AirspaceKind = AirspaceKind.UNCONTROLLED
    complexity: ComplexityTier = ComplexityTier.LOW
    arc_base: Optional[str] = None
    requirements: tuple[str, ...] = ()

    @property
    def requires_atc_authorization(self) -> bool:
        return self.kind in (AirspaceKind.CONTROLLED, AirspaceKind.CONTROL_ZONE)


@dataclass(frozen=True)
class OperationType(CategoryDefinition):
    """Line-of-sight mode and lighting of the operation."""
    line_of_sight: LineOfSight = LineOfSight.VLOS
    lighting: Lighting = Lighting.DAY
    sail_modifier: int = 0
    complexity: Optional[str] = None
    reduced_restriction: bool = False
    requirements: tuple[str, ...] = ()


@dataclass(frozen=True)
class CoverageType(CategoryDefinition):
    """Area or corridor extent to be covered."""
    area_range: Optional[str] = None
    flight_estimate: Optional[str] = None
    platform_suggestion: Optional[str] = None
    platform_class: PlatformClass = PlatformClass.MULTIROTOR
    extended: bool = False


@dataclass(frozen=True)
class PayloadType(CategoryDefinition):
    """Sensor or payload carried by the platform."""
    weight: PayloadWeight = PayloadWeight.LIGHT
    typical_weight: Optional[str] = None
    applications: tuple[str, ...] = ()
    data_output: Optional[str] = None
    platform_category: PlatformCategory = PlatformCategory.AERIAL
    operator_demand: OperatorDemand = OperatorDemand.NONE
    platform_features: tuple[str, ...] = ()
    equipment: tuple[KitItem, ...] = ()


@dataclass(frozen=True)
class WeatherCondition(CategoryDefinition):
    """Expected weather."""


@dataclass(frozen=True)
class Season(CategoryDefinition):
    """Season of operations."""


@dataclass(frozen=True)
class TimeOfDay(CategoryDefinition):
    """Time-of-day window."""


D = TypeVar("D", bound=CategoryDefinition)


# =============================================================================
# Category Catalog
# =============================================================================

@dataclass(frozen=True)
class CategoryCatalog(Generic[D]):
    """
    Read-only, ordered collection of definitions for one category.

    Iteration follows catalog order, which the engine uses whenever it
    needs a deterministic order over a set of selected ids.
    """
    category: Category
    definitions: tuple[D, ...] = ()
    _index: Mapping[str, D] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {d.id: d for d in self.definitions})

    def __contains__(self, fact_id: object) -> bool:
        return fact_id in self._index

    def __iter__(self) -> Iterator[D]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(d.id for d in self.definitions)

    def get(self, fact_id: str) -> D:
        """
        Look up a definition by id.

        Raises:
            UnknownFactError: If the id is not in this catalog
        """
        try:
            return self._index[fact_id]
        except KeyError:
            raise UnknownFactError(
                message=f"Unknown {self.category.value} id: {fact_id!r}",
                details={"id": fact_id, "valid_ids": list(self.ids)},
                category=self.category.value,
            ) from None

    def select(self, fact_ids: Iterable[str]) -> list[D]:
        """
        Resolve a selection to definitions in catalog order.

        Every id is checked; an unknown id raises before anything is returned.
        """
        wanted = set(fact_ids)
        for fact_id in sorted(wanted):
            self.get(fact_id)
        return [d for d in self.definitions if d.id in wanted]

    def unknown(self, fact_ids: Iterable[str]) -> list[str]:
        """Return ids that are not in this catalog, in input order."""
        return [f for f in fact_ids if f not in self._index]


# =============================================================================
# Pathway Definitions
# =============================================================================

@dataclass(frozen=True)
class PathwayDefinition:
    """
    Fixed text attached to a regulatory pathway.

    reason is used verbatim when reason_prefix is empty; otherwise the
    classifier appends the joined triggering sub-conditions to the prefix.
    """
    id: PathwayId
    name: str
    label: str
    complexity: str
    reason: str = ""
    reason_prefix: str = ""
    requirements: tuple[str, ...] = ()
    documents: tuple[str, ...] = ()


# =============================================================================
# Completeness Requirements
# =============================================================================

@dataclass(frozen=True)
class CompletenessRequirement:
    """
    A named input requirement satisfied when any listed category has a
    selection.
    """
    key: str
    label: str
    categories: tuple[Category, ...]


# =============================================================================
# Baseline Lists
# =============================================================================

@dataclass(frozen=True)
class BaselineItem:
    """
    A baseline equipment item.

    condition names a rule in the equipment deriver that decides the
    required flag; None means the plain required value applies.
    """
    item: str
    required: bool = True
    condition: Optional[str] = None


@dataclass(frozen=True)
class DocumentationBaseline:
    """Documents listed for every analysis before pathway additions."""
    required: tuple[str, ...] = ()
    recommended: tuple[str, ...] = ()
    operational: tuple[str, ...] = ()
    controlled_airspace: tuple[str, ...] = ()
    bvlos: tuple[str, ...] = ()


@dataclass(frozen=True)
class EquipmentBaseline:
    """Equipment sections listed for every analysis."""
    flight: tuple[BaselineItem, ...] = ()
    safety: tuple[BaselineItem, ...] = ()
    communication: tuple[BaselineItem, ...] = ()
    documentation: tuple[BaselineItem, ...] = ()
    night: tuple[BaselineItem, ...] = ()


# =============================================================================
# Fact Catalogs (container)
# =============================================================================

AnyCatalog = Union[
    CategoryCatalog[MissionProfile],
    CategoryCatalog[OperatingEnvironment],
    CategoryCatalog[AirspaceScenario],
    CategoryCatalog[OperationType],
    CategoryCatalog[CoverageType],
    CategoryCatalog[PayloadType],
    CategoryCatalog[WeatherCondition],
    CategoryCatalog[Season],
    CategoryCatalog[TimeOfDay],
]


@dataclass(frozen=True, eq=False)
class FactCatalogs:
    """
    Every category catalog plus the pathway, baseline and completeness
    data loaded from one catalog pack.
    """
    pack_id: str
    version: str
    jurisdiction: str
    mission_profiles: CategoryCatalog[MissionProfile]
    environments: CategoryCatalog[OperatingEnvironment]
    airspaces: CategoryCatalog[AirspaceScenario]
    operation_types: CategoryCatalog[OperationType]
    coverages: CategoryCatalog[CoverageType]
    payloads: CategoryCatalog[PayloadType]
    weather_conditions: CategoryCatalog[WeatherCondition]
    seasons: CategoryCatalog[Season]
    times_of_day: CategoryCatalog[TimeOfDay]
    pathways: Mapping[PathwayId, PathwayDefinition]
    completeness_requirements: tuple[CompletenessRequirement, ...]
    documentation: DocumentationBaseline
    equipment: EquipmentBaseline
    content_hash: str = ""

    def catalog(self, category: Category) -> AnyCatalog:
        """Get the catalog for a category."""
        return {
            Category.MISSION_PROFILES: self.mission_profiles,
            Category.ENVIRONMENTS: self.environments,
            Category.AIRSPACES: self.airspaces,
            Category.OPERATION_TYPES: self.operation_types,
            Category.COVERAGES: self.coverages,
            Category.PAYLOADS: self.payloads,
            Category.WEATHER_CONDITIONS: self.weather_conditions,
            Category.SEASONS: self.seasons,
            Category.TIMES_OF_DAY: self.times_of_day,
        }[Category(category)]

    def pathway(self, pathway_id: PathwayId) -> PathwayDefinition:
        """Get a pathway definition (every PathwayId is guaranteed by the loader)."""
        return self.pathways[pathway_id]
