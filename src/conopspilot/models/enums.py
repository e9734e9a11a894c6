"""
ConopsPilot Enumerations

All enumeration types used throughout the needs-analysis engine.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Fact Categories
# =============================================================================

class Category(str, Enum):
    """
    Selectable fact categories.

    Values are the boundary keys used by the serialized fact set.
    """
    MISSION_PROFILES = "missionProfiles"
    ENVIRONMENTS = "environments"
    AIRSPACES = "airspaces"
    OPERATION_TYPES = "operationTypes"
    COVERAGES = "coverages"
    PAYLOADS = "payloads"
    WEATHER_CONDITIONS = "weatherConditions"
    SEASONS = "seasons"
    TIMES_OF_DAY = "timesOfDay"


# Legacy single-value keys from older saved analyses
LEGACY_SCALAR_KEYS: dict[str, Category] = {
    "missionProfile": Category.MISSION_PROFILES,
    "environment": Category.ENVIRONMENTS,
    "airspace": Category.AIRSPACES,
    "operationType": Category.OPERATION_TYPES,
    "coverage": Category.COVERAGES,
}


# =============================================================================
# Category Attributes
# =============================================================================

class PlatformCategory(str, Enum):
    """Vehicle platform a mission profile or payload belongs to."""
    AERIAL = "aerial"
    MARINE = "marine"
    GROUND = "ground"


class PopulationCategory(str, Enum):
    """Ground population density class of an operating environment."""
    CONTROLLED = "controlled"    # Access-controlled site, no uninvolved persons
    SPARSE = "sparse"
    MODERATE = "moderate"
    POPULATED = "populated"
    GATHERING = "gathering"      # Assembly of people
    MIXED = "mixed"              # Spans several density classes


class AirspaceKind(str, Enum):
    """Regulatory kind of an airspace scenario."""
    UNCONTROLLED = "uncontrolled"
    CONTROLLED = "controlled"        # Class E transition / near aerodrome
    CONTROL_ZONE = "control_zone"
    RESTRICTED = "restricted"        # Military / special use


class ComplexityTier(str, Enum):
    """Airspace complexity tier; HIGH adds to the SAIL estimate."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LineOfSight(str, Enum):
    """Visual line-of-sight mode of an operation type."""
    VLOS = "vlos"
    EVLOS = "evlos"
    BVLOS = "bvlos"


class Lighting(str, Enum):
    """Lighting conditions of an operation type."""
    DAY = "day"
    TWILIGHT = "twilight"
    NIGHT = "night"


class PayloadWeight(str, Enum):
    """Payload weight class."""
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    VARIES = "varies"


class OperatorDemand(str, Enum):
    """How much crew attention a payload needs in flight."""
    NONE = "none"
    COMPLEX = "complex"          # Recommend an operator when several are flown
    DEDICATED = "dedicated"      # Always needs its own operator


class PlatformClass(str, Enum):
    """
    Airframe class suggested by coverage extent.

    Declaration order is the demand order (least to most demanding).
    """
    MULTIROTOR = "multirotor"
    MULTIROTOR_OR_VTOL = "multirotor_or_vtol"
    FIXED_WING_OR_VTOL = "fixed_wing_or_vtol"

    @property
    def rank(self) -> int:
        return list(PlatformClass).index(self)

    @property
    def label(self) -> str:
        return PLATFORM_CLASS_LABELS[self]


PLATFORM_CLASS_LABELS: dict[PlatformClass, str] = {
    PlatformClass.MULTIROTOR: "Multi-rotor",
    PlatformClass.MULTIROTOR_OR_VTOL: "Multi-rotor or VTOL",
    PlatformClass.FIXED_WING_OR_VTOL: "Fixed-wing or VTOL",
}


# =============================================================================
# Regulatory Pathways
# =============================================================================

class PathwayId(str, Enum):
    """
    Regulatory approval tracks under CARs Part IX.

    MARINE and GROUND are non-aviation pathways for vessel and
    ground-based survey platforms.
    """
    BASIC = "basic"
    ADVANCED = "advanced"
    COMPLEX = "complex"
    LEVEL1_COMPLEX = "level1_complex"
    SFOC = "sfoc"
    MARINE = "marine"
    GROUND = "ground"

    @property
    def is_aviation(self) -> bool:
        return self not in (PathwayId.MARINE, PathwayId.GROUND)


# =============================================================================
# SAIL
# =============================================================================

SAIL_MIN = 1
SAIL_MAX = 6

SAIL_LABELS = ("I", "II", "III", "IV", "V", "VI")
