"""
ConopsPilot Pathway Classifier

Classifies an operation against the CARs Part IX approval tracks.

Rules are evaluated in a fixed order and the first match wins:

    non_aviation    every mission profile is marine or ground
    level1_complex  low-risk BVLOS inside the Level 1 Complex envelope
    sfoc            night, other BVLOS, restricted airspace, gatherings
    complex         control zone, or urban twilight operations
    advanced        populated areas, controlled airspace, EVLOS
    basic           everything else

Each rule reads attributes of the selected definitions (population
category, airspace kind, line of sight, lighting), never raw ids, so a
catalog pack can add entries without touching the rules.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..exceptions import ClassificationError
from ..models import (
    AirspaceKind,
    AirspaceScenario,
    FactCatalogs,
    FactSet,
    LineOfSight,
    Lighting,
    MissionProfile,
    OperatingEnvironment,
    OperationType,
    PathwayClassification,
    PathwayId,
    PlatformCategory,
    PopulationCategory,
)

logger = logging.getLogger(__name__)


# Population categories allowed under Level 1 Complex BVLOS
LEVEL1_POPULATIONS = frozenset({PopulationCategory.CONTROLLED, PopulationCategory.SPARSE})

# Population categories that put an operation near people
NEAR_PEOPLE_POPULATIONS = frozenset({PopulationCategory.MODERATE, PopulationCategory.POPULATED})


# =============================================================================
# Resolved Facts
# =============================================================================

@dataclass(frozen=True)
class ClassificationFacts:
    """
    The fact set resolved to definitions, in catalog order.

    Resolution fails with UnknownFactError on any unknown id.
    """
    profiles: tuple[MissionProfile, ...] = ()
    environments: tuple[OperatingEnvironment, ...] = ()
    airspaces: tuple[AirspaceScenario, ...] = ()
    operations: tuple[OperationType, ...] = ()

    @classmethod
    def resolve(cls, fact_set: FactSet, catalogs: FactCatalogs) -> ClassificationFacts:
        return cls(
            profiles=tuple(catalogs.mission_profiles.select(fact_set.mission_profiles)),
            environments=tuple(catalogs.environments.select(fact_set.environments)),
            airspaces=tuple(catalogs.airspaces.select(fact_set.airspaces)),
            operations=tuple(catalogs.operation_types.select(fact_set.operation_types)),
        )

    # Platform

    @property
    def is_non_aviation(self) -> bool:
        return bool(self.profiles) and not any(p.is_aerial for p in self.profiles)

    @property
    def has_marine_platform(self) -> bool:
        return any(p.platform_category == PlatformCategory.MARINE for p in self.profiles)

    # Operation types

    @property
    def has_night(self) -> bool:
        return any(o.lighting == Lighting.NIGHT for o in self.operations)

    @property
    def has_twilight(self) -> bool:
        return any(o.lighting == Lighting.TWILIGHT for o in self.operations)

    @property
    def has_bvlos(self) -> bool:
        return any(o.line_of_sight == LineOfSight.BVLOS for o in self.operations)

    @property
    def has_evlos(self) -> bool:
        return any(o.line_of_sight == LineOfSight.EVLOS for o in self.operations)

    @property
    def has_reduced_restriction(self) -> bool:
        return any(o.reduced_restriction for o in self.operations)

    # Airspace

    def _has_airspace(self, kind: AirspaceKind) -> bool:
        return any(a.kind == kind for a in self.airspaces)

    @property
    def has_restricted_airspace(self) -> bool:
        return self._has_airspace(AirspaceKind.RESTRICTED)

    @property
    def has_control_zone(self) -> bool:
        return self._has_airspace(AirspaceKind.CONTROL_ZONE)

    @property
    def has_controlled_airspace(self) -> bool:
        return self._has_airspace(AirspaceKind.CONTROLLED)

    # Environment

    @property
    def has_gathering(self) -> bool:
        return any(e.population_category == PopulationCategory.GATHERING for e in self.environments)

    @property
    def has_urban(self) -> bool:
        return any(e.population_category == PopulationCategory.POPULATED for e in self.environments)

    @property
    def is_near_people(self) -> bool:
        return any(e.population_category in NEAR_PEOPLE_POPULATIONS for e in self.environments)

    @property
    def bvlos_eligible(self) -> bool:
        """
        Level 1 Complex envelope: uncontrolled airspace only and a
        controlled or sparse population only. Empty categories do not
        disqualify.
        """
        class_g_only = all(a.kind == AirspaceKind.UNCONTROLLED for a in self.airspaces)
        sparse_only = all(e.population_category in LEVEL1_POPULATIONS for e in self.environments)
        return class_g_only and sparse_only


def bvlos_eligibility(fact_set: FactSet, catalogs: FactCatalogs) -> bool:
    """Check whether BVLOS in this fact set fits the Level 1 Complex envelope."""
    return ClassificationFacts.resolve(fact_set, catalogs).bvlos_eligible


# =============================================================================
# Rule Definitions
# =============================================================================

@dataclass(frozen=True)
class PathwayRule:
    """
    One entry in the ordered rule list.

    predicate decides whether the rule applies; build turns the facts
    into the classification once it does.
    """
    name: str
    predicate: Callable[[ClassificationFacts], bool]
    build: Callable[[ClassificationFacts, FactCatalogs], PathwayClassification]


def _classification(
    catalogs: FactCatalogs,
    pathway_id: PathwayId,
    rule: str,
    triggers: Iterable[str] = (),
) -> PathwayClassification:
    """Attach the pathway's fixed text to a set of triggers."""
    definition = catalogs.pathway(pathway_id)
    triggers = tuple(triggers)
    if definition.reason_prefix:
        reason = definition.reason_prefix + ", ".join(triggers)
    else:
        reason = definition.reason
    return PathwayClassification(
        pathway=pathway_id,
        name=definition.name,
        label=definition.label,
        reason=reason,
        complexity=definition.complexity,
        requirements=definition.requirements,
        triggers=triggers,
        rule=rule,
    )


def _collect(*checks: tuple[bool, str]) -> list[str]:
    return [text for fired, text in checks if fired]


# Non-aviation

def _non_aviation_applies(facts: ClassificationFacts) -> bool:
    return facts.is_non_aviation


def _build_non_aviation(facts: ClassificationFacts, catalogs: FactCatalogs) -> PathwayClassification:
    if facts.has_marine_platform:
        return _classification(
            catalogs, PathwayId.MARINE, "non_aviation", ["Marine platform mission profile"]
        )
    return _classification(
        catalogs, PathwayId.GROUND, "non_aviation", ["Ground platform mission profile"]
    )


# Level 1 Complex

def _level1_applies(facts: ClassificationFacts) -> bool:
    bvlos = facts.has_bvlos or facts.has_reduced_restriction
    return (
        bvlos
        and facts.bvlos_eligible
        and not facts.has_night
        and not facts.has_restricted_airspace
        and not facts.has_gathering
    )


def _build_level1(facts: ClassificationFacts, catalogs: FactCatalogs) -> PathwayClassification:
    triggers = _collect(
        (facts.has_reduced_restriction, "Level 1 Complex BVLOS operation selected"),
        (facts.has_bvlos, "BVLOS within Level 1 Complex criteria"),
    )
    return _classification(catalogs, PathwayId.LEVEL1_COMPLEX, "level1_complex", triggers)


# SFOC

def _sfoc_triggers(facts: ClassificationFacts) -> list[str]:
    return _collect(
        (facts.has_night, "Night operations (after civil twilight)"),
        (
            facts.has_bvlos and not facts.bvlos_eligible,
            "Beyond Visual Line of Sight (BVLOS) not meeting Level 1 Complex criteria",
        ),
        (facts.has_restricted_airspace, "Restricted/special use airspace"),
        (facts.has_gathering, "Operations over assembly of people"),
    )


def _sfoc_applies(facts: ClassificationFacts) -> bool:
    return bool(_sfoc_triggers(facts))


def _build_sfoc(facts: ClassificationFacts, catalogs: FactCatalogs) -> PathwayClassification:
    return _classification(catalogs, PathwayId.SFOC, "sfoc", _sfoc_triggers(facts))


# Complex

def _complex_triggers(facts: ClassificationFacts) -> list[str]:
    return _collect(
        (facts.has_control_zone, "Within airport control zone"),
        (facts.has_urban and facts.has_twilight, "Urban twilight operations"),
    )


def _complex_applies(facts: ClassificationFacts) -> bool:
    return bool(_complex_triggers(facts))


def _build_complex(facts: ClassificationFacts, catalogs: FactCatalogs) -> PathwayClassification:
    return _classification(catalogs, PathwayId.COMPLEX, "complex", _complex_triggers(facts))


# Advanced

def _advanced_triggers(facts: ClassificationFacts) -> list[str]:
    return _collect(
        (facts.is_near_people, "Operations in populated areas (within 30m of people)"),
        (facts.has_controlled_airspace, "Controlled airspace or near aerodrome"),
        (facts.has_evlos, "Extended Visual Line of Sight (EVLOS)"),
    )


def _advanced_applies(facts: ClassificationFacts) -> bool:
    return bool(_advanced_triggers(facts))


def _build_advanced(facts: ClassificationFacts, catalogs: FactCatalogs) -> PathwayClassification:
    return _classification(catalogs, PathwayId.ADVANCED, "advanced", _advanced_triggers(facts))


# Basic

def _build_basic(facts: ClassificationFacts, catalogs: FactCatalogs) -> PathwayClassification:
    return _classification(catalogs, PathwayId.BASIC, "basic")


PATHWAY_RULES: tuple[PathwayRule, ...] = (
    PathwayRule("non_aviation", _non_aviation_applies, _build_non_aviation),
    PathwayRule("level1_complex", _level1_applies, _build_level1),
    PathwayRule("sfoc", _sfoc_applies, _build_sfoc),
    PathwayRule("complex", _complex_applies, _build_complex),
    PathwayRule("advanced", _advanced_applies, _build_advanced),
    PathwayRule("basic", lambda facts: True, _build_basic),
)


# =============================================================================
# Evaluation
# =============================================================================

def first_match(
    rules: Iterable[PathwayRule],
    facts: ClassificationFacts,
) -> Optional[PathwayRule]:
    """Return the first rule whose predicate holds, or None."""
    for rule in rules:
        if rule.predicate(facts):
            return rule
    return None


def classify_pathway(
    fact_set: FactSet,
    catalogs: FactCatalogs,
    rules: Iterable[PathwayRule] = PATHWAY_RULES,
) -> PathwayClassification:
    """
    Classify a fact set into a regulatory pathway.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
        ClassificationError: If a custom rule list has no catch-all and nothing matched
    """
    facts = ClassificationFacts.resolve(fact_set, catalogs)
    rules = tuple(rules)
    rule = first_match(rules, facts)
    if rule is None:
        raise ClassificationError(
            message="No pathway rule matched the fact set",
            details={"rules": [r.name for r in rules]},
        )

    classification = rule.build(facts, catalogs)
    logger.debug(
        "Pathway rule %s matched",
        rule.name,
        extra={"pathway": classification.pathway.value},
    )
    return classification
