"""
ConopsPilot Equipment Deriver

Builds the field equipment checklist.

The checklist has the same items on every call: the baseline sections
from the catalog pack, every payload kit item, every mission kit item
and the night kit. Only the required flags and triggered_by differ, so
a UI can render the full list and grey out what is not needed.

Baseline items carry a named condition; the CONDITIONS table below maps
each name to the rule that decides it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Union

from ..models import (
    AirspaceScenario,
    BaselineItem,
    ChecklistItem,
    EquipmentChecklist,
    FactCatalogs,
    FactSet,
    KitItem,
    Lighting,
    MissionProfile,
    OperatingEnvironment,
    OperationType,
    PathwayClassification,
    PathwayId,
    PayloadType,
    PopulationCategory,
)


# =============================================================================
# Condition Context
# =============================================================================

@dataclass(frozen=True)
class EquipmentFacts:
    """Selected definitions plus the pathway, in catalog order."""
    profiles: Sequence[MissionProfile]
    environments: Sequence[OperatingEnvironment]
    airspaces: Sequence[AirspaceScenario]
    operations: Sequence[OperationType]
    payloads: Sequence[PayloadType]
    pathway: PathwayClassification

    @property
    def night_operations(self) -> tuple[str, ...]:
        return tuple(o.id for o in self.operations if o.lighting == Lighting.NIGHT)


# A condition returns (required, triggered_by)
Condition = Callable[[EquipmentFacts], tuple[bool, tuple[str, ...]]]


def _not_isolated(facts: EquipmentFacts) -> tuple[bool, tuple[str, ...]]:
    """Required unless an isolated environment is among those selected."""
    if any(e.isolated for e in facts.environments):
        return False, ()
    return True, tuple(e.id for e in facts.environments)


def _hazardous_site(facts: EquipmentFacts) -> tuple[bool, tuple[str, ...]]:
    ids = tuple(p.id for p in facts.profiles if p.hazardous_site)
    return bool(ids), ids


def _atc_airspace(facts: EquipmentFacts) -> tuple[bool, tuple[str, ...]]:
    ids = tuple(a.id for a in facts.airspaces if a.requires_atc_authorization)
    return bool(ids), ids


def _uncontrolled_site(facts: EquipmentFacts) -> tuple[bool, tuple[str, ...]]:
    """Required unless an access-controlled environment is among those selected."""
    if any(e.population_category == PopulationCategory.CONTROLLED for e in facts.environments):
        return False, ()
    return True, tuple(e.id for e in facts.environments)


def _sfoc_pathway(facts: EquipmentFacts) -> tuple[bool, tuple[str, ...]]:
    if facts.pathway.pathway == PathwayId.SFOC:
        return True, (facts.pathway.pathway.value,)
    return False, ()


def _night_operations(facts: EquipmentFacts) -> tuple[bool, tuple[str, ...]]:
    ids = facts.night_operations
    return bool(ids), ids


CONDITIONS: dict[str, Condition] = {
    "not_isolated": _not_isolated,
    "hazardous_site": _hazardous_site,
    "atc_airspace": _atc_airspace,
    "uncontrolled_site": _uncontrolled_site,
    "sfoc_pathway": _sfoc_pathway,
    "night_operations": _night_operations,
}


# =============================================================================
# Item Builders
# =============================================================================

def _baseline_items(items: Iterable[BaselineItem], facts: EquipmentFacts) -> tuple[ChecklistItem, ...]:
    result = []
    for item in items:
        if item.condition is None:
            result.append(ChecklistItem(item=item.item, required=item.required))
            continue
        required, triggered_by = CONDITIONS[item.condition](facts)
        result.append(ChecklistItem(
            item=item.item,
            required=item.required and required,
            triggered_by=triggered_by if required else (),
        ))
    return tuple(result)


def _kit_items(
    owners: Iterable[Union[MissionProfile, PayloadType]],
    selected: set[str],
    night: bool,
) -> tuple[ChecklistItem, ...]:
    """
    Every kit item of every owner in the catalog, merged by item name.

    An item is required when a selected owner lists it as required, or
    as required at night while a night operation is selected.
    triggered_by names the selected owners that list the item.
    """
    order: list[str] = []
    required: dict[str, bool] = {}
    triggers: dict[str, list[str]] = {}

    for owner in owners:
        kit: Sequence[KitItem] = owner.equipment
        for entry in kit:
            if entry.item not in required:
                order.append(entry.item)
                required[entry.item] = False
                triggers[entry.item] = []
            if owner.id not in selected:
                continue
            if entry.required or (entry.required_at_night and night):
                required[entry.item] = True
            if owner.id not in triggers[entry.item]:
                triggers[entry.item].append(owner.id)

    return tuple(
        ChecklistItem(item=name, required=required[name], triggered_by=tuple(triggers[name]))
        for name in order
    )


# =============================================================================
# Deriver
# =============================================================================

def derive_equipment(
    fact_set: FactSet,
    catalogs: FactCatalogs,
    pathway: PathwayClassification,
) -> EquipmentChecklist:
    """
    Derive the equipment checklist.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
        KeyError: If the pack names a condition with no rule (the pack
            schema prevents this)
    """
    facts = EquipmentFacts(
        profiles=catalogs.mission_profiles.select(fact_set.mission_profiles),
        environments=catalogs.environments.select(fact_set.environments),
        airspaces=catalogs.airspaces.select(fact_set.airspaces),
        operations=catalogs.operation_types.select(fact_set.operation_types),
        payloads=catalogs.payloads.select(fact_set.payloads),
        pathway=pathway,
    )
    night = bool(facts.night_operations)
    baseline = catalogs.equipment

    return EquipmentChecklist(
        flight=_baseline_items(baseline.flight, facts),
        safety=_baseline_items(baseline.safety, facts),
        communication=_baseline_items(baseline.communication, facts),
        documentation=_baseline_items(baseline.documentation, facts),
        payload=_kit_items(catalogs.payloads, set(fact_set.payloads), night),
        additional=(
            _kit_items(catalogs.mission_profiles, set(fact_set.mission_profiles), night)
            + _baseline_items(baseline.night, facts)
        ),
    )
