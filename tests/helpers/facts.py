"""
Fact set helpers for needs-analysis tests.

Provides a clean interface for building boundary-form fact sets
without spelling out all nine categories every time.
"""
from __future__ import annotations

from typing import Iterable, Union

from conopspilot.models import Category, FactSet


# A complete, low-risk baseline: inspection of a remote asset in Class G, VLOS by day
BASELINE_SELECTIONS: dict[str, list[str]] = {
    "missionProfiles": ["inspection"],
    "environments": ["remote"],
    "airspaces": ["uncontrolled_rural"],
    "operationTypes": ["vlos_day"],
    "coverages": ["point"],
    "payloads": ["rgb_camera"],
    "weatherConditions": ["clear"],
    "seasons": [],
    "timesOfDay": [],
}

_KWARG_KEYS = {
    "missions": "missionProfiles",
    "environments": "environments",
    "airspaces": "airspaces",
    "operations": "operationTypes",
    "coverages": "coverages",
    "payloads": "payloads",
    "weather": "weatherConditions",
    "seasons": "seasons",
    "times": "timesOfDay",
}


def selections(**overrides: Union[str, Iterable[str]]) -> dict[str, list[str]]:
    """
    Baseline selections with some categories replaced.

    Example:
        >>> selections(environments=["urban"], operations=["bvlos_day"])
    """
    result = {key: list(ids) for key, ids in BASELINE_SELECTIONS.items()}
    for name, ids in overrides.items():
        key = _KWARG_KEYS[name]
        result[key] = [ids] if isinstance(ids, str) else list(ids)
    return result


def fact_set(**overrides: Union[str, Iterable[str]]) -> FactSet:
    """Baseline FactSet with some categories replaced (unvalidated)."""
    data = selections(**overrides)
    return FactSet(
        mission_profiles=data["missionProfiles"],
        environments=data["environments"],
        airspaces=data["airspaces"],
        operation_types=data["operationTypes"],
        coverages=data["coverages"],
        payloads=data["payloads"],
        weather_conditions=data["weatherConditions"],
        seasons=data["seasons"],
        times_of_day=data["timesOfDay"],
    )


def only(**categories: Union[str, Iterable[str]]) -> FactSet:
    """FactSet holding only the given categories; everything else empty."""
    result = FactSet()
    for name, ids in categories.items():
        result = result.with_selection(
            Category(_KWARG_KEYS[name]),
            [ids] if isinstance(ids, str) else list(ids),
        )
    return result
