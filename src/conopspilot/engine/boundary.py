"""
ConopsPilot Input Boundary

Normalizes serialized fact sets before they reach the engine.

Key features:
- Legacy single-value keys (missionProfile, environment, ...) folded
  into their plural categories
- Bare string values wrapped as single-element lists, None as []
- Unknown category keys rejected
- Validated FactSet built from any accepted input form
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from ..exceptions import FactSetError
from ..models import (
    LEGACY_SCALAR_KEYS,
    AnalysisFactSet,
    Category,
    FactCatalogs,
    FactSet,
    coerce_category,
    validate_selection,
)


FactInput = Union[FactSet, AnalysisFactSet, Mapping[str, Any]]


def _as_id_list(key: str, value: Any) -> list[str]:
    """Coerce one boundary value to a list of ids."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        ids = list(value)
        bad = [v for v in ids if not isinstance(v, str)]
        if bad:
            raise FactSetError(
                message=f"Fact ids for {key!r} must be strings",
                details={"key": key, "invalid": [repr(v) for v in bad]},
            )
        return ids
    raise FactSetError(
        message=f"Unsupported value for {key!r}: expected a list of ids",
        details={"key": key, "type": type(value).__name__},
    )


def normalize_fact_input(data: Mapping[str, Any]) -> dict[Category, list[str]]:
    """
    Normalize a serialized fact set to category-keyed id lists.

    A legacy scalar key and its plural category may both be present
    (older records migrated halfway); their ids are merged, plural first,
    without duplicates.

    Raises:
        InvalidCategoryError: Unknown key
        FactSetError: Value is not None, a string or a list of strings
    """
    if not isinstance(data, Mapping):
        raise FactSetError(
            message="Fact set must be a mapping of category keys to id lists",
            details={"type": type(data).__name__},
        )

    normalized: dict[Category, list[str]] = {category: [] for category in Category}

    # Plural keys first so their order wins over legacy values
    ordered = sorted(data.items(), key=lambda kv: kv[0] in LEGACY_SCALAR_KEYS)
    for key, value in ordered:
        if key in LEGACY_SCALAR_KEYS:
            category = LEGACY_SCALAR_KEYS[key]
        else:
            category = coerce_category(key)
        current = normalized[category]
        for fact_id in _as_id_list(str(key), value):
            if fact_id not in current:
                current.append(fact_id)

    return normalized


def to_fact_set(facts: FactInput, catalogs: FactCatalogs) -> FactSet:
    """
    Get the frozen, validated FactSet for any accepted input form.

    A FactSet is checked against the catalogs and returned unchanged.
    A session is frozen first and checked the same way.

    Raises:
        InvalidCategoryError: Unknown key in a mapping
        UnknownFactError: Unknown id in any input form
        FactSetError: Malformed mapping
    """
    if isinstance(facts, AnalysisFactSet):
        facts = facts.freeze()
    if isinstance(facts, FactSet):
        for category in Category:
            validate_selection(catalogs, category, sorted(facts.get(category)))
        return facts
    return FactSet.from_mapping(normalize_fact_input(facts), catalogs)
