"""
ConopsPilot Fact Sets

Two representations of the operator's selections:

- AnalysisFactSet: the mutable session object the collaborating UI
  toggles. Every mutation is validated against the catalogs.
- FactSet: a frozen snapshot (one frozenset per category). This is the
  only thing the engine reads.

Both are keyed by Category; serialized forms use the camelCase category
values as keys and lists of ids as values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Union

from ..canon import compute_fact_set_hash
from ..exceptions import InvalidCategoryError, UnknownFactError
from .enums import Category

if TYPE_CHECKING:
    from .catalog import FactCatalogs


def coerce_category(key: Union[str, Category]) -> Category:
    """
    Convert a boundary key to a Category.

    Raises:
        InvalidCategoryError: If the key is not a known category
    """
    try:
        return Category(key)
    except ValueError:
        raise InvalidCategoryError(
            message=f"Unknown fact category: {key!r}",
            details={"key": str(key), "valid_keys": [c.value for c in Category]},
        ) from None


def validate_selection(
    catalogs: "FactCatalogs",
    category: Category,
    fact_ids: Iterable[str],
) -> None:
    """
    Check that every id exists in the category catalog.

    Raises:
        UnknownFactError: Listing all unknown ids, not just the first
    """
    unknown = catalogs.catalog(category).unknown(fact_ids)
    if unknown:
        raise UnknownFactError(
            message=f"Unknown {category.value} id(s): {', '.join(map(repr, unknown))}",
            details={"unknown_ids": unknown},
            category=category.value,
        )


# =============================================================================
# Frozen Fact Set (engine input)
# =============================================================================

@dataclass(frozen=True)
class FactSet:
    """
    Immutable snapshot of selected fact ids.

    Direct construction does not validate ids; use FactSet.from_mapping
    at the boundary. Unvalidated unknown ids fail loudly when the engine
    looks them up.
    """
    mission_profiles: frozenset[str] = frozenset()
    environments: frozenset[str] = frozenset()
    airspaces: frozenset[str] = frozenset()
    operation_types: frozenset[str] = frozenset()
    coverages: frozenset[str] = frozenset()
    payloads: frozenset[str] = frozenset()
    weather_conditions: frozenset[str] = frozenset()
    seasons: frozenset[str] = frozenset()
    times_of_day: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        # Accept any iterable of ids, store frozensets
        for attr in _ATTRS.values():
            value = getattr(self, attr)
            if isinstance(value, str):
                value = (value,)
            if not isinstance(value, frozenset):
                object.__setattr__(self, attr, frozenset(value))

    @classmethod
    def from_mapping(
        cls,
        selections: Mapping[Union[str, Category], Iterable[str]],
        catalogs: "FactCatalogs",
    ) -> FactSet:
        """
        Build a validated FactSet from category-keyed arrays of ids.

        Raises:
            InvalidCategoryError: Unknown category key
            UnknownFactError: Unknown id in any category
        """
        values: dict[str, frozenset[str]] = {}
        for key, ids in selections.items():
            category = coerce_category(key)
            id_list = list(ids)
            validate_selection(catalogs, category, id_list)
            values[_ATTRS[category]] = frozenset(id_list)
        return cls(**values)

    def get(self, category: Union[str, Category]) -> frozenset[str]:
        """Get the selected ids for a category."""
        return getattr(self, _ATTRS[coerce_category(category)])

    def has(self, category: Union[str, Category]) -> bool:
        """Check whether a category has at least one selection."""
        return bool(self.get(category))

    def with_selection(
        self,
        category: Union[str, Category],
        fact_ids: Iterable[str],
    ) -> FactSet:
        """Return a copy with one category's selection replaced."""
        values = {attr: getattr(self, attr) for attr in _ATTRS.values()}
        values[_ATTRS[coerce_category(category)]] = frozenset(fact_ids)
        return FactSet(**values)

    def with_added(self, category: Union[str, Category], fact_id: str) -> FactSet:
        """Return a copy with one id added to a category."""
        return self.with_selection(category, self.get(category) | {fact_id})

    @property
    def is_empty(self) -> bool:
        return not any(self.get(category) for category in Category)

    def to_dict(self) -> dict[str, list[str]]:
        """Serialize to the boundary form (sorted id lists)."""
        return {
            category.value: sorted(self.get(category))
            for category in Category
        }

    def fingerprint(self) -> str:
        """Order-independent content hash, usable as a cache key."""
        return compute_fact_set_hash(
            {category.value: self.get(category) for category in Category}
        )


_ATTRS: dict[Category, str] = {
    Category.MISSION_PROFILES: "mission_profiles",
    Category.ENVIRONMENTS: "environments",
    Category.AIRSPACES: "airspaces",
    Category.OPERATION_TYPES: "operation_types",
    Category.COVERAGES: "coverages",
    Category.PAYLOADS: "payloads",
    Category.WEATHER_CONDITIONS: "weather_conditions",
    Category.SEASONS: "seasons",
    Category.TIMES_OF_DAY: "times_of_day",
}


# =============================================================================
# Mutable Analysis Fact Set (session)
# =============================================================================

@dataclass
class AnalysisFactSet:
    """
    The operator's working selections for one analysis session.

    Created empty, mutated by toggles from the UI, persisted by the
    storage layer. Selection order is kept for display; the engine only
    ever sees the frozen, order-free snapshot.

    Usage:
        facts = AnalysisFactSet(catalogs)
        facts.toggle(Category.MISSION_PROFILES, "inspection")
        facts.toggle("environments", "remote")

        snapshot = facts.freeze()
    """
    catalogs: "FactCatalogs" = field(repr=False)
    selections: dict[Category, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        existing = self.selections
        self.selections = {category: [] for category in Category}
        for key, ids in existing.items():
            category = coerce_category(key)
            for fact_id in ids:
                self.add(category, fact_id)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        catalogs: "FactCatalogs",
    ) -> AnalysisFactSet:
        """
        Restore a session from its persisted form.

        Legacy scalar fields are normalized first (see engine.boundary).
        """
        from ..engine.boundary import normalize_fact_input

        return cls(catalogs=catalogs, selections=normalize_fact_input(data))

    def selected(self, category: Union[str, Category]) -> list[str]:
        """Get the selected ids for a category in selection order."""
        return list(self.selections[coerce_category(category)])

    def is_selected(self, category: Union[str, Category], fact_id: str) -> bool:
        return fact_id in self.selections[coerce_category(category)]

    def add(self, category: Union[str, Category], fact_id: str) -> bool:
        """
        Select an id. Returns False if it was already selected.

        Raises:
            UnknownFactError: If the id is not in the category catalog
        """
        category = coerce_category(category)
        validate_selection(self.catalogs, category, [fact_id])
        current = self.selections[category]
        if fact_id in current:
            return False
        current.append(fact_id)
        return True

    def remove(self, category: Union[str, Category], fact_id: str) -> bool:
        """
        Deselect an id. Returns False if it was not selected.

        Raises:
            UnknownFactError: If the id is not in the category catalog
        """
        category = coerce_category(category)
        validate_selection(self.catalogs, category, [fact_id])
        current = self.selections[category]
        if fact_id not in current:
            return False
        current.remove(fact_id)
        return True

    def toggle(self, category: Union[str, Category], fact_id: str) -> bool:
        """
        Flip one id's selection. Returns True if it is now selected.

        Raises:
            UnknownFactError: If the id is not in the category catalog
        """
        if self.is_selected(category, fact_id):
            self.remove(category, fact_id)
            return False
        self.add(category, fact_id)
        return True

    def clear(self, category: Union[str, Category, None] = None) -> None:
        """Clear one category, or every category when none is given."""
        if category is None:
            for ids in self.selections.values():
                ids.clear()
        else:
            self.selections[coerce_category(category)].clear()

    def freeze(self) -> FactSet:
        """Snapshot the current selections for the engine."""
        return FactSet(**{
            _ATTRS[category]: frozenset(ids)
            for category, ids in self.selections.items()
        })

    def to_dict(self) -> dict[str, list[str]]:
        """Serialize to the boundary form (selection order kept)."""
        return {category.value: list(ids) for category, ids in self.selections.items()}
