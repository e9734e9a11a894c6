"""
ConopsPilot Documentation Deriver

Builds the documentation checklist: the baseline lists from the catalog
pack, then the pathway's own documents, then controlled-airspace and
BVLOS documents when those facts are selected.
"""
from __future__ import annotations

from typing import Iterable

from ..models import (
    DocumentationChecklist,
    FactCatalogs,
    FactSet,
    LineOfSight,
    PathwayClassification,
)


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def derive_documentation(
    fact_set: FactSet,
    catalogs: FactCatalogs,
    pathway: PathwayClassification,
) -> DocumentationChecklist:
    """
    Derive the documentation checklist.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
    """
    airspaces = catalogs.airspaces.select(fact_set.airspaces)
    operations = catalogs.operation_types.select(fact_set.operation_types)
    baseline = catalogs.documentation

    required = list(baseline.required)
    required.extend(catalogs.pathway(pathway.pathway).documents)
    if any(a.requires_atc_authorization for a in airspaces):
        required.extend(baseline.controlled_airspace)
    if any(o.line_of_sight == LineOfSight.BVLOS for o in operations):
        required.extend(baseline.bvlos)

    return DocumentationChecklist(
        required=_dedupe(required),
        recommended=_dedupe(baseline.recommended),
        operational=_dedupe(baseline.operational),
    )
