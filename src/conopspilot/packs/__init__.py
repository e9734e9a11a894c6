"""
ConopsPilot Catalog Packs

Schema validation and loading for catalog packs.

Catalog packs are YAML or JSON files that define the selectable facts
(mission profiles, environments, airspaces, operation types, coverages,
payloads, weather, seasons, times of day) together with the regulatory
pathway texts, baseline checklists and completeness requirements for a
jurisdiction.

Focus: Canada, CARs Part IX

Usage:
    from conopspilot.packs import get_default_catalogs, load_catalogs

    # Bundled pack, loaded once per process
    catalogs = get_default_catalogs()

    # A custom pack
    catalogs = load_catalogs("path/to/pack.yaml")
"""
from __future__ import annotations

from .loader import (
    CatalogPackLoader,
    get_default_catalogs,
    load_catalogs,
    load_catalogs_from_string,
    validate_reference_integrity,
)
from .schema import (
    SCHEMA_VERSION,
    CatalogPackSchema,
    check_schema_version,
    validate_catalog_pack,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "CatalogPackLoader",
    "get_default_catalogs",
    "load_catalogs",
    "load_catalogs_from_string",
    # Validation
    "validate_catalog_pack",
    "validate_reference_integrity",
    "check_schema_version",
    # Schemas
    "CatalogPackSchema",
]
