"""
ConopsPilot - CONOPS Needs-Analysis Engine for RPAS Operations

ConopsPilot turns an operator's selections about a planned drone mission
into the regulatory pathway it falls under (CARs Part IX), an estimated
SAIL, and the crew, aircraft, equipment and documentation it needs.

Core Principle: the analysis is a pure projection of the selected facts.
Nothing is stored; every call recomputes from the fact set.

Key Features:
- Catalog packs (YAML) define every selectable fact and regulatory text
- Ordered, first-match pathway rules with auditable reasons
- Conservative SAIL aggregation, saturated to I-VI
- Stable-shape equipment checklist with per-item required flags
- Completeness gate with a partial-input mission briefing

Quick Start:
    from conopspilot import NeedsAnalyzer, AnalysisFactSet, get_default_catalogs

    catalogs = get_default_catalogs()
    facts = AnalysisFactSet(catalogs)
    facts.toggle("missionProfiles", "inspection")
    facts.toggle("environments", "remote")
    ...

    outcome = NeedsAnalyzer(catalogs).analyze(facts)
    if outcome.is_complete:
        print(outcome.result.to_dict())

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "ConopsPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    Category,
    PathwayId,
    PlatformCategory,
    # Catalogs
    FactCatalogs,
    # Fact sets
    AnalysisFactSet,
    FactSet,
    # Results
    AnalysisOutcome,
    CompletenessReport,
    NeedsAnalysisResult,
    PathwayClassification,
    RiskLevel,
)

# =============================================================================
# Catalog Packs
# =============================================================================
from .packs import (
    CatalogPackLoader,
    get_default_catalogs,
    load_catalogs,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    NeedsAnalyzer,
    get_default_analyzer,
    run_needs_analysis,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    AnalysisIncompleteError,
    CatalogLoadError,
    CatalogValidationError,
    ClassificationError,
    ConopsPilotError,
    FactSetError,
    InvalidCategoryError,
    UnknownFactError,
)

# =============================================================================
# Configuration
# =============================================================================
from .config import (
    Settings,
    configure_logging,
    load_settings,
)


__all__ = [
    "__version__",
    # Models
    "Category",
    "PathwayId",
    "PlatformCategory",
    "FactCatalogs",
    "AnalysisFactSet",
    "FactSet",
    "AnalysisOutcome",
    "CompletenessReport",
    "NeedsAnalysisResult",
    "PathwayClassification",
    "RiskLevel",
    # Packs
    "CatalogPackLoader",
    "get_default_catalogs",
    "load_catalogs",
    # Engine
    "NeedsAnalyzer",
    "get_default_analyzer",
    "run_needs_analysis",
    # Exceptions
    "AnalysisIncompleteError",
    "CatalogLoadError",
    "CatalogValidationError",
    "ClassificationError",
    "ConopsPilotError",
    "FactSetError",
    "InvalidCategoryError",
    "UnknownFactError",
    # Config
    "Settings",
    "configure_logging",
    "load_settings",
]
