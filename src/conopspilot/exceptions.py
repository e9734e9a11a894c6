"""
ConopsPilot Exception Hierarchy

Domain-specific exceptions for the CONOPS needs-analysis engine.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: CN_<CATEGORY>_<SPECIFIC>

Incomplete input is NOT an exception: the analyzer reports it as an
incomplete outcome. Only callers that insist on a result get
AnalysisIncompleteError.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ConopsPilotError(Exception):
    """
    Base exception for all ConopsPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (CN_*)
        details: Additional context about the error
        category: Fact category involved, if applicable
    """
    message: str
    code: str = "CN_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    category: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.category:
            parts.append(f"(category: {self.category})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.category:
            result["category"] = self.category
        return result


# =============================================================================
# Catalog Pack Errors
# =============================================================================

@dataclass
class CatalogLoadError(ConopsPilotError):
    """Failed to read or parse a catalog pack file."""
    code: str = "CN_CATALOG_LOAD_ERROR"


@dataclass
class CatalogValidationError(ConopsPilotError):
    """Catalog pack failed schema or reference validation."""
    code: str = "CN_CATALOG_VALIDATION_ERROR"


# =============================================================================
# Fact Set Errors
# =============================================================================

@dataclass
class FactSetError(ConopsPilotError):
    """Fact set is malformed."""
    code: str = "CN_FACT_SET_ERROR"


@dataclass
class UnknownFactError(FactSetError):
    """Fact id is not present in the category catalog."""
    code: str = "CN_UNKNOWN_FACT"


@dataclass
class InvalidCategoryError(FactSetError):
    """Category key is not one of the known fact categories."""
    code: str = "CN_INVALID_CATEGORY"


# =============================================================================
# Analysis Errors
# =============================================================================

@dataclass
class AnalysisIncompleteError(ConopsPilotError):
    """A result was demanded from an analysis with unsatisfied requirements."""
    code: str = "CN_ANALYSIS_INCOMPLETE"


@dataclass
class ClassificationError(ConopsPilotError):
    """No pathway rule matched the fact set."""
    code: str = "CN_CLASSIFICATION_ERROR"
