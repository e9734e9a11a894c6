"""
ConopsPilot Risk Level Estimator

Estimates the SORA Specific Assurance and Integrity Level (SAIL).

The estimate is the sum of three contributions, clamped to I-VI:
- environment: highest sail_weight among selected environments
- airspace: +1 when any selected airspace is in the high complexity tier
- operation type: highest sail_modifier among selected operation types

Each contribution is a maximum over the selection, so adding a fact can
never lower the estimate.
"""
from __future__ import annotations

from ..models import (
    SAIL_MAX,
    SAIL_MIN,
    ComplexityTier,
    FactCatalogs,
    FactSet,
    RiskLevel,
)


AIRSPACE_COMPLEXITY_INCREMENT = 1


def clamp_sail(value: int) -> int:
    """Saturate a raw sum into the SAIL range."""
    return max(SAIL_MIN, min(SAIL_MAX, value))


def estimate_risk_level(fact_set: FactSet, catalogs: FactCatalogs) -> RiskLevel:
    """
    Estimate the SAIL for a fact set.

    Raises:
        UnknownFactError: If the fact set holds an unknown id
    """
    environments = catalogs.environments.select(fact_set.environments)
    airspaces = catalogs.airspaces.select(fact_set.airspaces)
    operations = catalogs.operation_types.select(fact_set.operation_types)

    environment = max((e.sail_weight for e in environments), default=0)
    airspace = (
        AIRSPACE_COMPLEXITY_INCREMENT
        if any(a.complexity == ComplexityTier.HIGH for a in airspaces)
        else 0
    )
    operation_type = max((o.sail_modifier for o in operations), default=0)

    return RiskLevel(
        numeric=clamp_sail(environment + airspace + operation_type),
        environment=environment,
        airspace=airspace,
        operation_type=operation_type,
    )
