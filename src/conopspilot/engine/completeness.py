"""
ConopsPilot Completeness Checker

Decides whether a fact set carries enough information to run the
analysis. The aggregator only derives requirements from complete fact
sets; an incomplete one is reported, not rejected.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..models import CompletenessReport, CompletenessRequirement, FactSet


def percent_complete(completed: int, total: int) -> int:
    """Whole-number percentage, halves rounded up (4 of 7 is 57)."""
    if total <= 0:
        return 100
    ratio = Decimal(completed) * 100 / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def check_completeness(
    fact_set: FactSet,
    requirements: Iterable[CompletenessRequirement],
) -> CompletenessReport:
    """
    Check each requirement against the fact set.

    A requirement is satisfied when any of its categories has at least
    one selection.
    """
    checks = {
        requirement.key: any(fact_set.has(c) for c in requirement.categories)
        for requirement in requirements
    }
    completed = sum(1 for ok in checks.values() if ok)
    total = len(checks)
    return CompletenessReport(
        checks=checks,
        completed=completed,
        total=total,
        percent=percent_complete(completed, total),
    )
