"""
Pytest configuration and fixtures for ConopsPilot tests.

Provides the bundled catalogs, an analyzer bound to them, and a fresh
parsed copy of the bundled pack for tests that corrupt it.
"""
import pytest
import yaml

from conopspilot.config import DEFAULT_CATALOG_PATH
from conopspilot.engine import NeedsAnalyzer
from conopspilot.models import AnalysisFactSet
from conopspilot.packs import get_default_catalogs


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def catalogs():
    """The bundled Canada Part IX catalogs (loaded once)."""
    return get_default_catalogs()


@pytest.fixture
def analyzer(catalogs):
    """Analyzer bound to the bundled catalogs."""
    return NeedsAnalyzer(catalogs)


@pytest.fixture
def session_facts(catalogs):
    """Empty mutable fact set, as the UI creates one."""
    return AnalysisFactSet(catalogs)


@pytest.fixture
def pack_data():
    """Freshly parsed bundled pack; safe to mutate."""
    with open(DEFAULT_CATALOG_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
