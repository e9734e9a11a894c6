"""
Tests for ConopsPilot models: fact sets, results and exceptions.
"""
import pytest

from conopspilot.exceptions import (
    AnalysisIncompleteError,
    ConopsPilotError,
    FactSetError,
    InvalidCategoryError,
    UnknownFactError,
)
from conopspilot.models import (
    AnalysisFactSet,
    AnalysisOutcome,
    Category,
    ChecklistItem,
    CompletenessReport,
    EquipmentChecklist,
    FactSet,
    PlatformClass,
    RiskLevel,
    coerce_category,
)


# =============================================================================
# Enum Tests
# =============================================================================

class TestEnums:
    """Tests for enum types."""

    def test_category_values_are_boundary_keys(self):
        assert Category("missionProfiles") == Category.MISSION_PROFILES
        assert Category.TIMES_OF_DAY.value == "timesOfDay"
        assert len(Category) == 9

    def test_platform_class_rank_follows_declaration(self):
        ranks = [c.rank for c in PlatformClass]
        assert ranks == sorted(ranks)
        assert PlatformClass.FIXED_WING_OR_VTOL.rank > PlatformClass.MULTIROTOR.rank

    def test_coerce_category_unknown(self):
        with pytest.raises(InvalidCategoryError) as exc:
            coerce_category("missionProfile_s")
        assert "missionProfiles" in exc.value.details["valid_keys"]


# =============================================================================
# FactSet Tests
# =============================================================================

class TestFactSet:
    """Tests for the frozen fact set."""

    def test_iterables_become_frozensets(self):
        facts = FactSet(mission_profiles=["inspection", "inspection"], payloads="thermal")
        assert facts.mission_profiles == frozenset({"inspection"})
        assert facts.payloads == frozenset({"thermal"})

    def test_empty(self):
        assert FactSet().is_empty
        assert not FactSet(seasons=["winter"]).is_empty

    def test_get_by_key_or_enum(self):
        facts = FactSet(environments=["urban"])
        assert facts.get("environments") == facts.get(Category.ENVIRONMENTS)
        assert facts.has("environments")
        assert not facts.has("airspaces")

    def test_with_selection_returns_copy(self):
        facts = FactSet(environments=["urban"])
        changed = facts.with_selection("environments", ["remote"])
        assert facts.environments == frozenset({"urban"})
        assert changed.environments == frozenset({"remote"})

    def test_with_added(self):
        facts = FactSet(payloads=["thermal"]).with_added(Category.PAYLOADS, "lidar")
        assert facts.payloads == frozenset({"thermal", "lidar"})

    def test_hashable_and_equal_by_content(self):
        a = FactSet(payloads=["thermal", "lidar"])
        b = FactSet(payloads=["lidar", "thermal"])
        assert a == b
        assert len({a, b}) == 1

    def test_to_dict_sorted(self):
        data = FactSet(payloads=["thermal", "lidar"]).to_dict()
        assert data["payloads"] == ["lidar", "thermal"]
        assert set(data) == {c.value for c in Category}

    def test_fingerprint_ignores_order_and_empties(self):
        a = FactSet(payloads=["thermal", "lidar"])
        b = FactSet(payloads=["lidar", "thermal"], seasons=[])
        assert a.fingerprint() == b.fingerprint()
        assert a.fingerprint() != FactSet(payloads=["thermal"]).fingerprint()

    def test_from_mapping_validates(self, catalogs):
        facts = FactSet.from_mapping({"payloads": ["thermal"]}, catalogs)
        assert facts.payloads == frozenset({"thermal"})
        with pytest.raises(UnknownFactError) as exc:
            FactSet.from_mapping({"payloads": ["thermal", "laser", "sonar"]}, catalogs)
        assert exc.value.details["unknown_ids"] == ["laser", "sonar"]
        assert exc.value.category == "payloads"

    def test_from_mapping_unknown_category(self, catalogs):
        with pytest.raises(InvalidCategoryError):
            FactSet.from_mapping({"vehicles": ["car"]}, catalogs)


# =============================================================================
# AnalysisFactSet Tests
# =============================================================================

class TestAnalysisFactSet:
    """Tests for the mutable session fact set."""

    def test_starts_empty(self, session_facts):
        assert session_facts.freeze().is_empty
        assert all(ids == [] for ids in session_facts.to_dict().values())

    def test_toggle_on_and_off(self, session_facts):
        assert session_facts.toggle("payloads", "thermal") is True
        assert session_facts.is_selected("payloads", "thermal")
        assert session_facts.toggle("payloads", "thermal") is False
        assert session_facts.selected("payloads") == []

    def test_add_is_idempotent(self, session_facts):
        assert session_facts.add(Category.SEASONS, "winter") is True
        assert session_facts.add(Category.SEASONS, "winter") is False
        assert session_facts.selected(Category.SEASONS) == ["winter"]

    def test_remove_unselected(self, session_facts):
        assert session_facts.remove("seasons", "winter") is False

    def test_selection_order_kept(self, session_facts):
        session_facts.add("payloads", "thermal")
        session_facts.add("payloads", "lidar")
        assert session_facts.to_dict()["payloads"] == ["thermal", "lidar"]

    def test_unknown_id_rejected(self, session_facts):
        with pytest.raises(UnknownFactError):
            session_facts.toggle("payloads", "flamethrower")
        assert session_facts.selected("payloads") == []

    def test_unknown_category_rejected(self, session_facts):
        with pytest.raises(InvalidCategoryError):
            session_facts.add("vehicles", "car")

    def test_clear_one_or_all(self, session_facts):
        session_facts.add("payloads", "thermal")
        session_facts.add("seasons", "winter")
        session_facts.clear("payloads")
        assert session_facts.selected("payloads") == []
        assert session_facts.selected("seasons") == ["winter"]
        session_facts.clear()
        assert session_facts.freeze().is_empty

    def test_freeze_is_independent_snapshot(self, session_facts):
        session_facts.add("payloads", "thermal")
        snapshot = session_facts.freeze()
        session_facts.add("payloads", "lidar")
        assert snapshot.payloads == frozenset({"thermal"})

    def test_round_trip_through_dict(self, session_facts, catalogs):
        session_facts.add("missionProfiles", "emergency")
        session_facts.add("payloads", "thermal")
        restored = AnalysisFactSet.from_dict(session_facts.to_dict(), catalogs)
        assert restored.freeze() == session_facts.freeze()

    def test_from_dict_folds_legacy_keys(self, catalogs):
        restored = AnalysisFactSet.from_dict(
            {"missionProfile": "inspection", "environments": ["urban"], "environment": "remote"},
            catalogs,
        )
        assert restored.selected("missionProfiles") == ["inspection"]
        assert restored.selected("environments") == ["urban", "remote"]


# =============================================================================
# Result Model Tests
# =============================================================================

class TestResults:
    """Tests for result models."""

    def test_risk_level_labels(self):
        level = RiskLevel(numeric=6, environment=5, airspace=1, operation_type=2)
        assert level.level == "VI"
        assert level.unclamped == 8
        assert level.to_dict() == {
            "level": "VI",
            "numeric": 6,
            "factors": {"environment": 5, "airspace": 1, "operationType": 2},
        }

    def test_completeness_missing_in_order(self):
        report = CompletenessReport(
            checks={"a": True, "b": False, "c": False}, completed=1, total=3, percent=33
        )
        assert not report.is_complete
        assert report.missing == ["b", "c"]
        assert report.to_dict()["isComplete"] is False

    def test_equipment_checklist_lookup(self):
        checklist = EquipmentChecklist(
            flight=(ChecklistItem("Controller", True),),
            safety=(ChecklistItem("Hard hat", False),),
        )
        assert checklist.required_items() == ["Controller"]
        assert checklist.find("Hard hat").required is False
        assert checklist.find("Ladder") is None
        data = checklist.to_dict()
        assert list(data) == [
            "flightEquipment",
            "safetyEquipment",
            "communicationEquipment",
            "documentationEquipment",
            "payloadEquipment",
            "additionalEquipment",
        ]
        assert data["flightEquipment"] == [
            {"item": "Controller", "required": True, "triggeredBy": []}
        ]

    def test_incomplete_outcome_require_result(self):
        report = CompletenessReport(checks={"payloads": False}, completed=0, total=1, percent=0)
        outcome = AnalysisOutcome(completeness=report, result=None)
        assert not outcome.is_complete
        assert outcome.to_dict()["status"] == "incomplete"
        with pytest.raises(AnalysisIncompleteError) as exc:
            outcome.require_result()
        assert exc.value.details["missing"] == ["payloads"]
        assert exc.value.code == "CN_ANALYSIS_INCOMPLETE"


# =============================================================================
# Exception Tests
# =============================================================================

class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(UnknownFactError, FactSetError)
        assert issubclass(InvalidCategoryError, FactSetError)
        assert issubclass(FactSetError, ConopsPilotError)

    def test_str_includes_code_and_category(self):
        error = UnknownFactError(message="Unknown id", category="payloads")
        assert str(error) == "[CN_UNKNOWN_FACT] Unknown id (category: payloads)"

    def test_to_dict(self):
        error = FactSetError(message="Bad", details={"key": "payloads"})
        assert error.to_dict() == {
            "code": "CN_FACT_SET_ERROR",
            "message": "Bad",
            "details": {"key": "payloads"},
        }

    def test_raisable(self):
        with pytest.raises(ConopsPilotError, match="Bad"):
            raise FactSetError(message="Bad")
