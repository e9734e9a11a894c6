"""
Tests for the pathway classifier.

Validates:
- Rule order is fixed and the first match wins
- Each rule's triggers and reason text
- Level 1 Complex eligibility (Class G only, sparse/controlled only)
- Non-aviation dominance over every aviation fact
- Order independence of the selections
"""
from itertools import permutations

import pytest

from conopspilot.engine import (
    PATHWAY_RULES,
    ClassificationFacts,
    PathwayRule,
    bvlos_eligibility,
    classify_pathway,
    first_match,
)
from conopspilot.exceptions import ClassificationError, UnknownFactError
from conopspilot.models import FactSet, PathwayId

from tests.helpers.facts import fact_set, only


class TestRuleOrder:
    """The rule list itself."""

    def test_order(self):
        assert [r.name for r in PATHWAY_RULES] == [
            "non_aviation",
            "level1_complex",
            "sfoc",
            "complex",
            "advanced",
            "basic",
        ]

    def test_basic_is_catch_all(self):
        assert PATHWAY_RULES[-1].predicate(ClassificationFacts())

    def test_first_match_none(self):
        assert first_match([], ClassificationFacts()) is None

    def test_no_match_raises(self, catalogs):
        with pytest.raises(ClassificationError) as exc:
            classify_pathway(fact_set(), catalogs, rules=PATHWAY_RULES[:-1])
        assert exc.value.details["rules"] == [r.name for r in PATHWAY_RULES[:-1]]

    def test_custom_rules(self, catalogs):
        always_sfoc = PathwayRule(
            "always_sfoc",
            lambda facts: True,
            PATHWAY_RULES[2].build,
        )
        result = classify_pathway(fact_set(), catalogs, rules=[always_sfoc])
        assert result.pathway == PathwayId.SFOC
        assert result.triggers == ()


class TestBasic:
    """Least-restrictive default."""

    def test_baseline_is_basic(self, catalogs):
        result = classify_pathway(fact_set(), catalogs)
        assert result.pathway == PathwayId.BASIC
        assert result.name == "Basic"
        assert result.label == "Basic Operations"
        assert result.complexity == "low"
        assert result.triggers == ()
        assert result.reason.startswith("Basic operations under CARs 901.45")

    def test_empty_fact_set_is_basic(self, catalogs):
        assert classify_pathway(FactSet(), catalogs).pathway == PathwayId.BASIC

    def test_requirements_from_pack(self, catalogs):
        result = classify_pathway(fact_set(), catalogs)
        assert result.requirements == catalogs.pathway(PathwayId.BASIC).requirements


class TestSfoc:
    """Most-restrictive pathway."""

    def test_reason_joins_triggers_in_rule_order(self, catalogs):
        facts = fact_set(
            environments="gathering",
            airspaces="restricted_special",
            operations=["bvlos_night"],
        )
        result = classify_pathway(facts, catalogs)
        assert result.pathway == PathwayId.SFOC
        assert result.triggers == (
            "Night operations (after civil twilight)",
            "Beyond Visual Line of Sight (BVLOS) not meeting Level 1 Complex criteria",
            "Restricted/special use airspace",
            "Operations over assembly of people",
        )
        assert result.reason == (
            "SFOC required under CARs 903.03 due to: "
            + ", ".join(result.triggers)
        )

    def test_night_beats_level1(self, catalogs):
        facts = fact_set(environments="controlled", operations=["bvlos_day", "vlos_night"])
        assert classify_pathway(facts, catalogs).pathway == PathwayId.SFOC

    def test_sfoc_beats_complex(self, catalogs):
        facts = fact_set(airspaces=["control_zone", "restricted_special"])
        assert classify_pathway(facts, catalogs).pathway == PathwayId.SFOC

    def test_one_ineligible_environment_spoils_bvlos(self, catalogs):
        facts = fact_set(environments=["remote", "suburban"], operations="bvlos_day")
        result = classify_pathway(facts, catalogs)
        assert result.pathway == PathwayId.SFOC


class TestLevel1Complex:
    """Reduced-restriction BVLOS."""

    def test_bvlos_over_controlled_site(self, catalogs):
        facts = fact_set(environments="controlled", operations="bvlos_day")
        result = classify_pathway(facts, catalogs)
        assert result.pathway == PathwayId.LEVEL1_COMPLEX
        assert result.rule == "level1_complex"
        assert result.name == "Level1Complex"
        assert result.triggers == ("BVLOS within Level 1 Complex criteria",)

    def test_fixed_reason(self, catalogs):
        facts = fact_set(operations="bvlos_day")
        result = classify_pathway(facts, catalogs)
        assert result.reason == catalogs.pathway(PathwayId.LEVEL1_COMPLEX).reason

    def test_explicit_selection_lists_both_triggers(self, catalogs):
        facts = fact_set(operations="bvlos_level1_complex")
        result = classify_pathway(facts, catalogs)
        assert result.triggers == (
            "Level 1 Complex BVLOS operation selected",
            "BVLOS within Level 1 Complex criteria",
        )

    def test_both_eligible_environments(self, catalogs):
        facts = fact_set(environments=["controlled", "remote", "sparsely"], operations="bvlos_day")
        assert classify_pathway(facts, catalogs).pathway == PathwayId.LEVEL1_COMPLEX

    def test_eligibility_helper(self, catalogs):
        assert bvlos_eligibility(fact_set(), catalogs)
        assert bvlos_eligibility(FactSet(), catalogs)
        assert not bvlos_eligibility(fact_set(environments="urban"), catalogs)
        assert not bvlos_eligibility(fact_set(airspaces="near_aerodrome"), catalogs)
        assert not bvlos_eligibility(
            fact_set(airspaces=["uncontrolled_rural", "control_zone"]), catalogs
        )


class TestComplexAndAdvanced:
    """Middle pathways."""

    def test_control_zone(self, catalogs):
        result = classify_pathway(fact_set(airspaces="control_zone"), catalogs)
        assert result.pathway == PathwayId.COMPLEX
        assert result.reason == (
            "Complex operations under CARs Part IX due to: Within airport control zone"
        )

    def test_suburban_twilight_is_not_complex(self, catalogs):
        facts = fact_set(environments="suburban", operations="vlos_twilight")
        assert classify_pathway(facts, catalogs).pathway == PathwayId.ADVANCED

    def test_urban_day_is_advanced(self, catalogs):
        result = classify_pathway(fact_set(environments="urban"), catalogs)
        assert result.pathway == PathwayId.ADVANCED

    def test_advanced_collects_every_trigger(self, catalogs):
        facts = fact_set(
            environments="suburban",
            airspaces="controlled_transition",
            operations="evlos_day",
        )
        result = classify_pathway(facts, catalogs)
        assert result.triggers == (
            "Operations in populated areas (within 30m of people)",
            "Controlled airspace or near aerodrome",
            "Extended Visual Line of Sight (EVLOS)",
        )

    def test_sparse_environment_alone_is_basic(self, catalogs):
        assert classify_pathway(fact_set(environments="sparsely"), catalogs).pathway == PathwayId.BASIC

    def test_mixed_environment_is_not_near_people(self, catalogs):
        result = classify_pathway(fact_set(environments="mixed"), catalogs)
        assert result.pathway == PathwayId.BASIC
        assert "Operations in populated areas (within 30m of people)" not in result.triggers

    def test_mixed_environment_spoils_bvlos(self, catalogs):
        facts = fact_set(environments="mixed", operations="bvlos_day")
        assert not bvlos_eligibility(facts, catalogs)
        result = classify_pathway(facts, catalogs)
        assert result.pathway == PathwayId.SFOC
        assert result.triggers == (
            "Beyond Visual Line of Sight (BVLOS) not meeting Level 1 Complex criteria",
        )


class TestNonAviation:
    """Marine and ground profiles override every aviation fact."""

    AVIATION_HEAVY = dict(
        environments=["gathering", "urban"],
        airspaces=["restricted_special", "control_zone"],
        operations=["bvlos_night", "evlos_day"],
    )

    def test_marine(self, catalogs):
        facts = fact_set(missions="marine_remote_sensing", **self.AVIATION_HEAVY)
        result = classify_pathway(facts, catalogs)
        assert result.pathway == PathwayId.MARINE
        assert result.rule == "non_aviation"
        assert result.reason == catalogs.pathway(PathwayId.MARINE).reason

    def test_ground(self, catalogs):
        facts = fact_set(missions=["terrestrial_lidar", "mobile_mapping"], **self.AVIATION_HEAVY)
        assert classify_pathway(facts, catalogs).pathway == PathwayId.GROUND

    def test_marine_wins_over_ground(self, catalogs):
        facts = only(missions=["mobile_mapping", "bathymetric_survey"])
        assert classify_pathway(facts, catalogs).pathway == PathwayId.MARINE

    def test_any_aerial_profile_keeps_aviation_rules(self, catalogs):
        facts = fact_set(missions=["mobile_mapping", "linear"], **self.AVIATION_HEAVY)
        assert classify_pathway(facts, catalogs).pathway == PathwayId.SFOC

    @pytest.mark.parametrize("operation", [
        "vlos_day", "vlos_twilight", "vlos_night", "evlos_day",
        "bvlos_day", "bvlos_night", "bvlos_level1_complex",
    ])
    def test_dominance_over_each_operation(self, catalogs, operation):
        facts = fact_set(missions="bathymetric_survey", operations=operation)
        assert classify_pathway(facts, catalogs).pathway == PathwayId.MARINE


class TestOrderIndependence:
    """Permuting selections never changes the classification."""

    @pytest.mark.parametrize("environments", [
        ["remote", "urban", "gathering"],
        ["controlled", "suburban", "mixed"],
    ])
    def test_environment_permutations(self, catalogs, environments):
        results = {
            classify_pathway(
                fact_set(environments=list(order), operations=["bvlos_day", "vlos_twilight"]),
                catalogs,
            )
            for order in permutations(environments)
        }
        assert len(results) == 1

    def test_operation_permutations(self, catalogs):
        operations = ["vlos_night", "bvlos_day", "evlos_day", "bvlos_level1_complex"]
        results = {
            classify_pathway(fact_set(operations=list(order)), catalogs)
            for order in permutations(operations)
        }
        assert len(results) == 1


class TestUnknownIds:
    """Unvalidated fact sets fail loudly."""

    def test_unknown_environment(self, catalogs):
        with pytest.raises(UnknownFactError):
            classify_pathway(FactSet(environments=["moon"]), catalogs)
