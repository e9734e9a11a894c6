"""
Tests for the documentation deriver.
"""
from conopspilot.engine import classify_pathway, derive_documentation

from tests.helpers.facts import fact_set


BASELINE_REQUIRED = (
    "Pilot certificate (appropriate level)",
    "Aircraft registration",
    "Proof of insurance",
    "Flight log/records",
)


def documentation(facts, catalogs):
    return derive_documentation(facts, catalogs, classify_pathway(facts, catalogs))


class TestDocumentation:

    def test_basic(self, catalogs):
        docs = documentation(fact_set(), catalogs)
        assert docs.required == BASELINE_REQUIRED
        assert docs.recommended == (
            "Site risk assessment",
            "Emergency response plan",
            "Client authorization/contract",
        )
        assert docs.operational == (
            "Pre-flight checklist",
            "Daily flight log",
            "Weather briefing documentation",
        )

    def test_sfoc_bvlos(self, catalogs):
        docs = documentation(fact_set(environments="urban", operations="bvlos_day"), catalogs)
        assert docs.required == BASELINE_REQUIRED + (
            "SFOC (Special Flight Operations Certificate)",
            "SFOC-specific operating procedures",
            "Crew qualification records",
            "Aircraft airworthiness documentation",
            "BVLOS-specific procedures",
            "DAA system documentation",
            "C2 link specifications",
        )

    def test_control_zone(self, catalogs):
        docs = documentation(fact_set(airspaces="control_zone"), catalogs)
        assert docs.required == BASELINE_REQUIRED + (
            "Advanced pilot certificate",
            "Site-specific NAV CANADA authorization",
            "Enhanced safety documentation",
            "NAV CANADA authorization",
            "NOTAM request/confirmation",
        )

    def test_restricted_airspace_needs_no_atc_documents(self, catalogs):
        docs = documentation(fact_set(airspaces="restricted_special"), catalogs)
        assert "NAV CANADA authorization" not in docs.required

    def test_level1(self, catalogs):
        docs = documentation(fact_set(operations="bvlos_level1_complex"), catalogs)
        assert "RPAS Operator Certificate (RPOC)" in docs.required
        assert "C2 link specifications" in docs.required

    def test_ground(self, catalogs):
        docs = documentation(fact_set(missions="terrestrial_lidar"), catalogs)
        assert docs.required[-2:] == (
            "Site access authorization",
            "Traffic management plan (if applicable)",
        )

    def test_no_duplicates(self, catalogs):
        facts = fact_set(
            environments="suburban",
            airspaces=["near_aerodrome", "control_zone"],
            operations=["bvlos_day", "bvlos_night"],
        )
        docs = documentation(facts, catalogs)
        assert len(docs.required) == len(set(docs.required))

    def test_to_dict(self, catalogs):
        data = documentation(fact_set(), catalogs).to_dict()
        assert data["required"] == list(BASELINE_REQUIRED)
        assert set(data) == {"required", "recommended", "operational"}
