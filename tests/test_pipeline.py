"""
Extraction pipeline tests.
Run with: python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dataclasses import FrozenInstanceError, replace

import pytest
from agents.sections import split_sections, classify_fragment
from agents.records import (
    COMPETITOR_LABELS, APPLICATION_LABELS, PERSONA_LABELS,
    parse_records, split_records, split_label_line,
)
from agents.builders import (
    build_entities, build_competitors, build_applications, build_personas,
)
from agents.cross_reference import match_customers, attach_customers
from agents.templates import (
    render_sales_email, render_discovery_email, render_templates, apply_templates,
)
from agents.extractor import extract_analysis
from models.schemas import Competitor, Application, CustomerPersona


REPORT = """1. Competitors:

1. Name: Acme Corp
Description: Industrial widgets
Headquarters: Austin, USA
Revenue: $10B (2023: est.)

2. Name: Globex
Description: Global exports
Revenue: $2B

3. Customer Personas:

1. Name: VP of Sales
Description: Leads the sales org
Cares Most About: pipeline growth, forecast accuracy
Cares Least About: UI polish

4. Potential Customers:

1. VP of Sales at Acme - fits well
2. Random line
"""

APPLICATIONS = """2. Product Applications:

1. Name: Retail
Description: Store forecasting
Market Size: $450M
Growth Rate: 12%

2. Name: Logistics
Description: Fleet planning
MARKET SIZE: $90M
growth rate: 4.5% annually
Commentary: strong demand in the north

3. Name: Healthcare
Description: Clinic scheduling
Market Size: $30M
"""


# ─── Fixtures ────────────────────────────────────────────────────────────────

@pytest.fixture
def persona():
    return CustomerPersona(
        name="IT Manager",
        description="Runs IT for a mid-sized firm",
        cares_most_about="security, uptime, cost",
        cares_least_about="branding",
    )


@pytest.fixture
def result():
    return extract_analysis(REPORT, "WidgetPro", prompt="the prompt")


# ─── Section Splitter Tests ───────────────────────────────────────────────────

class TestSectionSplitter:
    def test_all_sections_found(self):
        sections = split_sections(REPORT + "\n" + APPLICATIONS)
        assert sections.competitors.startswith("1. Competitors:")
        assert sections.applications.startswith("2. Product Applications:")
        assert sections.personas.startswith("3. Customer Personas:")
        assert sections.customers.startswith("4. Potential Customers:")

    def test_heading_stays_with_its_section(self):
        sections = split_sections(REPORT)
        assert "Acme Corp" in sections.competitors
        assert "VP of Sales at Acme" not in sections.competitors
        assert "Random line" in sections.customers

    def test_missing_section_is_empty_string(self):
        sections = split_sections(REPORT)
        assert sections.applications == ""

    def test_classification_ignores_order(self):
        text = "1. Customer Personas:\n1. Name: A\n\n2. Competitors:\n1. Name: B\n"
        sections = split_sections(text)
        assert "Name: A" in sections.personas
        assert "Name: B" in sections.competitors

    def test_preamble_is_ignored(self):
        sections = split_sections("Sure! Here is your analysis.\n\n" + REPORT)
        assert "Sure!" not in sections.competitors

    def test_empty_text(self):
        sections = split_sections("")
        assert (sections.competitors, sections.applications,
                sections.personas, sections.customers) == ("", "", "", "")

    def test_classify_fragment(self):
        assert classify_fragment("2. Product Applications:\n...") == "Product Applications"
        assert classify_fragment("closing remarks") == ""


# ─── Record Parser Tests ──────────────────────────────────────────────────────

class TestRecordParser:
    def test_split_on_first_colon_only(self):
        assert split_label_line("Revenue: $10B (2023: est.)") == ("Revenue", "$10B (2023: est.)")

    def test_url_value_keeps_colons(self):
        assert split_label_line("Website: https://acme.com") == ("Website", "https://acme.com")

    @pytest.mark.parametrize("line", ["", "   ", "no colon here", "Description:", ": orphan value"])
    def test_unparseable_lines_skipped(self, line):
        assert split_label_line(line) is None

    def test_records_split_on_numbered_markers(self):
        records = split_records("1. Name: A\nDescription: x\n2. Name: B\n")
        assert len(records) == 2
        assert records[0].startswith("Name: A")
        assert "Description: x" in records[0]

    def test_multi_digit_marker_is_one_record(self):
        assert split_records("112. Name: X\n") == ["Name: X\n"]

    def test_decimal_values_do_not_split_records(self):
        records = split_records("1. Name: A\nGrowth Rate: 4.5%\nRevenue: $1.2B\n")
        assert len(records) == 1

    def test_labels_case_insensitive(self):
        records = parse_records(APPLICATIONS, APPLICATION_LABELS)
        logistics = next(r for r in records if r.get("name") == "Logistics")
        assert logistics["market_size"] == "$90M"
        assert logistics["growth_rate"] == "4.5% annually"

    def test_unknown_labels_ignored(self):
        records = parse_records(APPLICATIONS, APPLICATION_LABELS)
        for r in records:
            assert "commentary" not in r
            assert set(r) <= set(APPLICATION_LABELS.values())

    def test_records_are_immutable(self):
        record = parse_records("1. Name: A\n", COMPETITOR_LABELS)[0]
        with pytest.raises(TypeError):
            record["name"] = "B"

    def test_lines_split_on_newline_only(self):
        records = parse_records("1. Name: Acme\u2028Corp\x0cInc\nRevenue: $1B\n", COMPETITOR_LABELS)
        assert records[0]["name"] == "Acme\u2028Corp\x0cInc"
        assert records[0]["revenue"] == "$1B"

    def test_order_preserved(self):
        records = parse_records("1. Name: First\n2. Name: Second\n3. Name: Third\n", PERSONA_LABELS)
        assert [r["name"] for r in records] == ["First", "Second", "Third"]


# ─── Entity Builder Tests ─────────────────────────────────────────────────────

class TestEntityBuilders:
    def test_incomplete_competitor_dropped(self):
        competitors = build_competitors(split_sections(REPORT).competitors)
        assert [c.name for c in competitors] == ["Acme Corp"]

    def test_revenue_kept_verbatim(self):
        competitor = build_competitors(split_sections(REPORT).competitors)[0]
        assert competitor.revenue == "$10B (2023: est.)"

    def test_applications_built(self):
        applications = build_applications(APPLICATIONS)
        assert [a.name for a in applications] == ["Retail", "Logistics"]
        assert applications[0].market_size == "$450M"
        assert applications[0].growth_rate == "12%"

    def test_whitespace_value_counts_as_missing(self):
        records = [{"name": "A", "description": "  ", "headquarters": "X", "revenue": "1"}]
        assert build_entities(records, Competitor) == []

    def test_never_more_entities_than_records(self):
        fragment = APPLICATIONS
        assert len(build_applications(fragment)) <= len(split_records(fragment))

    def test_required_fields_non_empty(self):
        for app in build_applications(APPLICATIONS):
            for f in Application.REQUIRED:
                assert getattr(app, f)

    def test_empty_fragment_gives_no_entities(self):
        assert build_competitors("") == []
        assert build_personas("") == []

    def test_personas_start_without_customers_or_emails(self):
        persona = build_personas(split_sections(REPORT).personas)[0]
        assert persona.potential_customers == ()
        assert persona.sales_email is None
        assert persona.discovery_email is None

    def test_entities_are_frozen(self):
        competitor = build_competitors(split_sections(REPORT).competitors)[0]
        with pytest.raises(FrozenInstanceError):
            competitor.name = "Other"


# ─── Cross-Referencer Tests ───────────────────────────────────────────────────

class TestCrossReferencer:
    CUSTOMERS = "VP of Sales at Acme - fits well\nRandom line"

    def test_only_matching_lines_attached(self):
        assert match_customers("VP of Sales", self.CUSTOMERS) == ("VP of Sales at Acme",)
        assert match_customers("IT Manager", self.CUSTOMERS) == ()

    def test_case_insensitive(self):
        assert match_customers("vp OF sales", self.CUSTOMERS) == ("VP of Sales at Acme",)

    def test_order_and_duplicates_preserved(self):
        text = "CTO at B - x\nCTO at A - y\nCTO at B - x"
        assert match_customers("CTO", text) == ("CTO at B", "CTO at A", "CTO at B")

    def test_empty_label_excluded(self):
        assert match_customers("Manager", " - Manager somewhere") == ()

    def test_line_without_separator_uses_whole_line(self):
        assert match_customers("CFO", "  CFO at Initech  ") == ("CFO at Initech",)

    def test_overlapping_names_match_independently(self, persona):
        other = replace(persona, name="Manager")
        enriched = attach_customers([persona, other], "IT Manager at Acme - fit")
        assert enriched[0].potential_customers == ("IT Manager at Acme",)
        assert enriched[1].potential_customers == ("IT Manager at Acme",)

    def test_original_persona_untouched(self, persona):
        attach_customers([persona], "IT Manager at Acme - fit")
        assert persona.potential_customers == ()


# ─── Template Renderer Tests ──────────────────────────────────────────────────

class TestTemplateRenderer:
    def test_deterministic(self, persona):
        assert render_templates(persona, "WidgetPro") == render_templates(persona, "WidgetPro")

    def test_sales_email_substitutions(self, persona):
        email = render_sales_email(persona, "WidgetPro")
        assert email.startswith("Subject: Streamline Your IT Manager's Workflow with WidgetPro\n")
        assert "you're focused on security, uptime, cost." in email
        assert "eliminating concerns about branding." in email
        assert "- Maximize security\n" in email

    def test_top_priority_without_comma(self, persona):
        email = render_sales_email(replace(persona, cares_most_about="uptime"), "WidgetPro")
        assert "- Maximize uptime\n" in email

    def test_discovery_subject_ignores_cares_least_about(self, persona):
        a = render_discovery_email(persona, "WidgetPro")
        b = render_discovery_email(replace(persona, cares_least_about="anything else"), "WidgetPro")
        assert a.splitlines()[0] == b.splitlines()[0]
        assert a.splitlines()[0] == "Subject: Quick question about your IT Manager challenges"

    def test_persona_name_used_verbatim(self, persona):
        email = render_discovery_email(replace(persona, name="Store Owners"), "WidgetPro")
        assert "several Store Ownerss who" in email

    def test_apply_templates_sets_both(self, persona):
        enriched = apply_templates(persona, "WidgetPro")
        assert enriched.sales_email and enriched.discovery_email
        assert persona.sales_email is None


# ─── End-to-end Extraction ────────────────────────────────────────────────────

class TestExtraction:
    def test_end_to_end_counts(self, result):
        assert len(result.competitors) == 1
        assert len(result.applications) == 0
        assert len(result.customer_personas) == 1

    def test_persona_enriched(self, result):
        persona = result.customer_personas[0]
        assert persona.potential_customers == ("1. VP of Sales at Acme",)
        assert "WidgetPro" in persona.sales_email
        assert persona.discovery_email.startswith("Subject: Quick question about your VP of Sales")

    def test_raw_data_kept_verbatim(self, result):
        assert result.raw_data.prompt == "the prompt"
        assert result.raw_data.response == REPORT

    def test_same_input_same_result(self, result):
        assert extract_analysis(REPORT, "WidgetPro", prompt="the prompt") == result

    def test_garbage_input_gives_empty_result(self):
        result = extract_analysis("I'm sorry, I can't help with that.", "WidgetPro")
        assert result.competitors == ()
        assert result.applications == ()
        assert result.customer_personas == ()

    def test_to_dict_uses_camel_case(self, result):
        data = result.to_dict()
        assert set(data) == {"competitors", "applications", "customerPersonas", "rawData"}
        persona = data["customerPersonas"][0]
        assert persona["caresMostAbout"] == "pipeline growth, forecast accuracy"
        assert persona["potentialCustomers"] == ["1. VP of Sales at Acme"]
