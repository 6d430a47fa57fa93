"""
Section Splitter
-----------------
Divides a raw market-analysis report into its four top-level sections.

A section starts at a heading such as ``2. Product Applications:``. The text
is cut in front of every heading (look-ahead, the heading stays with its
section) and each fragment is classified by the title it contains, so the
order in which the model emits sections does not matter.
"""

import re
import logging
from dataclasses import dataclass
from typing import Dict

logger = logging.getLogger(__name__)


COMPETITORS = "Competitors"
APPLICATIONS = "Product Applications"
PERSONAS = "Customer Personas"
CUSTOMERS = "Potential Customers"

# Classification order: the first title found in a fragment wins.
SECTION_TITLES = (COMPETITORS, APPLICATIONS, PERSONAS, CUSTOMERS)

_HEADING_SPLIT = re.compile(
    r"(?<!\d)(?=\d+\.\s+(?:" + "|".join(re.escape(t) for t in SECTION_TITLES) + r"):)"
)


@dataclass(frozen=True)
class ReportSections:
    """The four raw text fragments; an absent section is ``""``."""
    competitors: str = ""
    applications: str = ""
    personas: str = ""
    customers: str = ""


_FIELD_FOR_TITLE: Dict[str, str] = {
    COMPETITORS: "competitors",
    APPLICATIONS: "applications",
    PERSONAS: "personas",
    CUSTOMERS: "customers",
}


def classify_fragment(fragment: str) -> str:
    """Return the section title a fragment belongs to, or ``""``."""
    for title in SECTION_TITLES:
        if f"{title}:" in fragment:
            return title
    return ""


def split_sections(text: str) -> ReportSections:
    found: Dict[str, str] = {}
    for fragment in _HEADING_SPLIT.split(text or ""):
        title = classify_fragment(fragment)
        if title:
            found[_FIELD_FOR_TITLE[title]] = fragment

    missing = [t for t in SECTION_TITLES if _FIELD_FOR_TITLE[t] not in found]
    if missing:
        logger.info(f"Sections not found in report: {', '.join(missing)}")

    return ReportSections(**found)
