"""
Customer Cross-Referencer
--------------------------
Attaches lines of the "Potential Customers" section to personas.

A line belongs to a persona when it mentions the persona's name
(case-insensitive substring). Matching is per persona, so a line naming
"Manager" also lands on "IT Manager" and "Operations Manager". The customer
label is the text before the first "-".
"""

import logging
from dataclasses import replace
from typing import List, Sequence, Tuple

from models.schemas import CustomerPersona

logger = logging.getLogger(__name__)


def customer_label(line: str) -> str:
    return line.split("-", 1)[0].strip()


def match_customers(persona_name: str, customers_text: str) -> Tuple[str, ...]:
    needle = persona_name.lower()
    labels = []
    for line in (customers_text or "").split("\n"):
        if needle not in line.lower():
            continue
        label = customer_label(line)
        if label:
            labels.append(label)
    return tuple(labels)


def attach_customers(
    personas: Sequence[CustomerPersona], customers_text: str
) -> List[CustomerPersona]:
    enriched = []
    for persona in personas:
        customers = match_customers(persona.name, customers_text)
        logger.debug(f"Persona '{persona.name}': {len(customers)} potential customers")
        enriched.append(replace(persona, potential_customers=customers))
    return enriched
