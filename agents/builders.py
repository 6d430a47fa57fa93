"""
Entity Builders
----------------
Validating constructors for Competitor / Application / CustomerPersona.

A field mapping becomes an entity only if every required field is present
and non-empty; anything partial is dropped, never repaired.
"""

import logging
from typing import List, Mapping, Sequence, Type, TypeVar

from agents.records import (
    APPLICATION_LABELS,
    COMPETITOR_LABELS,
    PERSONA_LABELS,
    parse_records,
)
from models.schemas import Application, Competitor, CustomerPersona

logger = logging.getLogger(__name__)

E = TypeVar("E", Competitor, Application, CustomerPersona)


def missing_fields(record: Mapping[str, str], required: Sequence[str]) -> List[str]:
    return [f for f in required if not (record.get(f) or "").strip()]


def build_entities(records: Sequence[Mapping[str, str]], entity_cls: Type[E]) -> List[E]:
    entities: List[E] = []
    for i, record in enumerate(records, 1):
        missing = missing_fields(record, entity_cls.REQUIRED)
        if missing:
            logger.debug(
                f"Dropping {entity_cls.__name__} record #{i}: missing {', '.join(missing)}"
            )
            continue
        entities.append(entity_cls(**{f: record[f].strip() for f in entity_cls.REQUIRED}))
    return entities


def build_competitors(fragment: str) -> List[Competitor]:
    return build_entities(parse_records(fragment, COMPETITOR_LABELS), Competitor)


def build_applications(fragment: str) -> List[Application]:
    return build_entities(parse_records(fragment, APPLICATION_LABELS), Application)


def build_personas(fragment: str) -> List[CustomerPersona]:
    """Base personas only; customers and emails are attached later."""
    return build_entities(parse_records(fragment, PERSONA_LABELS), CustomerPersona)
