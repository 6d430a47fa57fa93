"""
Record Parser
--------------
Turns one report section into a list of ``field -> value`` mappings, one per
numbered sub-record.

  1. Name: Acme Corp
  Description: Industrial widgets
  Revenue: $10B (2023: est.)

Each line is split on its first colon only. Labels are matched
case-insensitively through a per-entity label map; anything else the model
adds (commentary, bullets, blank lines) is ignored.
"""

import re
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


# ─── Label maps (canonical lowercase label → entity field) ────────────────────

COMPETITOR_LABELS: Mapping[str, str] = MappingProxyType({
    "name": "name",
    "description": "description",
    "headquarters": "headquarters",
    "revenue": "revenue",
})

APPLICATION_LABELS: Mapping[str, str] = MappingProxyType({
    "name": "name",
    "description": "description",
    "market size": "market_size",
    "growth rate": "growth_rate",
})

PERSONA_LABELS: Mapping[str, str] = MappingProxyType({
    "name": "name",
    "description": "description",
    "cares most about": "cares_most_about",
    "cares least about": "cares_least_about",
})


# A record marker is "<integer>." followed by whitespace. The negative
# look-behind keeps "112. " from also splitting at "12. " and "2. ".
_RECORD_SPLIT = re.compile(r"(?<!\d)(?=\d+\.\s)")
_RECORD_MARKER = re.compile(r"^\d+\.\s+")


def split_records(fragment: str) -> List[str]:
    """Split a section into numbered sub-records, markers stripped."""
    records = []
    for chunk in _RECORD_SPLIT.split(fragment or ""):
        body = _RECORD_MARKER.sub("", chunk, count=1)
        if body.strip():
            records.append(body)
    return records


def split_label_line(line: str) -> Optional[Tuple[str, str]]:
    """
    ``"Revenue: $10B (2023: est.)"`` → ``("Revenue", "$10B (2023: est.)")``.

    Returns None unless both key and value are non-empty after trimming.
    """
    key, sep, value = line.partition(":")
    key, value = key.strip(), value.strip()
    if not sep or not key or not value:
        return None
    return key, value


def normalize_label(key: str) -> str:
    return " ".join(key.lower().split())


def parse_record(record: str, labels: Mapping[str, str]) -> Mapping[str, str]:
    fields: Dict[str, str] = {}
    for line in record.split("\n"):
        parsed = split_label_line(line)
        if parsed is None:
            continue
        key, value = parsed
        field_name = labels.get(normalize_label(key))
        if field_name:
            fields[field_name] = value
    return MappingProxyType(fields)


def parse_records(fragment: str, labels: Mapping[str, str]) -> List[Mapping[str, str]]:
    """Parse every sub-record of a section, preserving their order."""
    parsed = [parse_record(r, labels) for r in split_records(fragment)]
    logger.debug(f"Parsed {len(parsed)} sub-records")
    return parsed
