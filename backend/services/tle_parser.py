"""
TLE (Two-Line Element) text parsing.

TLE Structure (per CelesTrak specification):
Line 0: Satellite name
Line 1: Catalog number, epoch, orbital decay, drag term, ephemeris type
Line 2: Inclination, right ascension, eccentricity, perigee, mean anomaly, mean motion

Field positions are fixed by the format (1-indexed):
Line 1, cols 3-7: Satellite catalog number

References:
- https://celestrak.org/columns/v04n03/
- https://celestrak.org/NORAD/documentation/tle-fmt.php
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

LINE1_PREFIX = '1 '
LINE2_PREFIX = '2 '

# Rejection reasons
REJECT_LINE1_PREFIX = 'line1_prefix'
REJECT_LINE2_PREFIX = 'line2_prefix'
REJECT_CATALOG_NUMBER = 'catalog_number'


@dataclass(frozen=True)
class SatelliteRecord:
    """One parsed orbital element set."""
    name: str
    line1: str
    line2: str
    norad_id: int

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'line1': self.line1,
            'line2': self.line2,
            'noradId': self.norad_id,
        }


@dataclass(frozen=True)
class Accepted:
    record: SatelliteRecord


@dataclass(frozen=True)
class Rejected:
    reason: str
    name: str
    line1: str
    line2: str


ParseOutcome = Union[Accepted, Rejected]


def parse_norad_id(line1: str) -> Optional[int]:
    """Extract NORAD catalog number from TLE line 1 (columns 3-7)."""
    field = line1[2:7].strip()
    # int() would also take signs, underscores and non-ASCII digits
    if not (field.isascii() and field.isdigit()):
        return None
    return int(field)


def parse_tle_group(name: str, line1: str, line2: str) -> ParseOutcome:
    """Validate one name/line1/line2 group."""
    name = name.strip()
    line1 = line1.strip()
    line2 = line2.strip()

    if not line1.startswith(LINE1_PREFIX):
        return Rejected(REJECT_LINE1_PREFIX, name, line1, line2)
    if not line2.startswith(LINE2_PREFIX):
        return Rejected(REJECT_LINE2_PREFIX, name, line1, line2)

    norad_id = parse_norad_id(line1)
    if norad_id is None:
        return Rejected(REJECT_CATALOG_NUMBER, name, line1, line2)

    return Accepted(SatelliteRecord(name=name, line1=line1, line2=line2, norad_id=norad_id))


def parse_tle_groups(tle_text: str) -> List[ParseOutcome]:
    """
    Walk the text in non-overlapping groups of 3 lines.

    A group that fails validation still consumes its 3 lines; there is no
    resynchronization. A trailing partial group is ignored.
    """
    text = tle_text.strip()
    if not text:
        return []

    lines = text.split('\n')
    outcomes = []
    for i in range(0, len(lines) - 2, 3):
        outcomes.append(parse_tle_group(lines[i], lines[i + 1], lines[i + 2]))
    return outcomes


def parse_tle_text(tle_text: str) -> List[SatelliteRecord]:
    """
    Parse raw TLE text into structured records, preserving input order.
    Malformed groups (headers, comments, corrupted data) are dropped silently.
    """
    return [
        outcome.record
        for outcome in parse_tle_groups(tle_text)
        if isinstance(outcome, Accepted)
    ]
