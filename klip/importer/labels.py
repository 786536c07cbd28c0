import re
from typing import NamedTuple, Optional

# "L1: 6c+", "L2:6b" -> pitch number + grade
PITCH_WITH_GRADE_RE = re.compile(r"L(\d+)\s*:\s*([3-9][a-c]\+?)", re.IGNORECASE)
# Standalone grade anywhere in the label, e.g. "Rose des sables 7a"
GRADE_RE = re.compile(r"\b([3-9][a-c])(\+)?", re.ASCII | re.IGNORECASE)
# "1 - Assurancetourix"
NUMBERED_NAME_RE = re.compile(r"^(\d+)\s*-\s*(.+)$")

_CONVENTION_YES = {"Y", "YES", "OUI"}
_CONVENTION_NO = {"N", "NO", "NON"}


class ParsedLabel(NamedTuple):
    number: int
    name: Optional[str]
    grade: Optional[str]
    pitch_number: Optional[int]


def parse_route_label(label: str) -> ParsedLabel:
    """
    Split a free-text route cell into number, name, grade and pitch.

    Grade tokens are stripped before the name is read, so
    "1 - Assurancetourix 6a" gives name "Assurancetourix". Only the first
    "Lx: grade" token counts, but all of them are removed from the name.
    """
    working = (label or "").strip()
    grade = None
    pitch_number = None

    pitch_match = PITCH_WITH_GRADE_RE.search(working)
    if pitch_match:
        pitch_number = int(pitch_match.group(1))
        grade = pitch_match.group(2).lower()
        working = PITCH_WITH_GRADE_RE.sub("", working).strip()
    else:
        grade_match = GRADE_RE.search(working)
        if grade_match:
            grade = (grade_match.group(1) + (grade_match.group(2) or "")).lower()
            working = GRADE_RE.sub("", working, count=1).strip()

    m = NUMBERED_NAME_RE.match(working)
    if m:
        return ParsedLabel(
            number=int(m.group(1)),
            name=m.group(2).strip() or None,
            grade=grade,
            pitch_number=pitch_number,
        )

    return ParsedLabel(
        number=0,
        name=working.strip() or None,
        grade=grade,
        pitch_number=pitch_number,
    )


def parse_convention(value) -> Optional[bool]:
    """Y/YES/OUI -> True, N/NO/NON -> False, anything else -> None."""
    if value is None:
        return None
    normalized = str(value).strip().upper()
    if normalized in _CONVENTION_YES:
        return True
    if normalized in _CONVENTION_NO:
        return False
    return None
