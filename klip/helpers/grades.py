import re
from functools import cmp_to_key
from typing import NamedTuple, Optional

# Ordering accepts any digit run ("10a") so stored grades always compare;
# validation is stricter and only lets 3..9 in from user input.
_GRADE_RE = re.compile(r"([0-9]+)([a-c])?(\+)?", re.IGNORECASE)
_COTATION_RE = re.compile(r"[3-9][a-c]?(\+)?", re.IGNORECASE)


class ParsedGrade(NamedTuple):
    number: int
    letter: str
    modifier: str


def parse_grade(text) -> Optional[ParsedGrade]:
    """
    Parse a French grade into comparable parts.

    "6a+" -> ParsedGrade(6, "a", "+"), "6" -> ParsedGrade(6, "a", "").
    Returns None for anything that isn't a grade (never raises).
    """
    if not isinstance(text, str):
        return None

    m = _GRADE_RE.fullmatch(text)
    if not m:
        return None

    return ParsedGrade(
        number=int(m.group(1)),
        letter=(m.group(2) or "a").lower(),
        modifier=m.group(3) or "",
    )


def compare_grades(a, b) -> int:
    """
    Three-way comparison: >0 if a is harder, <0 if easier, 0 if equal.

    Invalid grades sort below every valid grade and tie with each other.
    """
    pa = parse_grade(a)
    pb = parse_grade(b)

    if pa is None and pb is None:
        return 0
    if pa is None:
        return -1
    if pb is None:
        return 1

    if pa.number != pb.number:
        return pa.number - pb.number
    if pa.letter != pb.letter:
        return 1 if pa.letter > pb.letter else -1
    if pa.modifier != pb.modifier:
        return 1 if pa.modifier else -1
    return 0


# sorted(grades, key=grade_sort_key)
grade_sort_key = cmp_to_key(compare_grades)


def is_valid_cotation(text) -> bool:
    if not isinstance(text, str):
        return False
    return _COTATION_RE.fullmatch(text) is not None


def _cotation_of(pitch):
    if pitch is None:
        return None
    if isinstance(pitch, dict):
        return pitch.get("cotation")
    return getattr(pitch, "cotation", None)


def get_max_cotation(pitches) -> Optional[str]:
    """
    Hardest cotation among the pitches, ignoring missing ones.

    Accepts dicts or objects with a `cotation` attribute. On ties the
    first one seen wins.
    """
    best = None
    for cotation in (_cotation_of(p) for p in pitches or []):
        if cotation is None:
            continue
        if best is None or compare_grades(cotation, best) > 0:
            best = cotation
    return best
