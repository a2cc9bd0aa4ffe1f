"""Broad regex pass used to backfill fields the other strategies missed.

Looser than the rules in ``hardcoded``: it accepts labelled forms such as
"Location: ..." and extra prepositions, and it never applies the priority
keyword table for activities. Its values always sit at the bottom of the
merge order.
"""

import re

from src.extraction.extractors.filters import LOCATION_EXCLUDED_WORDS, strip_leading_stopwords
from src.extraction.pipeline.types import ExtractionResult, is_valid_kid_count

_ACTIVITY_WORDS = (
    r"teaching|tutoring|mentoring|coaching|reading|arts|crafts|cooking|sports|music|dance"
    r"|computer|helping|training"
)
_CAP_PHRASE = r"[A-Z][\w'&-]*(?:\s+[A-Z][\w'&-]*){0,4}"

FALLBACK_NAME_PATTERNS = (
    re.compile(
        r"\b(?:my name is|i['’]?m|i am|hi,?\s*i['’]?m|hello,?\s*i['’]?m)\s+"
        r"([A-Za-z][a-z]+(?:\s+(?-i:[A-Z][a-z]+))?)",
        re.IGNORECASE,
    ),
    re.compile(r"\bname:\s*([A-Za-z][a-z]+(?:\s+[A-Za-z][a-z]+)?)", re.IGNORECASE),
)

FALLBACK_ACTIVITY_PATTERNS = (
    re.compile(
        r"\b(?:i|we)\s+(?:did|was|went|helped with|worked on|taught|tutored|mentored|coached)"
        r"\s+([a-z\s]+?)(?:\s+(?:at|with|for|to|and)\b)",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:activity|work|job|task|volunteering):\s*([a-z\s]+)", re.IGNORECASE),
    re.compile(rf"\b(?:i|we)\s+({_ACTIVITY_WORDS})\b", re.IGNORECASE),
    re.compile(rf"\b({_ACTIVITY_WORDS})\b(?:\s+(?:kids|children|students))?", re.IGNORECASE),
    re.compile(rf"\b(?:doing|did)\s+({_ACTIVITY_WORDS})\b", re.IGNORECASE),
)
_ACTIVITY_LEADING_RE = re.compile(r"^(?:i|we|did|was|went|helped with|worked on)\s+", re.IGNORECASE)
_ACTIVITY_TRAILING_RE = re.compile(r"\s+(?:at|with|for|to|and)\b.*$", re.IGNORECASE)

FALLBACK_KID_PATTERNS = (
    re.compile(r"\b(\d{1,4})\s*(?:kids?|child(?:ren)?|students?|participants?)\b", re.IGNORECASE),
    re.compile(r"\b(?:helped|taught|worked with|mentored|coached)\s*(\d{1,4})\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,4})\s*(?:-\s*)?(?:year|grade|age)", re.IGNORECASE),
    re.compile(r"\bwith\s+(\d{1,4})\s+(?:kids|children|students)\b", re.IGNORECASE),
)

LABELLED_LOCATION_PATTERN = re.compile(r"\b(?:location|place|venue):\s*([^\n,;]{3,30})", re.IGNORECASE)
FALLBACK_LOCATION_PATTERNS = (
    re.compile(rf"\b(?i:at|in|near|inside)\s+(?:(?i:the)\s+)?({_CAP_PHRASE})"),
    LABELLED_LOCATION_PATTERN,
)

FALLBACK_ORGANIZATION_PATTERNS = (
    re.compile(
        r"\b(?i:for|at|with)\s+(?:(?i:the)\s+)?((?:[A-Z][\w'&-]*\s+){1,4}"
        r"(?:Youth|Community|School|Center|Centre|House|Foundation|Club|Home)\b)"
    ),
    re.compile(r"\b(?:organization|organisation|charity|nonprofit|youth house):\s*([^\n,;]{3,40})", re.IGNORECASE),
)

FALLBACK_DATE_PATTERNS = (
    re.compile(
        r"\b(?:yesterday|today|last\s+week|this\s+week|monday|tuesday|wednesday|thursday|friday"
        r"|saturday|sunday)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
    re.compile(
        r"\b(?:january|february|march|april|may|june|july|august|september|october|november|december)"
        r"\s+\d{1,2}\b",
        re.IGNORECASE,
    ),
)


def _first_capture(patterns, text: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            value = (match.group(1) if match.groups() else match.group(0)).strip()
            if value:
                return value
    return None


def _fallback_activity(text: str) -> str | None:
    for pattern in FALLBACK_ACTIVITY_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        activity = (match.group(1) or match.group(0)).strip().lower()
        activity = _ACTIVITY_LEADING_RE.sub("", activity)
        activity = _ACTIVITY_TRAILING_RE.sub("", activity).strip()
        if activity:
            return activity
    return None


def _fallback_kids(text: str) -> int | None:
    for pattern in FALLBACK_KID_PATTERNS:
        match = pattern.search(text)
        if match:
            count = int(match.group(1))
            if is_valid_kid_count(count):
                return count
    return None


def _fallback_location(text: str) -> str | None:
    value = _first_capture(FALLBACK_LOCATION_PATTERNS, text)
    if value is None:
        return None
    words = value.split()
    while words and words[-1].lower() in LOCATION_EXCLUDED_WORDS:
        words.pop()
    return " ".join(words) or None


def labelled_location(text: str) -> str | None:
    """Value of an explicit "Location: ..." style label, if the text has one."""
    match = LABELLED_LOCATION_PATTERN.search(text or "")
    if not match:
        return None
    return match.group(1).strip() or None


def _fallback_organization(text: str) -> str | None:
    value = _first_capture(FALLBACK_ORGANIZATION_PATTERNS, text)
    if value is None:
        return None
    return strip_leading_stopwords(value) or None


def extract_with_fallback(text: str) -> ExtractionResult:
    text = text or ""
    candidates = {
        "name": _first_capture(FALLBACK_NAME_PATTERNS, text),
        "activity_type": _fallback_activity(text),
        "location": _fallback_location(text),
        "number_of_kids": _fallback_kids(text),
        "youth_house": _fallback_organization(text),
        "date": _first_capture(FALLBACK_DATE_PATTERNS, text),
    }
    result: ExtractionResult = {}
    for field_name, value in candidates.items():
        if value is not None:
            result[field_name] = value
    return result
