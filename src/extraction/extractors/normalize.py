import re
from types import MappingProxyType

from src.core.logger import get_logger
from src.extraction.extractors.filters import (
    NAME_SANITIZE_EXCLUDED_WORDS,
    is_excluded_location,
    is_excluded_name,
)
from src.extraction.pipeline.types import is_valid_kid_count

logger = get_logger(__name__)

# Checked exactly first, then as substrings in this order.
ACTIVITY_KEYWORD_MAP = MappingProxyType(
    {
        "teach": "teaching",
        "taught": "teaching",
        "teaching": "teaching",
        "education": "teaching",
        "lesson": "teaching",
        "class": "teaching",
        "instruction": "teaching",
        "educating": "teaching",
        "tutor": "tutoring",
        "tutoring": "tutoring",
        "homework": "tutoring",
        "study": "tutoring",
        "academic": "tutoring",
        "studying": "tutoring",
        "mentor": "mentoring",
        "mentoring": "mentoring",
        "guidance": "mentoring",
        "counseling": "mentoring",
        "support": "mentoring",
        "helping": "mentoring",
        "coach": "coaching",
        "coaching": "coaching",
        "training": "coaching",
        "sport": "sports",
        "sports": "sports",
        "physical": "sports",
        "exercise": "sports",
        "fitness": "sports",
        "athletic": "sports",
        "basketball": "sports",
        "soccer": "sports",
        "football": "sports",
        "volleyball": "sports",
        "art": "arts and crafts",
        "arts": "arts and crafts",
        "craft": "arts and crafts",
        "crafts": "arts and crafts",
        "creative": "arts and crafts",
        "drawing": "arts and crafts",
        "painting": "arts and crafts",
        "artistic": "arts and crafts",
        "read": "reading",
        "reading": "reading",
        "story": "reading",
        "book": "reading",
        "literature": "reading",
        "stories": "reading",
        "cook": "cooking",
        "cooking": "cooking",
        "food": "cooking",
        "kitchen": "cooking",
        "music": "music",
        "singing": "music",
        "dance": "dance",
        "dancing": "dance",
        "computer": "computer skills",
        "tech": "computer skills",
        "technology": "computer skills",
        "coding": "computer skills",
        "programming": "computer skills",
        "clean": "cleaning",
        "cleaning": "cleaning",
        "event": "event organizing",
        "organizing": "event organizing",
        "organising": "event organizing",
    }
)

DATE_CANONICAL_MAP = MappingProxyType(
    {
        "today": "today",
        "yesterday": "yesterday",
        "last week": "last week",
        "this week": "this week",
        "last month": "last month",
        "this month": "this month",
        "last weekend": "last weekend",
        "this weekend": "this weekend",
        "few days ago": "few days ago",
        "a few days ago": "few days ago",
        "a week ago": "a week ago",
        "monday": "Monday",
        "tuesday": "Tuesday",
        "wednesday": "Wednesday",
        "thursday": "Thursday",
        "friday": "Friday",
        "saturday": "Saturday",
        "sunday": "Sunday",
        "mon": "Monday",
        "tue": "Tuesday",
        "wed": "Wednesday",
        "thu": "Thursday",
        "fri": "Friday",
        "sat": "Saturday",
        "sun": "Sunday",
    }
)

_NAME_DISALLOWED_RE = re.compile(r"[^a-zA-Z\s'-]")
_LOCATION_DISALLOWED_RE = re.compile(r"[^\w\s,.-]")
_WHITESPACE_RE = re.compile(r"\s+")


def _collapse(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def canonicalize_activity_type(value: str) -> str:
    normalized = _collapse(value.lower())
    if normalized in ACTIVITY_KEYWORD_MAP:
        return ACTIVITY_KEYWORD_MAP[normalized]
    for keyword, category in ACTIVITY_KEYWORD_MAP.items():
        if keyword in normalized:
            return category
    return normalized


def normalize_date(value: str) -> str:
    """Map relative terms and weekdays to their canonical token.

    Anything else (including literal calendar dates) is returned lower-cased
    and trimmed; no calendar parsing happens here.
    """
    normalized = _collapse(value.lower())
    return DATE_CANONICAL_MAP.get(normalized, normalized)


def sanitize_name(value: str) -> str | None:
    cleaned = _collapse(_NAME_DISALLOWED_RE.sub("", value))
    if is_excluded_name(cleaned):
        return None
    if any(word in NAME_SANITIZE_EXCLUDED_WORDS for word in cleaned.lower().split()):
        return None
    return cleaned


def sanitize_location(value: str) -> str | None:
    cleaned = _collapse(_LOCATION_DISALLOWED_RE.sub("", value))
    if is_excluded_location(cleaned):
        return None
    return cleaned


def normalize_kid_count(value: object) -> int | None:
    if isinstance(value, str):
        digits = value.strip()
        if not digits.isdigit() or len(digits) > 4:
            return None
        value = int(digits)
    return value if is_valid_kid_count(value) else None


def normalize_field(field_name: str, value: object) -> object | None:
    """Normalize one candidate value; ``None`` means the candidate is rejected."""
    if value is None:
        return None
    if field_name == "number_of_kids":
        return normalize_kid_count(value)
    if not isinstance(value, str) or not value.strip():
        return None

    if field_name == "name":
        normalized = sanitize_name(value)
    elif field_name == "activity_type":
        normalized = canonicalize_activity_type(value)
    elif field_name == "location":
        normalized = sanitize_location(value)
    elif field_name == "date":
        normalized = normalize_date(value)
    else:
        normalized = _collapse(value)

    if not normalized:
        logger.debug("[normalize] rejected %s candidate %r", field_name, value)
        return None
    return normalized
