import re

from src.core.logger import get_logger
from src.extraction.extractors.filters import (
    LOCATION_EXCLUDED_WORDS,
    NAME_EXCLUDED_WORDS,
    is_excluded_location,
    is_excluded_name,
    same_phrase,
    strip_leading_stopwords,
)
from src.extraction.pipeline.types import ExtractionResult, is_valid_kid_count

logger = get_logger(__name__)

# A name token: first word in any case, optional second word only when capitalized.
_NAME = r"([A-Za-z][a-z]+(?:\s+(?-i:[A-Z][a-z]+))?)"
_CAP_NAME = r"([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)"
_CAP_WORD = r"[A-Z][a-zA-Z'\u2019-]*"
_PREPOSITION = r"\b(?i:at|in|to|from)\s+"
_ARTICLE = r"(?:(?i:the)\s+)?"

NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Self-introductions.
    re.compile(rf"\b(?:my name is|i['\u2019]?m|i am)\s+{_NAME}", re.IGNORECASE),
    re.compile(rf"\b(?:this is|call me)\s+{_NAME}", re.IGNORECASE),
    re.compile(rf"\b(?:hi,?\s+i['\u2019]?m|hello,?\s+i['\u2019]?m)\s+{_NAME}", re.IGNORECASE),
    # Name-first.
    re.compile(rf"^{_CAP_NAME}\s+(?:here|volunteering|helped|taught)\b"),
    re.compile(rf"^{_CAP_NAME}\s+(?:did|worked|assisted)\b"),
    # Casual introductions.
    re.compile(rf"\b(?:it['\u2019]?s|name['\u2019]?s)\s+{_NAME}", re.IGNORECASE),
    re.compile(rf"\bvolunteer\s+{_NAME}", re.IGNORECASE),
    re.compile(r"^([A-Z][a-z]+)(?:\s+[A-Z][a-z]+)?\s*[.,!]?\s*(?:I|We|Yesterday|Today|Last)\b"),
)

_KIDS = r"(?:kids?|child(?:ren)?)"
KID_COUNT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        rf"\b(\d{{1,4}})\s*(?:{_KIDS}|students?|boys?|girls?)\b",
        r"\b(?:helped|taught|mentored|assisted|worked with)\s*(\d{1,4})\b",
        r"\b(\d{1,4})\s*(?:young|little)\s*(?:ones?|people)\b",
        r"\bgroup\s*of\s*(\d{1,4})\b",
        r"\b(\d{1,4})\s*(?:participants?|volunteers?)\b",
        rf"\babout\s*(\d{{1,4}})\s*{_KIDS}\b",
        rf"\baround\s*(\d{{1,4}})\s*{_KIDS}\b",
        r"\b(\d{1,4})\s*(?:teens?|teenagers?|teenage)\b",
        rf"\bwith\s*(\d{{1,4}})\s*{_KIDS}\b",
        r"\b(\d{1,4})\s*(?:youths?|young\s+people)\b",
    )
)

# Category order is a priority: the first category with any matching keyword wins.
ACTIVITY_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    category: tuple(re.compile(rf"\b(?:{keywords})") for keywords in groups)
    for category, groups in (
        (
            "teaching",
            (
                r"teach|taught|lesson|education|class|instruction|school",
                r"math|english|reading|writing|homework|study|learning",
                r"subject|curriculum|academic|educational",
            ),
        ),
        (
            "mentoring",
            (
                r"mentor|guidance|counsel|advice|support",
                r"life skills|career|personal development",
                r"coaching|motivating|inspiring",
            ),
        ),
        (
            "tutoring",
            (
                r"tutor|homework help|academic",
                r"exam|test prep|study group|study session",
                r"one.on.one|individual help",
            ),
        ),
        (
            "sports",
            (
                r"sports?|football|basketball|soccer|tennis|volleyball",
                r"game|play|exercise|physical|athletic|training",
                r"fitness|running|swimming|cycling",
            ),
        ),
        (
            "arts and crafts",
            (
                r"art|drawing|painting|craft|creative|music|singing",
                r"dance|drama|theater|creative writing",
                r"pottery|sculpture|handicraft",
            ),
        ),
        (
            "reading",
            (
                r"read|story|book|library",
                r"storytime|literacy|reading session",
                r"storytelling|book club",
            ),
        ),
        (
            "cooking",
            (
                r"cook|bake|baking|food|kitchen|meal",
                r"recipe|nutrition|food preparation",
                r"culinary|chef",
            ),
        ),
        (
            "cleaning",
            (
                r"clean|organize|tidy|maintenance",
                r"gardening|landscaping|environment",
                r"trash|garbage|recycling",
            ),
        ),
        (
            "event organizing",
            (
                r"event|party|celebration|festival|fundraiser",
                r"organize|planning|coordination|setup",
                r"conference|workshop|seminar",
            ),
        ),
        (
            "computer skills",
            (
                r"computer|coding|programming|technology",
                r"digital|internet|software|apps?\b",
                r"tech|technical",
            ),
        ),
    )
}

_PLACE_SUFFIX = r"(?:Center|Centre|School|Library|Park|House|Foundation|Organization)"
LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Location-suffixed nouns first.
    re.compile(rf"{_PREPOSITION}{_ARTICLE}((?:{_CAP_WORD}\s+){{1,4}}{_PLACE_SUFFIX})\b"),
    re.compile(rf"{_PREPOSITION}(Ban\s+[A-Z][a-z]+)"),
    re.compile(rf"{_PREPOSITION}{_ARTICLE}((?:{_CAP_WORD}\s+){{1,4}}(?:Community|Village|District))\b"),
    # Generic capitalized phrase.
    re.compile(rf"{_PREPOSITION}{_ARTICLE}({_CAP_WORD}(?:\s+{_CAP_WORD}){{0,3}})"),
    # Street address.
    re.compile(rf"{_PREPOSITION}(\d+\s+{_CAP_WORD}(?:\s+{_CAP_WORD}){{0,4}})"),
)

_ORG_SUFFIX = r"(?:Foundation|Organization|Organisation|NGO|Charity|Trust)"
_HOUSE_SUFFIX = r"(?:Center|Centre|House|Home)"
_HOPEFUL_PREFIX = r"(?:Hope|Care|Love|Help|Support|Future|Dream|Bright|New)"
_PREFIX_NOUN = r"(?:Club|Project|Shelter|Village|Academy|Society|Mission|Kids|Youth|Network)"
ORGANIZATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b((?:{_CAP_WORD}\s+){{1,4}}{_ORG_SUFFIX})\b"),
    re.compile(rf"\b((?:{_CAP_WORD}\s+){{1,4}}{_HOUSE_SUFFIX})\b"),
    re.compile(r"\b(Boys?\s+(?:and|&)\s+Girls?\s+Clubs?)\b", re.IGNORECASE),
    re.compile(r"\b(YMCA|YWCA)\b", re.IGNORECASE),
    re.compile(r"\b(Red\s+Cross)\b", re.IGNORECASE),
    re.compile(r"\b(Salvation\s+Army)\b", re.IGNORECASE),
    re.compile(r"\b(United\s+Way)\b", re.IGNORECASE),
    re.compile(rf"\b(Ban\s+[A-Z][a-z]+\s+(?:Foundation|Center|House))\b"),
    re.compile(rf"\b({_HOPEFUL_PREFIX}(?:\s+{_CAP_WORD}){{0,3}}\s+{_PREFIX_NOUN})\b"),
)

_MONTHS = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)


def _weekday(full: str, short: str) -> re.Pattern[str]:
    # Abbreviations must be capitalized so "I sat with them" is not Saturday,
    # and must not open a proper name ("Sun Valley Center").
    return re.compile(rf"(?i:\b(?:last\s+|this\s+)?{full}\b)|\b{short}\b(?!\s+[A-Z])\.?")


# Symbolic terms map to a canonical value; literal dates are returned as found.
DATE_PATTERNS: tuple[tuple[re.Pattern[str], str | None], ...] = (
    (re.compile(r"\byesterday\b", re.IGNORECASE), "yesterday"),
    (re.compile(r"\btoday\b", re.IGNORECASE), "today"),
    (re.compile(r"\blast\s+week\b", re.IGNORECASE), "last week"),
    (re.compile(r"\bthis\s+week\b", re.IGNORECASE), "this week"),
    (re.compile(r"\blast\s+month\b", re.IGNORECASE), "last month"),
    (re.compile(r"\bthis\s+month\b", re.IGNORECASE), "this month"),
    (re.compile(r"\blast\s+weekend\b", re.IGNORECASE), "last weekend"),
    (re.compile(r"\bthis\s+weekend\b", re.IGNORECASE), "this weekend"),
    (re.compile(r"\b(?:a\s+)?few\s+days?\s+ago\b", re.IGNORECASE), "few days ago"),
    (re.compile(r"\ba\s+week\s+ago\b", re.IGNORECASE), "a week ago"),
    (_weekday("monday", "Mon"), "Monday"),
    (_weekday("tuesday", "Tue"), "Tuesday"),
    (_weekday("wednesday", "Wed"), "Wednesday"),
    (_weekday("thursday", "Thu"), "Thursday"),
    (_weekday("friday", "Fri"), "Friday"),
    (_weekday("saturday", "Sat"), "Saturday"),
    (_weekday("sunday", "Sun"), "Sunday"),
    (re.compile(r"\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b"), None),
    (re.compile(rf"\b{_MONTHS}\.?\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b", re.IGNORECASE), None),
    (re.compile(rf"\b\d{{1,2}}(?:st|nd|rd|th)?\s+{_MONTHS}\.?,?\s+\d{{4}}\b", re.IGNORECASE), None),
)


_NAME_TRAILING_EXCLUDED = NAME_EXCLUDED_WORDS | LOCATION_EXCLUDED_WORDS


def _trim_trailing(words: list[str], excluded: frozenset[str]) -> list[str]:
    while words and words[-1].lower() in excluded:
        words = words[:-1]
    return words


def extract_name(text: str) -> str | None:
    for pattern in NAME_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        # "I'm Sarah Yesterday ..." should not keep the trailing temporal word.
        words = _trim_trailing(match.group(1).split(), _NAME_TRAILING_EXCLUDED)
        candidate = " ".join(words)
        if is_excluded_name(candidate):
            logger.debug("[pattern] rejected name candidate %r", match.group(1))
            continue
        return candidate
    return None


def extract_number_of_kids(lower_text: str) -> int | None:
    for pattern in KID_COUNT_PATTERNS:
        match = pattern.search(lower_text)
        if not match:
            continue
        count = int(match.group(1))
        if is_valid_kid_count(count):
            return count
        logger.debug("[pattern] rejected kid count %s", count)
    return None


def extract_activity_type(lower_text: str) -> str | None:
    for category, patterns in ACTIVITY_PATTERNS.items():
        if any(pattern.search(lower_text) for pattern in patterns):
            return category
    return None


def extract_location(text: str) -> str | None:
    for pattern in LOCATION_PATTERNS:
        for match in pattern.finditer(text):
            words = _trim_trailing(match.group(1).split(), LOCATION_EXCLUDED_WORDS)
            candidate = " ".join(words)
            if len(candidate) < 3 or is_excluded_location(candidate):
                continue
            return candidate
    return None


def extract_organization(text: str) -> str | None:
    for pattern in ORGANIZATION_PATTERNS:
        for match in pattern.finditer(text):
            words = strip_leading_stopwords(match.group(1)).split()
            # A bare suffix such as "Center" is not an organization.
            if len(words) < 2 and not re.fullmatch(r"(?i)YMCA|YWCA", " ".join(words)):
                continue
            return " ".join(words)
    return None


def extract_date(text: str) -> str | None:
    for pattern, canonical in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            return canonical or match.group(0).strip()
    return None


def extract_from_utterance(text: str, *, organization_known: bool = False) -> ExtractionResult:
    """Rule-based extraction of all six activity fields from one utterance.

    Deterministic and offline. Each field is extracted independently; fields
    with no match are left out of the result. With ``organization_known`` the
    organization slot is already filled, so a phrase matching both stays the
    location.
    """
    text = text or ""
    lower_text = text.lower()

    candidates = {
        "name": extract_name(text),
        "activity_type": extract_activity_type(lower_text),
        "location": extract_location(text),
        "number_of_kids": extract_number_of_kids(lower_text),
        "youth_house": extract_organization(text),
        "date": extract_date(text),
    }
    # A phrase recognised as the organization is not also the location.
    if not organization_known and same_phrase(candidates["location"], candidates["youth_house"]):
        candidates["location"] = None

    result: ExtractionResult = {}
    for field_name, value in candidates.items():
        if value is not None:
            result[field_name] = value
    return result
