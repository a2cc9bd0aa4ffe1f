NAME_EXCLUDED_WORDS = frozenset(
    word.lower()
    for word in (
        "Today",
        "Yesterday",
        "Tomorrow",
        "Hope",
        "Community",
        "Foundation",
        "Center",
        "House",
        "Teaching",
        "Reading",
        "Playing",
        "Working",
        "Helped",
        "Taught",
        "Mentored",
        "Volunteering",
        "Activity",
        "Kids",
        "Children",
        "Students",
        "Boys",
        "Girls",
        "When",
        "Where",
        "What",
        "About",
        "With",
        "From",
        "Good",
        "Great",
        "Nice",
        "Amazing",
    )
)

# Post-merge validation rejects a name if any of its words is one of these.
NAME_SANITIZE_EXCLUDED_WORDS = frozenset(
    word.lower()
    for word in (
        "Today",
        "Yesterday",
        "Hope",
        "Community",
        "Foundation",
        "Center",
        "House",
        "School",
        "Program",
        "Activity",
    )
)

LOCATION_EXCLUDED_WORDS = frozenset(
    word.lower()
    for word in (
        "Today",
        "Yesterday",
        "Tomorrow",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
        "Morning",
        "Afternoon",
        "Evening",
        "Night",
        "Week",
        "Month",
        "Year",
    )
)

ORGANIZATION_LEADING_STOPWORDS = frozenset(
    ("at", "in", "for", "with", "from", "to", "on", "i", "we", "and", "our", "my")
)

# Lower-case words that "I'm ..." style patterns pick up in place of a name.
NAME_STOPWORDS = frozenset(
    (
        "a", "an", "the", "at", "in", "on", "so", "not", "here", "just", "back", "done",
        "also", "really", "very", "glad", "happy", "going", "sure", "from", "with",
        "and", "but", "excited", "proud", "still", "currently", "work", "there", "for",
        "to", "my", "our", "your", "their", "this", "that", "been", "was", "is", "some",
    )
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


def is_excluded_name(value: str | None) -> bool:
    if not value:
        return True
    normalized = value.strip()
    if not (NAME_MIN_LENGTH <= len(normalized) <= NAME_MAX_LENGTH):
        return True

    # "Teaching kids" is rejected as well as "Teaching".
    words = normalized.lower().split()
    if normalized.lower() in NAME_EXCLUDED_WORDS:
        return True
    return words[0] in NAME_EXCLUDED_WORDS or words[0] in NAME_STOPWORDS


def is_excluded_location(value: str | None) -> bool:
    if not value:
        return True
    normalized = value.strip().lower()
    if not normalized:
        return True
    return normalized in LOCATION_EXCLUDED_WORDS


def strip_leading_stopwords(phrase: str) -> str:
    words = phrase.split()
    # Temporal words are stripped too: "Yesterday At Hope House".
    while words and (
        words[0].lower() in ORGANIZATION_LEADING_STOPWORDS or words[0].lower() in LOCATION_EXCLUDED_WORDS
    ):
        words.pop(0)
    return " ".join(words)


def same_phrase(first: str | None, second: str | None) -> bool:
    if not first or not second:
        return False
    return " ".join(first.lower().split()) == " ".join(second.lower().split())
