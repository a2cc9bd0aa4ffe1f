from collections.abc import Mapping, Sequence

from src.dialogue.slots import TOTAL_FIELDS
from src.extraction.pipeline.types import ActivityRecord, ExtractionResult

# Ask order differs from the canonical field order: kid count comes before location.
QUESTION_PRIORITY: tuple[str, ...] = (
    "name",
    "activity_type",
    "number_of_kids",
    "location",
    "youth_house",
    "date",
)

BASE_QUESTIONS: dict[str, str] = {
    "name": "Hi there! What's your name? I need to know who did this amazing volunteering work! 😊",
    "activity_type": "What type of activity did you do? (e.g., teaching, mentoring, sports, arts and crafts)",
    "location": "Where did this volunteering take place?",
    "number_of_kids": "How many kids did you help or work with?",
    "youth_house": "Which organization or youth house was this for?",
    "date": "When did this volunteering activity happen?",
}

PERSONALIZED_QUESTIONS: dict[str, str] = {
    "activity_type": "Hi {name}! What type of activity did you do?",
    "location": "Thanks {name}! Where did this volunteering take place?",
    "number_of_kids": "Great {name}! How many kids did you work with?",
    "youth_house": "Nice {name}! Which organization or youth house was this for?",
    "date": "Almost done {name}! When did this happen?",
}

DEFAULT_QUESTION = "Can you tell me more about that?"
COMPLETION_MESSAGE = "Perfect! I have all the required information. Would you like me to save this activity? ✅"
GREETING = (
    "Hi! I'm here to help you log your volunteering activities. I need to collect 6 pieces of "
    "information: your name, activity type, location, number of kids, organization, and date. "
    "Let's start - what's your name and tell me about what you did!"
)
NEW_ACTIVITY_PROMPT = "Ready to log another activity? What's your name and tell me about what you did!"

ACKNOWLEDGMENT_LABELS: tuple[tuple[str, str], ...] = (
    ("name", "name: {}"),
    ("activity_type", "activity: {}"),
    ("number_of_kids", "{} kids"),
    ("location", "location: {}"),
    ("youth_house", "organization: {}"),
    ("date", "date: {}"),
)


def _get(record: ActivityRecord | Mapping, field_name: str):
    if isinstance(record, Mapping):
        return record.get(field_name)
    return getattr(record, field_name, None)


def select_field(missing: Sequence[str]) -> str | None:
    for field_name in QUESTION_PRIORITY:
        if field_name in missing:
            return field_name
    return missing[0] if missing else None


def next_question(missing: Sequence[str], record: ActivityRecord | Mapping) -> str:
    """Render the follow-up for the highest-priority missing field.

    With nothing missing, the completion acknowledgment is returned instead.
    """
    field_name = select_field(missing)
    if field_name is None:
        return COMPLETION_MESSAGE

    question = BASE_QUESTIONS.get(field_name, DEFAULT_QUESTION)
    name = _get(record, "name")
    if name and field_name != "name" and field_name in PERSONALIZED_QUESTIONS:
        question = PERSONALIZED_QUESTIONS[field_name].format(name=name)

    if len(missing) > 1:
        completed = TOTAL_FIELDS - len(missing)
        question = f"{question} ({completed}/{TOTAL_FIELDS} complete)"
    return question


def summarize(record: ActivityRecord | Mapping) -> str:
    parts: list[str] = []
    if _get(record, "name"):
        parts.append(f"{_get(record, 'name')}")
    if _get(record, "activity_type"):
        parts.append(f"did {_get(record, 'activity_type')}")
    if _get(record, "number_of_kids"):
        parts.append(f"with {_get(record, 'number_of_kids')} kids")
    if _get(record, "location"):
        parts.append(f"at {_get(record, 'location')}")
    if _get(record, "youth_house"):
        parts.append(f"({_get(record, 'youth_house')})")
    if _get(record, "date"):
        parts.append(f"on {_get(record, 'date')}")
    return " ".join(parts)


def acknowledge(extracted: ExtractionResult) -> str:
    found = [template.format(extracted[field_name]) for field_name, template in ACKNOWLEDGMENT_LABELS if extracted.get(field_name)]
    if not found:
        return "Thanks for that! "
    return f"Great! I got {', '.join(found)}. "


def completion_reply(record: ActivityRecord | Mapping) -> str:
    return (
        "Perfect! I have all the information I need. "
        f"Here's what I recorded: {summarize(record)}. "
        "Would you like me to save this to your volunteer log? 🎉"
    )


def saved_reply(row_number: int | None, name: str | None) -> str:
    location = f"row {row_number}" if row_number is not None else "a new row"
    thanks = f"Thank you {name} for making a difference!" if name else "Thank you for making a difference!"
    return f"✅ Success! Your volunteering activity has been saved to {location} in the log. {thanks}"


def save_failed_reply(error: str) -> str:
    return f"❌ Sorry, there was an error saving your activity: {error}. Please try again or contact support."
