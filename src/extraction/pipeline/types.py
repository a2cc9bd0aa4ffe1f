from dataclasses import dataclass, fields
from datetime import datetime
from typing import TypedDict

REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "activity_type",
    "location",
    "number_of_kids",
    "youth_house",
    "date",
)

# Fixed column layout of the activity store.
ROW_COLUMNS: tuple[str, ...] = (
    "name",
    "date",
    "activity_type",
    "location",
    "number_of_kids",
    "youth_house",
    "logged_at",
)

MIN_KIDS = 1
MAX_KIDS = 999


class ExtractionResult(TypedDict, total=False):
    """Partial field set from one extraction strategy.

    A strategy that found nothing for a field leaves the key out entirely.
    """

    name: str
    activity_type: str
    location: str
    number_of_kids: int
    youth_house: str
    date: str


def is_valid_kid_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_KIDS <= value <= MAX_KIDS


def has_value(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


@dataclass(slots=True)
class ActivityRecord:
    name: str | None = None
    activity_type: str | None = None
    location: str | None = None
    number_of_kids: int | None = None
    youth_house: str | None = None
    date: str | None = None

    @classmethod
    def from_partial(cls, partial: ExtractionResult | dict) -> "ActivityRecord":
        record = cls()
        record.merge(partial)
        return record

    def merge(self, partial: ExtractionResult | dict) -> list[str]:
        """Overlay non-empty values from ``partial``; return the fields that changed.

        Absent or empty values never clear an existing field.
        """
        updated: list[str] = []
        for field_name in REQUIRED_FIELDS:
            value = partial.get(field_name)
            if not has_value(value):
                continue
            if field_name == "number_of_kids" and not is_valid_kid_count(value):
                continue
            if isinstance(value, str):
                value = value.strip()
            if getattr(self, field_name) != value:
                setattr(self, field_name, value)
                updated.append(field_name)
        return updated

    def reset(self) -> None:
        for item in fields(self):
            setattr(self, item.name, None)

    def is_empty(self) -> bool:
        return not any(has_value(getattr(self, field_name)) for field_name in REQUIRED_FIELDS)

    def as_dict(self) -> ExtractionResult:
        result: ExtractionResult = {}
        for field_name in REQUIRED_FIELDS:
            value = getattr(self, field_name)
            if has_value(value):
                result[field_name] = value
        return result

    def to_row(self, logged_at: datetime) -> list[str]:
        """Render the record in the store's column order, every cell a string."""
        values = {
            "name": self.name or "",
            "date": self.date or "",
            "activity_type": self.activity_type or "",
            "location": self.location or "",
            "number_of_kids": str(self.number_of_kids) if self.number_of_kids is not None else "",
            "youth_house": self.youth_house or "",
            "logged_at": logged_at.isoformat(),
        }
        return [values[column] for column in ROW_COLUMNS]
