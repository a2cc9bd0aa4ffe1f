from collections.abc import Mapping

from src.extraction.pipeline.types import REQUIRED_FIELDS, ActivityRecord, has_value

TOTAL_FIELDS = len(REQUIRED_FIELDS)


def _field_value(record: ActivityRecord | Mapping, field_name: str) -> object:
    if isinstance(record, Mapping):
        return record.get(field_name)
    return getattr(record, field_name, None)


def missing_fields(record: ActivityRecord | Mapping) -> list[str]:
    """Required fields not yet filled, in canonical order."""
    return [field_name for field_name in REQUIRED_FIELDS if not has_value(_field_value(record, field_name))]


def is_complete(record: ActivityRecord | Mapping) -> bool:
    return not missing_fields(record)


def completed_count(record: ActivityRecord | Mapping) -> int:
    return TOTAL_FIELDS - len(missing_fields(record))
