from itertools import product

from src.dialogue.slots import completed_count, is_complete, missing_fields
from src.extraction.pipeline.types import REQUIRED_FIELDS, ActivityRecord

VALUES = {
    "name": "Sarah",
    "activity_type": "teaching",
    "location": "Community Hall",
    "number_of_kids": 12,
    "youth_house": "Hope Center",
    "date": "yesterday",
}


def test_missing_fields_over_every_subset():
    for mask in product((True, False), repeat=len(REQUIRED_FIELDS)):
        present = {field_name for field_name, keep in zip(REQUIRED_FIELDS, mask) if keep}
        data = {field_name: VALUES[field_name] for field_name in present}
        expected = [field_name for field_name in REQUIRED_FIELDS if field_name not in present]

        assert missing_fields(data) == expected
        assert missing_fields(ActivityRecord.from_partial(data)) == expected
        assert is_complete(data) is (not expected)
        assert completed_count(data) == len(present)


def test_blank_strings_count_as_missing():
    data = dict(VALUES, name="   ", date="")

    assert missing_fields(data) == ["name", "date"]
