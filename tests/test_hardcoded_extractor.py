import pytest

from src.extraction.extractors.hardcoded import (
    extract_activity_type,
    extract_date,
    extract_from_utterance,
    extract_name,
    extract_number_of_kids,
    extract_organization,
)
from src.extraction.pipeline.types import MAX_KIDS, MIN_KIDS, REQUIRED_FIELDS


def test_extract_from_utterance_sarah_intro():
    result = extract_from_utterance("Hi I'm Sarah, I taught 12 kids at Hope Center yesterday")

    assert result == {
        "name": "Sarah",
        "activity_type": "teaching",
        "number_of_kids": 12,
        "youth_house": "Hope Center",
        "date": "yesterday",
    }


def test_extract_from_utterance_name_first_with_park():
    result = extract_from_utterance("Maria helped 8 kids with reading at Lincoln Park on Monday")

    assert result["name"] == "Maria"
    assert result["number_of_kids"] == 8
    assert result["location"] == "Lincoln Park"
    assert result["date"] == "Monday"
    assert "youth_house" not in result


def test_extract_from_utterance_empty_text():
    assert extract_from_utterance("") == {}


def test_kid_count_out_of_range_is_discarded():
    assert extract_number_of_kids("i helped 2500 kids") is None
    assert extract_number_of_kids("we had 0 kids") is None
    assert extract_number_of_kids("123456 kids showed up") is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("i worked with 15 children", 15),
        ("a group of 6 came by", 6),
        ("mentored 3 teens after school", 3),
        ("about 20 kids", 20),
    ],
)
def test_kid_count_phrasings(text, expected):
    assert extract_number_of_kids(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("my name is John Smith and I coached soccer", "John Smith"),
        ("This is Priya, I read stories to kids", "Priya"),
        ("Carlos taught 5 kids to paint", "Carlos"),
        ("Name's Lee, did some tutoring", "Lee"),
    ],
)
def test_extract_name(text, expected):
    assert extract_name(text) == expected


def test_extract_name_rejects_excluded_words():
    assert extract_name("I'm Teaching kids today") is None
    assert extract_name("I'm so excited about today") is None


def test_activity_keywords_are_word_anchored():
    assert extract_activity_type("we started a new program") is None
    assert extract_activity_type("it was fun") is None
    assert extract_activity_type("we did arts and crafts") == "arts and crafts"


def test_activity_category_priority():
    # Teaching keywords win over later categories in the same sentence.
    assert extract_activity_type("taught a cooking class") == "teaching"
    assert extract_activity_type("played basketball") == "sports"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("I played with my friend", None),
        ("every month we meet", None),
        ("we went last weekend", "last weekend"),
        ("it happened last week", "last week"),
        ("We played soccer on Sunday", "Sunday"),
        ("last Friday at the park", "Friday"),
        ("on Sat. afternoon", "Saturday"),
        ("I sat with them", None),
        ("We painted at Sun Valley Center", None),
        ("the Sat Morning Club met", None),
        ("we met on Sun and painted", "Sunday"),
        ("it was a few days ago", "few days ago"),
        ("on 3/14/2024 we met", "3/14/2024"),
        ("on March 3, 2024 we met", "March 3, 2024"),
    ],
)
def test_extract_date(text, expected):
    assert extract_date(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("I coached basketball at the Boys and Girls Club on Saturday", "Boys and Girls Club"),
        ("I volunteered at the YMCA", "YMCA"),
        ("We cooked at Sunrise Youth Foundation", "Sunrise Youth Foundation"),
        ("Yesterday At Hope House we painted", "Hope House"),
    ],
)
def test_extract_organization(text, expected):
    assert extract_organization(text) == expected


def test_organization_phrase_is_not_reported_as_location():
    result = extract_from_utterance("I read to 4 kids at Hope House today")

    assert result["youth_house"] == "Hope House"
    assert "location" not in result


def test_known_organization_phrase_stays_the_location():
    result = extract_from_utterance("It was at Hope House", organization_known=True)

    assert result["location"] == "Hope House"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "🙂🙂🙂",
        "9" * 200,
        "at at at in in to from",
        "I'm",
        "Hi I'm " + "A" * 300,
        "helped 99999999999999999999 kids",
        "Location: , Organization: ; Date:",
    ],
)
def test_extract_from_utterance_never_raises_and_respects_bounds(text):
    result = extract_from_utterance(text)

    assert set(result) <= set(REQUIRED_FIELDS)
    if "number_of_kids" in result:
        assert MIN_KIDS <= result["number_of_kids"] <= MAX_KIDS
