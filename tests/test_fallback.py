from src.extraction.extractors.fallback import extract_with_fallback


def test_fallback_reads_labelled_fields():
    result = extract_with_fallback("Location: Riverside Park, Organization: Hope Foundation")

    assert result["location"] == "Riverside Park"
    assert result["youth_house"] == "Hope Foundation"


def test_fallback_activity_between_verb_and_preposition():
    result = extract_with_fallback("we did cooking with the kids")

    assert result["activity_type"] == "cooking"


def test_fallback_sarah_intro():
    result = extract_with_fallback("Hi I'm Sarah, I taught 12 kids at Hope Center yesterday")

    assert result["name"] == "Sarah"
    assert result["number_of_kids"] == 12
    assert result["location"] == "Hope Center"
    assert result["youth_house"] == "Hope Center"
    assert result["date"] == "yesterday"


def test_fallback_drops_out_of_range_counts():
    assert "number_of_kids" not in extract_with_fallback("I helped 2500 kids")


def test_fallback_empty_text():
    assert extract_with_fallback("") == {}
