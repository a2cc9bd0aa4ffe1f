import httpx

from src.dialogue.slots import missing_fields
from src.extraction.extractors.fallback import extract_with_fallback
from src.extraction.extractors.hardcoded import extract_from_utterance
from src.extraction.extractors.llm import RemoteClassifier
from src.extraction.pipeline.merge import fold_extractions, merge_extractions
from src.extraction.pipeline.runner import submit_utterance

SARAH_TEXT = "Hi I'm Sarah, I taught 12 kids at Hope Center yesterday"


def test_merge_sarah_leaves_only_location_missing():
    merged = merge_extractions(extract_from_utterance(SARAH_TEXT), {}, SARAH_TEXT)

    assert merged == {
        "name": "Sarah",
        "activity_type": "teaching",
        "number_of_kids": 12,
        "youth_house": "Hope Center",
        "date": "yesterday",
    }


def test_merge_without_remote_equals_pattern_over_fallback():
    text = "Maria helped 8 kids with reading at Lincoln Park on Monday"
    pattern_result = extract_from_utterance(text)

    merged = merge_extractions(pattern_result, {}, text)

    assert merged == fold_extractions([("fallback", extract_with_fallback(text)), ("pattern", pattern_result)])
    assert merged["activity_type"] == "teaching"
    assert set(pattern_result) <= set(merged)


def test_remote_value_overrides_pattern_value():
    # Accepted trade-off: a remote label beats a correct keyword match.
    merged = merge_extractions({"activity_type": "teaching"}, {"activity_type": "cooking"}, "")

    assert merged["activity_type"] == "cooking"


def test_rejected_remote_name_falls_back_to_pattern_name():
    merged = merge_extractions({"name": "Sarah"}, {"name": "Teaching"}, "")

    assert merged["name"] == "Sarah"


def test_rejected_remote_kid_count_keeps_lower_layer():
    merged = merge_extractions({"number_of_kids": 12}, {"number_of_kids": "2500"}, "")

    assert merged["number_of_kids"] == 12


def test_remote_kid_count_string_is_normalized():
    merged = merge_extractions({}, {"number_of_kids": "9"}, "")

    assert merged["number_of_kids"] == 9


def test_remote_activity_label_is_canonicalized():
    merged = merge_extractions({}, {"activity_type": "homework help"}, "")

    assert merged["activity_type"] == "tutoring"


def test_fold_drops_location_equal_to_organization():
    merged = fold_extractions(
        [
            ("pattern", {"location": "hope center"}),
            ("remote", {"youth_house": "Hope Center"}),
        ]
    )

    assert merged == {"youth_house": "Hope Center"}


def test_location_matching_known_organization_is_kept():
    text = "It was at Hope Center"
    pattern_result = extract_from_utterance(text, organization_known=True)

    merged = merge_extractions(pattern_result, {}, text, known_organization="Hope Center")

    assert merged["location"] == "Hope Center"


def test_labelled_location_survives_matching_organization():
    text = "Location: Hope Center"

    merged = merge_extractions(extract_from_utterance(text), {}, text)

    assert merged["location"] == "Hope Center"
    assert merged["youth_house"] == "Hope Center"


async def test_submit_utterance_with_disabled_classifier(offline_classifier):
    merged = await submit_utterance(SARAH_TEXT, classifier=offline_classifier)

    assert merged == merge_extractions(extract_from_utterance(SARAH_TEXT), {}, SARAH_TEXT)


async def test_timed_out_remote_matches_pattern_baseline():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    classifier = RemoteClassifier(
        enabled=True,
        api_key="test-key",
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )

    merged = await submit_utterance(SARAH_TEXT, classifier=classifier)

    assert merged == merge_extractions(extract_from_utterance(SARAH_TEXT), {}, SARAH_TEXT)


async def test_out_of_range_kid_count_stays_missing(offline_classifier):
    merged = await submit_utterance("I'm Dana and I helped 2500 kids with soccer", classifier=offline_classifier)

    assert "number_of_kids" not in merged
    assert "number_of_kids" in missing_fields(merged)
    assert merged["name"] == "Dana"
