import json

import httpx
import pytest

from src.core.config import settings
from src.core.errors import RemoteClassifierError
from src.extraction.extractors.llm import RemoteClassifier, llm_extraction_enabled
from src.extraction.strategies.generation import build_prompt, parse_labeled_output
from src.extraction.strategies.inference import InferenceClient
from src.extraction.strategies.ner import group_entities
from src.extraction.strategies.zero_shot import top_label

TEXT = "Hi I'm Sarah, I taught 12 kids at Hope Center yesterday"

NER_RESPONSE = [
    {"entity_group": "PER", "word": "Sarah", "score": 0.99},
    {"entity_group": "ORG", "word": "Hope Center", "score": 0.91},
]
GENERATION_RESPONSE = [
    {"generated_text": " Sarah\nActivity: teaching\nLocation: Community Hall\nKids: 12\nOrganization: ?\nDate: yesterday"}
]
ZERO_SHOT_RESPONSE = {"sequence": TEXT, "labels": ["tutoring", "teaching"], "scores": [0.8, 0.1]}


def _model_of(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/models/")


def _make_classifier(handler, **kwargs) -> RemoteClassifier:
    return RemoteClassifier(
        enabled=True,
        api_key="test-key",
        api_base="https://inference.test",
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _routes(ner=None, generation=None, zero_shot=None):
    responses = {
        settings.llm_ner_model: ner,
        settings.llm_generation_model: generation,
        settings.llm_zero_shot_model: zero_shot,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        response = responses[_model_of(request)]
        if isinstance(response, httpx.Response):
            return response
        if response is None:
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json=response)

    return handler


async def test_classify_combines_all_strategies():
    classifier = _make_classifier(_routes(NER_RESPONSE, GENERATION_RESPONSE, ZERO_SHOT_RESPONSE))

    result = await classifier.classify(TEXT)

    assert result == {
        "name": "Sarah",
        "youth_house": "Hope Center",
        "activity_type": "tutoring",
        "location": "Community Hall",
        "number_of_kids": 12,
        "date": "yesterday",
    }


async def test_classify_sends_bearer_token_and_payloads():
    seen: dict[str, dict] = {}
    tokens: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        tokens.append(request.headers["Authorization"])
        seen[_model_of(request)] = json.loads(request.content)
        return httpx.Response(200, json=[])

    await _make_classifier(handler).classify(TEXT)

    assert tokens == ["Bearer test-key"] * 3
    assert seen[settings.llm_ner_model]["parameters"] == {"aggregation_strategy": "simple"}
    assert seen[settings.llm_generation_model]["inputs"].endswith("Name:")
    assert "teaching" in seen[settings.llm_zero_shot_model]["parameters"]["candidate_labels"]


async def test_failed_strategy_contributes_nothing():
    classifier = _make_classifier(_routes(None, GENERATION_RESPONSE, ZERO_SHOT_RESPONSE))

    result = await classifier.classify(TEXT)

    assert "youth_house" not in result
    assert result["name"] == "Sarah"
    assert result["activity_type"] == "tutoring"


async def test_all_strategies_failing_returns_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await _make_classifier(handler).classify(TEXT) == {}


async def test_low_confidence_label_is_ignored():
    low = {"labels": ["cooking"], "scores": [0.2]}
    classifier = _make_classifier(_routes(NER_RESPONSE, None, low))

    result = await classifier.classify(TEXT)

    assert "activity_type" not in result


@pytest.mark.parametrize("kwargs", [{"enabled": False}, {"api_key": ""}])
async def test_missing_credentials_short_circuit(kwargs):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=[])

    options = {"enabled": True, "api_key": "test-key", **kwargs}
    classifier = RemoteClassifier(transport=httpx.MockTransport(handler), **options)

    assert await classifier.classify(TEXT) == {}
    assert calls == []


@pytest.mark.parametrize(
    ("enabled", "api_key", "expected"),
    [(True, "test-key", True), (True, "", False), (False, "test-key", False)],
)
def test_llm_extraction_enabled_gates_classifier(enabled, api_key, expected):
    classifier = RemoteClassifier(enabled=enabled, api_key=api_key)

    assert llm_extraction_enabled(enabled, api_key) is expected
    assert classifier.available is expected


def test_llm_extraction_enabled_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(settings, "llm_enabled", True)
    monkeypatch.setattr(settings, "llm_api_key", "from-env")

    assert llm_extraction_enabled() is True
    assert RemoteClassifier().available is True


async def test_empty_text_sends_no_requests():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert await _make_classifier(handler).classify("   ") == {}


async def test_inference_client_retries_transient_status():
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) == 1:
            return httpx.Response(503, headers={"Retry-After": "0"}, json={"error": "loading"})
        return httpx.Response(200, json={"ok": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = InferenceClient(http, api_base="https://inference.test", max_attempts=2, base_backoff_seconds=0)
        assert await client.query("some/model", {"inputs": "x"}) == {"ok": True}
    assert len(attempts) == 2


async def test_inference_client_raises_on_client_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "unauthorized"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = InferenceClient(http, api_base="https://inference.test", base_backoff_seconds=0)
        with pytest.raises(RemoteClassifierError):
            await client.query("some/model", {"inputs": "x"})


def test_group_entities_joins_word_pieces_and_bio_tags():
    entities = [
        {"entity": "B-PER", "word": "Jo"},
        {"entity": "I-PER", "word": "##hn"},
        {"entity": "B-LOC", "word": "Lincoln"},
        {"entity": "I-LOC", "word": "Park"},
        {"entity": "B-MISC", "word": "Tuesday"},
    ]

    assert group_entities(entities) == {"name": "John", "location": "Lincoln Park"}


def test_parse_labeled_output_skips_placeholders_and_bad_counts():
    output = "Name: ?\nActivity: sports\nKids: 5000\nLocation: n/a\nDate: Monday"

    assert parse_labeled_output(output) == {"activity_type": "sports", "date": "Monday"}


def test_build_prompt_quotes_the_utterance():
    prompt = build_prompt("I coached soccer")

    assert prompt.startswith('Extract volunteer information from: "I coached soccer"')


def test_top_label_accepts_list_shape():
    assert top_label([{"label": "music", "score": 0.4}, {"label": "dance", "score": 0.6}]) == ("dance", 0.6)
