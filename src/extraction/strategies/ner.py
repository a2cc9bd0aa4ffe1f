from typing import Any

from src.core.errors import RemoteClassifierError
from src.extraction.pipeline.types import ExtractionResult
from src.extraction.strategies.base import BaseRemoteStrategy

ENTITY_FIELDS = {
    "PER": "name",
    "ORG": "youth_house",
    "LOC": "location",
}


def _entity_group(entity: dict[str, Any]) -> str:
    group = entity.get("entity_group") or entity.get("entity") or ""
    # Un-aggregated output uses BIO tags such as "B-PER".
    return str(group).split("-")[-1].upper()


def group_entities(entities: list[dict[str, Any]]) -> ExtractionResult:
    fragments: dict[str, list[str]] = {field_name: [] for field_name in ENTITY_FIELDS.values()}
    for entity in entities:
        field_name = ENTITY_FIELDS.get(_entity_group(entity))
        word = str(entity.get("word", "")).strip()
        if field_name is None or not word:
            continue
        bucket = fragments[field_name]
        if word.startswith("##"):
            if bucket:
                bucket[-1] += word[2:]
            else:
                bucket.append(word[2:])
        else:
            bucket.append(word)

    extracted: ExtractionResult = {}
    for field_name, words in fragments.items():
        joined = " ".join(words).strip()
        if joined:
            extracted[field_name] = joined
    return extracted


class EntityRecognitionStrategy(BaseRemoteStrategy):
    strategy_name = "ner"

    def build_payload(self, text: str) -> dict[str, Any]:
        return {"inputs": text, "parameters": {"aggregation_strategy": "simple"}}

    def parse(self, response: Any, text: str) -> ExtractionResult:
        if not isinstance(response, list):
            raise RemoteClassifierError("Token classification response is not a list")
        return group_entities([entity for entity in response if isinstance(entity, dict)])
