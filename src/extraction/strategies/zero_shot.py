from typing import Any

from src.core.errors import RemoteClassifierError
from src.extraction.pipeline.types import ExtractionResult
from src.extraction.strategies.base import BaseRemoteStrategy

ACTIVITY_LABELS: tuple[str, ...] = (
    "teaching",
    "tutoring",
    "mentoring",
    "coaching",
    "reading",
    "arts and crafts",
    "cooking",
    "sports",
    "music",
    "dance",
    "computer skills",
    "homework help",
    "field trips",
    "games",
    "community service",
    "environmental work",
    "cleaning",
    "organizing",
)


def top_label(response: Any) -> tuple[str, float]:
    # Two response shapes: {"labels": [...], "scores": [...]} or [{"label", "score"}, ...].
    if isinstance(response, dict) and response.get("labels") and response.get("scores"):
        return str(response["labels"][0]), float(response["scores"][0])
    if isinstance(response, list) and response and isinstance(response[0], dict):
        best = max(response, key=lambda item: float(item.get("score", 0.0)))
        return str(best.get("label", "")), float(best.get("score", 0.0))
    raise RemoteClassifierError("Zero-shot response has no labels")


class ActivityZeroShotStrategy(BaseRemoteStrategy):
    strategy_name = "zero_shot"

    def __init__(self, model: str, *, threshold: float = 0.3, labels: tuple[str, ...] = ACTIVITY_LABELS):
        super().__init__(model)
        self.threshold = threshold
        self.labels = labels

    def build_payload(self, text: str) -> dict[str, Any]:
        return {"inputs": text, "parameters": {"candidate_labels": list(self.labels)}}

    def parse(self, response: Any, text: str) -> ExtractionResult:
        label, score = top_label(response)
        if label and score > self.threshold:
            return {"activity_type": label}
        return {}
