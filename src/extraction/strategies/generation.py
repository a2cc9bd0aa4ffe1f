import re
from typing import Any

from src.core.errors import RemoteClassifierError
from src.extraction.pipeline.types import ExtractionResult, is_valid_kid_count
from src.extraction.strategies.base import BaseRemoteStrategy

SLOT_LABELS: dict[str, str] = {
    "name": "Name",
    "activity_type": "Activity",
    "location": "Location",
    "number_of_kids": "Kids",
    "youth_house": "Organization",
    "date": "Date",
}
PLACEHOLDER_VALUES = frozenset({"?", "??", "-", "n/a", "none", "unknown"})
STOP_SEQUENCES = ["\n\n", "Location:", "Activity:", "Kids:", "Organization:", "Date:"]

_LABEL_PATTERNS = {
    field_name: re.compile(rf"^[ \t]*{label}:[ \t]*(.+?)[ \t]*$", re.IGNORECASE | re.MULTILINE)
    for field_name, label in SLOT_LABELS.items()
    if field_name != "number_of_kids"
}
_KIDS_PATTERN = re.compile(r"^[ \t]*Kids:[ \t]*(\d{1,4})\b", re.IGNORECASE | re.MULTILINE)


def build_prompt(text: str) -> str:
    labels = "\n".join(f"{label}:" for label in SLOT_LABELS.values())
    # The prompt ends on "Name:" so the model continues with the first slot value.
    return f'Extract volunteer information from: "{text}"\n\n{labels}\n\nName:'


def parse_labeled_output(output: str) -> ExtractionResult:
    """Parse ``Label: value`` lines, ignoring placeholder answers such as "?"."""
    extracted: ExtractionResult = {}
    for field_name, pattern in _LABEL_PATTERNS.items():
        match = pattern.search(output)
        if not match:
            continue
        value = match.group(1).strip()
        if value and value.lower() not in PLACEHOLDER_VALUES:
            extracted[field_name] = value

    kids_match = _KIDS_PATTERN.search(output)
    if kids_match and is_valid_kid_count(int(kids_match.group(1))):
        extracted["number_of_kids"] = int(kids_match.group(1))
    return extracted


class SlotGenerationStrategy(BaseRemoteStrategy):
    strategy_name = "generation"

    def __init__(self, model: str, *, max_new_tokens: int = 100, temperature: float = 0.1):
        super().__init__(model)
        self.max_new_tokens = max_new_tokens
        self.temperature = temperature

    def build_payload(self, text: str) -> dict[str, Any]:
        return {
            "inputs": build_prompt(text),
            "parameters": {
                "max_new_tokens": self.max_new_tokens,
                "temperature": self.temperature,
                "return_full_text": False,
                "stop": STOP_SEQUENCES,
            },
        }

    def parse(self, response: Any, text: str) -> ExtractionResult:
        if isinstance(response, list) and response:
            response = response[0]
        if not isinstance(response, dict) or not isinstance(response.get("generated_text"), str):
            raise RemoteClassifierError("Generation response has no generated_text")
        return parse_labeled_output("Name:" + response["generated_text"])
