from abc import ABC, abstractmethod
from typing import Any

from src.extraction.pipeline.types import ExtractionResult
from src.extraction.strategies.inference import InferenceClient


class BaseRemoteStrategy(ABC):
    strategy_name: str

    def __init__(self, model: str):
        self.model = model

    @abstractmethod
    def build_payload(self, text: str) -> dict[str, Any]:
        """Build the JSON request body for the model."""

    @abstractmethod
    def parse(self, response: Any, text: str) -> ExtractionResult:
        """Turn the raw model response into a partial field set."""

    async def run(self, client: InferenceClient, text: str) -> ExtractionResult:
        response = await client.query(self.model, self.build_payload(text))
        return self.parse(response, text)
