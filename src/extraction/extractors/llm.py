import asyncio

import httpx

from src.core.config import settings
from src.core.logger import get_logger
from src.extraction.pipeline.types import ExtractionResult
from src.extraction.strategies.base import BaseRemoteStrategy
from src.extraction.strategies.generation import SlotGenerationStrategy
from src.extraction.strategies.inference import InferenceClient
from src.extraction.strategies.ner import EntityRecognitionStrategy
from src.extraction.strategies.zero_shot import ActivityZeroShotStrategy

logger = get_logger(__name__)


def llm_extraction_enabled(enabled: bool | None = None, api_key: str | None = None) -> bool:
    """Remote extraction runs only when switched on and a key is configured."""
    enabled = settings.llm_enabled if enabled is None else enabled
    api_key = settings.llm_api_key if api_key is None else api_key
    return enabled and bool(api_key)


class RemoteClassifier:
    """Best-effort model-backed extraction.

    Runs entity recognition, slot generation and zero-shot activity
    classification concurrently. ``classify`` never raises: a failed strategy
    contributes nothing, and a missing key or disabled flag yields ``{}``.
    """

    def __init__(
        self,
        *,
        enabled: bool | None = None,
        api_key: str | None = None,
        api_base: str | None = None,
        timeout_seconds: float | None = None,
        max_attempts: int | None = None,
        backoff_seconds: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.enabled = settings.llm_enabled if enabled is None else enabled
        self.api_key = api_key if api_key is not None else settings.llm_api_key
        self.api_base = api_base or settings.llm_api_base
        self.timeout_seconds = timeout_seconds or settings.llm_timeout_seconds
        self.max_attempts = max_attempts or settings.llm_max_attempts
        self.backoff_seconds = backoff_seconds
        self.transport = transport

        self.ner = EntityRecognitionStrategy(settings.llm_ner_model)
        self.generation = SlotGenerationStrategy(settings.llm_generation_model)
        self.zero_shot = ActivityZeroShotStrategy(
            settings.llm_zero_shot_model,
            threshold=settings.llm_zero_shot_threshold,
        )

    @property
    def available(self) -> bool:
        return llm_extraction_enabled(self.enabled, self.api_key)

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=self.transport,
        )

    async def _run_strategy(
        self,
        strategy: BaseRemoteStrategy,
        client: InferenceClient,
        text: str,
    ) -> ExtractionResult:
        try:
            return await strategy.run(client, text)
        except Exception as exc:
            logger.warning("[remote-classify] %s strategy failed: %s", strategy.strategy_name, exc)
            return {}

    async def classify(self, text: str) -> ExtractionResult:
        if not self.available:
            logger.debug("[remote-classify] skipped: remote extraction disabled or no API key")
            return {}
        if not text or not text.strip():
            return {}

        try:
            async with self._http_client() as http:
                client = InferenceClient(
                    http,
                    api_base=self.api_base,
                    max_attempts=self.max_attempts,
                    base_backoff_seconds=self.backoff_seconds,
                )
                ner_result, generated, zero_shot = await asyncio.gather(
                    self._run_strategy(self.ner, client, text),
                    self._run_strategy(self.generation, client, text),
                    self._run_strategy(self.zero_shot, client, text),
                )
        except Exception as exc:
            logger.warning("[remote-classify] remote extraction failed: %s", exc)
            return {}

        # NER is the base, generated slots overlay it, and a confident
        # classifier label always wins for activity_type.
        combined: ExtractionResult = {**ner_result, **generated}
        if zero_shot.get("activity_type"):
            combined["activity_type"] = zero_shot["activity_type"]
        logger.info("[remote-classify] fields=%s", sorted(combined))
        return combined
