import asyncio
from typing import Any

import httpx

from src.core.errors import RemoteClassifierError
from src.core.logger import get_logger

logger = get_logger(__name__)

TRANSIENT_STATUS_CODES = (429, 500, 502, 503, 504)


class InferenceClient:
    """Thin async client for a hosted model inference API.

    One POST per model call, retried on transport errors and transient
    statuses with exponential backoff. Every failure surfaces as
    ``RemoteClassifierError``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        api_base: str,
        max_attempts: int = 2,
        base_backoff_seconds: float = 1.0,
    ):
        self.http = http
        self.api_base = api_base.rstrip("/")
        self.max_attempts = max(1, max_attempts)
        self.base_backoff_seconds = base_backoff_seconds

    def model_url(self, model: str) -> str:
        return f"{self.api_base}/models/{model}"

    async def query(self, model: str, payload: dict[str, Any]) -> Any:
        url = self.model_url(model)
        last_exception: Exception | None = None
        last_status: int | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = await self.http.post(url, json=payload)
            except httpx.HTTPError as exc:
                last_exception = exc
                logger.warning(
                    "[inference] model=%s attempt %s/%s transport error=%s",
                    model,
                    attempt,
                    self.max_attempts,
                    exc,
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.base_backoff_seconds * (2 ** (attempt - 1)))
                    continue
                break

            last_status = response.status_code
            if response.status_code < 400:
                try:
                    return response.json()
                except ValueError as exc:
                    raise RemoteClassifierError(f"Malformed response from {model}") from exc

            # 503 is also what the hosted API returns while a model is loading.
            if response.status_code in TRANSIENT_STATUS_CODES and attempt < self.max_attempts:
                retry_after = response.headers.get("Retry-After")
                if retry_after and retry_after.isdigit():
                    wait_seconds = float(retry_after)
                else:
                    wait_seconds = self.base_backoff_seconds * (2 ** (attempt - 1))
                logger.info(
                    "[inference] model=%s transient status=%s, retrying after %.1fs",
                    model,
                    response.status_code,
                    wait_seconds,
                )
                await asyncio.sleep(wait_seconds)
                continue

            logger.warning(
                "[inference] model=%s non-retriable status=%s on attempt %s",
                model,
                response.status_code,
                attempt,
            )
            break

        if last_status is not None:
            raise RemoteClassifierError(f"Inference request to {model} failed with status {last_status}")
        raise RemoteClassifierError(f"Inference request to {model} failed") from last_exception
