from collections.abc import Sequence

from src.core.logger import get_logger
from src.extraction.extractors.hardcoded import extract_from_utterance
from src.extraction.extractors.llm import RemoteClassifier
from src.extraction.pipeline.merge import merge_extractions
from src.extraction.pipeline.types import ExtractionResult

logger = get_logger(__name__)


async def submit_utterance(
    text: str,
    prior_turns: Sequence[str] = (),
    *,
    classifier: RemoteClassifier | None = None,
    known_organization: str | None = None,
) -> ExtractionResult:
    """Extract one user turn into a merged partial activity.

    Rule extraction is synchronous; the remote classifier is the only await
    and degrades to an empty result on any failure. ``known_organization`` is
    the organization already on the running record, if any.
    """
    # 1) Deterministic rules over the raw utterance.
    pattern_result = extract_from_utterance(text, organization_known=bool(known_organization))

    # 2) Best-effort remote extraction.
    classifier = classifier or RemoteClassifier()
    remote_result = await classifier.classify(text)

    # 3) Precedence merge with the fallback backfill and normalization.
    merged = merge_extractions(pattern_result, remote_result, text, known_organization=known_organization)
    logger.info(
        "[extract] prior_turns=%s pattern=%s remote=%s merged=%s",
        len(prior_turns),
        sorted(pattern_result),
        sorted(remote_result),
        sorted(merged),
    )
    return merged
