from src.core.logger import get_logger
from src.extraction.extractors.fallback import extract_with_fallback, labelled_location
from src.extraction.extractors.filters import same_phrase
from src.extraction.extractors.normalize import normalize_field
from src.extraction.pipeline.types import REQUIRED_FIELDS, ExtractionResult

logger = get_logger(__name__)

# Lowest precedence first; later sources overwrite earlier ones field by field.
MERGE_PRECEDENCE: dict[str, int] = {
    "fallback": 0,
    "pattern": 1,
    "remote": 2,
}


def fold_extractions(
    layers: list[tuple[str, ExtractionResult]],
    *,
    organization_claims_location: bool = True,
) -> ExtractionResult:
    """Fold partial results in precedence order.

    Each candidate is normalized before it can overwrite anything, so a
    rejected remote value leaves the lower-precedence value in place.
    """
    merged: ExtractionResult = {}
    sources: dict[str, str] = {}
    for source, partial in sorted(layers, key=lambda layer: MERGE_PRECEDENCE[layer[0]]):
        for field_name in REQUIRED_FIELDS:
            if field_name not in partial:
                continue
            value = normalize_field(field_name, partial[field_name])
            if value is None:
                continue
            merged[field_name] = value
            sources[field_name] = source

    # One phrase fills one slot: a newly found organization keeps it.
    if organization_claims_location and same_phrase(merged.get("location"), merged.get("youth_house")):
        merged.pop("location")
        sources.pop("location", None)

    logger.debug("[merge] field sources=%s", sources)
    return merged


def merge_extractions(
    pattern_result: ExtractionResult,
    remote_result: ExtractionResult,
    raw_text: str,
    *,
    known_organization: str | None = None,
) -> ExtractionResult:
    """Combine rule and remote output, backfilling gaps with the fallback pass.

    The fallback pass runs on every call, whether or not remote extraction
    ran, so the merged result never has fewer fields than pattern matching
    alone would give.

    A phrase found as both location and organization is kept as the location
    when the running record already names an organization, or when the text
    labels it explicitly ("Location: ...").
    """
    claims_location = not known_organization and labelled_location(raw_text) is None
    return fold_extractions(
        [
            ("fallback", extract_with_fallback(raw_text)),
            ("pattern", pattern_result),
            ("remote", remote_result),
        ],
        organization_claims_location=claims_location,
    )
