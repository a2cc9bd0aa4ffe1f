from fastapi import APIRouter, Depends

from src.core.errors import VolunteerLogError
from src.dialogue.controller import next_question
from src.extraction.extractors.llm import RemoteClassifier
from src.extraction.pipeline.runner import submit_utterance
from src.schemas.activity import ExtractRequest, ExtractResponse, FollowUpRequest, FollowUpResponse

router = APIRouter(tags=["extract"])


def get_remote_classifier() -> RemoteClassifier:
    return RemoteClassifier()


@router.post("/extract", response_model=ExtractResponse)
async def extract_activity(
    payload: ExtractRequest,
    classifier: RemoteClassifier = Depends(get_remote_classifier),
) -> ExtractResponse:
    if not payload.text.strip():
        raise VolunteerLogError("Text is required", status_code=400)
    data = await submit_utterance(payload.text, payload.conversation_history, classifier=classifier)
    return ExtractResponse(success=True, data=dict(data))


@router.put("/extract/follow-up", response_model=FollowUpResponse)
def follow_up_question(payload: FollowUpRequest) -> FollowUpResponse:
    known = {key: value for key, value in payload.extracted_data.items() if value is not None}
    return FollowUpResponse(success=True, question=next_question(payload.missing_fields, known))
