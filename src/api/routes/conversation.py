from fastapi import APIRouter, Depends

from src.dialogue.controller import GREETING, NEW_ACTIVITY_PROMPT
from src.schemas.conversation import (
    ConversationClosed,
    ConversationStarted,
    MessageRequest,
    MessageResponse,
    SaveResponse,
)
from src.services.conversation_service import ConversationService, get_conversation_service

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post("", response_model=ConversationStarted)
def start_conversation(
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationStarted:
    conversation = service.start()
    return ConversationStarted(conversation_id=conversation.conversation_id, message=GREETING)


@router.post("/{conversation_id}/messages", response_model=MessageResponse)
async def post_message(
    conversation_id: str,
    payload: MessageRequest,
    service: ConversationService = Depends(get_conversation_service),
) -> MessageResponse:
    outcome = await service.submit(conversation_id, payload.text)
    return MessageResponse(
        message=outcome.message,
        data=dict(outcome.data),
        missing_fields=outcome.missing_fields,
        is_complete=outcome.is_complete,
    )


@router.post("/{conversation_id}/save", response_model=SaveResponse)
async def save_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
) -> SaveResponse:
    outcome = await service.save(conversation_id)
    return SaveResponse(
        success=outcome.success,
        message=outcome.message,
        row_number=outcome.row_number,
        error=outcome.error,
    )


@router.post("/{conversation_id}/reset", response_model=ConversationClosed)
def reset_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationClosed:
    conversation = service.reset(conversation_id)
    return ConversationClosed(conversation_id=conversation.conversation_id, message=NEW_ACTIVITY_PROMPT)


@router.delete("/{conversation_id}", response_model=ConversationClosed)
def end_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationClosed:
    service.end(conversation_id)
    return ConversationClosed(conversation_id=conversation_id, message="Conversation ended.")
