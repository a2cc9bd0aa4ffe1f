from pydantic import BaseModel


class ConversationStarted(BaseModel):
    conversation_id: str
    message: str


class MessageRequest(BaseModel):
    text: str


class MessageResponse(BaseModel):
    message: str
    data: dict[str, str | int]
    missing_fields: list[str]
    is_complete: bool


class SaveResponse(BaseModel):
    success: bool
    message: str
    row_number: int | None = None
    error: str | None = None


class ConversationClosed(BaseModel):
    conversation_id: str
    message: str
