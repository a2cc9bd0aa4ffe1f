from pydantic import BaseModel, Field


class ActivityCreate(BaseModel):
    name: str | None = None
    activity_type: str | None = None
    location: str | None = None
    number_of_kids: int | None = None
    youth_house: str | None = None
    date: str | None = None


class ActivityRead(BaseModel):
    id: int
    name: str
    date: str
    activity_type: str
    location: str
    number_of_kids: str
    youth_house: str
    logged_at: str

    model_config = {"from_attributes": True}


class ActivityAppendResponse(BaseModel):
    success: bool
    row_number: int | None = None
    data: ActivityCreate | None = None
    error: str | None = None


class ConnectionStatus(BaseModel):
    success: bool
    error: str | None = None


class ExtractRequest(BaseModel):
    text: str = ""
    conversation_history: list[str] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    success: bool
    data: dict[str, str | int]


class FollowUpRequest(BaseModel):
    missing_fields: list[str] = Field(default_factory=list)
    extracted_data: dict[str, str | int | None] = Field(default_factory=dict)


class FollowUpResponse(BaseModel):
    success: bool
    question: str
