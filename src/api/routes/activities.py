from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from src.db.session import get_session_factory
from src.extraction.pipeline.types import ActivityRecord
from src.schemas.activity import ActivityAppendResponse, ActivityCreate, ActivityRead, ConnectionStatus
from src.services.activity_service import append_activity, list_recent_activities, validate_connection

router = APIRouter(tags=["activities"])


@router.post("/activities", response_model=ActivityAppendResponse)
def create_activity(
    payload: ActivityCreate,
    session_factory: sessionmaker = Depends(get_session_factory),
):
    record = ActivityRecord.from_partial(payload.model_dump(exclude_none=True))
    result = append_activity(record, session_factory=session_factory)
    if not result.success:
        return JSONResponse(
            status_code=500,
            content=ActivityAppendResponse(success=False, error=result.error).model_dump(),
        )
    return ActivityAppendResponse(
        success=True,
        row_number=result.row_number,
        data=ActivityCreate(**record.as_dict()),
    )


@router.get("/activities/recent", response_model=list[ActivityRead])
def get_recent_activities(
    limit: int = Query(default=10, ge=1, le=100),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> list[ActivityRead]:
    rows = list_recent_activities(limit, session_factory=session_factory)
    return [ActivityRead.model_validate(row) for row in rows]


@router.get("/activities/connection", response_model=ConnectionStatus)
def get_connection_status(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> ConnectionStatus:
    ok, error = validate_connection(session_factory=session_factory)
    return ConnectionStatus(success=ok, error=error)
