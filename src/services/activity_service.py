from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import Engine, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from src.core.errors import IncompleteActivityError
from src.core.logger import get_logger
from src.db.session import Base, SessionLocal, engine as default_engine
from src.dialogue.slots import missing_fields
from src.extraction.pipeline.types import ROW_COLUMNS, ActivityRecord
from src.models.activity import VolunteerActivity

logger = get_logger(__name__)


@dataclass(slots=True)
class AppendResult:
    success: bool
    row_number: int | None = None
    error: str | None = None


def init_db(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or default_engine)


def append_activity(
    record: ActivityRecord,
    *,
    session_factory: sessionmaker | None = None,
    logged_at: datetime | None = None,
) -> AppendResult:
    """Append one complete record to the activity log.

    Store failures are returned, never raised, so the caller can keep the
    record and offer a retry. An incomplete record raises
    ``IncompleteActivityError``.
    """
    missing = missing_fields(record)
    if missing:
        raise IncompleteActivityError(missing)

    factory = session_factory or SessionLocal
    stamp = logged_at or datetime.now(timezone.utc)
    row = dict(zip(ROW_COLUMNS, record.to_row(stamp)))

    try:
        with factory() as db:
            activity = VolunteerActivity(**row)
            db.add(activity)
            db.commit()
            row_number = activity.id
    except SQLAlchemyError as exc:
        logger.error("[activity-store] append failed for name=%r: %s", record.name, exc)
        return AppendResult(success=False, error=str(exc))

    logger.info("[activity-store] appended row=%s name=%r", row_number, record.name)
    return AppendResult(success=True, row_number=row_number)


def list_recent_activities(
    limit: int = 10,
    *,
    session_factory: sessionmaker | None = None,
) -> list[VolunteerActivity]:
    factory = session_factory or SessionLocal
    stmt = select(VolunteerActivity).order_by(VolunteerActivity.id.desc()).limit(max(1, min(limit, 100)))
    with factory() as db:
        return list(db.scalars(stmt))


def validate_connection(*, session_factory: sessionmaker | None = None) -> tuple[bool, str | None]:
    factory = session_factory or SessionLocal
    try:
        with factory() as db:
            db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("[activity-store] connection check failed: %s", exc)
        return False, str(exc)
    return True, None
