from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.db.session import Base


class VolunteerActivity(Base):
    """One logged volunteering activity.

    Cells are stored as strings in the fixed store column order; ``id`` is the
    row's position in the log.
    """

    __tablename__ = "volunteer_activities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str] = mapped_column(String(100), nullable=False)
    activity_type: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_kids: Mapped[str] = mapped_column(String(10), nullable=False)
    youth_house: Mapped[str] = mapped_column(String(255), nullable=False)
    logged_at: Mapped[str] = mapped_column(String(40), nullable=False)
