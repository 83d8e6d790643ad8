from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ConstructionStage(Base):
    __tablename__ = "construction_stages"
    __table_args__ = (
        CheckConstraint(
            "status IN ('NEW','PLANNED','DELETED')",
            name="ck_construction_stages_status",
        ),
        CheckConstraint(
            "duration_unit IN ('HOURS','DAYS','WEEKS')",
            name="ck_construction_stages_duration_unit",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # naive UTC
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    duration: Mapped[float | None] = mapped_column(Float, nullable=True)
    duration_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="DAYS")

    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    external_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="NEW", index=True)
