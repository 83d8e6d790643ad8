from datetime import datetime

from app.core.durations import calculate_duration
from app.models.construction_stage import ConstructionStage


def stage_payload(**overrides) -> dict:
    payload = {
        "name": "Foundations",
        "startDate": "2026-02-01T08:00:00Z",
        "endDate": "2026-02-15T08:00:00Z",
        "durationUnit": "DAYS",
        "color": "#607d8b",
        "externalId": "FD-002",
        "status": "NEW",
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


def create_stage(
    db,
    name: str = "Site preparation",
    start_date: datetime = datetime(2026, 1, 5, 8, 0, 0),
    end_date: datetime | None = datetime(2026, 1, 12, 8, 0, 0),
    duration_unit: str = "DAYS",
    status: str = "NEW",
    color: str | None = None,
    external_id: str | None = None,
) -> ConstructionStage:
    s = ConstructionStage(
        name=name,
        start_date=start_date,
        end_date=end_date,
        duration=calculate_duration(start_date, end_date, duration_unit),
        duration_unit=duration_unit,
        status=status,
        color=color,
        external_id=external_id,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s
