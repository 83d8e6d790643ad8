from typing import Any

from pydantic import BaseModel

from app.core.durations import DURATION_UNITS
from app.core.validation import ValidatableEntity

STAGE_STATUSES = ("NEW", "PLANNED", "DELETED")

# request field -> ConstructionStage attribute
FIELD_COLUMNS = {
    "name": "name",
    "startDate": "start_date",
    "endDate": "end_date",
    "durationUnit": "duration_unit",
    "color": "color",
    "externalId": "external_id",
    "status": "status",
}


class ConstructionStagePayload(ValidatableEntity):
    name: Any = None
    startDate: Any = None
    endDate: Any = None
    duration: Any = None
    durationUnit: Any = None
    color: Any = None
    externalId: Any = None
    status: Any = None


class ConstructionStageCreate(ConstructionStagePayload):
    def rules(self) -> dict[str, str]:
        return {
            "name": "required|max:255",
            "startDate": "required|date|isISO8601",
            "endDate": "date|isISO8601|after:{startDate}",
            "durationUnit": "in:" + ",".join(DURATION_UNITS),
            "color": "hex_color",
            "externalId": "max:255",
            "status": "required|in:" + ",".join(STAGE_STATUSES),
        }


class ConstructionStageUpdate(ConstructionStagePayload):
    def rules(self) -> dict[str, str]:
        return {
            "name": "max:255",
            "startDate": "date|isISO8601",
            "endDate": "date|isISO8601|after:{startDate}",
            "durationUnit": "in:" + ",".join(DURATION_UNITS),
            "color": "hex_color",
            "externalId": "max:255",
            "status": "in:" + ",".join(STAGE_STATUSES),
        }


class ConstructionStageOut(BaseModel):
    id: int
    name: str
    startDate: str
    endDate: str | None
    duration: float | None
    durationUnit: str
    color: str | None
    externalId: str | None
    status: str
