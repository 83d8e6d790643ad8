import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.durations import calculate_duration, format_utc, parse_iso8601
from app.core.validation import ValidationOutcome, Validator
from app.db.session import get_db
from app.models.construction_stage import ConstructionStage
from app.schemas.construction_stage import (
    FIELD_COLUMNS,
    ConstructionStageCreate,
    ConstructionStageOut,
    ConstructionStageUpdate,
)
from app.schemas.pagination import PaginatedResponse, PaginationMeta
from app.schemas.validation import ValidationErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/constructionStages", tags=["construction-stages"])


def to_out(s: ConstructionStage) -> ConstructionStageOut:
    return ConstructionStageOut(
        id=s.id,
        name=s.name,
        startDate=format_utc(s.start_date),
        endDate=format_utc(s.end_date),
        duration=s.duration,
        durationUnit=s.duration_unit,
        color=s.color,
        externalId=s.external_id,
        status=s.status,
    )


def get_stage_or_404(db: Session, stage_id: int) -> ConstructionStage:
    s = db.get(ConstructionStage, stage_id)
    if not s:
        raise HTTPException(status_code=404, detail="Construction stage not found")
    return s


def raise_if_failed(outcome: ValidationOutcome) -> None:
    if outcome.fails:
        raise HTTPException(
            status_code=422,
            detail={"message": "Validation error", "errors": outcome.errors},
        )


def apply_validated(s: ConstructionStage, validated: dict[str, Any]) -> None:
    for key, value in validated.items():
        column = FIELD_COLUMNS[key]
        if value is None and not ConstructionStage.__table__.c[column].nullable:
            # NOT NULL column: a null from PATCH leaves it as is
            continue
        if column in ("start_date", "end_date"):
            value = parse_iso8601(value)
        setattr(s, column, value)

    if s.duration_unit is None:
        s.duration_unit = "DAYS"
    s.duration = calculate_duration(s.start_date, s.end_date, s.duration_unit)


@router.get("")
def list_construction_stages(
    status: str | None = Query(default=None, description="Filter by status (NEW, PLANNED, DELETED)"),
    limit: int = Query(default=100, ge=1, le=500, description="Maximum number of results"),
    offset: int = Query(default=0, ge=0, description="Number of results to skip"),
    include_pagination: bool = Query(default=False, description="Include pagination metadata"),
    db: Session = Depends(get_db),
):
    """
    List construction stages ordered by id.

    Use ?include_pagination=true to get pagination metadata.
    """
    query = db.query(ConstructionStage)

    if status:
        query = query.filter(ConstructionStage.status == status)

    total = query.count()

    stages = query.order_by(ConstructionStage.id.asc()).offset(offset).limit(limit).all()
    items = [to_out(s) for s in stages]

    if include_pagination:
        return PaginatedResponse[ConstructionStageOut](
            items=items,
            pagination=PaginationMeta(
                total=total,
                limit=limit,
                offset=offset,
                has_more=(offset + len(items) < total),
            ),
        )
    return items


@router.get("/{stage_id}", response_model=ConstructionStageOut)
def get_construction_stage(
    stage_id: int,
    db: Session = Depends(get_db),
):
    return to_out(get_stage_or_404(db, stage_id))


@router.post(
    "",
    response_model=ConstructionStageOut,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ValidationErrorResponse}},
)
def create_construction_stage(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    data = ConstructionStageCreate.from_payload(payload)
    outcome = Validator(payload).validate(data)
    raise_if_failed(outcome)

    s = ConstructionStage(status="NEW")
    apply_validated(s, outcome.validated)

    db.add(s)
    db.commit()
    db.refresh(s)

    logger.info("Created construction stage %s", s.id)
    return to_out(s)


@router.patch(
    "/{stage_id}",
    response_model=ConstructionStageOut,
    responses={422: {"model": ValidationErrorResponse}},
)
def update_construction_stage(
    stage_id: int,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    """
    Partial update. Only the fields sent by the client are validated and
    written; the stored stage fills in the rest, so "after:{startDate}" on
    endDate compares against the stored start date when none is sent.
    """
    s = get_stage_or_404(db, stage_id)

    current = to_out(s).model_dump()
    data = ConstructionStageUpdate.from_payload({**current, **payload})

    outcome = Validator(payload).validate(data, only_request_fields=True)
    raise_if_failed(outcome)

    # validated may carry the stored values too; write back only what was sent
    changes = {k: v for k, v in outcome.validated.items() if k in payload}

    if changes:
        apply_validated(s, changes)
        db.commit()
        db.refresh(s)
        logger.info("Updated construction stage %s: %s", s.id, ", ".join(changes))

    return to_out(s)


@router.delete("/{stage_id}")
def delete_construction_stage(
    stage_id: int,
    db: Session = Depends(get_db),
):
    """Soft delete: the row stays, its status becomes DELETED."""
    s = get_stage_or_404(db, stage_id)
    s.status = "DELETED"

    db.commit()

    logger.info("Deleted construction stage %s", s.id)
    return {"message": "Deleted successfully"}
