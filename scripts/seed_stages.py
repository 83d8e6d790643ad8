# seed_stages.py
from sqlalchemy.orm import Session

from app.api.construction_stages import apply_validated
from app.core.validation import Validator
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.construction_stage import ConstructionStage
from app.schemas.construction_stage import ConstructionStageCreate


STAGES = [
    {
        "name": "Site preparation",
        "startDate": "2026-01-05T08:00:00Z",
        "endDate": "2026-01-23T17:00:00Z",
        "durationUnit": "DAYS",
        "color": "#8d6e63",
        "externalId": "SP-001",
        "status": "PLANNED",
    },
    {
        "name": "Foundations",
        "startDate": "2026-01-26T08:00:00Z",
        "endDate": "2026-03-06T17:00:00Z",
        "durationUnit": "WEEKS",
        "color": "#607d8b",
        "externalId": "FD-002",
        "status": "PLANNED",
    },
    {
        "name": "Framing",
        "startDate": "2026-03-09T08:00:00+01:00",
        "durationUnit": "HOURS",
        "color": "fa0",
        "status": "NEW",
    },
]


def get_or_create_stage(db: Session, payload: dict) -> ConstructionStage:
    s = db.query(ConstructionStage).filter(ConstructionStage.name == payload["name"]).one_or_none()
    if s:
        return s

    outcome = Validator(payload).validate(ConstructionStageCreate.from_payload(payload))
    if outcome.fails:
        raise SystemExit(f"Seed stage {payload['name']!r} is invalid: {outcome.errors}")

    s = ConstructionStage(status="NEW")
    apply_validated(s, outcome.validated)
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


def main():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        print("Seeded construction stages:")
        for payload in STAGES:
            s = get_or_create_stage(db, payload)
            print(f"  {s.id}: {s.name} ({s.status}, duration={s.duration} {s.duration_unit})")

        print("\nNext API steps:")
        print("  GET   /constructionStages")
        print("  PATCH /constructionStages/<id>  {\"status\": \"PLANNED\"}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
