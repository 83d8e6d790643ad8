from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    pass

# Register the stage table on Base.metadata (create_all / Alembic)
from app.models import *  # noqa
