from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "Construction Stages API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }
