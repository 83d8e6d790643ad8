import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.construction_stages import router as construction_stages_router
from app.api.health import router as health_router
from app.api.root import router as root_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.validation import ConfigurationError

setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(title="Construction Stages API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigurationError)
def handle_configuration_error(request: Request, exc: ConfigurationError):
    # a broken rule spec is a defect, never a client error
    logger.error(
        "Rule configuration error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Server error"})


app.include_router(root_router)
app.include_router(health_router)
app.include_router(construction_stages_router)
