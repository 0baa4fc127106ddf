# Precision Baker API Main Entry Point
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from . import __version__
from .settings import settings
from .rate_limit import limiter
from .routers.ready import router as ready_router
from .routers.social_links import router as social_links_router
from .routers.recipes import router as recipes_router
from .routers.conversion_history import router as history_router
from .routers.units import router as units_router
from .routers.ai import router as ai_router
from .routers.dev import router as dev_router

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("precision_baker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_on_startup:
        from .repository import SqlRepository, get_memory_repository
        from .seed import seed_defaults

        if settings.storage_backend == "memory":
            get_memory_repository()
        else:
            from .db import create_schema, session_factory

            create_schema()
            db = session_factory()()
            try:
                seed_defaults(SqlRepository(db))
            finally:
                db.close()
        logger.info("Startup seeding complete (backend=%s)", settings.storage_backend)
    yield


app = FastAPI(title="Precision Baker API", version=__version__, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422."""
    logger.info("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "detail": jsonable_encoder(exc.errors())},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(social_links_router, prefix="/api", tags=["social-links"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(history_router, prefix="/api", tags=["conversion-history"])
app.include_router(units_router, prefix="/api", tags=["units"])
app.include_router(ai_router, prefix="/api", tags=["ai"])
app.include_router(dev_router, prefix="/api", tags=["dev"])
