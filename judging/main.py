import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# IMPORT ROUTERS
from judging.routers.health import router as health_router
from judging.routers.events import router as events_router
from judging.routers.candidates import router as candidates_router
from judging.routers.scores import router as scores_router
from judging.routers.results import router as results_router
from judging.routers.deliberations import router as deliberations_router
from judging.routers.roster import router as roster_router
from judging.routers.common import repository_exception_handler, validation_exception_handler
from judging.config import settings
from judging.core.dependencies import get_store
from judging.core.exceptions import RepositoryException
from judging.logging_config import configure_logging
load_dotenv()

logger = structlog.get_logger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Audition Events"},
    {"name": "Candidates"},
    {"name": "Scores"},
    {"name": "Results"},
    {"name": "Deliberations"},
    {"name": "Roster"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RepositoryException, repository_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)         # Health
app.include_router(events_router)         # Audition Events
app.include_router(candidates_router)     # Candidates
app.include_router(scores_router)         # Scores
app.include_router(results_router)        # Results
app.include_router(deliberations_router)  # Deliberations
app.include_router(roster_router)         # Roster


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging()
    store = get_store()
    if hasattr(store, "ensure_schema"):
        store.ensure_schema()
    logger.info(
        "app_started",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        store_backend=settings.STORE_BACKEND,
        cache_enabled=settings.CACHE_ENABLED,
        transfer_policy=settings.TRANSFER_POLICY,
        ranking_mode=settings.RANKING_MODE,
    )


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("app_stopped", app=settings.APP_NAME)


def main():
    import uvicorn
    uvicorn.run(
        "judging.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )


# RUN WITH UVICORN
if __name__ == "__main__":
    main()
