import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemeflow.config import settings
from schemeflow.database import (
    check_storage_health,
    close_storage_connection,
    connect_to_storage,
    get_storage,
)
from schemeflow.routes import (
    auth_router,
    patients_router,
    approvals_router,
    stats_router,
    schemes_router,
    eligibility_router,
)
from schemeflow.services.scheme_service import SchemeService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_storage()
    if settings.seed_default_schemes:
        await SchemeService(get_storage().schemes).seed_defaults()
    logger.info(f"{settings.app_name} started")
    yield
    # Shutdown
    await close_storage_connection()
    logger.info(f"{settings.app_name} stopped")


app = FastAPI(
    title="SchemeFlow API",
    description="Patient registration, scheme recommendation and multi-level approval workflow",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid request"))
    return JSONResponse(status_code=422, content={"message": "; ".join(problems) or "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/")
async def root():
    return {"message": "SchemeFlow API is running", "version": settings.app_version}


app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(patients_router, prefix=settings.api_prefix)
app.include_router(approvals_router, prefix=settings.api_prefix)
app.include_router(stats_router, prefix=settings.api_prefix)
app.include_router(schemes_router, prefix=settings.api_prefix)
app.include_router(eligibility_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    storage_ok = await check_storage_health()
    return {
        "status": "healthy" if storage_ok else "degraded",
        "service": "schemeflow-backend",
        "storage": get_storage().backend
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("schemeflow.main:app", host=settings.host, port=settings.port, reload=settings.debug)
