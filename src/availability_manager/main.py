'''
FastAPI application: lifespan, middleware, error mapping and routers.
'''
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .database.engine import create_db_engine_and_session_factory, create_all_tables, dispose_db_engine
from .common.logger import log
from .common.config import settings
from .common.exceptions import (
    ServiceNotFoundError,
    PatternNotFoundError,
    ExceptionNotFoundError,
    SharableLinkNotFoundError
)
from .api import services, availability, exceptions, public

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    # --- On App Startup ---
    log.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")
    create_db_engine_and_session_factory()
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_all_tables()

    yield # --- Application is now running ---

    # --- On App Shutdown ---
    log.info("Application lifespan shutdown...")
    await dispose_db_engine()


# ---- CREATING THE APP ----
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# --- Add CORS Middleware ---
origins = [
    # URL of local frontend
    "http://localhost",
    "http://localhost:4200",
]

# Extend with environment-specific origins
origins.extend(settings.BACKEND_CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],)
# --- End of CORS Middleware ---

# --- Domain errors -> 404 ---
@app.exception_handler(ServiceNotFoundError)
@app.exception_handler(PatternNotFoundError)
@app.exception_handler(ExceptionNotFoundError)
@app.exception_handler(SharableLinkNotFoundError)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

@app.get("/")
async def health_check():
    return {"status": "ok", "message": f"{settings.APP_NAME} is running"}

app.include_router(services.router)
app.include_router(availability.router)
app.include_router(exceptions.router)
app.include_router(public.router)
