# En main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.exceptions import ReservationError, UnknownError
from app import models  # noqa: F401  registers the tables
from app.database import Base, SessionLocal, engine
from app.routers import admin, auth, availability, blocks, catalog, reservations
from app.services.expiry_sweeper import start_sweeper, stop_sweeper

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Halı Saha Rezervasyon API",
    description="Booking requests, availability and admin approval for turf-field slots",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=600,
)

# Routers
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
app.include_router(availability.router, prefix="/availability", tags=["Availability"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(blocks.router, prefix="/blocks", tags=["Blocks"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


@app.exception_handler(ReservationError)
async def reservation_error_handler(request: Request, exc: ReservationError):
    if exc.status_code >= 500:
        logger.error(f"❌ {exc.error_type} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error_type": exc.error_type, "message": exc.message},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unexpected error on {request.method} {request.url.path}")
    error = UnknownError("An unexpected server error occurred.")
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error_type": error.error_type, "message": error.message},
    )


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    app.state.sweeper = None
    if settings.AUTO_REJECT_ENABLED:
        app.state.sweeper = start_sweeper(SessionLocal, settings.AUTO_REJECT_INTERVAL_MINUTES)


@app.on_event("shutdown")
def shutdown():
    stop_sweeper(getattr(app.state, "sweeper", None))


@app.get("/")
def read_root():
    return {
        "message": "Halı Saha Rezervasyon API is running",
        "version": "1.0.0"
    }

@app.get("/health")
def health_check():
    sweeper = getattr(app.state, "sweeper", None)
    return {
        "status": "healthy",
        "service": "Halı Saha Rezervasyon API",
        "auto_reject_running": bool(sweeper and sweeper.running),
    }
