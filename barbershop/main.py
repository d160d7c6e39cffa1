import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import SessionLocal
from .redis_client import redis_client
from .routers import appointments, services, slots, users, waitlist
from .services.errors import BookingError
from .services.reminder_checker import reminder_checker_loop

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    reminder_task = asyncio.create_task(reminder_checker_loop())
    try:
        yield
    finally:
        reminder_task.cancel()
        try:
            await reminder_task
        except asyncio.CancelledError:
            pass


app = FastAPI(title="Barbershop Booking API", lifespan=lifespan)

app.include_router(slots.router)
app.include_router(appointments.router)
app.include_router(waitlist.router)
app.include_router(services.router)
app.include_router(users.router)


# ===== Error handlers =====

@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_errors(exc), "code": "VALIDATION_ERROR"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server error", "code": "INTERNAL_ERROR"},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


# ===== Health =====

@app.get("/health")
def health():
    db_ok = True
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        db_ok = False
    finally:
        db.close()

    try:
        redis_ok = bool(redis_client.ping())
    except (RedisError, OSError):
        redis_ok = False

    return {"database": db_ok, "redis": redis_ok}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "barbershop.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
