from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
import uvicorn
import os
import time
import uuid
from dotenv import load_dotenv
from estate_enquiry.api import router
from estate_enquiry.database import init_db, close_db
from estate_enquiry.utils.create_admin import create_admin_user
from estate_enquiry.utils.tour_status_job import complete_past_tours
from estate_enquiry.config.logging import configure_logging, get_logger, set_request_id, clear_request_id

load_dotenv()

CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:3000")

configure_logging()
logger = get_logger(__name__)

scheduler = AsyncIOScheduler()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - handles startup and shutdown"""

    if os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true":
        await init_db()

    await create_admin_user()

    tour_hour = int(os.getenv("TOUR_STATUS_HOUR", 1))
    tour_mins = int(os.getenv("TOUR_STATUS_MINUTE", 0))

    scheduler.add_job(
        complete_past_tours,
        CronTrigger(hour=tour_hour, minute=tour_mins),
        id="complete_past_tours",
        name="Mark confirmed tours in the past as completed",
        replace_existing=True
    )

    scheduler.start()
    logger.info(
        "APScheduler started",
        extra={"tour_status_schedule": f"Daily at {tour_hour:02d}:{tour_mins:02d}"}
    )

    yield

    logger.info("Shutting down application")
    scheduler.shutdown()
    await close_db()

app = FastAPI(title="Property Enquiry API", lifespan=lifespan)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log HTTP requests and responses with unique request IDs."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)

    start_time = time.time()
    try:
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        if response.status_code < 400:
            log_level = logger.info
        elif response.status_code < 500:
            log_level = logger.warning
        else:
            log_level = logger.error

        log_level(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            }
        )

        return response
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            "Request failed with exception",
            exc_info=True,
            extra={
                "method": request.method,
                "path": request.url.path,
                "duration_ms": round(duration_ms, 2),
                "error": str(e),
            }
        )
        raise
    finally:
        clear_request_id()


# The enquiry forms read "error" (and "details") from failed responses
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "error": f"{field}: {message}" if field else message,
            "details": [f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in errors],
        }
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=[CLIENT_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(router)

@app.get("/health")
async def health():
    return {"status": "ok"}

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8080)
