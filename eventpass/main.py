# eventpass/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from eventpass.api.v1.api import api_router
from eventpass.api.v1.endpoints import dev, health
from eventpass.core.config import settings
from eventpass.core.exceptions import EventPassError, UpstreamError
from eventpass.core.limiter import limiter
from eventpass.db.session import engine

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(f"EventPass starting up (env={settings.ENV})")
    yield
    logger.info("EventPass shutting down...")
    engine.dispose()


app = FastAPI(
    title="EventPass",
    version="1.0.0",
    description="""
        Multi-tenant event registration and ticketing.

        * **Registration**: free tickets are issued at once, paid ones after payment
        * **Tickets**: opaque tokens rendered as QR codes, looked up at the door
        * **Check-in**: one scan per ticket inside the event's check-in window
        * **Admin**: tenant-scoped events, ticket types, theme and reminders

        Admin endpoints accept the `auth-token` session cookie or an
        `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(EventPassError)
async def eventpass_error_handler(request: Request, exc: EventPassError):
    if isinstance(exc, UpstreamError):
        # Provider details stay in the logs
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        content = {"error": exc.public_message, "code": exc.code}
    else:
        content = {"error": exc.message, "code": exc.code, **exc.extra}
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(
            {"error": "Invalid input data", "details": exc.errors()}
        ),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,  # Session cookie
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(api_router, prefix="/api/v1")

if not settings.IS_PRODUCTION:
    app.include_router(dev.router)


@app.get("/")
def read_root():
    return {"status": "EventPass is running"}
