import logging
import traceback
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from surveydesk import __version__
from surveydesk.api import analytics, auth, responses, surveys
from surveydesk.core.config import settings
from surveydesk.core.errors import SurveyDeskError
from surveydesk.core.storage import get_store
from surveydesk.services.repository import ensure_admin

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def init_store(app: FastAPI):
    """Open the document store and seed the admin account if configured."""
    store = app.dependency_overrides.get(get_store, get_store)()
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        admin = ensure_admin(store, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME)
        if admin.role == "admin":
            logger.info(f"Admin account ready: {admin.email}")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the store on startup."""
    init_store(app)
    yield


# Disable API docs in production
docs_url = "/docs" if settings.ENVIRONMENT != "production" else None
redoc_url = "/redoc" if settings.ENVIRONMENT != "production" else None

app = FastAPI(
    title=settings.APP_NAME,
    description="SurveyDesk - survey builder, cart survey and response analytics API",
    version=__version__,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url,
)


# Exception handlers - always return JSON {"detail": ...}
@app.exception_handler(SurveyDeskError)
async def domain_exception_handler(request, exc: SurveyDeskError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error("Unhandled exception: %s\n%s", exc, traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal error: {str(exc)}"},
    )


allowed_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in allowed_origins:
    allowed_origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "surveydesk-api", "version": __version__}


# Include routers
app.include_router(auth.router)
app.include_router(surveys.router)
app.include_router(analytics.router)
app.include_router(responses.router)
