"""
FastAPI app assembly: logging, middleware, exception handlers and router wiring.
"""
import logging
import time
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse

from contact_manager.api.countries import api_router as countries_api_router
from contact_manager.api.countries import router as countries_router
from contact_manager.api.persons import api_router as persons_api_router
from contact_manager.api.persons import router as persons_router
from contact_manager.exceptions import DuplicateError, FormatError, NotFoundError, ValidationError
from contact_manager.utils.settings import get_settings

# Configure logging
LOG_LEVEL_NAME = get_settings().log_level
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Contact Manager",
    description="Persons and countries directory with CSV/Excel/PDF export and Excel country import.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."
GLOBAL_HEADER_NAME = "X-Global-Header"
GLOBAL_HEADER_VALUE = "Global-Value"


# Middleware: turn unhandled errors into a plain 500 response.
# Registered first so it sits innermost, under the logging and header middleware.
@app.middleware("http")
async def handle_unexpected_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        inner = e.__cause__ or e
        logger.error(
            "unhandled_exception: path=%s type=%s message=%s",
            request.url.path,
            type(inner).__name__,
            inner,
            exc_info=True,
        )
        return PlainTextResponse(UNEXPECTED_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# Middleware: one log line per request
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "http_request: method=%s path=%s status=%d elapsed_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# Middleware: header stamped on every response
@app.middleware("http")
async def add_global_header(request: Request, call_next):
    response = await call_next(request)
    response.headers[GLOBAL_HEADER_NAME] = GLOBAL_HEADER_VALUE
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"detail": exc.errors}, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


@app.exception_handler(DuplicateError)
async def duplicate_error_handler(request: Request, exc: DuplicateError):
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_409_CONFLICT)


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(FormatError)
async def format_error_handler(request: Request, exc: FormatError):
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST)


app.include_router(persons_router)
app.include_router(persons_api_router)
app.include_router(countries_router)
app.include_router(countries_api_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "contact-manager"}
