"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from realestate_api.config import get_settings
from realestate_api.api import router as api_router
from realestate_api.calculations.validation import NOT_FINITE_MESSAGE, ValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Real estate investment calculators",
    version=settings.version,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


def describe_request_errors(errors) -> str:
    """Build a client-facing message from pydantic request validation errors."""
    if any(error.get("type") == "json_invalid" for error in errors):
        return "Request body is not valid JSON"

    number_fields = []
    date_fields = []
    for error in errors:
        loc = error.get("loc", ())
        if len(loc) < 2:
            continue
        # loc is ("body", field, ...) for flat request bodies
        field = str(loc[1])
        target = date_fields if error.get("type", "").startswith("date") else number_fields
        if field not in number_fields + date_fields:
            target.append(field)

    if not number_fields and not date_fields:
        return "Request body must be a JSON object"

    problems = []
    if number_fields:
        problems.append(f"Fields must be finite JSON numbers ({', '.join(number_fields)})")
    if date_fields:
        problems.append(f"Fields must be ISO dates, YYYY-MM-DD ({', '.join(date_fields)})")
    return "; ".join(problems)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Return calculation input errors as 400 responses."""
    logger.warning(f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(OverflowError)
async def overflow_error_handler(request: Request, exc: OverflowError):
    """Integer inputs whose results do not fit in a float are client errors."""
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": NOT_FINITE_MESSAGE})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Return malformed request bodies as 400 responses."""
    message = describe_request_errors(exc.errors())
    logger.warning(f"Rejected {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/")
async def root():
    """Service status."""
    return {"status": "ok", "service": settings.service_name}


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


def run():
    """Start the API server with uvicorn."""
    import uvicorn

    logger.info(f"Real Estate API listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
