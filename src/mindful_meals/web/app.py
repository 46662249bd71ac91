"""
Mindful Meals API - FastAPI application.

Every error response has the shape {"error": "<message>"}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from mindful_meals import __version__
from mindful_meals.config import Settings, get_settings
from mindful_meals.web.ingredient_routes import router as ingredient_router
from mindful_meals.web.profile_routes import router as profile_router

logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Something broke!"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API application.

    Loads settings eagerly so missing Supabase configuration stops the server
    at startup (MissingConfiguration) rather than on the first request.
    """
    settings = settings or get_settings()

    app = FastAPI(title="Mindful Meals", version=__version__)

    # CORS for the mobile/web client dev servers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(profile_router, prefix="/api")
    app.include_router(ingredient_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "message": "Server is running"}

    @app.get("/api")
    async def api_root():
        return {"message": "Welcome to Mindful Meals API"}

    logger.info(f"Mindful Meals API configured ({settings.app_env})")
    return app
