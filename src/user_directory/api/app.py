"""
FastAPI application for the user directory.

Builds the app with its request pipeline: request/response logging, a
backstop that turns unhandled faults into a uniform JSON error, and
exception handlers for HTTP and validation errors.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_directory import __version__
from user_directory.api.models.users import ErrorResponse
from user_directory.api.users import problem_response, router as users_router
from user_directory.lib.config import Config
from user_directory.lib.security import TokenValidator
from user_directory.services.user_service import REQUIRED_FIELDS_MESSAGE, UserDirectoryService
from user_directory.services.user_store import UserStore, seed_users


logger = logging.getLogger(__name__)

BACKSTOP_MESSAGE = "An unexpected error occurred. Please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"User directory started with {len(app.state.directory_service.store)} users")
    yield
    logger.info("User directory stopped")


def create_app(config: Optional[Config] = None, store: Optional[UserStore] = None) -> FastAPI:
    """
    Create the user directory application.

    Args:
        config: Service configuration; defaults are used when omitted
        store: User store to serve; a fresh store (seeded per config) when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or Config()
    if store is None:
        store = UserStore(seed_users() if config.directory.seed_demo_users else None)

    docs_enabled = config.api.debug
    app = FastAPI(
        title="User Directory API",
        description="CRUD operations over an in-memory user directory",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.directory_service = UserDirectoryService(store)
    app.state.token_validator = TokenValidator(config.auth)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_pipeline(app)
    register_exception_handlers(app)

    app.include_router(users_router)
    register_system_routes(app)

    return app


def register_pipeline(app: FastAPI) -> None:
    """Install the request pipeline middleware. The last one added runs outermost."""

    @app.middleware("http")
    async def error_backstop_middleware(request: Request, call_next):
        """Convert any fault a handler did not catch into a uniform 500 body."""
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled exception occurred.")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(
                    message=BACKSTOP_MESSAGE,
                    statusCode=status.HTTP_500_INTERNAL_SERVER_ERROR,
                ).model_dump(),
            )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        logger.info(f"Incoming Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Outgoing Response: {response.status_code}")
        return response


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors (401, unknown routes, bad methods) as {"message": ...}."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Map validation errors onto the directory's 400/404 responses."""
        errors = exc.errors()

        # A non-integer id never matches a user route.
        for error in errors:
            loc = error.get("loc") or ()
            if loc and loc[0] == "path":
                return JSONResponse(
                    status_code=status.HTTP_404_NOT_FOUND,
                    content={"message": "Not Found"},
                )

        for error in errors:
            loc = error.get("loc") or ()
            if loc and loc[0] == "query":
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"message": f"Invalid value for query parameter '{loc[-1]}'"},
                )

        if any(error.get("type") == "json_invalid" for error in errors):
            message = "Malformed JSON in request body"
        elif any(error.get("type") == "missing" and tuple(error.get("loc") or ()) == ("body",) for error in errors):
            message = REQUIRED_FIELDS_MESSAGE
        else:
            message = "Invalid request body"

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message},
        )


def register_system_routes(app: FastAPI) -> None:

    @app.get("/error", include_in_schema=False)
    async def error():
        return problem_response()

    @app.get("/health", tags=["system"])
    async def health_check():
        """Liveness probe."""
        return {
            "status": "healthy",
            "version": __version__,
            "user_count": len(app.state.directory_service.store),
        }
