"""Main FastAPI application for the connection service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devconnect.api.routes import auth, profile, requests, user
from devconnect.config import settings
from devconnect.core.database import Database
from devconnect.core.exceptions import DevConnectError
from devconnect.repositories import ConnectionRequestRepository, UserRepository

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_database():
    """Create the document store selected by DATABASE_BACKEND."""
    if settings.database_backend == "mongo":
        from devconnect.core.mongo import MongoDatabase
        return MongoDatabase(settings.mongo_uri, settings.mongo_db_name)
    return Database()


def create_app(database=None) -> FastAPI:
    """
    Build the application around a document store.

    Args:
        database: Store to use; defaults to the one selected by settings
    """
    database = database if database is not None else build_database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await UserRepository(database).ensure_indexes()
        await ConnectionRequestRepository(database).ensure_indexes()
        logger.info(f"Using {database.name} store")
        yield
        await database.close()

    app = FastAPI(
        title=settings.service_name,
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DevConnectError)
    async def handle_app_error(request: Request, exc: DevConnectError):
        if exc.status_code >= 500:
            # Store errors carry driver detail; keep it in the log only.
            logger.error(f"{request.method} {request.url.path} failed: {str(exc)}", exc_info=exc)
            return JSONResponse(status_code=exc.status_code, content={"message": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return JSONResponse(
            status_code=400,
            content={"message": message, "errors": jsonable_errors(errors)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.get("/")
    async def root():
        """Root endpoint returning API information."""
        return {
            "message": "Server is running!",
            "service": settings.service_name,
            "version": settings.service_version,
            "store": database.name,
        }

    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(requests.router)
    app.include_router(user.router)
    return app


def jsonable_errors(errors):
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in errors
    ]


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "devconnect.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
