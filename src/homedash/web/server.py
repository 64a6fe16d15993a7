from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from homedash.app import App
from homedash.config import Config
from homedash.errors import UserError
from homedash.web.error_handlers import (
    general_exception_handler,
    http_exception_handler,
    request_validation_error_handler,
    user_error_handler,
)
from homedash.web.openapi import set_custom_openapi
from homedash.web.routers import auth_router, collection_routers, health_router, me_router, weather_router
from homedash.web.spa import SPAStaticFiles


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        # Store app instance and config in app state
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Homedash API", lifespan=lifespan)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(health_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(me_router, prefix="/api")
    for router in collection_routers:
        app.include_router(router, prefix="/api")
    app.include_router(weather_router, prefix="/api")

    api_methods = ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]

    @app.api_route("/api", methods=api_methods, include_in_schema=False)
    @app.api_route("/api/{path:path}", methods=api_methods, include_in_schema=False)
    async def api_not_found() -> None:
        raise StarletteHTTPException(status_code=404, detail="Not Found")

    if config.static_path:
        app.mount("/", SPAStaticFiles(directory=config.static_path), name="spa")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app

