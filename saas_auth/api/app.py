import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from saas_auth.app.services.mail_dispatcher import MailDeliveryError
from saas_auth.context import ServiceContext

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": _with_trace(request, error_dict, exc)},
    )


async def handle_mail_delivery_error(request: Request, exc: MailDeliveryError):
    error_dict = {"code": "MAIL_DELIVERY_FAILED", "message": "Internal server error"}
    logger.error(f"Mail delivery failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": _with_trace(request, error_dict, exc)},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    error_dict = {"code": "INTERNAL_ERROR", "message": "Internal server error"}
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": _with_trace(request, error_dict, exc)},
    )


def _with_trace(request: Request, error_dict: dict, exc: BaseException) -> dict:
    # Stack traces are exposed only in development
    if request.app.state.services.environment == "development":
        error_dict["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return error_dict


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: ServiceContext = app.state.services
    async with services.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Service context ready")
    yield
    await services.close()
    logger.info("Service context closed")


def create_app(ApplicationConfig, services: Optional[ServiceContext] = None) -> FastAPI:
    app = FastAPI(title="SaaS Auth API", version="0.1.0", lifespan=lifespan)
    app.state.services = services or ServiceContext.build(ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from saas_auth.api.routes import admin, auth, health_check, team, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(team.router, tags=["Teams"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(MailDeliveryError, handle_mail_delivery_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
