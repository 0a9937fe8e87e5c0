import sys
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger

from image_gateway.config import Settings, settings
from image_gateway.errors import GatewayError
from image_gateway.models.responses import ErrorEnvelope
from image_gateway.routes.health import router as health_router
from image_gateway.routes.images import router as images_router
from image_gateway.routes.upload import router as upload_router
from image_gateway.services.cloudinary_client import CloudinaryGateway


def _configure_logging(app_settings: Settings) -> None:
    logger.configure(patcher=lambda record: record["extra"].setdefault("request_id", "-"))
    logger.remove()
    logger.add(
        sys.stderr,
        level=app_settings.log_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | req={extra[request_id]} | {name}:{function}:{line} | {message}",
    )


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    envelope = ErrorEnvelope(error=error, message=message)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings = settings
    _configure_logging(app_settings)
    app.state.settings = app_settings
    app.state.storage_gateway = CloudinaryGateway(app_settings.storage_config())
    logger.bind(request_id="-").info(
        "Starting app app_name={} debug={} log_level={} upload_folder={} credentials_configured={}",
        app_settings.app_name,
        app_settings.debug,
        app_settings.log_level,
        app_settings.upload_folder,
        app_settings.storage_config().has_credentials,
    )
    yield
    logger.bind(request_id="-").info("Shutting down app app_name={}", app_settings.app_name)


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(upload_router)
app.include_router(images_router)


@app.exception_handler(GatewayError)
async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    logger.warning(
        "Request error method={} path={} status={} error={} message={}",
        request.method,
        request.url.path,
        exc.status_code,
        exc.error,
        exc.message,
    )
    return _error_response(exc.status_code, exc.error, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Request validation failed method={} path={} errors={}", request.method, request.url.path, exc.errors())
    return _error_response(400, "Invalid request", "Request body could not be parsed")


@app.middleware("http")
async def add_request_context(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid4()))
    bound_logger = logger.bind(request_id=request_id)
    start = time.perf_counter()
    bound_logger.info("Request start method={} path={}", request.method, request.url.path)
    try:
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
    except Exception as exc:
        # Anything that is not a GatewayError ends here; the process keeps serving.
        bound_logger.exception("Request failed method={} path={} error={}", request.method, request.url.path, str(exc))
        response = _error_response(500, "Internal server error", str(exc))
    duration_ms = (time.perf_counter() - start) * 1000
    bound_logger.info(
        "Request finish method={} path={} status={} duration_ms={:.2f}",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    response.headers["X-Request-ID"] = request_id
    return response
