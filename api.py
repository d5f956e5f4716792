import logging
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from platform_services import router
from impl.config import settings
from impl.utils.json_utils import IndentedJSONResponse


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger("ghgateway.api")

BODYLESS_STATUS = (status.HTTP_204_NO_CONTENT, status.HTTP_304_NOT_MODIFIED)

app = FastAPI(title=settings.app_name, version="0.1.0", default_response_class=IndentedJSONResponse)

# CORS (configure in env)
origins = settings.cors_allow_origins_list
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(router)


def envelope(status_code: int, message: str) -> Response:
    if status_code in BODYLESS_STATUS:
        return Response(status_code=status_code)
    return IndentedJSONResponse(status_code=status_code, content={"status": status_code, "message": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return envelope(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ()) if part not in ("path", "query"))
    message = f"Invalid parameter '{where}'" if where else "Invalid request"
    return envelope(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    if not settings.request_logging:
        return await call_next(request)

    start = time.time()
    trace_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.trace_id = trace_id

    response = None
    try:
        response = await call_next(request)
        return response
    finally:
        duration_ms = (time.time() - start) * 1000
        path = request.url.path
        method = request.method
        status_code = response.status_code if response else 500
        client_host = request.client.host if request.client else "-"
        logger.info(
            "trace_id=%s method=%s path=%s status=%s duration_ms=%.2f client=%s",
            trace_id,
            method,
            path,
            status_code,
            duration_ms,
            client_host,
        )
        if response:
            response.headers["x-trace-id"] = trace_id


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
