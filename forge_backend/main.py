"""
Forge Assistant Backend - FastAPI Application Entry Point
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routers import config, files, generate
from .routers.deps import build_context
from .services.errors import ForgeError

logger = logging.getLogger(__name__)

LOG_LINE_LIMIT = 80


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logger.info("Starting Forge Assistant backend...")
    if getattr(app.state, "context", None) is None:
        app.state.context = build_context()
    logger.info("Writing generated files to %s", app.state.context.output_dir)

    yield
    logger.info("Shutting down Forge Assistant backend...")


app = FastAPI(
    title="Forge Assistant Backend",
    description="Simulated AI code-generation assistant with live typing playback",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log one line per API request: method, path, status and duration"""
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path != "/health":
        duration_ms = (time.perf_counter() - start) * 1000
        line = f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms"
        if len(line) > LOG_LINE_LIMIT:
            line = line[: LOG_LINE_LIMIT - 1] + "…"
        logger.info(line)
    return response


@app.exception_handler(ForgeError)
async def forge_error_handler(request: Request, exc: ForgeError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc), "success": False})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": messages or "Invalid request"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "success": False})


# Include routers
app.include_router(generate.router, prefix="/generate", tags=["generate"])
app.include_router(generate.sessions_router, prefix="/sessions", tags=["sessions"])
app.include_router(files.router, prefix="/files", tags=["files"])
app.include_router(files.preview_router, prefix="/preview", tags=["files"])
app.include_router(config.router, prefix="/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "forge-assistant-backend"}


if __name__ == "__main__":
    import uvicorn

    from .services.config_manager import ConfigManager

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    server = ConfigManager.get_instance().get_config().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 5000))
