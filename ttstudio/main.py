from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from ttstudio.api.router import api_router
from ttstudio.config import get_settings
from ttstudio.core.errors import TTSError
from ttstudio.core.logging import get_logger, setup_logging
from ttstudio.core.rate_limit import limiter, rate_limit_exceeded_handler

logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    setup_logging()
    yield


app = FastAPI(
    title="ttstudio",
    description="Text-to-speech with chunked synthesis and aligned subtitles",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.base_url, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TTSError)
async def tts_error_handler(request: Request, exc: TTSError) -> JSONResponse:
    """Report validation and synthesis errors as {"error": message}."""
    logger.bind(
        path=request.url.path,
        error_type=type(exc).__name__,
        status=exc.status_code,
    ).warning("request_failed")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for load balancers."""
    return {"status": "healthy"}
