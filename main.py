"""
FastAPI Application Entry Point

Integrates:
  - ElevenLabs webhook receiver
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from config import Config
from storage import JsonConversationStore
from transport.elevenlabs import ElevenLabsClient, router as elevenlabs_router

# Setup logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    app.state.conversation_store = JsonConversationStore(Config.CONVERSATIONS_FILE)
    app.state.elevenlabs_client = ElevenLabsClient(
        api_key=Config.ELEVENLABS_API_KEY,
        base_url=Config.ELEVENLABS_API_BASE_URL,
    )

    logger.info("=" * 60)
    logger.info("Conversation webhook receiver starting up...")
    logger.info(f"Conversations file: {Config.CONVERSATIONS_FILE}")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    if Config.missing():
        logger.warning(
            f"Missing configuration: {', '.join(Config.missing())}; "
            f"all webhook deliveries will be rejected"
        )
    logger.info("=" * 60)

    yield

    # Shutdown
    await app.state.elevenlabs_client.aclose()
    logger.info("Conversation webhook receiver shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Conversation Webhook API",
    description="Receives ElevenLabs post-call webhooks and stores conversation records",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


# Include routers
app.include_router(elevenlabs_router)


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness probe)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness health check (Kubernetes readiness probe)."""
    missing = Config.missing()
    if missing:
        return {"status": "not_ready", "reason": f"Missing configuration: {', '.join(missing)}"}
    return {"status": "ready"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Conversation Webhook API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "elevenlabs_webhook": "POST /api/elevenlabs-webhook",
            "elevenlabs_webhook_live": "GET /api/elevenlabs-webhook",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=Config.WEBHOOK_PORT,
    )
