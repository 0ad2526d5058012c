# /app/main.py
"""
Main application module for the frame server.
This is the entry point that initializes the FastAPI app and includes all routes.
"""
import logging
import sys
import httpx
from fastapi import FastAPI
from app.api.router import router
from app.config import load_settings

# Logging setup - direct to stdout
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stdout,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    force=True  # Override any previous configuration
)

logger = logging.getLogger(__name__)

# Initialize FastAPI
app = FastAPI(
    title="Farcaster Fan Token Tracker",
    description="Frames showing Farcaster profiles, fan token stats and owned fan tokens"
)


@app.on_event("startup")
async def startup_event():
    """Load settings and open the shared HTTP client when app starts up"""
    logger.info("=== API STARTING UP ===")

    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)
    app.state.settings = settings
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout)

    logger.info(f"Airstack key: {'✓' if settings.airstack_api_key else '✗'}")
    logger.info(f"Analytics: {'✓' if settings.analytics_query_id is not None else '✗'}")
    logger.info("=== API READY ===")


@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared HTTP client when app shuts down"""
    logger.info("=== SHUTTING DOWN API ===")
    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()


# Health endpoint
@app.get("/")
async def root():
    return {"message": "Fan token frames are running"}

# Frame routes live under /api
app.include_router(router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
