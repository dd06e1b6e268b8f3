from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse

from backend.routes import health, rates
from rate_weather.utils.logging import get_logger


logger = get_logger(__name__)

app = FastAPI(
    title="Rate Weather API",
    description="Exchange-rate weather for JPY and USD against EUR",
    version="0.1.0",
)


@app.on_event("startup")
async def startup_event():
    """Load configuration and prepare the cache store."""
    try:
        from backend.dependencies import get_cache
        get_cache()
        logger.info("Cache store ready")
    except Exception as e:
        logger.warning(f"Startup initialization warning: {e}")


# CORS (broad for dev; tighten in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(rates.router, prefix="/api/rates", tags=["rates"])
app.include_router(health.router, tags=["health"])


@app.get("/", response_class=HTMLResponse)
def index():
    """Serve the forecast page."""
    html_path = Path(__file__).parent / "static" / "index.html"
    return FileResponse(html_path)
