"""Run the Rate Weather API locally with auto-reload."""
from pathlib import Path

import uvicorn

from rate_weather.config import load_config

ROOT = Path(__file__).resolve().parent


def main() -> None:
    config = load_config()
    uvicorn.run(
        "backend.main:app",
        host=config.get("server.host", "127.0.0.1"),
        port=int(config.get("server.port", 8000)),
        reload=True,
        # Reload workers import from the checkout, not an installed copy
        app_dir=str(ROOT),
        reload_dirs=[str(ROOT / "backend"), str(ROOT / "rate_weather")],
        log_level=str(config.get("logging.level", "info")).lower(),
    )


if __name__ == "__main__":
    main()
