"""
Run the ESG Data Management API with uvicorn.

Usage:
    python -m scripts.run_server
"""

from __future__ import annotations

import logging

import uvicorn

from app.config import get_app_settings

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_app_settings()
    logger.info("Starting ESG Data Management API on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
