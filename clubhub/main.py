"""
ClubHub - Main entry point.

Runs the API server:

    python -m clubhub.main

or, with auto-reload while developing:

    uvicorn clubhub.api.app:app --reload
"""

from __future__ import annotations

import uvicorn

from clubhub.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "clubhub.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=settings.debug and not settings.is_production,
    )


if __name__ == "__main__":
    main()
