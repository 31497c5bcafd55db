#!/usr/bin/env python3
"""
Server entry point for the Code Complexity Analyzer backend.
"""
import uvicorn
from dotenv import load_dotenv

# .env must be exported before settings are read
load_dotenv()

from app.config import settings, logger  # noqa: E402


def main():
    """Run the server."""
    logger.info("Code Analyzer backend listening on http://%s:%d", settings.HOST, settings.PORT)

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
