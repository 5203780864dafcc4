"""Main entry point for the profiling server.

Runs the FastAPI application with uvicorn using the configured host and port.
"""

import uvicorn

from src.core.config import get_settings

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(
        "src.api.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_ENV == "development",
        log_config=None,  # logging is configured by src.utils.logger
        access_log=False,  # handled by LoggingMiddleware
        workers=1 if settings.APP_ENV == "development" else 4,
    )
