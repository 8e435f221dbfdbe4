"""Run the preview server with ``python -m server``."""

import os

import uvicorn

from legaldoc.utils.logging_config import get_logger

logger = get_logger(__name__)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info("Starting legaldoc preview server", extra={"host": host, "port": port, "reload": reload})

    uvicorn.run("server.main:app", host=host, port=port, reload=reload, log_config=None)
