# willowbank/server.py
"""
Server module: JSON logging, configuration and the ASGI app.

configure_logging() is called first so every logger created while importing
the app writes JSON to stderr.
"""

# Configure logging FIRST before any other imports
from willowbank.logging_config import configure_logging

configure_logging()

# Now safe to import everything else
import logging

import uvicorn

from willowbank.api.app import create_app
from willowbank.config.loader import load_config

logger = logging.getLogger(__name__)

# Load configuration
_config = load_config()
logger.info(
    f"Loaded configuration: environment={_config.environment}, "
    f"cors_origin={_config.server.cors_origin}"
)

app = create_app(_config)


def run() -> None:
    """Serve the app with uvicorn (blocks until SIGINT/SIGTERM)."""
    logger.info(f"Starting Willowbank API on {_config.server.host}:{_config.server.port}")
    # log_config=None keeps the JSON handlers installed above
    uvicorn.run(app, host=_config.server.host, port=_config.server.port, log_config=None)
