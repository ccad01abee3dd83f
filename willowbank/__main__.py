# willowbank/__main__.py
"""
Entry point for the willowbank API server.

Server imports configure_logging() first so all output is JSON on stderr.
Uvicorn handles SIGINT/SIGTERM and runs the app lifespan, which closes the
store on shutdown.
"""

# Import server (which configures logging before anything else)
from willowbank.server import run

if __name__ == "__main__":
    run()
