"""HTTP API layer for willowbank."""

from willowbank.api.app import create_app

__all__ = ["create_app"]
