# willowbank/errors.py
"""
Error taxonomy shared by the store, services and HTTP layer.

Each error carries the HTTP status it is rendered with by the API layer.
"""


class WillowbankError(Exception):
    """Base class for errors raised by willowbank services."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadInput(WillowbankError):
    """Structural validation failure. Raised before any store access."""

    status_code = 400


class NotFound(WillowbankError):
    """Primary-key or scoped lookup miss."""

    status_code = 404


class StoreError(WillowbankError):
    """
    Underlying storage failure.

    Always raised with the driver error chained as __cause__.
    The message is suppressed in production responses.
    """

    status_code = 500
