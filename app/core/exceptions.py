"""
Application error hierarchy.

The CRUD layer raises these; main.py translates them into HTTP responses.
"""


class AppError(Exception):
    """Base exception for errors that map onto a client-facing status code."""

    status_code: int = 500

    def __init__(self, message: str = "Application error") -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Raised when client input cannot be acted on."""

    status_code = 400


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    status_code = 404
