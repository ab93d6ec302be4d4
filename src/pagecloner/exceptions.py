"""Custom exceptions for pagecloner."""


class PageClonerError(Exception):
    """Base exception for pagecloner."""


class ConfigError(PageClonerError):
    """Raised when configuration is missing or invalid."""


class ValidationError(PageClonerError):
    """Raised when a request is missing a required field."""


class NotFoundError(PageClonerError):
    """Raised when a container or template reference does not resolve."""


class InvalidReferenceError(PageClonerError):
    """Raised when a URL cannot be parsed into a document reference."""


class RemoteRequestError(PageClonerError):
    """Raised when a single request to the document store fails."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        # 0 means the request never got a response (transport error)
        return self.status_code == 0 or self.status_code == 429 or self.status_code >= 500


class OperationTimeoutError(PageClonerError, TimeoutError):
    """Raised when an operation exceeds its caller-imposed time budget."""
