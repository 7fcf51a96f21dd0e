"""
Typed failures raised by the remote data clients.

ServiceError
├── NetworkError   request never produced a response (DNS, refused, timeout)
├── ApiError       non-success HTTP status, message from the body if any
└── NotFoundError  entity missing from the demo dataset
"""


class ServiceError(Exception):
    """Base class for every data access failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(ServiceError):
    """The API could not be reached."""


class ApiError(ServiceError):
    """The API answered with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ServiceError):
    """The requested entity does not exist."""
