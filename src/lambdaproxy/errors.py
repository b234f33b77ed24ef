"""
Error model for the handler chain.

Handlers raise ``HTTPError`` to end a chain with an explicit, client-visible
status and message. Every other exception escaping a handler is treated as an
internal error by the executor: it is logged for operators and replaced by a
generic 500 response.
"""

from http import HTTPStatus
from typing import Any, Dict


def status_text(code: int) -> str:
    """Return the standard reason phrase for ``code``, or an empty string."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ''


class LambdaProxyError(Exception):
    """Base exception class for dispatch layer errors."""

    error_code = 'LAMBDA_PROXY_ERROR'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured logging."""
        return {
            "error_code": self.error_code,
            "error_type": type(self).__name__,
            "message": self.message,
        }


class HTTPError(LambdaProxyError):
    """Raised by a handler to stop the chain with an explicit status code.

    When ``message`` is empty the standard reason phrase of ``code`` is used,
    so ``HTTPError(404)`` produces a ``Not Found`` body.
    """

    error_code = 'HTTP_ERROR'

    def __init__(self, code: int, message: str = ''):
        super().__init__(message or status_text(code))
        self.code = code

    def __str__(self) -> str:
        return f'code={self.code}, message={self.message}'

    def __repr__(self) -> str:
        return f'HTTPError(code={self.code!r}, message={self.message!r})'

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["code"] = self.code
        return data


class BindError(LambdaProxyError):
    """Raised when the request body and query string cannot be bound to a model."""

    error_code = 'BIND_ERROR'


class SerializationError(LambdaProxyError):
    """Raised when a response body cannot be encoded as JSON."""

    error_code = 'SERIALIZATION_ERROR'


class EventParseError(LambdaProxyError):
    """Raised when the inbound event is not a valid API Gateway proxy event."""

    error_code = 'EVENT_PARSE_ERROR'
