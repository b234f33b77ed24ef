"""
Per-invocation execution context shared by every handler of a chain.
"""

import json
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from lambdaproxy.errors import BindError, SerializationError
from lambdaproxy.models.request import Request
from lambdaproxy.models.response import Response

M = TypeVar('M', bound=BaseModel)


class Context:
    """
    Carries the parsed request and the response set so far.

    Setting a response does not end the chain. Each of ``no_content``,
    ``string`` and ``json`` replaces whatever an earlier handler set, and the
    executor keeps the last one.
    """

    def __init__(self, request: Request):
        self._request = request
        self._response: Optional[Response] = None

    @property
    def request(self) -> Request:
        return self._request

    @property
    def response(self) -> Optional[Response]:
        """The response set by a handler, or None if none has been set yet."""
        return self._response

    def query_param(self, name: str) -> str:
        return self._request.query_string_parameters.get(name, '')

    def path_param(self, name: str) -> str:
        return self._request.path_parameters.get(name, '')

    def stage_var(self, name: str) -> str:
        return self._request.stage_variables.get(name, '')

    def header(self, name: str) -> str:
        """Look up a header, falling back to a case-insensitive match."""
        headers = self._request.headers
        if name in headers:
            return headers[name]
        lowered = name.lower()
        for key, value in headers.items():
            if key.lower() == lowered:
                return value
        return ''

    def bind(self, model: Type[M]) -> M:
        """
        Bind the JSON body and the query string to a pydantic model.

        The body is decoded first; query string parameters are then laid over
        it, replacing body fields with the same name. An empty body binds as
        an empty object.

        Args:
            model: Pydantic model class to validate into

        Returns:
            A validated instance of ``model``

        Raises:
            BindError: If the body is not a JSON object or validation fails
        """
        # No body at all is an empty object so query-only requests can bind;
        # a non-empty body must still decode as JSON.
        data: Any = {}
        if self._request.body:
            try:
                data = json.loads(self._request.body)
            except ValueError as exc:
                raise BindError(f'lambdaproxy: unable to bind body to {model.__name__}: {exc}') from exc

        if not isinstance(data, dict):
            raise BindError(
                f'lambdaproxy: unable to bind body to {model.__name__}: '
                f'expected a JSON object, got {type(data).__name__}'
            )

        merged = {**data, **self._request.query_string_parameters}
        try:
            return model.model_validate(merged)
        except ValidationError as exc:
            raise BindError(f'lambdaproxy: unable to bind query params to {model.__name__}: {exc}') from exc

    def no_content(self, status: int) -> None:
        self._set_response(status, '')

    def string(self, status: int, body: str) -> None:
        self._set_response(status, body)

    def json(self, status: int, body: Any) -> None:
        """
        Set a JSON-encoded response.

        Pydantic models, dataclasses, datetimes and the other types pydantic
        knows how to render are accepted alongside plain JSON values.

        Raises:
            SerializationError: If ``body`` cannot be encoded
        """
        try:
            encoded = json.dumps(body, default=to_jsonable_python, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f'lambdaproxy: unable to convert body to json: {exc}') from exc
        self._set_response(status, encoded)

    def continue_chain(self) -> None:
        """Explicitly hand over to the next handler without setting a response."""
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Dump the context for operator diagnostics."""
        return {
            "request": self._request.to_dict(),
            "response": self._response.to_event() if self._response else None,
        }

    def _set_response(self, status: int, body: str) -> None:
        self._response = Response(status_code=status, headers={}, body=body)
