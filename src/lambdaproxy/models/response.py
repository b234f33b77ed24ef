"""
Outbound proxy response model.
"""

from http import HTTPStatus
from typing import Annotated, Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from lambdaproxy.errors import status_text


class Response(BaseModel):
    """Response returned to API Gateway. ``headers`` is always present."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: Annotated[int, Field(
        alias='statusCode',
        description='HTTP status code',
        examples=[200, 204, 404],
    )]

    headers: Annotated[Dict[str, str], Field(
        alias='headers',
        default_factory=dict,
        description='Response headers, empty when none were set',
    )]

    body: Annotated[str, Field(
        alias='body',
        description='Serialized response body',
    )] = ''

    @classmethod
    def initial(cls) -> 'Response':
        """The response a chain yields when no handler sets one."""
        return cls(status_code=int(HTTPStatus.NO_CONTENT), headers={}, body='')

    @classmethod
    def internal_error(cls) -> 'Response':
        """Generic 500 response that never carries error details."""
        return cls(
            status_code=int(HTTPStatus.INTERNAL_SERVER_ERROR),
            headers={},
            body=status_text(HTTPStatus.INTERNAL_SERVER_ERROR),
        )

    def to_event(self) -> Dict[str, Any]:
        """Serialize to the envelope the Lambda proxy integration expects."""
        return {
            "statusCode": int(self.status_code),
            "headers": dict(self.headers),
            "body": self.body,
        }
