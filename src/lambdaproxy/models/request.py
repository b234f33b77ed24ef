"""
Inbound API Gateway REST proxy event models.

The Lambda runtime hands us the proxy event as a dict (or, when invoked
directly, as raw JSON). Every field is optional: missing or ``null`` values
become empty strings and empty maps so handlers never have to guard against
``None``.
"""

from typing import Annotated, Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from lambdaproxy.errors import EventParseError


class _EventModel(BaseModel):
    """Base for event models: camelCase aliases, read-only, nulls dropped."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    @model_validator(mode='before')
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        """Let defaults apply where API Gateway sends ``null``."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Identity(_EventModel):
    """Caller identity, passed through and never interpreted."""

    api_key: Annotated[str, Field(alias='apiKey')] = ''
    user_arn: Annotated[str, Field(alias='userArn')] = ''
    cognito_authentication_type: Annotated[str, Field(alias='cognitoAuthenticationType')] = ''
    caller: Annotated[str, Field(alias='caller')] = ''
    user_agent: Annotated[str, Field(alias='userAgent')] = ''
    user: Annotated[str, Field(alias='user')] = ''
    cognito_identity_pool_id: Annotated[str, Field(alias='cognitoIdentityPoolId')] = ''
    cognito_identity_id: Annotated[str, Field(alias='cognitoIdentityId')] = ''
    cognito_authentication_provider: Annotated[str, Field(alias='cognitoAuthenticationProvider')] = ''
    source_ip: Annotated[str, Field(alias='sourceIp')] = ''
    account_id: Annotated[str, Field(alias='accountId')] = ''


class RequestContext(_EventModel):
    """The ``requestContext`` block of a proxy event."""

    resource_id: Annotated[str, Field(alias='resourceId')] = ''
    api_id: Annotated[str, Field(alias='apiId')] = ''
    resource_path: Annotated[str, Field(alias='resourcePath')] = ''
    http_method: Annotated[str, Field(alias='httpMethod')] = ''
    request_id: Annotated[str, Field(alias='requestId')] = ''
    account_id: Annotated[str, Field(alias='accountId')] = ''
    identity: Annotated[Identity, Field(alias='identity', default_factory=Identity)]
    stage: Annotated[str, Field(alias='stage')] = ''


class Request(_EventModel):
    """A parsed API Gateway REST proxy request."""

    request_context: Annotated[RequestContext, Field(
        alias='requestContext',
        default_factory=RequestContext,
        description='API Gateway request metadata',
    )]

    http_method: Annotated[str, Field(
        alias='httpMethod',
        description='HTTP method of the request',
        examples=['GET', 'POST'],
    )] = ''

    path: Annotated[str, Field(
        alias='path',
        description='Concrete request path',
        examples=['/items/42'],
    )] = ''

    resource: Annotated[str, Field(
        alias='resource',
        description='Resource template the request matched',
        examples=['/items/{id}'],
    )] = ''

    headers: Annotated[Dict[str, str], Field(alias='headers', default_factory=dict)]
    query_string_parameters: Annotated[Dict[str, str], Field(alias='queryStringParameters', default_factory=dict)]
    path_parameters: Annotated[Dict[str, str], Field(alias='pathParameters', default_factory=dict)]
    stage_variables: Annotated[Dict[str, str], Field(alias='stageVariables', default_factory=dict)]

    body: Annotated[str, Field(
        alias='body',
        description='Raw request body',
    )] = ''

    @classmethod
    def from_event(cls, event: Union[Dict[str, Any], str, bytes]) -> 'Request':
        """
        Parse a proxy event into a Request.

        Args:
            event: The event as delivered by the Lambda runtime, or raw JSON

        Returns:
            The parsed request

        Raises:
            EventParseError: If the event is not a JSON object of the expected shape
        """
        try:
            if isinstance(event, (str, bytes, bytearray)):
                return cls.model_validate_json(event)
            return cls.model_validate(event)
        except ValidationError as exc:
            raise EventParseError(f'unable to parse lambda proxy event: {exc}') from exc

    def to_dict(self) -> Dict[str, Any]:
        """Dump the request using the event's own field names."""
        return self.model_dump(by_alias=True)
