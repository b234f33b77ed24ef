"""
Lambda entrypoint adapter.

Turns the dispatch core into a ``lambda_handler(event, context)`` callable
instrumented with AWS Lambda Powertools, and provides ``handle()`` for
functions that run one fixed handler chain without routing.
"""

from typing import Any, Callable, Dict, Optional, Sequence, Union

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from lambdaproxy.context import Context
from lambdaproxy.errors import EventParseError
from lambdaproxy.executor import Handler, execute
from lambdaproxy.models.env_vars import get_proxy_env_vars
from lambdaproxy.models.request import Request
from lambdaproxy.models.response import Response
from lambdaproxy.utils.observability import logger, metrics, tracer

Event = Union[Dict[str, Any], str, bytes]
LambdaHandler = Callable[[Event, LambdaContext], Dict[str, Any]]


def parse_request(event: Event) -> Optional[Request]:
    """Parse the event, logging and returning None when it is malformed."""
    try:
        return Request.from_event(event)
    except EventParseError as exc:
        logger.exception("Unable to parse lambda proxy event", extra={"error": exc.to_dict()})
        metrics.add_metric(name="EventParseError", unit=MetricUnit.Count, value=1)
        return None


def run_chain(event: Event, handlers: Sequence[Handler]) -> Response:
    """Parse ``event`` and run ``handlers`` against a fresh context."""
    request = parse_request(event)
    if request is None:
        return Response.internal_error()
    return execute(Response.initial(), Context(request), handlers)


def build_lambda_handler(dispatch: Callable[[Event], Response]) -> LambdaHandler:
    """
    Wrap a dispatch function into an instrumented Lambda entrypoint.

    Args:
        dispatch: Function producing the response for one event

    Returns:
        A callable suitable as the Lambda function handler
    """
    env_vars = get_proxy_env_vars()

    @metrics.log_metrics(capture_cold_start_metric=env_vars.cold_start_metric_enabled)
    @tracer.capture_lambda_handler(capture_response=False)
    @logger.inject_lambda_context(
        correlation_id_path=correlation_paths.API_GATEWAY_REST,
        log_event=env_vars.log_event_enabled,
    )
    def lambda_handler(event: Event, context: LambdaContext) -> Dict[str, Any]:
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

        response = dispatch(event)

        logger.info("Lambda invocation completed", extra={
            "status_code": response.status_code,
            "request_id": context.aws_request_id,
        })
        return response.to_event()

    return lambda_handler


def handle(*handlers: Handler) -> LambdaHandler:
    """
    Build a Lambda entrypoint that runs the same handler chain for every event.

    Example:
        lambda_handler = handle(authenticate, load_item, render_item)
    """
    chain = tuple(handlers)
    return build_lambda_handler(lambda event: run_chain(event, chain))
