"""
Handler chain executor.

Runs handlers strictly in order against one context. The first error wins and
stops the chain; otherwise the last response set by a handler wins. Setting a
response does not stop the chain.
"""

from typing import Any, Callable, Sequence

from aws_lambda_powertools.metrics import MetricUnit

from lambdaproxy.context import Context
from lambdaproxy.errors import HTTPError
from lambdaproxy.models.response import Response
from lambdaproxy.utils.observability import logger, metrics, tracer

Handler = Callable[[Context], Any]


def handler_name(handler: Handler) -> str:
    return getattr(handler, '__qualname__', None) or repr(handler)


@tracer.capture_method(capture_response=False)
def execute(response: Response, ctx: Context, handlers: Sequence[Handler]) -> Response:
    """
    Run a handler chain and collapse it into a single response.

    Args:
        response: Response returned when no handler sets one
        ctx: Context shared by every handler of the chain
        handlers: Handlers to run, in order

    Returns:
        The HTTPError response, the generic internal error response, or the
        last response set through the context
    """
    for handler in handlers:
        try:
            handler(ctx)
        except HTTPError as exc:
            logger.info("Handler chain stopped with HTTP error", extra={
                "handler": handler_name(handler),
                "status_code": exc.code,
            })
            metrics.add_metric(name="HTTPError", unit=MetricUnit.Count, value=1)
            return Response(status_code=exc.code, headers={}, body=exc.message)
        except Exception as exc:
            logger.exception("Error processing function handler", extra={
                "handler": handler_name(handler),
                "error": str(exc),
                "error_type": type(exc).__name__,
            })
            metrics.add_metric(name="HandlerError", unit=MetricUnit.Count, value=1)
            return Response.internal_error()

        if ctx.response is not None:
            response = ctx.response

    return response
