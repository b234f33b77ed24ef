"""
lambdaproxy - handler chains and routing for API Gateway Lambda proxy events.

A Router maps (method, resource path) to an ordered chain of handlers. Each
handler receives the shared Context; the first error stops the chain and the
last response set wins:

    from lambdaproxy import HTTPError, Router

    def load_item(ctx):
        if ctx.path_param('id') not in ITEMS:
            raise HTTPError(404, 'missing')

    def render_item(ctx):
        ctx.json(200, ITEMS[ctx.path_param('id')])

    router = Router().get('/items/{id}', load_item, render_item)
    lambda_handler = router.serve()
"""

__version__ = "1.0.0"

from lambdaproxy.context import Context
from lambdaproxy.errors import BindError, EventParseError, HTTPError, LambdaProxyError, SerializationError
from lambdaproxy.executor import Handler, execute
from lambdaproxy.handler import handle
from lambdaproxy.models.request import Identity, Request, RequestContext
from lambdaproxy.models.response import Response
from lambdaproxy.router import Route, Router, default_not_found_handler, route_key

__all__ = [
    "__version__",
    "Context",
    "Handler",
    "execute",
    "handle",
    "Route",
    "Router",
    "default_not_found_handler",
    "route_key",
    "Identity",
    "Request",
    "RequestContext",
    "Response",
    "LambdaProxyError",
    "HTTPError",
    "BindError",
    "SerializationError",
    "EventParseError",
]
