"""
Route registry and dispatch.

Routes are keyed by the request's HTTP method and resource template, trimmed
and lowercased. Lookup is an exact dictionary match: path parameters are
resolved by API Gateway before the event reaches us.
"""

from dataclasses import dataclass
from http import HTTPStatus
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from aws_lambda_powertools.metrics import MetricUnit

from lambdaproxy.context import Context
from lambdaproxy.executor import Handler, execute
from lambdaproxy.handler import Event, LambdaHandler, build_lambda_handler, parse_request
from lambdaproxy.models.response import Response
from lambdaproxy.utils.observability import logger, metrics


def route_key(method: str, path: str) -> str:
    return f'{method.strip()}:{path.strip()}'.lower()


@dataclass(frozen=True)
class Route:
    """A registered method and resource path with its handler chain."""

    http_method: str
    resource_path: str
    handlers: Tuple[Handler, ...] = ()

    @property
    def key(self) -> str:
        return route_key(self.http_method, self.resource_path)


def default_not_found_handler(ctx: Context) -> None:
    """Dump the context for operators and answer 404 with an empty body."""
    logger.debug("Context", extra={"context": ctx.to_dict()})
    ctx.no_content(HTTPStatus.NOT_FOUND)


class Router:
    """
    Registry mapping (method, resource path) to handler chains.

    Registration methods return the router so calls can be chained:

        router = Router()
        router.get('/items', list_items).post('/items', authorize, create_item)
        lambda_handler = router.serve()
    """

    def __init__(self):
        self._routes: Dict[str, Route] = {}
        self._not_found_handler: Handler = default_not_found_handler

    @property
    def routes(self) -> Mapping[str, Route]:
        """Read-only view of the registered routes by key."""
        return MappingProxyType(self._routes)

    @property
    def not_found_handler(self) -> Handler:
        return self._not_found_handler

    def add(self, method: str, resource_path: str, *handlers: Handler) -> 'Router':
        """Register ``handlers`` for a method and path, replacing any earlier route."""
        route = Route(http_method=method, resource_path=resource_path, handlers=tuple(handlers))
        if route.key in self._routes:
            logger.debug("Overwriting route", extra={"route": route.key})
        self._routes[route.key] = route
        return self

    def get(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('GET', resource_path, *handlers)

    def put(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('PUT', resource_path, *handlers)

    def post(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('POST', resource_path, *handlers)

    def delete(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('DELETE', resource_path, *handlers)

    def head(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('HEAD', resource_path, *handlers)

    def patch(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('PATCH', resource_path, *handlers)

    def options(self, resource_path: str, *handlers: Handler) -> 'Router':
        return self.add('OPTIONS', resource_path, *handlers)

    def route(self, method: str, resource_path: str) -> Callable[[Handler], Handler]:
        """Decorator registering a single handler; the function is returned unchanged."""
        def decorator(handler: Handler) -> Handler:
            self.add(method, resource_path, handler)
            return handler
        return decorator

    def set_not_found_handler(self, handler: Handler) -> 'Router':
        if not callable(handler):
            raise TypeError(f'not found handler must be callable, got {type(handler).__name__}')
        self._not_found_handler = handler
        return self

    def lookup(self, method: str, resource_path: str) -> Optional[Route]:
        return self._routes.get(route_key(method, resource_path))

    def dispatch(self, event: Event) -> Response:
        """
        Produce the response for one event against the live registry.

        Args:
            event: API Gateway proxy event, as a dict or raw JSON

        Returns:
            The response of the matched chain, of the not-found handler, or
            the generic internal error response for a malformed event
        """
        return _dispatch(event, self._routes, self._not_found_handler)

    def serve(self) -> LambdaHandler:
        """
        Freeze the registry and return the Lambda entrypoint.

        Routes registered after this call are not seen by the returned handler.
        """
        routes = MappingProxyType(dict(self._routes))
        not_found_handler = self._not_found_handler
        logger.debug("Serving routes", extra={"routes": sorted(routes)})
        return build_lambda_handler(lambda event: _dispatch(event, routes, not_found_handler))


def _dispatch(event: Event, routes: Mapping[str, Route], not_found_handler: Handler) -> Response:
    request = parse_request(event)
    if request is None:
        return Response.internal_error()

    ctx = Context(request)
    key = route_key(request.http_method, request.resource)
    route = routes.get(key)

    if route is None or not route.handlers:
        logger.info("No route matched", extra={"route": key, "path": request.path})
        metrics.add_metric(name="RouteNotFound", unit=MetricUnit.Count, value=1)
        return execute(Response.initial(), ctx, (not_found_handler,))

    metrics.add_metric(name="RouteMatched", unit=MetricUnit.Count, value=1)
    return execute(Response.initial(), ctx, route.handlers)
