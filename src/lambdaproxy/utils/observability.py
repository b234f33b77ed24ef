"""
Shared Powertools instances for the executor, the router and the Lambda
entrypoint adapter.

Service name and metrics namespace come from ``ProxyEnvVars``, so
POWERTOOLS_SERVICE_NAME and POWERTOOLS_METRICS_NAMESPACE apply with project
defaults when unset. Tracing is off outside Lambda or with
POWERTOOLS_TRACE_DISABLED=true.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

from lambdaproxy.models.env_vars import get_proxy_env_vars

_env_vars = get_proxy_env_vars()

logger: Logger = Logger(service=_env_vars.POWERTOOLS_SERVICE_NAME)

tracer: Tracer = Tracer(service=_env_vars.POWERTOOLS_SERVICE_NAME)

# Dispatch counters: RouteMatched, RouteNotFound, HTTPError, HandlerError, EventParseError
metrics: Metrics = Metrics(
    namespace=_env_vars.POWERTOOLS_METRICS_NAMESPACE,
    service=_env_vars.POWERTOOLS_SERVICE_NAME,
)
