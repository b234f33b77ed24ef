"""
Environment variable models for type-safe configuration.

Read through ``get_proxy_env_vars()``: the observability module takes the
service name and metrics namespace from it at import, and the Lambda
entrypoint adapter reads the logging and cold start flags on each
``serve()``/``handle()`` call.
"""

from typing import Annotated

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class ProxyEnvVars(BaseModel):
    """Environment variables for the dispatch layer."""

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='lambdaproxy',
        description='Service name for AWS Powertools',
        min_length=1
    )] = 'lambdaproxy'

    # Metrics namespace
    POWERTOOLS_METRICS_NAMESPACE: Annotated[str, Field(
        default='LambdaProxy',
        description='Namespace for CloudWatch metrics',
        min_length=1
    )] = 'LambdaProxy'

    # Log the raw incoming event on every invocation
    LOG_EVENT: Annotated[str, Field(
        default='false',
        description='Log the incoming proxy event (true/false)',
        pattern=r'^(true|false)$'
    )] = 'false'

    CAPTURE_COLD_START_METRIC: Annotated[str, Field(
        default='true',
        description='Emit a ColdStart metric on the first invocation (true/false)',
        pattern=r'^(true|false)$'
    )] = 'true'

    @property
    def log_event_enabled(self) -> bool:
        """Check if incoming events should be logged."""
        return self.LOG_EVENT.lower() == 'true'

    @property
    def cold_start_metric_enabled(self) -> bool:
        """Check if the cold start metric should be captured."""
        return self.CAPTURE_COLD_START_METRIC.lower() == 'true'


def get_proxy_env_vars() -> ProxyEnvVars:
    """
    Get typed environment variables for the dispatch layer.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=ProxyEnvVars)
