"""
Models Package

Pydantic models for the inbound proxy event, the outbound response and the
environment configuration.
"""

from .env_vars import ProxyEnvVars, get_proxy_env_vars
from .request import Identity, Request, RequestContext
from .response import Response

__all__ = [
    # Event models
    "Identity",
    "Request",
    "RequestContext",

    # Response model
    "Response",

    # Configuration
    "ProxyEnvVars",
    "get_proxy_env_vars",
]
