"""
Pytest configuration and shared fixtures for lambdaproxy.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import os
import pytest
from typing import Any, Callable, Dict, Optional
from unittest.mock import Mock

from lambdaproxy.utils.observability import metrics


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "POWERTOOLS_SERVICE_NAME": "test-lambdaproxy",
        "LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    })


@pytest.fixture
def api_gateway_event() -> Dict[str, Any]:
    """Create a sample API Gateway REST proxy event for testing."""
    return {
        "resource": "/items/{id}",
        "path": "/items/42",
        "httpMethod": "GET",
        "headers": {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": "test-agent/1.0",
        },
        "multiValueHeaders": {},
        "queryStringParameters": {"verbose": "true"},
        "multiValueQueryStringParameters": None,
        "pathParameters": {"id": "42"},
        "stageVariables": {"tableName": "items-test"},
        "requestContext": {
            "resourceId": "abc123",
            "resourcePath": "/items/{id}",
            "httpMethod": "GET",
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "apiId": "testapi123",
            "stage": "test",
            "identity": {
                "sourceIp": "127.0.0.1",
                "userAgent": "test-agent/1.0",
                "apiKey": None,
                "cognitoIdentityId": None,
            },
        },
        "body": None,
        "isBase64Encoded": False,
    }


@pytest.fixture
def event_factory() -> Callable[..., Dict[str, Any]]:
    """Build minimal proxy events for a method and resource template."""
    def make_event(
        method: str,
        resource: str,
        path: Optional[str] = None,
        body: Optional[str] = None,
        **fields: Any,
    ) -> Dict[str, Any]:
        event = {
            "httpMethod": method,
            "resource": resource,
            "path": path or resource,
            "body": body,
            "requestContext": {"requestId": "factory-request-id"},
        }
        event.update(fields)
        return event

    return make_event


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = 512
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Drop buffered metrics between tests."""
    metrics.clear_metrics()
    yield
    metrics.clear_metrics()
