"""
Unit tests for the execution context.

This module tests the request accessors, binding of body and query string to
pydantic models, and the response-setting operations.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import pytest
from pydantic import BaseModel

from lambdaproxy.context import Context
from lambdaproxy.errors import BindError, SerializationError
from lambdaproxy.models.request import Request


class ItemQuery(BaseModel):
    name: str = ""
    color: str = ""
    size: Optional[int] = None


class StrictItem(BaseModel):
    name: str
    quantity: int


@dataclass
class Point:
    x: int
    y: int


def make_context(**fields) -> Context:
    return Context(Request.from_event(fields))


class TestAccessors:
    """Test cases for request accessors."""

    def test_present_values(self, api_gateway_event):
        ctx = Context(Request.from_event(api_gateway_event))

        assert ctx.query_param("verbose") == "true"
        assert ctx.path_param("id") == "42"
        assert ctx.stage_var("tableName") == "items-test"
        assert ctx.header("User-Agent") == "test-agent/1.0"

    def test_absent_values_are_empty(self):
        """Test that absent names return an empty string instead of failing."""
        ctx = make_context()

        assert ctx.query_param("missing") == ""
        assert ctx.path_param("missing") == ""
        assert ctx.stage_var("missing") == ""
        assert ctx.header("missing") == ""

    def test_header_case_insensitive_fallback(self):
        ctx = make_context(headers={"content-type": "application/json"})

        assert ctx.header("Content-Type") == "application/json"

    def test_header_exact_match_preferred(self):
        ctx = make_context(headers={"X-Trace": "exact", "x-trace": "lower"})

        assert ctx.header("X-Trace") == "exact"
        assert ctx.header("x-trace") == "lower"

    def test_request_property(self, api_gateway_event):
        request = Request.from_event(api_gateway_event)

        assert Context(request).request is request


class TestBind:
    """Test cases for Context.bind."""

    def test_body_only(self):
        ctx = make_context(body='{"name": "widget", "color": "red"}')

        result = ctx.bind(ItemQuery)

        assert result == ItemQuery(name="widget", color="red")

    def test_query_overlays_body(self):
        """Test that query values win for keys they define, other keys survive."""
        ctx = make_context(
            body='{"name": "widget", "color": "red"}',
            queryStringParameters={"color": "blue", "size": "3"},
        )

        result = ctx.bind(ItemQuery)

        assert result.name == "widget"
        assert result.color == "blue"
        assert result.size == 3

    def test_query_only_with_empty_body(self):
        """Test that an empty body binds as an empty object."""
        ctx = make_context(queryStringParameters={"name": "gadget"})

        assert ctx.bind(ItemQuery) == ItemQuery(name="gadget")

    def test_empty_body_still_validates_required_fields(self):
        """Test that an empty body binds as {} and required fields are enforced."""
        ctx = make_context(body="")

        with pytest.raises(BindError):
            ctx.bind(StrictItem)

    def test_empty_body_with_query_fills_required_fields(self):
        ctx = make_context(queryStringParameters={"name": "widget", "quantity": "2"})

        assert ctx.bind(StrictItem) == StrictItem(name="widget", quantity=2)

    @pytest.mark.parametrize("body", ["   ", "\n"])
    def test_whitespace_body_is_not_empty(self, body):
        """Test that only a truly empty body is treated as an empty object."""
        ctx = make_context(body=body)

        with pytest.raises(BindError):
            ctx.bind(ItemQuery)

    def test_invalid_json_body(self):
        ctx = make_context(body="{not json")

        with pytest.raises(BindError):
            ctx.bind(ItemQuery)

    @pytest.mark.parametrize("body", ['[1, 2]', '"text"', '42', 'null'])
    def test_non_object_body(self, body):
        """Test that only JSON objects can be merged with the query string."""
        ctx = make_context(body=body)

        with pytest.raises(BindError) as exc_info:
            ctx.bind(ItemQuery)

        assert "expected a JSON object" in str(exc_info.value)

    def test_validation_failure(self):
        ctx = make_context(body='{"name": "widget"}')

        with pytest.raises(BindError):
            ctx.bind(StrictItem)

    def test_query_value_failing_validation(self):
        ctx = make_context(
            body='{"name": "widget", "quantity": 2}',
            queryStringParameters={"quantity": "lots"},
        )

        with pytest.raises(BindError):
            ctx.bind(StrictItem)

    def test_bind_does_not_set_response(self):
        ctx = make_context(body='{"name": "widget"}')
        ctx.bind(ItemQuery)

        assert ctx.response is None


class TestResponseSetters:
    """Test cases for the response-setting operations."""

    def test_initially_no_response(self):
        assert make_context().response is None

    def test_no_content(self):
        ctx = make_context()
        ctx.no_content(202)

        assert ctx.response.status_code == 202
        assert ctx.response.body == ""
        assert ctx.response.headers == {}

    def test_string(self):
        ctx = make_context()
        ctx.string(200, "plain text")

        assert ctx.response.status_code == 200
        assert ctx.response.body == "plain text"
        assert ctx.response.headers == {}

    def test_json(self):
        ctx = make_context()
        ctx.json(200, {"items": [1, 2], "ok": True})

        assert ctx.response.status_code == 200
        assert json.loads(ctx.response.body) == {"items": [1, 2], "ok": True}
        assert ctx.response.headers == {}

    def test_json_string_value_is_encoded(self):
        ctx = make_context()
        ctx.json(200, "hi")

        assert ctx.response.body == '"hi"'

    def test_json_pydantic_model_and_datetime(self):
        ctx = make_context()
        created = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        ctx.json(201, {"item": StrictItem(name="widget", quantity=2), "created": created})

        body = json.loads(ctx.response.body)
        assert body["item"] == {"name": "widget", "quantity": 2}
        assert body["created"].startswith("2024-01-01T12:00:00")

    def test_json_dataclass(self):
        ctx = make_context()
        ctx.json(200, Point(x=1, y=2))

        assert json.loads(ctx.response.body) == {"x": 1, "y": 2}

    def test_json_unencodable_value(self):
        """Test that values without a JSON form raise SerializationError."""
        ctx = make_context()

        with pytest.raises(SerializationError):
            ctx.json(200, {"handle": object()})

        assert ctx.response is None

    def test_json_nan(self):
        ctx = make_context()

        with pytest.raises(SerializationError):
            ctx.json(200, float("nan"))

    def test_json_circular_reference(self):
        ctx = make_context()
        data = {}
        data["self"] = data

        with pytest.raises(SerializationError):
            ctx.json(200, data)

    def test_later_setter_overwrites(self):
        ctx = make_context()
        ctx.string(200, "first")
        ctx.json(201, {"second": True})

        assert ctx.response.status_code == 201
        assert json.loads(ctx.response.body) == {"second": True}

    def test_continue_chain_sets_nothing(self):
        ctx = make_context()

        assert ctx.continue_chain() is None
        assert ctx.response is None

    def test_continue_chain_keeps_existing_response(self):
        ctx = make_context()
        ctx.string(200, "kept")
        ctx.continue_chain()

        assert ctx.response.body == "kept"


class TestToDict:
    """Test cases for the diagnostic dump."""

    def test_without_response(self, api_gateway_event):
        ctx = Context(Request.from_event(api_gateway_event))

        data = ctx.to_dict()

        assert data["request"]["path"] == "/items/42"
        assert data["response"] is None
        json.dumps(data)

    def test_with_response(self):
        ctx = make_context()
        ctx.string(200, "ok")

        assert ctx.to_dict()["response"] == {"statusCode": 200, "headers": {}, "body": "ok"}
