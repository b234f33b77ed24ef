"""
Items Lambda Function - example API built on the lambdaproxy router.

Shows chained handlers sharing one context, request binding, explicit HTTP
errors and a custom not-found handler. Items live in memory for the lifetime
of the execution environment.
"""

from datetime import datetime, timezone
from typing import Annotated, Dict, List
from uuid import uuid4

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field, field_validator

from lambdaproxy import Context, HTTPError, Router
from lambdaproxy.errors import BindError
from lambdaproxy.utils.observability import logger, metrics

ITEMS_PATH = '/items'
ITEM_PATH = '/items/{id}'

ITEMS: Dict[str, 'Item'] = {}


class CreateItemRequest(BaseModel):
    """Request model for creating an item."""

    name: Annotated[str, Field(
        min_length=1,
        max_length=50,
        description='Item name',
        examples=['widget']
    )]

    quantity: Annotated[int, Field(
        description='Number of units in stock',
        examples=[1, 5, 10]
    )] = 1

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        """Validate that quantity is not negative."""
        if v < 0:
            raise ValueError('quantity cannot be negative')
        return v


class Item(BaseModel):
    """A stored item."""

    id: str
    name: str
    quantity: int
    created_at: datetime


def require_json(ctx: Context) -> None:
    """Reject request bodies that are not declared as JSON."""
    content_type = ctx.header('Content-Type')
    if not content_type.startswith('application/json'):
        raise HTTPError(415, 'expected application/json')
    return ctx.continue_chain()


def list_items(ctx: Context) -> None:
    name = ctx.query_param('name')
    items: List[Item] = [item for item in ITEMS.values() if not name or item.name == name]
    logger.info("Listing items", extra={"item_count": len(items), "name_filter": name})
    ctx.json(200, {"items": items, "count": len(items)})


def create_item(ctx: Context) -> None:
    try:
        payload = ctx.bind(CreateItemRequest)
    except BindError as exc:
        logger.warning("Invalid item payload", extra={"error": str(exc)})
        raise HTTPError(400, 'invalid item payload') from exc

    item = Item(
        id=uuid4().hex,
        name=payload.name,
        quantity=payload.quantity,
        created_at=datetime.now(timezone.utc),
    )
    ITEMS[item.id] = item
    metrics.add_metric(name="ItemCreated", unit=MetricUnit.Count, value=1)
    ctx.json(201, item)


def load_item(ctx: Context) -> None:
    """Stop the chain with 404 when the item does not exist."""
    if ctx.path_param('id') not in ITEMS:
        raise HTTPError(404, 'missing')


def render_item(ctx: Context) -> None:
    ctx.json(200, ITEMS[ctx.path_param('id')])


def delete_item(ctx: Context) -> None:
    del ITEMS[ctx.path_param('id')]
    ctx.no_content(204)


def not_found(ctx: Context) -> None:
    ctx.string(404, f'no route for {ctx.request.http_method} {ctx.request.path}')


router = (
    Router()
    .get(ITEMS_PATH, list_items)
    .post(ITEMS_PATH, require_json, create_item)
    .get(ITEM_PATH, load_item, render_item)
    .delete(ITEM_PATH, load_item, delete_item)
    .set_not_found_handler(not_found)
)

lambda_handler = router.serve()

