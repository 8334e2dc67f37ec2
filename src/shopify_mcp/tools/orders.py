"""
Order tools: list, fetch one, update, create (as a draft order), fulfill.

``create-order`` goes through ``draftOrderCreate``: a draft can be built
from variant ids alone, and Shopify turns it into a real order on checkout.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import EmailStr, Field, field_validator

from shopify_mcp.core.envelope import MutationPayload
from shopify_mcp.core.errors import NotFoundError, raise_if_business_errors
from shopify_mcp.core.formatters import qualify, search_query, shop_money, unwrap_edges
from shopify_mcp.core.schemas import (
    DEFAULT_LIMIT,
    CustomAttribute,
    Limit,
    MailingAddress,
    MetafieldInput,
    MetafieldUpdate,
    NonEmptyStr,
)
from shopify_mcp.core.tool import ShopifyTool, ToolInput, pick
from shopify_mcp.graphql.fragments import ORDER_BASIC, ORDER_FULL_FRAGMENTS, compose

MONEY_FIELDS = {
    "totalPriceSet": "totalPrice",
    "subtotalPriceSet": "subtotalPrice",
    "totalTaxSet": "totalTax",
    "totalShippingPriceSet": "totalShippingPrice",
}

GET_ORDERS_QUERY = compose(
    ORDER_BASIC,
    """
query GetOrders($first: Int!, $query: String) {
  orders(first: $first, query: $query, sortKey: PROCESSED_AT, reverse: true) {
    edges {
      node {
        ...OrderBasic
      }
    }
  }
}
""",
)

GET_ORDER_BY_ID_QUERY = compose(
    *ORDER_FULL_FRAGMENTS,
    """
query GetOrderById($id: ID!) {
  order(id: $id) {
    ...OrderFull
  }
}
""",
)

UPDATE_ORDER_MUTATION = compose(
    *ORDER_FULL_FRAGMENTS,
    """
mutation UpdateOrder($input: OrderInput!) {
  orderUpdate(input: $input) {
    order {
      ...OrderFull
    }
    userErrors {
      field
      message
    }
  }
}
""",
)

CREATE_DRAFT_ORDER_MUTATION = """
mutation CreateDraftOrder($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder {
      id
      name
      email
      phone
      privateNote
      tags
      taxExempt
      totalPriceSet {
        shopMoney {
          amount
          currencyCode
        }
      }
      subtotalPriceSet {
        shopMoney {
          amount
          currencyCode
        }
      }
      totalTaxSet {
        shopMoney {
          amount
          currencyCode
        }
      }
      totalShippingPriceSet {
        shopMoney {
          amount
          currencyCode
        }
      }
      customer {
        id
        firstName
        lastName
        email
        phone
      }
      shippingAddress {
        address1
        address2
        city
        company
        country
        firstName
        lastName
        phone
        province
        zip
      }
      billingAddress {
        address1
        address2
        city
        company
        country
        firstName
        lastName
        phone
        province
        zip
      }
      lineItems(first: 50) {
        edges {
          node {
            id
            title
            quantity
            originalTotalSet {
              shopMoney {
                amount
                currencyCode
              }
            }
            variant {
              id
              title
              sku
            }
            customAttributes {
              key
              value
            }
          }
        }
      }
      customAttributes {
        key
        value
      }
      metafields(first: 10) {
        edges {
          node {
            id
            namespace
            key
            value
            type
          }
        }
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

CREATE_FULFILLMENT_MUTATION = """
mutation CreateFulfillment($fulfillment: FulfillmentInput!) {
  fulfillmentCreate(fulfillment: $fulfillment) {
    fulfillment {
      id
      name
      status
      displayStatus
      createdAt
      updatedAt
      deliveredAt
      estimatedDeliveryAt
      legacyResourceId
      trackingInfo {
        number
        url
        company
      }
      originAddress {
        address1
        address2
        city
        countryCode
        provinceCode
        zip
      }
      service {
        id
        handle
        serviceName
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

VARIANT_HINT = "Invalid product variant. Please check that all variant IDs are correct."
CUSTOMER_HINT = "Invalid customer ID. Please check the customer ID format."


def _with_money(node: dict[str, Any]) -> dict[str, Any]:
    flat = {k: v for k, v in node.items() if k not in MONEY_FIELDS}
    for source, target in MONEY_FIELDS.items():
        if source in node:
            flat[target] = shop_money(node[source])
    return flat


def flatten_order_summary(order: dict[str, Any]) -> dict[str, Any]:
    """Flatten an ``OrderBasic`` selection."""
    return _with_money(order)


def flatten_order(order: dict[str, Any]) -> dict[str, Any]:
    """Flatten an ``OrderFull`` selection."""
    flat = _with_money(order)
    flat["lineItems"] = [
        {
            "id": item["id"],
            "title": item.get("title"),
            "quantity": item.get("quantity"),
            "sku": item.get("sku"),
            "originalUnitPrice": shop_money(item.get("originalUnitPriceSet")),
            "discountedTotal": shop_money(item.get("discountedTotalSet")),
            "variant": item.get("variant"),
            "product": item.get("product"),
        }
        for item in unwrap_edges(order.get("lineItems"))
    ]
    flat["shippingLines"] = [
        {
            "id": line.get("id"),
            "title": line.get("title"),
            "code": line.get("code"),
            "source": line.get("source"),
            "price": shop_money(line.get("originalPriceSet")),
        }
        for line in unwrap_edges(order.get("shippingLines"))
    ]
    flat["fulfillments"] = order.get("fulfillments") or []
    flat["metafields"] = unwrap_edges(order.get("metafields"))
    return flat


# ─── get-orders ───

class GetOrdersInput(ToolInput):
    status: Literal["any", "open", "closed", "cancelled"] = "any"
    limit: Limit = DEFAULT_LIMIT


class GetOrders(ShopifyTool):
    name = "get-orders"
    description = "Get orders with optional filtering by status"
    operation = "fetch orders"
    input_model = GetOrdersInput

    async def execute(self, params: GetOrdersInput) -> dict[str, Any]:
        variables: dict[str, Any] = {"first": params.limit}
        query = search_query(f"status:{params.status}" if params.status != "any" else None)
        if query:
            variables["query"] = query

        data = await self.client.request(GET_ORDERS_QUERY, variables)
        return {"orders": [flatten_order_summary(o) for o in unwrap_edges(data.get("orders"))]}


# ─── get-order-by-id ───

class GetOrderByIdInput(ToolInput):
    order_id: NonEmptyStr = Field(description="Numeric order ID or gid://shopify/Order/... global ID")


class GetOrderById(ShopifyTool):
    name = "get-order-by-id"
    description = "Get a specific order by ID"
    operation = "fetch order"
    input_model = GetOrderByIdInput

    async def execute(self, params: GetOrderByIdInput) -> dict[str, Any]:
        data = await self.client.request(
            GET_ORDER_BY_ID_QUERY, {"id": qualify("Order", params.order_id)}
        )
        order = data.get("order")
        if order is None:
            raise NotFoundError("Order not found")
        return {"order": flatten_order(order)}


# ─── update-order ───

class UpdateOrderInput(ToolInput):
    id: NonEmptyStr
    tags: list[str] | None = None
    email: EmailStr | None = None
    note: str | None = None
    custom_attributes: list[CustomAttribute] | None = None
    metafields: list[MetafieldUpdate] | None = None
    shipping_address: MailingAddress | None = None


class UpdateOrder(ShopifyTool):
    name = "update-order"
    description = "Update an existing order with new information"
    operation = "update order"
    input_model = UpdateOrderInput

    async def execute(self, params: UpdateOrderInput) -> dict[str, Any]:
        order_input = {
            "id": qualify("Order", params.id),
            **pick(params, "tags", "email", "note", "custom_attributes", "metafields", "shipping_address"),
        }
        data = await self.client.request(UPDATE_ORDER_MUTATION, {"input": order_input})

        payload = MutationPayload.from_response(data, "orderUpdate")
        raise_if_business_errors(payload.user_errors, self.operation)
        order = payload.resource("order")
        if order is None:
            raise NotFoundError("Order not found")
        return {"order": flatten_order(order)}


# ─── create-order ───

class LineItemInput(ToolInput):
    variant_id: NonEmptyStr
    quantity: int = Field(gt=0)
    custom_attributes: list[CustomAttribute] | None = None


class ShippingLine(ToolInput):
    title: str
    price: str


class CreateOrderInput(ToolInput):
    line_items: list[LineItemInput] = Field(min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    note: str | None = None
    tags: list[str] | None = None
    custom_attributes: list[CustomAttribute] | None = None
    metafields: list[MetafieldInput] | None = None
    billing_address: MailingAddress | None = None
    shipping_address: MailingAddress | None = None
    customer_id: NonEmptyStr | None = None
    shipping_line: ShippingLine | None = None
    tax_exempt: bool | None = None
    presentment_currency_code: str | None = None

    @field_validator("line_items", mode="before")
    @classmethod
    def _decode_line_items(cls, value: Any) -> Any:
        # Some MCP clients send arrays as a JSON-encoded string
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                raise ValueError("Invalid lineItems format. Expected a valid JSON array.") from None
        if isinstance(value, dict):
            value = [value]
        return value


class CreateOrder(ShopifyTool):
    name = "create-order"
    description = "Create a new draft order in Shopify"
    operation = "create order"
    input_model = CreateOrderInput

    hints = {
        "variantId": VARIANT_HINT,
        "lineItems": VARIANT_HINT,
        "customerId": CUSTOMER_HINT,
    }

    def build_input(self, params: CreateOrderInput) -> dict[str, Any]:
        draft = pick(
            params,
            "email", "phone", "tags", "custom_attributes", "metafields", "billing_address",
            "shipping_address", "shipping_line", "tax_exempt", "presentment_currency_code",
        )
        if params.note is not None:
            draft["privateNote"] = params.note
        if params.customer_id is not None:
            draft["customerId"] = qualify("Customer", params.customer_id)
        draft["lineItems"] = [
            {
                **pick(item, "quantity", "custom_attributes"),
                "variantId": qualify("ProductVariant", item.variant_id),
            }
            for item in params.line_items
        ]
        return draft

    async def execute(self, params: CreateOrderInput) -> dict[str, Any]:
        data = await self.client.request(
            CREATE_DRAFT_ORDER_MUTATION, {"input": self.build_input(params)}
        )
        payload = MutationPayload.from_response(data, "draftOrderCreate")
        raise_if_business_errors(payload.user_errors, self.operation, hints=self.hints)

        draft = payload.resource("draftOrder")
        if draft is None:
            raise NotFoundError("Shopify returned no draft order")

        order = _with_money({k: v for k, v in draft.items() if k != "privateNote"})
        order["note"] = draft.get("privateNote")
        order["lineItems"] = [
            {
                "id": item["id"],
                "title": item.get("title"),
                "quantity": item.get("quantity"),
                "originalTotal": shop_money(item.get("originalTotalSet")),
                "variant": item.get("variant"),
                "customAttributes": item.get("customAttributes"),
            }
            for item in unwrap_edges(draft.get("lineItems"))
        ]
        order["metafields"] = unwrap_edges(draft.get("metafields"))
        return {"order": order}


# ─── create-fulfillment ───

class TrackingInfo(ToolInput):
    number: str | None = None
    url: str | None = None
    company: str | None = None


class FulfillmentLineItem(ToolInput):
    id: NonEmptyStr
    quantity: int = Field(gt=0)


class CreateFulfillmentInput(ToolInput):
    order_id: NonEmptyStr
    tracking_info: TrackingInfo | None = None
    notify_customer: bool = True
    line_items: list[FulfillmentLineItem] | None = None
    location_id: NonEmptyStr | None = None
    tracking_numbers: list[str] | None = None
    tracking_urls: list[str] | None = None
    metadata: dict[str, str | int | float | bool] | None = None


class CreateFulfillment(ShopifyTool):
    name = "create-fulfillment"
    description = "Create a new fulfillment for an order in Shopify"
    operation = "create fulfillment"
    input_model = CreateFulfillmentInput

    def build_input(self, params: CreateFulfillmentInput) -> dict[str, Any]:
        fulfillment: dict[str, Any] = {
            "orderId": qualify("Order", params.order_id),
            "notifyCustomer": params.notify_customer,
            **pick(params, "tracking_info", "metadata"),
        }
        if params.line_items:
            fulfillment["lineItems"] = [
                {"id": qualify("LineItem", item.id), "quantity": item.quantity}
                for item in params.line_items
            ]
        if params.location_id is not None:
            fulfillment["locationId"] = qualify("Location", params.location_id)
        if params.tracking_numbers:
            fulfillment["trackingNumbers"] = params.tracking_numbers
        if params.tracking_urls:
            fulfillment["trackingUrls"] = params.tracking_urls
        return fulfillment

    async def execute(self, params: CreateFulfillmentInput) -> dict[str, Any]:
        data = await self.client.request(
            CREATE_FULFILLMENT_MUTATION, {"fulfillment": self.build_input(params)}
        )
        payload = MutationPayload.from_response(data, "fulfillmentCreate")
        raise_if_business_errors(payload.user_errors, self.operation)
        fulfillment = payload.resource("fulfillment")
        if fulfillment is None:
            raise NotFoundError("Shopify returned no fulfillment")
        return {"fulfillment": fulfillment}
