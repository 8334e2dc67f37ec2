"""Customer tools."""

from __future__ import annotations

from typing import Any

from pydantic import EmailStr, Field

from shopify_mcp.core.envelope import MutationPayload
from shopify_mcp.core.errors import NotFoundError, raise_if_business_errors
from shopify_mcp.core.formatters import extract_token, qualify, unwrap_edges
from shopify_mcp.core.schemas import (
    DEFAULT_LIMIT,
    Limit,
    MailingAddress,
    MetafieldInput,
    MetafieldUpdate,
    NumericId,
    SmsMarketingConsent,
)
from shopify_mcp.core.tool import ShopifyTool, ToolInput, pick
from shopify_mcp.graphql.fragments import (
    CUSTOMER_BASIC,
    CUSTOMER_FULL_FRAGMENTS,
    ORDER_BASIC,
    compose,
)
from shopify_mcp.tools.orders import flatten_order_summary

GET_CUSTOMERS_QUERY = compose(
    CUSTOMER_BASIC,
    """
query GetCustomers($first: Int!, $query: String) {
  customers(first: $first, query: $query) {
    edges {
      node {
        ...CustomerBasic
        defaultAddress {
          id
          address1
          address2
          city
          country
          province
          zip
        }
      }
    }
  }
}
""",
)

CREATE_CUSTOMER_MUTATION = compose(
    *CUSTOMER_FULL_FRAGMENTS,
    """
mutation CreateCustomer($input: CustomerInput!) {
  customerCreate(input: $input) {
    customer {
      ...CustomerFull
    }
    userErrors {
      field
      message
    }
  }
}
""",
)

UPDATE_CUSTOMER_MUTATION = compose(
    *CUSTOMER_FULL_FRAGMENTS,
    """
mutation UpdateCustomer($input: CustomerInput!) {
  customerUpdate(input: $input) {
    customer {
      ...CustomerFull
    }
    userErrors {
      field
      message
    }
  }
}
""",
)

GET_CUSTOMER_ORDERS_QUERY = compose(
    ORDER_BASIC,
    """
query GetCustomerOrders($first: Int!, $query: String) {
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


def _full_customer(customer: dict[str, Any]) -> dict[str, Any]:
    addresses = customer.get("addresses")
    if isinstance(addresses, dict):
        addresses = unwrap_edges(addresses)
    flat = {k: v for k, v in customer.items() if k not in ("addresses", "metafields")}
    flat["addresses"] = addresses or []
    flat["metafields"] = unwrap_edges(customer.get("metafields"))
    return flat


# ─── get-customers ───

class GetCustomersInput(ToolInput):
    search_query: str | None = Field(default=None, description="Shopify customer search syntax, e.g. email:jane@example.com")
    limit: Limit = DEFAULT_LIMIT


class GetCustomers(ShopifyTool):
    name = "get-customers"
    description = "Get all customers or search by email"
    operation = "fetch customers"
    input_model = GetCustomersInput

    async def execute(self, params: GetCustomersInput) -> dict[str, Any]:
        variables: dict[str, Any] = {"first": params.limit}
        if params.search_query:
            variables["query"] = params.search_query

        data = await self.client.request(GET_CUSTOMERS_QUERY, variables)
        return {"customers": unwrap_edges(data.get("customers"))}


# ─── create-customer ───

CUSTOMER_OPTIONAL_FIELDS = (
    "first_name", "last_name", "phone", "note", "tags", "tax_exempt",
    "sms_marketing_consent", "metafields",
)


class CreateCustomerInput(ToolInput):
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    note: str | None = None
    tags: list[str] | None = None
    tax_exempt: bool | None = None
    sms_marketing_consent: SmsMarketingConsent | None = None
    addresses: list[MailingAddress] | None = None
    metafields: list[MetafieldInput] | None = None


class CreateCustomer(ShopifyTool):
    name = "create-customer"
    description = "Create a new customer in Shopify"
    operation = "create customer"
    input_model = CreateCustomerInput

    async def execute(self, params: CreateCustomerInput) -> dict[str, Any]:
        customer_input = pick(params, "email", "addresses", *CUSTOMER_OPTIONAL_FIELDS)
        data = await self.client.request(CREATE_CUSTOMER_MUTATION, {"input": customer_input})

        payload = MutationPayload.from_response(data, "customerCreate")
        raise_if_business_errors(payload.user_errors, self.operation)
        customer = payload.resource("customer")
        if customer is None:
            raise NotFoundError("Shopify returned no customer")
        return {"customer": _full_customer(customer)}


# ─── update-customer ───

class UpdateCustomerInput(ToolInput):
    id: NumericId
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    note: str | None = None
    tags: list[str] | None = None
    tax_exempt: bool | None = None
    sms_marketing_consent: SmsMarketingConsent | None = None
    metafields: list[MetafieldUpdate] | None = None


class UpdateCustomer(ShopifyTool):
    name = "update-customer"
    description = "Update a customer's information"
    operation = "update customer"
    input_model = UpdateCustomerInput

    async def execute(self, params: UpdateCustomerInput) -> dict[str, Any]:
        customer_input = {
            "id": qualify("Customer", params.id),
            **pick(params, "email", *CUSTOMER_OPTIONAL_FIELDS),
        }
        data = await self.client.request(UPDATE_CUSTOMER_MUTATION, {"input": customer_input})

        payload = MutationPayload.from_response(data, "customerUpdate")
        raise_if_business_errors(payload.user_errors, self.operation)
        customer = payload.resource("customer")
        if customer is None:
            raise NotFoundError("Customer not found")
        return {"customer": _full_customer(customer)}


# ─── get-customer-orders ───

class GetCustomerOrdersInput(ToolInput):
    customer_id: NumericId
    limit: Limit = DEFAULT_LIMIT


class GetCustomerOrders(ShopifyTool):
    name = "get-customer-orders"
    description = "Get orders for a specific customer"
    operation = "fetch customer orders"
    input_model = GetCustomerOrdersInput

    async def execute(self, params: GetCustomerOrdersInput) -> dict[str, Any]:
        token = extract_token(qualify("Customer", params.customer_id))
        data = await self.client.request(
            GET_CUSTOMER_ORDERS_QUERY,
            {"first": params.limit, "query": f"customer_id:{token}"},
        )
        return {"orders": [flatten_order_summary(o) for o in unwrap_edges(data.get("orders"))]}
