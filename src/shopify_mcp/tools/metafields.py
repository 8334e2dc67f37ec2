"""Metafield tools."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from shopify_mcp.core.envelope import MutationPayload
from shopify_mcp.core.errors import NotFoundError, raise_if_business_errors
from shopify_mcp.core.formatters import qualify
from shopify_mcp.core.schemas import NonEmptyStr
from shopify_mcp.core.tool import ShopifyTool, ToolInput, pick

MetafieldOwnerType = Literal[
    "ARTICLE", "BLOG", "COLLECTION", "CUSTOMER", "DRAFTORDER", "ORDER",
    "PAGE", "PRODUCT", "PRODUCTIMAGE", "PRODUCTVARIANT", "SHOP",
]

# owner type enum → resource type segment of the owner's global id
OWNER_RESOURCE_TYPES: dict[str, str] = {
    "ARTICLE": "Article",
    "BLOG": "Blog",
    "COLLECTION": "Collection",
    "CUSTOMER": "Customer",
    "DRAFTORDER": "DraftOrder",
    "ORDER": "Order",
    "PAGE": "Page",
    "PRODUCT": "Product",
    "PRODUCTIMAGE": "ProductImage",
    "PRODUCTVARIANT": "ProductVariant",
    "SHOP": "Shop",
}

CREATE_METAFIELD_MUTATION = """
mutation CreateMetafield($input: MetafieldInput!) {
  metafieldCreate(input: $input) {
    metafield {
      id
      namespace
      key
      value
      type
      description
      ownerType
      createdAt
      updatedAt
    }
    userErrors {
      field
      message
    }
  }
}
"""


class CreateMetafieldInput(ToolInput):
    owner_id: NonEmptyStr
    namespace: NonEmptyStr
    key: NonEmptyStr
    value: NonEmptyStr
    type: NonEmptyStr = Field(description="Metafield type, e.g. single_line_text_field")
    description: str | None = None
    owner_type: MetafieldOwnerType = Field(default="PRODUCT", description="Resource type of ownerId")


class CreateMetafield(ShopifyTool):
    name = "create-metafield"
    description = "Create a new metafield for a resource in Shopify"
    operation = "create metafield"
    input_model = CreateMetafieldInput

    async def execute(self, params: CreateMetafieldInput) -> dict[str, Any]:
        metafield_input = {
            "ownerId": qualify(OWNER_RESOURCE_TYPES[params.owner_type], params.owner_id),
            **pick(params, "namespace", "key", "value", "type", "description"),
        }
        data = await self.client.request(CREATE_METAFIELD_MUTATION, {"input": metafield_input})

        payload = MutationPayload.from_response(data, "metafieldCreate")
        raise_if_business_errors(payload.user_errors, self.operation)

        metafield = payload.resource("metafield")
        if metafield is None:
            raise NotFoundError("Shopify returned no metafield")
        return {"metafield": metafield}
