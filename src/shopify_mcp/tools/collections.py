"""Collection tools."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from shopify_mcp.core.envelope import MutationPayload
from shopify_mcp.core.errors import NotFoundError, raise_if_business_errors
from shopify_mcp.core.formatters import qualify, unwrap_edges
from shopify_mcp.core.schemas import Image, MetafieldInput, NonEmptyStr, Seo
from shopify_mcp.core.tool import ShopifyTool, ToolInput, pick

SortOrder = Literal[
    "MANUAL", "BEST_SELLING", "ALPHA_ASC", "ALPHA_DESC", "PRICE_DESC",
    "PRICE_ASC", "CREATED", "CREATED_DESC", "ID_DESC", "RELEVANCE",
]
RuleColumn = Literal[
    "TAG", "TITLE", "TYPE", "VENDOR", "VARIANT_PRICE", "VARIANT_COMPARE_AT_PRICE",
    "VARIANT_WEIGHT", "VARIANT_INVENTORY", "VARIANT_TITLE", "IS_PRICE_REDUCED",
    "VARIANT_BARCODE",
]
RuleRelation = Literal[
    "EQUALS", "NOT_EQUALS", "GREATER_THAN", "LESS_THAN", "STARTS_WITH",
    "ENDS_WITH", "CONTAINS", "NOT_CONTAINS", "IS_SET", "IS_NOT_SET",
]

_COLLECTION_FIELDS = """
      id
      title
      description
      descriptionHtml
      handle
      updatedAt
      sortOrder
      templateSuffix
      productsCount {
        count
      }
      seo {
        title
        description
      }
      image {
        id
        url
        altText
        width
        height
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
"""

_RULE_SET_FIELDS = """
      ruleSet {
        appliedDisjunctively
        rules {
          column
          relation
          condition
        }
      }
"""

_CREATE_COLLECTION_TEMPLATE = """
mutation CreateCollection($input: CollectionInput!) {
  collectionCreate(input: $input) {
    collection {%s}
    userErrors {
      field
      message
    }
  }
}
"""

CREATE_COLLECTION_MUTATION = _CREATE_COLLECTION_TEMPLATE % _COLLECTION_FIELDS
CREATE_SMART_COLLECTION_MUTATION = _CREATE_COLLECTION_TEMPLATE % (_COLLECTION_FIELDS + _RULE_SET_FIELDS)


class CollectionRule(ToolInput):
    column: RuleColumn
    relation: RuleRelation
    condition: str


class CollectionRuleSet(ToolInput):
    rules: list[CollectionRule]
    applied_disjunctively: bool = True


class CreateCollectionInput(ToolInput):
    title: NonEmptyStr
    description_html: str | None = None
    handle: str | None = None
    is_published: bool | None = Field(default=None, description="Sent to Shopify as `published`")
    seo: Seo | None = None
    image: Image | None = None
    products_to_add: list[NonEmptyStr] | None = None
    sort_order: SortOrder | None = None
    template_suffix: str | None = None
    rule_set: CollectionRuleSet | None = Field(default=None, description="Makes this a smart collection")
    metafields: list[MetafieldInput] | None = None


class CreateCollection(ShopifyTool):
    name = "create-collection"
    description = "Create a new manual or smart collection in Shopify"
    operation = "create collection"
    input_model = CreateCollectionInput

    def build_input(self, params: CreateCollectionInput) -> dict[str, Any]:
        collection_input = pick(
            params,
            "title", "description_html", "handle", "seo", "image", "sort_order",
            "template_suffix", "rule_set", "metafields",
        )
        if params.is_published is not None:
            collection_input["published"] = params.is_published
        if params.products_to_add:
            collection_input["products"] = [qualify("Product", pid) for pid in params.products_to_add]
        return collection_input

    async def execute(self, params: CreateCollectionInput) -> dict[str, Any]:
        document = CREATE_SMART_COLLECTION_MUTATION if params.rule_set else CREATE_COLLECTION_MUTATION
        data = await self.client.request(document, {"input": self.build_input(params)})

        payload = MutationPayload.from_response(data, "collectionCreate")
        raise_if_business_errors(payload.user_errors, self.operation)

        collection = payload.resource("collection")
        if collection is None:
            raise NotFoundError("Shopify returned no collection")
        flat = dict(collection)
        flat["productsCount"] = (collection.get("productsCount") or {}).get("count")
        flat["metafields"] = unwrap_edges(collection.get("metafields"))
        return {"collection": flat}
