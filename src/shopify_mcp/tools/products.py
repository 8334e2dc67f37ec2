"""Product tools: list/search, fetch one, create."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from shopify_mcp.core.client import GraphQLRequester
from shopify_mcp.core.envelope import MutationPayload
from shopify_mcp.core.errors import NotFoundError, raise_if_business_errors
from shopify_mcp.core.formatters import qualify, quote_value, search_query, unwrap_edges
from shopify_mcp.core.schemas import (
    DEFAULT_LIMIT,
    Image,
    Limit,
    MetafieldInput,
    NonEmptyStr,
    Seo,
)
from shopify_mcp.core.tool import ShopifyTool, ToolInput, pick
from shopify_mcp.graphql.fragments import PRICE_RANGE, PRODUCT_FULL_FRAGMENTS, compose

ProductStatus = Literal["ACTIVE", "DRAFT", "ARCHIVED"]

GET_PRODUCTS_QUERY = """
query GetProducts($first: Int!, $query: String) {
  products(first: $first, query: $query) {
    edges {
      node {
        id
        title
        description
        handle
        status
        vendor
        productType
        createdAt
        updatedAt
        totalInventory
        %s
        images(first: 1) {
          edges {
            node {
              url
              altText
            }
          }
        }
        variants(first: 5) {
          edges {
            node {
              id
              title
              price
              inventoryQuantity
              sku
            }
          }
        }
      }
    }
  }
}
""" % PRICE_RANGE

GET_PRODUCT_BY_ID_QUERY = compose(
    *PRODUCT_FULL_FRAGMENTS,
    """
query GetProductById($id: ID!) {
  product(id: $id) {
    ...ProductFull
    %s
    collections(first: 10) {
      edges {
        node {
          id
          title
          handle
        }
      }
    }
  }
}
""" % PRICE_RANGE,
)

CREATE_PRODUCT_MUTATION = compose(
    *PRODUCT_FULL_FRAGMENTS,
    """
mutation CreateProduct($input: ProductInput!) {
  productCreate(input: $input) {
    product {
      ...ProductFull
    }
    userErrors {
      field
      message
    }
  }
}
""",
)


def _price_range(product: dict[str, Any]) -> dict[str, Any] | None:
    price_range = product.get("priceRangeV2")
    if not price_range:
        return None
    return {
        "minPrice": price_range["minVariantPrice"],
        "maxPrice": price_range["maxVariantPrice"],
    }


def _full_product(product: dict[str, Any]) -> dict[str, Any]:
    """Flatten a ``ProductFull`` selection."""
    return {
        "id": product["id"],
        "title": product.get("title"),
        "description": product.get("description"),
        "descriptionHtml": product.get("descriptionHtml"),
        "handle": product.get("handle"),
        "status": product.get("status"),
        "vendor": product.get("vendor"),
        "productType": product.get("productType"),
        "tags": product.get("tags"),
        "createdAt": product.get("createdAt"),
        "updatedAt": product.get("updatedAt"),
        "totalInventory": product.get("totalInventory"),
        "options": product.get("options"),
        "seo": product.get("seo"),
        "variants": unwrap_edges(product.get("variants")),
        "images": unwrap_edges(product.get("images")),
        "metafields": unwrap_edges(product.get("metafields")),
    }


# ─── get-products ───

class GetProductsInput(ToolInput):
    search_title: str | None = Field(default=None, description="Match products whose title contains this text")
    vendor: str | None = None
    product_type: str | None = None
    status: ProductStatus | None = None
    limit: Limit = DEFAULT_LIMIT


class GetProducts(ShopifyTool):
    name = "get-products"
    description = "Get all products or search by title"
    operation = "fetch products"
    input_model = GetProductsInput

    async def execute(self, params: GetProductsInput) -> dict[str, Any]:
        query = search_query(
            f"title:*{params.search_title}*" if params.search_title else None,
            f"vendor:{quote_value(params.vendor)}" if params.vendor else None,
            f"product_type:{quote_value(params.product_type)}" if params.product_type else None,
            f"status:{params.status.lower()}" if params.status else None,
        )
        variables: dict[str, Any] = {"first": params.limit}
        if query:
            variables["query"] = query

        data = await self.client.request(GET_PRODUCTS_QUERY, variables)

        products = []
        for product in unwrap_edges(data.get("products")):
            images = unwrap_edges(product.get("images"))
            products.append({
                "id": product["id"],
                "title": product.get("title"),
                "description": product.get("description"),
                "handle": product.get("handle"),
                "status": product.get("status"),
                "vendor": product.get("vendor"),
                "productType": product.get("productType"),
                "createdAt": product.get("createdAt"),
                "updatedAt": product.get("updatedAt"),
                "totalInventory": product.get("totalInventory"),
                "priceRange": _price_range(product),
                "imageUrl": images[0]["url"] if images else None,
                "variants": unwrap_edges(product.get("variants")),
            })
        return {"products": products}


# ─── get-product-by-id ───

class GetProductByIdInput(ToolInput):
    product_id: NonEmptyStr = Field(description="Numeric product ID or gid://shopify/Product/... global ID")


class GetProductById(ShopifyTool):
    name = "get-product-by-id"
    description = "Get a specific product by ID with all details"
    operation = "fetch product details"
    input_model = GetProductByIdInput

    async def execute(self, params: GetProductByIdInput) -> dict[str, Any]:
        data = await self.client.request(
            GET_PRODUCT_BY_ID_QUERY, {"id": qualify("Product", params.product_id)}
        )
        product = data.get("product")
        if product is None:
            raise NotFoundError("Product not found")

        result = _full_product(product)
        result["priceRange"] = _price_range(product)
        result["collections"] = unwrap_edges(product.get("collections"))
        return {"product": result}


# ─── create-product ───

class ProductOption(ToolInput):
    name: NonEmptyStr
    values: list[str] = Field(min_length=1)


class ProductVariantInput(ToolInput):
    options: list[str]
    price: str
    sku: str | None = None
    weight: float | None = None
    weight_unit: Literal["KILOGRAMS", "GRAMS", "POUNDS", "OUNCES"] | None = None
    inventory_quantity: int | None = None
    location_id: NonEmptyStr | None = Field(default=None, description="Location for inventoryQuantity; defaults to the store's configured location")
    inventory_policy: Literal["DENY", "CONTINUE"] | None = None
    inventory_management: Literal["SHOPIFY", "NOT_MANAGED"] | None = None
    requires_shipping: bool | None = None
    taxable: bool | None = None
    barcode: str | None = None


class CreateProductInput(ToolInput):
    title: NonEmptyStr
    description_html: str | None = None
    vendor: str | None = None
    product_type: str | None = None
    tags: list[str] | None = None
    status: ProductStatus = "ACTIVE"
    options: list[ProductOption] | None = None
    variants: list[ProductVariantInput] | None = None
    images: list[Image] | None = None
    seo: Seo | None = None
    metafields: list[MetafieldInput] | None = None
    collections_to_join: list[NonEmptyStr] | None = None
    gift_card: bool | None = None
    tax_code: str | None = None


class CreateProduct(ShopifyTool):
    name = "create-product"
    description = "Create a new product in Shopify"
    operation = "create product"
    input_model = CreateProductInput

    def __init__(self, client: GraphQLRequester | None, default_location_id: str = "1") -> None:
        super().__init__(client)
        self.default_location_id = default_location_id

    def _variant(self, variant: ProductVariantInput) -> dict[str, Any]:
        payload = pick(
            variant,
            "options", "price", "sku", "weight", "weight_unit", "inventory_policy",
            "inventory_management", "requires_shipping", "taxable", "barcode",
        )
        if variant.inventory_quantity is not None:
            location_id = variant.location_id
            if location_id is None:
                location_id = self.default_location_id
            payload["inventoryQuantities"] = {
                "availableQuantity": variant.inventory_quantity,
                "locationId": qualify("Location", location_id),
            }
        return payload

    def build_input(self, params: CreateProductInput) -> dict[str, Any]:
        product_input = pick(
            params,
            "title", "status", "description_html", "vendor", "product_type", "tags",
            "options", "images", "seo", "metafields", "gift_card", "tax_code",
        )
        if params.variants:
            product_input["variants"] = [self._variant(v) for v in params.variants]
        if params.collections_to_join:
            product_input["collectionsToJoin"] = [
                qualify("Collection", cid) for cid in params.collections_to_join
            ]
        return product_input

    async def execute(self, params: CreateProductInput) -> dict[str, Any]:
        data = await self.client.request(
            CREATE_PRODUCT_MUTATION, {"input": self.build_input(params)}
        )
        payload = MutationPayload.from_response(data, "productCreate")
        raise_if_business_errors(payload.user_errors, self.operation)

        product = payload.resource("product")
        if product is None:
            raise NotFoundError("Shopify returned no product")
        return {"product": _full_product(product)}
