"""
Inventory tools.

An item/location pair is either disconnected, connected but untracked, or
connected and tracked with quantities. The tools below map onto those
transitions one mutation each:

- connect-inventory-to-location  → ``inventoryActivate`` (absolute quantity)
- adjust-inventory               → ``inventoryAdjustQuantity`` (signed delta)
- set-inventory-tracking         → ``inventoryItemUpdate``
- disconnect-inventory-from-location → ``inventoryDeactivate``

Adjusting a disconnected pair is rejected by Shopify through userErrors.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from shopify_mcp.core.envelope import MutationPayload
from shopify_mcp.core.errors import NotFoundError, raise_if_business_errors
from shopify_mcp.core.formatters import (
    quantities_by_name,
    qualify,
    search_query,
    unwrap_edges,
)
from shopify_mcp.core.schemas import DEFAULT_LIMIT, Limit, NonEmptyStr
from shopify_mcp.core.tool import ShopifyTool, ToolInput
from shopify_mcp.graphql.fragments import INVENTORY_LEVEL, compose

GET_INVENTORY_LEVELS_QUERY = compose(
    INVENTORY_LEVEL,
    """
query GetInventoryLevels($first: Int!, $query: String) {
  inventoryLevels(first: $first, query: $query) {
    edges {
      node {
        ...InventoryLevelFields
      }
    }
  }
}
""",
)

GET_INVENTORY_ITEMS_QUERY = """
query GetInventoryItems($first: Int!, $query: String) {
  inventoryItems(first: $first, query: $query) {
    edges {
      node {
        id
        sku
        tracked
        requiresShipping
        countryCodeOfOrigin
        harmonizedSystemCode
        legacyResourceId
        unitCost {
          amount
          currencyCode
        }
        inventoryLevels(first: 5) {
          edges {
            node {
              id
              quantities(names: ["available", "incoming", "committed", "on_hand"]) {
                name
                quantity
              }
              location {
                id
                name
                isActive
              }
            }
          }
        }
        variant {
          id
          displayName
          sku
          inventoryQuantity
          inventoryPolicy
          product {
            id
            title
            handle
            status
          }
        }
      }
    }
  }
}
"""

GET_LOCATIONS_QUERY = """
query GetLocations($first: Int!, $query: String) {
  locations(first: $first, query: $query) {
    edges {
      node {
        id
        name
        isActive
        legacyResourceId
        fulfillsOnlineOrders
        hasActiveInventory
        shipsInventory
        address {
          address1
          address2
          city
          province
          provinceCode
          zip
          country
          countryCode
          phone
          formatted
        }
        localPickupSettingsV2 {
          instructions
          pickupTime
        }
      }
    }
  }
}
"""

ADJUST_INVENTORY_MUTATION = compose(
    INVENTORY_LEVEL,
    """
mutation AdjustInventory($input: InventoryAdjustQuantityInput!) {
  inventoryAdjustQuantity(input: $input) {
    inventoryLevel {
      ...InventoryLevelFields
    }
    userErrors {
      field
      message
    }
  }
}
""",
)

SET_INVENTORY_TRACKING_MUTATION = """
mutation SetInventoryTracking($id: ID!, $input: InventoryItemInput!) {
  inventoryItemUpdate(id: $id, input: $input) {
    inventoryItem {
      id
      sku
      tracked
      variant {
        id
        displayName
        product {
          id
          title
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

CONNECT_INVENTORY_MUTATION = compose(
    INVENTORY_LEVEL,
    """
mutation ConnectInventory($inventoryItemId: ID!, $locationId: ID!, $available: Int, $reason: String) {
  inventoryActivate(inventoryItemId: $inventoryItemId, locationId: $locationId, available: $available, reason: $reason) {
    inventoryLevel {
      ...InventoryLevelFields
    }
    userErrors {
      field
      message
    }
  }
}
""",
)

DISCONNECT_INVENTORY_MUTATION = """
mutation DisconnectInventory($inventoryItemId: ID!, $locationId: ID!, $reason: String) {
  inventoryDeactivate(inventoryItemId: $inventoryItemId, locationId: $locationId, reason: $reason) {
    userErrors {
      field
      message
    }
  }
}
"""


def flatten_level(level: dict[str, Any]) -> dict[str, Any]:
    """Inventory level with its ``quantities`` list folded into plain keys."""
    flat = {"id": level["id"], **quantities_by_name(level)}
    for key in ("item", "location"):
        if key in level:
            flat[key] = level[key]
    return flat


# ─── get-inventory-levels ───

class GetInventoryLevelsInput(ToolInput):
    location_id: NonEmptyStr | None = None
    product_id: NonEmptyStr | None = None
    limit: Limit = DEFAULT_LIMIT


class GetInventoryLevels(ShopifyTool):
    name = "get-inventory-levels"
    description = "Get inventory levels, optionally filtered by location and product"
    operation = "fetch inventory levels"
    input_model = GetInventoryLevelsInput

    async def execute(self, params: GetInventoryLevelsInput) -> dict[str, Any]:
        query = search_query(
            f"location_id:{qualify('Location', params.location_id)}" if params.location_id is not None else None,
            f"product_id:{qualify('Product', params.product_id)}" if params.product_id is not None else None,
        )
        variables: dict[str, Any] = {"first": params.limit}
        if query:
            variables["query"] = query

        data = await self.client.request(GET_INVENTORY_LEVELS_QUERY, variables)
        return {
            "inventoryLevels": [flatten_level(l) for l in unwrap_edges(data.get("inventoryLevels"))]
        }


# ─── get-inventory-items ───

class GetInventoryItemsInput(ToolInput):
    query: str | None = Field(default=None, description="Free-form Shopify search query")
    product_id: NonEmptyStr | None = None
    variant_id: NonEmptyStr | None = None
    limit: Limit = DEFAULT_LIMIT


class GetInventoryItems(ShopifyTool):
    name = "get-inventory-items"
    description = "Get inventory items with optional filtering"
    operation = "fetch inventory items"
    input_model = GetInventoryItemsInput

    async def execute(self, params: GetInventoryItemsInput) -> dict[str, Any]:
        query = search_query(
            params.query,
            f"product_id:{qualify('Product', params.product_id)}" if params.product_id is not None else None,
            f"variant_id:{qualify('ProductVariant', params.variant_id)}" if params.variant_id is not None else None,
        )
        variables: dict[str, Any] = {"first": params.limit}
        if query:
            variables["query"] = query

        data = await self.client.request(GET_INVENTORY_ITEMS_QUERY, variables)

        items = []
        for item in unwrap_edges(data.get("inventoryItems")):
            flat = dict(item)
            flat["inventoryLevels"] = [
                flatten_level(l) for l in unwrap_edges(item.get("inventoryLevels"))
            ]
            items.append(flat)
        return {"inventoryItems": items}


# ─── get-locations ───

class GetLocationsInput(ToolInput):
    active: bool | None = None
    limit: Limit = DEFAULT_LIMIT


class GetLocations(ShopifyTool):
    name = "get-locations"
    description = "Get store locations with optional filtering by active status"
    operation = "fetch locations"
    input_model = GetLocationsInput

    async def execute(self, params: GetLocationsInput) -> dict[str, Any]:
        variables: dict[str, Any] = {"first": params.limit}
        if params.active is not None:
            variables["query"] = f"is_active:{str(params.active).lower()}"

        data = await self.client.request(GET_LOCATIONS_QUERY, variables)
        return {"locations": unwrap_edges(data.get("locations"))}


# ─── adjust-inventory ───

class AdjustInventoryInput(ToolInput):
    inventory_item_id: NonEmptyStr
    location_id: NonEmptyStr
    available_delta: int = Field(description="Signed change to the available quantity")
    reason: str | None = None


class AdjustInventory(ShopifyTool):
    name = "adjust-inventory"
    description = "Adjust the available inventory quantity at a location by a delta"
    operation = "adjust inventory"
    input_model = AdjustInventoryInput

    async def execute(self, params: AdjustInventoryInput) -> dict[str, Any]:
        adjust_input: dict[str, Any] = {
            "inventoryItemId": qualify("InventoryItem", params.inventory_item_id),
            "locationId": qualify("Location", params.location_id),
            "availableDelta": params.available_delta,
        }
        if params.reason:
            adjust_input["reason"] = params.reason

        data = await self.client.request(ADJUST_INVENTORY_MUTATION, {"input": adjust_input})
        payload = MutationPayload.from_response(data, "inventoryAdjustQuantity")
        raise_if_business_errors(payload.user_errors, self.operation)

        level = payload.resource("inventoryLevel")
        if level is None:
            raise NotFoundError("Inventory level not found")
        return {"inventoryLevel": flatten_level(level)}


# ─── set-inventory-tracking ───

class SetInventoryTrackingInput(ToolInput):
    inventory_item_id: NonEmptyStr
    tracked: bool


class SetInventoryTracking(ShopifyTool):
    name = "set-inventory-tracking"
    description = "Turn inventory tracking on or off for an inventory item"
    operation = "set inventory tracking"
    input_model = SetInventoryTrackingInput

    async def execute(self, params: SetInventoryTrackingInput) -> dict[str, Any]:
        data = await self.client.request(
            SET_INVENTORY_TRACKING_MUTATION,
            {
                "id": qualify("InventoryItem", params.inventory_item_id),
                "input": {"tracked": params.tracked},
            },
        )
        payload = MutationPayload.from_response(data, "inventoryItemUpdate")
        raise_if_business_errors(payload.user_errors, self.operation)

        item = payload.resource("inventoryItem")
        if item is None:
            raise NotFoundError("Inventory item not found")
        return {"inventoryItem": item}


# ─── connect-inventory-to-location ───

class ConnectInventoryInput(ToolInput):
    inventory_item_id: NonEmptyStr
    location_id: NonEmptyStr
    available: int = Field(description="Initial available quantity at the location")
    reason: str | None = None


class ConnectInventoryToLocation(ShopifyTool):
    name = "connect-inventory-to-location"
    description = "Start stocking an inventory item at a location with an initial quantity"
    operation = "connect inventory to location"
    input_model = ConnectInventoryInput

    async def execute(self, params: ConnectInventoryInput) -> dict[str, Any]:
        variables: dict[str, Any] = {
            "inventoryItemId": qualify("InventoryItem", params.inventory_item_id),
            "locationId": qualify("Location", params.location_id),
            "available": params.available,
        }
        if params.reason:
            variables["reason"] = params.reason

        data = await self.client.request(CONNECT_INVENTORY_MUTATION, variables)
        payload = MutationPayload.from_response(data, "inventoryActivate")
        raise_if_business_errors(payload.user_errors, self.operation)

        level = payload.resource("inventoryLevel")
        if level is None:
            raise NotFoundError("Inventory level not found")
        return {"inventoryLevel": flatten_level(level)}


# ─── disconnect-inventory-from-location ───

class DisconnectInventoryInput(ToolInput):
    inventory_item_id: NonEmptyStr
    location_id: NonEmptyStr
    reason: str | None = None


class DisconnectInventoryFromLocation(ShopifyTool):
    name = "disconnect-inventory-from-location"
    description = "Stop stocking an inventory item at a location"
    operation = "disconnect inventory from location"
    input_model = DisconnectInventoryInput

    async def execute(self, params: DisconnectInventoryInput) -> dict[str, Any]:
        variables: dict[str, Any] = {
            "inventoryItemId": qualify("InventoryItem", params.inventory_item_id),
            "locationId": qualify("Location", params.location_id),
        }
        if params.reason:
            variables["reason"] = params.reason

        data = await self.client.request(DISCONNECT_INVENTORY_MUTATION, variables)
        payload = MutationPayload.from_response(data, "inventoryDeactivate")
        raise_if_business_errors(payload.user_errors, self.operation)
        return {
            "inventoryLevel": {
                "inventoryItemId": variables["inventoryItemId"],
                "locationId": variables["locationId"],
                "deactivated": True,
            }
        }
