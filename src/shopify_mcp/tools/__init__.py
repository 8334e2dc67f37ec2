"""Shopify tools and the registry factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shopify_mcp.core.registry import ToolRegistry
from shopify_mcp.tools.collections import CreateCollection
from shopify_mcp.tools.customers import (
    CreateCustomer,
    GetCustomerOrders,
    GetCustomers,
    UpdateCustomer,
)
from shopify_mcp.tools.inventory import (
    AdjustInventory,
    ConnectInventoryToLocation,
    DisconnectInventoryFromLocation,
    GetInventoryItems,
    GetInventoryLevels,
    GetLocations,
    SetInventoryTracking,
)
from shopify_mcp.tools.metafields import CreateMetafield
from shopify_mcp.tools.orders import (
    CreateFulfillment,
    CreateOrder,
    GetOrderById,
    GetOrders,
    UpdateOrder,
)
from shopify_mcp.tools.products import CreateProduct, GetProductById, GetProducts

if TYPE_CHECKING:
    from shopify_mcp.config.settings import Settings
    from shopify_mcp.core.client import GraphQLRequester


def build_registry(client: GraphQLRequester, settings: Settings | None = None) -> ToolRegistry:
    """Register every Shopify tool against one shared client, in tools/list order."""
    default_location_id = settings.default_location_id if settings else "1"
    return ToolRegistry([
        GetProducts(client),
        GetProductById(client),
        CreateProduct(client, default_location_id=default_location_id),
        GetCustomers(client),
        CreateCustomer(client),
        UpdateCustomer(client),
        GetCustomerOrders(client),
        GetOrders(client),
        GetOrderById(client),
        UpdateOrder(client),
        CreateOrder(client),
        CreateFulfillment(client),
        CreateCollection(client),
        CreateMetafield(client),
        GetInventoryLevels(client),
        GetInventoryItems(client),
        GetLocations(client),
        AdjustInventory(client),
        SetInventoryTracking(client),
        ConnectInventoryToLocation(client),
        DisconnectInventoryFromLocation(client),
    ])


__all__ = [
    "build_registry",
    "GetProducts",
    "GetProductById",
    "CreateProduct",
    "GetCustomers",
    "CreateCustomer",
    "UpdateCustomer",
    "GetCustomerOrders",
    "GetOrders",
    "GetOrderById",
    "UpdateOrder",
    "CreateOrder",
    "CreateFulfillment",
    "CreateCollection",
    "CreateMetafield",
    "GetInventoryLevels",
    "GetInventoryItems",
    "GetLocations",
    "AdjustInventory",
    "SetInventoryTracking",
    "ConnectInventoryToLocation",
    "DisconnectInventoryFromLocation",
]
