"""Identifier and response-shape helpers shared by every tool."""

from __future__ import annotations

from typing import Any

from shopify_mcp.core.errors import InputValidationError

GID_PREFIX = "gid://"
PLATFORM = "shopify"


# ─── Identifiers ───

def qualify(resource_type: str, resource_id: str) -> str:
    """
    Return the global id for ``resource_id``.

    ``qualify("Product", "123")`` → ``"gid://shopify/Product/123"``; an id
    that is already a global id comes back unchanged, so qualifying twice is
    the same as qualifying once.
    """
    if resource_id is None or not str(resource_id).strip():
        raise InputValidationError(
            f"{resource_type} ID must not be empty",
            fields=[resource_type],
        )
    resource_id = str(resource_id).strip()
    if resource_id.startswith(GID_PREFIX):
        return resource_id
    return f"{GID_PREFIX}{PLATFORM}/{resource_type}/{resource_id}"


def extract_token(global_id: str) -> str:
    """Trailing segment of a global id (``gid://shopify/Order/42`` → ``42``)."""
    return global_id.rsplit("/", 1)[-1]


# ─── Response shapes ───

def unwrap_edges(connection: dict[str, Any] | None) -> list[Any]:
    """``{edges: [{node: x}, ...]}`` → ``[x, ...]``; absent edges → ``[]``."""
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges") or []]


def quantities_by_name(level: dict[str, Any]) -> dict[str, int]:
    """Fold ``quantities: [{name, quantity}]`` into ``{name: quantity}``."""
    return {q["name"]: q["quantity"] for q in level.get("quantities") or []}


def shop_money(money_bag: dict[str, Any] | None) -> dict[str, Any] | None:
    """Reduce a ``*PriceSet`` to ``{amount, currencyCode}`` in shop currency."""
    if not money_bag or not money_bag.get("shopMoney"):
        return None
    money = money_bag["shopMoney"]
    return {"amount": money["amount"], "currencyCode": money["currencyCode"]}


def quote_value(value: str) -> str:
    """Single-quote a search value, backslash-escaping ``\\`` and ``'``."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def search_query(*clauses: str | None) -> str | None:
    """Join the non-empty search clauses with AND (None when there are none)."""
    present = [c for c in clauses if c]
    return " AND ".join(present) if present else None
