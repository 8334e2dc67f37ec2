"""
Tool base class and the shared input-model conventions.

A tool is one unit of the invocation pipeline: it validates a raw argument
bag against ``input_model``, turns the validated params into one GraphQL
request on the injected client, and flattens the response into plain JSON.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from shopify_mcp.core.client import GraphQLRequester
from shopify_mcp.core.errors import (
    ConfigurationError,
    InputValidationError,
    wrap_execution_error,
)

logger = logging.getLogger("shopify_mcp.tools")


class ToolInput(BaseModel):
    """Base for every tool's arguments: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def pick(model: BaseModel, *fields: str) -> dict[str, Any]:
    """
    Dump the named fields of ``model`` by alias, leaving out unset ones.

    Optional inputs are omitted rather than sent as ``null``: Shopify treats
    an explicit null as "clear this value".
    """
    return model.model_dump(
        by_alias=True,
        exclude_none=True,
        include=set(fields),
        mode="json",
    )


def _render_validation_error(exc: ValidationError) -> tuple[str, list[str]]:
    fields: list[str] = []
    parts: list[str] = []
    for err in exc.errors(include_url=False):
        path = ".".join(str(p) for p in err["loc"]) or "input"
        fields.append(path)
        parts.append(f"{path}: {err['msg']}")
    return "; ".join(parts), fields


class ShopifyTool:
    """
    Base class for a Shopify tool.

    Subclasses set ``name``, ``description``, ``operation`` (the phrase used
    in failures, e.g. ``"fetch products"``) and ``input_model``, and implement
    ``execute``.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    operation: ClassVar[str]
    input_model: ClassVar[type[ToolInput]]

    def __init__(self, client: GraphQLRequester | None) -> None:
        if client is None:
            raise ConfigurationError(
                f"Tool '{self.name}' needs a GraphQL client before it can be registered"
            )
        self.client = client

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def validate(self, arguments: dict[str, Any] | None) -> ToolInput:
        try:
            return self.input_model.model_validate(arguments or {})
        except ValidationError as e:
            message, fields = _render_validation_error(e)
            raise InputValidationError(
                f"Invalid arguments for {self.name}: {message}", fields=fields
            ) from e

    async def run(self, params: ToolInput) -> dict[str, Any]:
        try:
            return await self.execute(params)
        except Exception as e:
            logger.error(f"[{self.name}] {type(e).__name__}: {e}")
            raise wrap_execution_error(e, self.operation) from e

    async def execute(self, params: Any) -> dict[str, Any]:
        raise NotImplementedError
