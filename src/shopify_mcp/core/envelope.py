"""
Typed GraphQL payload envelopes.

Mutation responses all share one shape: a root field holding the mutated
resource plus a ``userErrors`` list. Decoding that shape right after the
network call lets the tools work with known fields (typed user errors, a
resource dict or ``None``) instead of walking untyped JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserError(BaseModel):
    """One domain-level rejection reported inside a mutation payload."""

    field: list[str] | None = None    # e.g. ["input", "lineItems", "0", "variantId"]
    message: str
    code: str | None = None

    @field_validator("field", mode="before")
    @classmethod
    def _split_field(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(part) for part in value]
        return value

    @property
    def path(self) -> str:
        """Dot-joined field path ("" when the platform gave none)."""
        return ".".join(self.field or [])

    def render(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class MutationPayload(BaseModel):
    """
    The ``{<resource>: ..., userErrors: [...]}`` object under a mutation root.

    Every key other than ``userErrors`` is kept as-is and reachable through
    ``resource()``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_errors: list[UserError] = Field(default_factory=list, alias="userErrors")

    @classmethod
    def from_response(cls, data: dict[str, Any], root: str) -> MutationPayload:
        """Decode ``data[root]``; a missing or null root decodes as empty."""
        return cls.model_validate(data.get(root) or {})

    def resource(self, key: str) -> Any:
        """Return the payload's resource (``product``, ``order``...) or None."""
        return (self.model_extra or {}).get(key)
