"""
Error taxonomy and the shared error reshaper.

Every failure a caller can observe is one of:

- InputValidationError: raw arguments broke the tool's schema.
- BusinessError:        Shopify accepted the request but rejected it
                        (userErrors, or a lookup that came back null).
- TransportError:       network failure, non-2xx status, bad body, or a
                        GraphQL-level ``errors`` array.
- ConfigurationError:   client/registry misuse; fatal at startup.
- UnknownToolError:     protocol-level: no tool with that name.

Tool units funnel anything they raise through ``wrap_execution_error`` so
the message always reads ``Failed to <operation>: <original message>``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from shopify_mcp.core.envelope import UserError


class ShopifyMCPError(Exception):
    """Base class for every error this package raises on purpose."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def relabel(self, message: str, operation: str) -> ShopifyMCPError:
        """Copy of this error with a new message, keeping its class and extras."""
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        Exception.__init__(clone, message)
        clone.message = message
        clone.operation = operation
        return clone

    def __str__(self) -> str:
        return self.message


class InputValidationError(ShopifyMCPError):
    """Caller input failed schema constraints. Never retried."""

    def __init__(
        self,
        message: str,
        *,
        fields: list[str] | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.fields = fields or []


class BusinessError(ShopifyMCPError):
    """Shopify rejected a well-formed request for domain reasons."""

    def __init__(
        self,
        message: str,
        *,
        user_errors: list[UserError] | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.user_errors = user_errors or []


class NotFoundError(BusinessError):
    """A lookup by id returned null."""


class TransportError(ShopifyMCPError):
    """The round trip to the GraphQL endpoint itself failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.status_code = status_code


class ConfigurationError(ShopifyMCPError):
    """Client used before it was set up, duplicate tool names, and the like."""


class UnknownToolError(ShopifyMCPError):
    """No tool is registered under the requested name."""


class ToolExecutionError(ShopifyMCPError):
    """Anything unexpected raised while a tool was running."""


# ─── Reshaper ───

def _coerce_user_errors(errors: Iterable[UserError | Mapping[str, Any]]) -> list[UserError]:
    return [e if isinstance(e, UserError) else UserError.model_validate(e) for e in errors]


def raise_if_business_errors(
    errors: Iterable[UserError | Mapping[str, Any]] | None,
    operation: str,
    hints: Mapping[str, str] | None = None,
) -> None:
    """
    Raise one aggregated BusinessError when ``errors`` is non-empty.

    ``hints`` maps a field-path segment (e.g. ``"variantId"``) to a friendlier
    explanation appended to each user error whose path contains it.
    """
    user_errors = _coerce_user_errors(errors or [])
    if not user_errors:
        return

    rendered = []
    for error in user_errors:
        text = error.render()
        for segment, hint in (hints or {}).items():
            if segment in (error.field or []):
                text = f"{text} ({hint})"
                break
        rendered.append(text)

    raise BusinessError(
        f"Failed to {operation}: {', '.join(rendered)}",
        user_errors=user_errors,
        operation=operation,
    )


def wrap_execution_error(error: BaseException, operation: str) -> ShopifyMCPError:
    """
    Return the uniformly worded failure for ``error``.

    Our own errors keep their class so callers can still tell business,
    transport and validation failures apart; foreign exceptions become
    ToolExecutionError. An error already labelled for ``operation`` is
    returned untouched.
    """
    if isinstance(error, ShopifyMCPError):
        if error.operation == operation:
            return error
        return error.relabel(f"Failed to {operation}: {error.message}", operation)
    return ToolExecutionError(f"Failed to {operation}: {error}", operation=operation)
