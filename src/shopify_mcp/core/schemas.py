"""Nested input shapes shared by several tools."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError

from shopify_mcp.core.tool import ToolInput

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError as e:
        raise ValueError("must be a valid URL") from e
    return value


# Validated as an http(s) URL but passed on exactly as the caller wrote it.
UrlStr = Annotated[str, AfterValidator(_check_url)]
NonEmptyStr = Annotated[str, Field(min_length=1)]
NumericId = Annotated[str, Field(pattern=r"^\d+$", description="Numeric ID, without the gid:// prefix")]
Limit = Annotated[int, Field(ge=1, le=250, description="Maximum number of results")]
DEFAULT_LIMIT = 10

MarketingState = Literal["SUBSCRIBED", "NOT_SUBSCRIBED", "PENDING", "UNSUBSCRIBED"]
MarketingOptInLevel = Literal["SINGLE_OPT_IN", "CONFIRMED_OPT_IN", "UNKNOWN"]


class Seo(ToolInput):
    title: str | None = None
    description: str | None = None


class Image(ToolInput):
    src: UrlStr
    alt_text: str | None = None


class MetafieldInput(ToolInput):
    """A metafield attached while creating a resource."""

    namespace: str
    key: str
    value: str
    type: str


class MetafieldUpdate(ToolInput):
    """A metafield on an update: ``id`` targets an existing one."""

    id: NonEmptyStr | None = None
    namespace: str | None = None
    key: str | None = None
    value: str
    type: str | None = None


class CustomAttribute(ToolInput):
    key: str
    value: str


class MailingAddress(ToolInput):
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    company: str | None = None
    country: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    province: str | None = None
    zip: str | None = None


class SmsMarketingConsent(ToolInput):
    marketing_state: MarketingState
    marketing_opt_in_level: MarketingOptInLevel | None = None
