"""
Reusable GraphQL fragments.

Documents are plain strings; ``compose`` glues fragment definitions onto an
operation. Fragments that spread other fragments list what they need in
their ``*_FRAGMENTS`` tuple so documents never miss a definition.
"""

from __future__ import annotations


def compose(*parts: str) -> str:
    """Join fragment definitions and an operation into one document."""
    seen: list[str] = []
    for part in parts:
        part = part.strip()
        if part not in seen:
            seen.append(part)
    return "\n\n".join(seen)


# ─── Products ───

PRODUCT_BASIC = """
fragment ProductBasic on Product {
  id
  title
  description
  descriptionHtml
  handle
  status
  vendor
  productType
  tags
  createdAt
  updatedAt
  totalInventory
}
"""

PRODUCT_SEO = """
fragment ProductSeo on Product {
  seo {
    title
    description
  }
}
"""

PRODUCT_IMAGE = """
fragment ProductImage on Image {
  id
  url
  altText
  width
  height
}
"""

PRODUCT_VARIANT = """
fragment ProductVariant on ProductVariant {
  id
  title
  price
  sku
  barcode
  taxable
  inventoryQuantity
  inventoryPolicy
  selectedOptions {
    name
    value
  }
}
"""

PRODUCT_FULL = """
fragment ProductFull on Product {
  ...ProductBasic
  ...ProductSeo
  options {
    id
    name
    position
    values
  }
  variants(first: 100) {
    edges {
      node {
        ...ProductVariant
      }
    }
  }
  images(first: 20) {
    edges {
      node {
        ...ProductImage
      }
    }
  }
  metafields(first: 20) {
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
}
"""

PRODUCT_FULL_FRAGMENTS = (PRODUCT_BASIC, PRODUCT_SEO, PRODUCT_IMAGE, PRODUCT_VARIANT, PRODUCT_FULL)

PRICE_RANGE = """
priceRangeV2 {
  minVariantPrice {
    amount
    currencyCode
  }
  maxVariantPrice {
    amount
    currencyCode
  }
}
"""

# ─── Customers ───

CUSTOMER_BASIC = """
fragment CustomerBasic on Customer {
  id
  displayName
  email
  firstName
  lastName
  phone
  note
  tags
  taxExempt
  state
  numberOfOrders
  createdAt
  updatedAt
  amountSpent {
    amount
    currencyCode
  }
  smsMarketingConsent {
    marketingState
    marketingOptInLevel
    consentUpdatedAt
  }
}
"""

CUSTOMER_ADDRESS = """
fragment CustomerAddress on MailingAddress {
  id
  address1
  address2
  city
  country
  countryCodeV2
  firstName
  lastName
  phone
  province
  provinceCode
  zip
}
"""

CUSTOMER_FULL = """
fragment CustomerFull on Customer {
  ...CustomerBasic
  defaultAddress {
    ...CustomerAddress
  }
  addresses(first: 10) {
    ...CustomerAddress
  }
  metafields(first: 20) {
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
}
"""

CUSTOMER_FULL_FRAGMENTS = (CUSTOMER_BASIC, CUSTOMER_ADDRESS, CUSTOMER_FULL)

# ─── Orders ───

ORDER_ADDRESS = """
fragment OrderAddress on MailingAddress {
  address1
  address2
  city
  province
  provinceCode
  country
  countryCodeV2
  zip
  phone
  firstName
  lastName
  company
}
"""

ORDER_LINE_ITEM = """
fragment OrderLineItem on LineItem {
  id
  title
  quantity
  sku
  originalUnitPriceSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  discountedTotalSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  variant {
    id
    title
    sku
  }
  product {
    id
    title
  }
}
"""

ORDER_BASIC = """
fragment OrderBasic on Order {
  id
  name
  email
  phone
  displayFinancialStatus
  displayFulfillmentStatus
  createdAt
  updatedAt
  processedAt
  closedAt
  cancelledAt
  currencyCode
  tags
  note
  totalPriceSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  subtotalPriceSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  totalTaxSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  totalShippingPriceSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  customer {
    id
    email
    firstName
    lastName
    displayName
  }
}
"""

ORDER_FULL = """
fragment OrderFull on Order {
  ...OrderBasic
  billingAddress {
    ...OrderAddress
  }
  shippingAddress {
    ...OrderAddress
  }
  customAttributes {
    key
    value
  }
  lineItems(first: 250) {
    edges {
      node {
        ...OrderLineItem
      }
    }
  }
  shippingLines(first: 10) {
    edges {
      node {
        id
        title
        code
        source
        originalPriceSet {
          shopMoney {
            amount
            currencyCode
          }
        }
      }
    }
  }
  fulfillments(first: 20) {
    id
    status
    createdAt
    trackingInfo {
      number
      url
      company
    }
  }
  metafields(first: 20) {
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
}
"""

ORDER_FULL_FRAGMENTS = (ORDER_BASIC, ORDER_ADDRESS, ORDER_LINE_ITEM, ORDER_FULL)

# ─── Inventory ───

INVENTORY_LEVEL = """
fragment InventoryLevelFields on InventoryLevel {
  id
  quantities(names: ["available", "incoming", "committed", "on_hand"]) {
    name
    quantity
  }
  item {
    id
    sku
    tracked
    variant {
      id
      title
      displayName
      product {
        id
        title
      }
    }
  }
  location {
    id
    name
    isActive
  }
}
"""
