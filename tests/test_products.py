"""Product tools."""

import pytest

from shopify_mcp.core.errors import BusinessError, InputValidationError, NotFoundError
from shopify_mcp.tools.products import CreateProduct, GetProductById, GetProducts


def product_node(**overrides):
    node = {
        "id": "gid://shopify/Product/123",
        "title": "Espresso Cup",
        "description": "Small cup",
        "descriptionHtml": "<p>Small cup</p>",
        "handle": "espresso-cup",
        "status": "ACTIVE",
        "vendor": "Acme",
        "productType": "Cups",
        "tags": ["kitchen"],
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-02T00:00:00Z",
        "totalInventory": 12,
        "seo": {"title": None, "description": None},
        "options": [{"id": "gid://shopify/ProductOption/1", "name": "Title", "position": 1, "values": ["Default"]}],
        "variants": {"edges": [{"node": {"id": "gid://shopify/ProductVariant/9", "price": "4.00"}}]},
        "images": {"edges": []},
        "metafields": {"edges": []},
        "priceRangeV2": {
            "minVariantPrice": {"amount": "4.0", "currencyCode": "USD"},
            "maxVariantPrice": {"amount": "4.0", "currencyCode": "USD"},
        },
    }
    node.update(overrides)
    return node


async def run(tool, arguments):
    return await tool.run(tool.validate(arguments))


class TestGetProducts:

    @pytest.mark.asyncio
    async def test_default_limit_matches_explicit_ten(self, make_client):
        client = make_client({"products": {"edges": []}})
        tool = GetProducts(client)

        await run(tool, {})
        await run(tool, {"limit": 10})

        assert client.calls[0][1] == client.calls[1][1] == {"first": 10}

    @pytest.mark.asyncio
    async def test_filters_are_and_joined(self, make_client):
        client = make_client({"products": {"edges": []}})
        await run(GetProducts(client), {"searchTitle": "cup", "vendor": "Acme", "status": "DRAFT"})
        assert client.last_variables["query"] == "title:*cup* AND vendor:'Acme' AND status:draft"

    @pytest.mark.asyncio
    async def test_flattens_products(self, make_client):
        node = product_node(images={"edges": [{"node": {"url": "https://cdn.example/cup.png", "altText": None}}]})
        client = make_client({"products": {"edges": [{"node": node}]}})

        result = await run(GetProducts(client), {"searchTitle": "cup"})

        product = result["products"][0]
        assert product["imageUrl"] == "https://cdn.example/cup.png"
        assert product["priceRange"]["minPrice"] == {"amount": "4.0", "currencyCode": "USD"}
        assert product["variants"] == [{"id": "gid://shopify/ProductVariant/9", "price": "4.00"}]

    def test_limit_must_be_positive(self, fake_client):
        with pytest.raises(InputValidationError) as exc:
            GetProducts(fake_client).validate({"limit": 0})
        assert "limit" in str(exc.value)


class TestGetProductById:

    @pytest.mark.asyncio
    async def test_found(self, make_client):
        node = product_node(collections={"edges": [{"node": {"id": "gid://shopify/Collection/5", "title": "Cups", "handle": "cups"}}]})
        client = make_client({"product": node})

        result = await run(GetProductById(client), {"productId": "123"})

        assert client.last_variables == {"id": "gid://shopify/Product/123"}
        assert result["product"]["id"] == "gid://shopify/Product/123"
        assert result["product"]["collections"][0]["handle"] == "cups"
        assert result["product"]["variants"][0]["id"] == "gid://shopify/ProductVariant/9"

    @pytest.mark.asyncio
    async def test_not_found(self, make_client):
        client = make_client({"product": None})
        with pytest.raises(NotFoundError) as exc:
            await run(GetProductById(client), {"productId": "123"})
        assert isinstance(exc.value, BusinessError)
        assert "not found" in str(exc.value)
        assert str(exc.value).startswith("Failed to fetch product details: ")

    def test_empty_id_rejected(self, fake_client):
        with pytest.raises(InputValidationError):
            GetProductById(fake_client).validate({"productId": ""})


class TestCreateProduct:

    @pytest.mark.asyncio
    async def test_omits_absent_optional_fields(self, make_client):
        client = make_client({"productCreate": {"product": product_node(), "userErrors": []}})

        await run(CreateProduct(client), {"title": "Espresso Cup"})

        assert client.last_variables == {"input": {"title": "Espresso Cup", "status": "ACTIVE"}}

    @pytest.mark.asyncio
    async def test_nested_ids_and_inventory_location(self, make_client):
        client = make_client({"productCreate": {"product": product_node(), "userErrors": []}})
        tool = CreateProduct(client, default_location_id="77")

        await run(tool, {
            "title": "Espresso Cup",
            "collectionsToJoin": ["5", "gid://shopify/Collection/6"],
            "images": [{"src": "https://cdn.example/cup.png", "altText": "cup"}],
            "variants": [
                {"options": ["Default"], "price": "4.00", "inventoryQuantity": 3},
                {"options": ["Large"], "price": "5.00", "inventoryQuantity": 1, "locationId": "8"},
            ],
        })

        product_input = client.last_variables["input"]
        assert product_input["collectionsToJoin"] == [
            "gid://shopify/Collection/5",
            "gid://shopify/Collection/6",
        ]
        assert product_input["images"] == [{"src": "https://cdn.example/cup.png", "altText": "cup"}]
        first, second = product_input["variants"]
        assert first == {
            "options": ["Default"],
            "price": "4.00",
            "inventoryQuantities": {"availableQuantity": 3, "locationId": "gid://shopify/Location/77"},
        }
        assert second["inventoryQuantities"]["locationId"] == "gid://shopify/Location/8"
        assert "locationId" not in second

    @pytest.mark.asyncio
    async def test_user_errors_short_circuit(self, make_client):
        client = make_client({
            "productCreate": {
                "product": None,
                "userErrors": [{"field": ["title"], "message": "Title has already been taken"}],
            }
        })
        with pytest.raises(BusinessError) as exc:
            await run(CreateProduct(client), {"title": "Espresso Cup"})
        assert str(exc.value) == "Failed to create product: title: Title has already been taken"

    def test_image_src_must_be_url(self, fake_client):
        with pytest.raises(InputValidationError) as exc:
            CreateProduct(fake_client).validate({"title": "x", "images": [{"src": "not a url"}]})
        assert "images.0.src" in str(exc.value)

    def test_status_enum(self, fake_client):
        with pytest.raises(InputValidationError):
            CreateProduct(fake_client).validate({"title": "x", "status": "LIVE"})


class TestEmptyIdentifiers:

    def test_variant_location_must_not_be_empty(self, fake_client):
        with pytest.raises(InputValidationError) as exc:
            CreateProduct(fake_client, default_location_id="77").validate({
                "title": "Espresso Cup",
                "variants": [{"options": ["Default"], "price": "4.00", "inventoryQuantity": 3, "locationId": ""}],
            })
        assert exc.value.fields == ["variants.0.locationId"]

    def test_collection_ids_must_not_be_empty(self, fake_client):
        with pytest.raises(InputValidationError):
            CreateProduct(fake_client).validate({"title": "Espresso Cup", "collectionsToJoin": ["5", ""]})

    @pytest.mark.asyncio
    async def test_blank_variant_location_is_not_defaulted(self, make_client):
        client = make_client({"productCreate": {"product": product_node(), "userErrors": []}})
        with pytest.raises(InputValidationError):
            await run(CreateProduct(client, default_location_id="77"), {
                "title": "Espresso Cup",
                "variants": [{"options": ["Default"], "price": "4.00", "inventoryQuantity": 3, "locationId": "  "}],
            })
        assert client.calls == []


class TestSearchQuoting:

    @pytest.mark.asyncio
    async def test_quotes_in_vendor_are_escaped(self, make_client):
        client = make_client({"products": {"edges": []}})
        await run(GetProducts(client), {"vendor": "O'Neill", "productType": "Wet suits"})
        assert client.last_variables["query"] == "vendor:'O\\'Neill' AND product_type:'Wet suits'"
