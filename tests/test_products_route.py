"""Tests for the product catalog endpoints.

Covers:
- Visibility and seller scoping of listings
- Ownership checks on create, update and delete
- Visit and redirect counters
- Image retention and media cleanup
"""

import uuid
from typing import Any

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Product, User
from tests.conftest import FakeCloudinaryClient, auth_headers, image_url

PRODUCTS = "/api/v1/products"


def _product_payload(category_id: uuid.UUID, **overrides: Any) -> dict[str, Any]:
    return {
        "product_name": "Linen Shirt",
        "price": 49.5,
        "category_id": str(category_id),
        **overrides,
    }


# ---------------------------------------------------------------------------
# GET /products
# ---------------------------------------------------------------------------


class TestListProducts:
    async def test_anonymous_sees_only_visible(
        self, client: AsyncClient, seller_user: User, product_factory: Any
    ) -> None:
        await product_factory(seller_id=seller_user.seller_id, name="Shown")
        await product_factory(seller_id=seller_user.seller_id, name="Hidden", is_visible=False)

        response = await client.get(PRODUCTS)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["data"][0]["product_name"] == "Shown"

    async def test_seller_sees_own_products_including_hidden(
        self,
        client: AsyncClient,
        seller_user: User,
        other_seller_user: User,
        product_factory: Any,
    ) -> None:
        await product_factory(seller_id=seller_user.seller_id, name="Mine", is_visible=False)
        await product_factory(seller_id=other_seller_user.seller_id, name="Theirs")

        response = await client.get(PRODUCTS, headers=auth_headers(seller_user))
        names = [p["product_name"] for p in response.json()["data"]]
        assert names == ["Mine"]

    async def test_admin_sees_everything(
        self,
        client: AsyncClient,
        admin: User,
        seller_user: User,
        other_seller_user: User,
        product_factory: Any,
    ) -> None:
        await product_factory(seller_id=seller_user.seller_id, is_visible=False)
        await product_factory(seller_id=other_seller_user.seller_id)

        response = await client.get(PRODUCTS, headers=auth_headers(admin))
        assert response.json()["count"] == 2

    async def test_filter_by_category(
        self,
        client: AsyncClient,
        seller_user: User,
        category_factory: Any,
        product_factory: Any,
    ) -> None:
        shirts = await category_factory(seller_id=seller_user.seller_id, name="Shirts")
        hats = await category_factory(seller_id=seller_user.seller_id, name="Hats")
        await product_factory(seller_id=seller_user.seller_id, category_id=shirts.id, name="Tee")
        await product_factory(seller_id=seller_user.seller_id, category_id=hats.id, name="Cap")

        response = await client.get(PRODUCTS, params={"category_id": str(hats.id)})
        assert [p["product_name"] for p in response.json()["data"]] == ["Cap"]


# ---------------------------------------------------------------------------
# GET /products/{id} and counters
# ---------------------------------------------------------------------------


class TestReadProduct:
    async def test_read_counts_a_visit(
        self, client: AsyncClient, seller_user: User, product_factory: Any
    ) -> None:
        product = await product_factory(seller_id=seller_user.seller_id)

        first = await client.get(f"{PRODUCTS}/{product.id}")
        second = await client.get(f"{PRODUCTS}/{product.id}")
        assert first.json()["data"]["visits"] == 1
        assert second.json()["data"]["visits"] == 2

    async def test_hidden_product_not_found_for_public(
        self, client: AsyncClient, seller_user: User, visitor: User, product_factory: Any
    ) -> None:
        product = await product_factory(seller_id=seller_user.seller_id, is_visible=False)

        assert (await client.get(f"{PRODUCTS}/{product.id}")).status_code == 404
        response = await client.get(f"{PRODUCTS}/{product.id}", headers=auth_headers(visitor))
        assert response.status_code == 404

        owner = await client.get(f"{PRODUCTS}/{product.id}", headers=auth_headers(seller_user))
        assert owner.status_code == 200

    async def test_other_seller_cannot_read(
        self,
        client: AsyncClient,
        seller_user: User,
        other_seller_user: User,
        product_factory: Any,
    ) -> None:
        product = await product_factory(seller_id=other_seller_user.seller_id)
        response = await client.get(f"{PRODUCTS}/{product.id}", headers=auth_headers(seller_user))
        assert response.status_code == 403
        assert response.json()["error"] == "OwnershipViolation"

    async def test_unknown_product(self, client: AsyncClient) -> None:
        response = await client.get(f"{PRODUCTS}/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    async def test_redirect_counter_is_public(
        self, client: AsyncClient, seller_user: User, product_factory: Any
    ) -> None:
        product = await product_factory(seller_id=seller_user.seller_id)
        response = await client.put(f"{PRODUCTS}/{product.id}/redirect")
        assert response.status_code == 200
        assert response.json()["data"]["redirects"] == 1
        assert response.json()["data"]["visits"] == 0


# ---------------------------------------------------------------------------
# POST /products
# ---------------------------------------------------------------------------


class TestCreateProduct:
    async def test_seller_creates_own_product(
        self, client: AsyncClient, seller_user: User, category_factory: Any, attribute_factory: Any
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        size = await attribute_factory(name="Size")

        response = await client.post(
            PRODUCTS,
            json=_product_payload(
                category.id, images=[image_url("shirt")], attribute_ids=[str(size.id)]
            ),
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["seller_id"] == str(seller_user.seller_id)
        assert data["category"]["id"] == str(category.id)
        assert [a["attribute_name"] for a in data["attributes"]] == ["Size"]
        assert data["images"] == [image_url("shirt")]
        assert data["visits"] == 0

    async def test_seller_cannot_create_for_other_seller(
        self,
        client: AsyncClient,
        seller_user: User,
        other_seller_user: User,
        category_factory: Any,
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        response = await client.post(
            PRODUCTS,
            json=_product_payload(category.id, seller_id=str(other_seller_user.seller_id)),
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 403
        assert response.json()["error"] == "OwnershipViolation"

    async def test_seller_cannot_use_other_sellers_category(
        self,
        client: AsyncClient,
        seller_user: User,
        other_seller_user: User,
        category_factory: Any,
    ) -> None:
        category = await category_factory(seller_id=other_seller_user.seller_id)
        response = await client.post(
            PRODUCTS, json=_product_payload(category.id), headers=auth_headers(seller_user)
        )
        assert response.status_code == 403

    async def test_unknown_category(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.post(
            PRODUCTS, json=_product_payload(uuid.uuid4()), headers=auth_headers(seller_user)
        )
        assert response.status_code == 404

    async def test_admin_must_name_owner(
        self, client: AsyncClient, admin: User, seller_user: User, category_factory: Any
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        response = await client.post(
            PRODUCTS, json=_product_payload(category.id), headers=auth_headers(admin)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "MissingOwner"

    async def test_admin_creates_for_seller(
        self, client: AsyncClient, admin: User, seller_user: User, category_factory: Any
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        response = await client.post(
            PRODUCTS,
            json=_product_payload(category.id, seller_id=str(seller_user.seller_id)),
            headers=auth_headers(admin),
        )
        assert response.status_code == 201
        assert response.json()["data"]["seller_id"] == str(seller_user.seller_id)

    async def test_admin_unknown_seller(
        self, client: AsyncClient, admin: User, seller_user: User, category_factory: Any
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        response = await client.post(
            PRODUCTS,
            json=_product_payload(category.id, seller_id=str(uuid.uuid4())),
            headers=auth_headers(admin),
        )
        assert response.status_code == 404

    async def test_visitor_cannot_create(
        self, client: AsyncClient, visitor: User, seller_user: User, category_factory: Any
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        response = await client.post(
            PRODUCTS, json=_product_payload(category.id), headers=auth_headers(visitor)
        )
        assert response.status_code == 403

    async def test_anonymous_cannot_create(
        self, client: AsyncClient, seller_user: User, category_factory: Any
    ) -> None:
        category = await category_factory(seller_id=seller_user.seller_id)
        response = await client.post(PRODUCTS, json=_product_payload(category.id))
        assert response.status_code == 401

    async def test_missing_fields(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.post(
            PRODUCTS, json={"product_name": "No price"}, headers=auth_headers(seller_user)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"


# ---------------------------------------------------------------------------
# PUT / DELETE /products/{id}
# ---------------------------------------------------------------------------


class TestUpdateAndDeleteProduct:
    async def test_owner_updates(
        self, client: AsyncClient, seller_user: User, product_factory: Any
    ) -> None:
        product = await product_factory(seller_id=seller_user.seller_id)
        response = await client.put(
            f"{PRODUCTS}/{product.id}",
            json={"price": 5.0, "is_visible": False},
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 5.0
        assert data["is_visible"] is False
        assert data["product_name"] == "Test Product"

    async def test_other_seller_cannot_update_or_delete(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        seller_user: User,
        other_seller_user: User,
        product_factory: Any,
    ) -> None:
        product = await product_factory(seller_id=other_seller_user.seller_id, price=10.0)
        headers = auth_headers(seller_user)

        update = await client.put(f"{PRODUCTS}/{product.id}", json={"price": 1.0}, headers=headers)
        delete = await client.delete(f"{PRODUCTS}/{product.id}", headers=headers)
        assert update.status_code == 403
        assert delete.status_code == 403

        stored = await db_session.get(Product, product.id, populate_existing=True)
        assert stored is not None
        assert stored.price == 10.0

    async def test_new_images_are_appended(
        self, client: AsyncClient, seller_user: User, product_factory: Any
    ) -> None:
        product = await product_factory(seller_id=seller_user.seller_id, images=[image_url("a")])
        response = await client.put(
            f"{PRODUCTS}/{product.id}",
            json={"images": [image_url("b")]},
            headers=auth_headers(seller_user),
        )
        assert response.json()["data"]["images"] == [image_url("a"), image_url("b")]

    async def test_images_to_keep_removes_the_rest(
        self,
        client: AsyncClient,
        seller_user: User,
        product_factory: Any,
        media_client: FakeCloudinaryClient,
    ) -> None:
        product = await product_factory(
            seller_id=seller_user.seller_id, images=[image_url("a"), image_url("b")]
        )
        response = await client.put(
            f"{PRODUCTS}/{product.id}",
            json={"images_to_keep": [image_url("b")], "images": [image_url("c")]},
            headers=auth_headers(seller_user),
        )
        assert response.status_code == 200
        assert response.json()["data"]["images"] == [image_url("b"), image_url("c")]
        assert media_client.destroyed == ["site-snap/a"]

    async def test_delete_removes_images(
        self,
        client: AsyncClient,
        seller_user: User,
        product_factory: Any,
        media_client: FakeCloudinaryClient,
    ) -> None:
        product = await product_factory(seller_id=seller_user.seller_id, images=[image_url("a")])
        response = await client.delete(f"{PRODUCTS}/{product.id}", headers=auth_headers(seller_user))
        assert response.status_code == 200
        assert response.json()["message"] == "Product deleted"
        assert media_client.destroyed == ["site-snap/a"]

        assert (await client.get(f"{PRODUCTS}/{product.id}")).status_code == 404
