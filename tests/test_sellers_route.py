"""Tests for seller profiles and the role transitions they drive.

Covers:
- Promotion on profile creation and demotion on deletion
- The ``me`` alias and the self-or-admin guard
- Catalog removal and media cleanup when a profile is deleted
"""

import uuid
from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Forbidden, NoSellerProfile, NotFound
from app.models import Business, Category, Product, Seller, User, UserRole
from app.services.role_service import self_or_admin_guard
from tests.conftest import FakeCloudinaryClient, auth_headers, image_url

SELLERS = "/api/v1/sellers"

PROFILE = {
    "name": "Corner Shop",
    "phone_number": "+15551230000",
    "whatsapp_number": "+15551230001",
    "address": "42 High Street",
}


async def _count(db: AsyncSession, model: Any, **filters: Any) -> int:
    stmt = select(func.count()).select_from(model)
    for field, value in filters.items():
        stmt = stmt.where(getattr(model, field) == value)
    return int((await db.execute(stmt)).scalar_one())


# ---------------------------------------------------------------------------
# POST /sellers (promotion)
# ---------------------------------------------------------------------------


class TestCreateSellerProfile:
    async def test_visitor_becomes_seller(self, client: AsyncClient, visitor: User) -> None:
        response = await client.post(SELLERS, json=PROFILE, headers=auth_headers(visitor))
        assert response.status_code == 201
        seller = response.json()["data"]
        assert seller["name"] == "Corner Shop"

        me = (await client.get("/api/v1/auth/me", headers=auth_headers(visitor))).json()["data"]
        assert me["role"] == "seller"
        assert me["seller_id"] == seller["id"]
        assert me["seller"]["id"] == seller["id"]

    async def test_second_profile_rejected(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.post(SELLERS, json=PROFILE, headers=auth_headers(seller_user))
        assert response.status_code == 400
        assert response.json()["error"] == "AlreadyHasSellerProfile"

    async def test_admin_cannot_become_seller(
        self, client: AsyncClient, admin: User, db_session: AsyncSession
    ) -> None:
        response = await client.post(SELLERS, json=PROFILE, headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["error"] == "RoleNotEligible"
        assert await _count(db_session, Seller) == 0

    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.post(SELLERS, json=PROFILE)
        assert response.status_code == 401

    async def test_invalid_phone_number(self, client: AsyncClient, visitor: User) -> None:
        response = await client.post(
            SELLERS, json={**PROFILE, "phone_number": "abc"}, headers=auth_headers(visitor)
        )
        assert response.status_code == 400


# ---------------------------------------------------------------------------
# GET / PUT /sellers/{id|me}
# ---------------------------------------------------------------------------


class TestReadAndUpdateSellerProfile:
    async def test_get_me(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.get(f"{SELLERS}/me", headers=auth_headers(seller_user))
        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(seller_user.seller_id)

    async def test_get_me_without_profile(self, client: AsyncClient, visitor: User) -> None:
        response = await client.get(f"{SELLERS}/me", headers=auth_headers(visitor))
        assert response.status_code == 404
        assert response.json()["error"] == "NoSellerProfile"

    async def test_other_sellers_profile_forbidden(
        self, client: AsyncClient, seller_user: User, other_seller_user: User
    ) -> None:
        response = await client.get(
            f"{SELLERS}/{other_seller_user.seller_id}", headers=auth_headers(seller_user)
        )
        assert response.status_code == 403

    async def test_admin_reads_any_profile(
        self, client: AsyncClient, admin: User, seller_user: User
    ) -> None:
        response = await client.get(f"{SELLERS}/{seller_user.seller_id}", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Alpha"

    async def test_list_is_scoped(
        self, client: AsyncClient, admin: User, seller_user: User, other_seller_user: User  # noqa: ARG002
    ) -> None:
        own = await client.get(SELLERS, headers=auth_headers(seller_user))
        assert [s["id"] for s in own.json()["data"]] == [str(seller_user.seller_id)]

        everything = await client.get(SELLERS, headers=auth_headers(admin))
        assert everything.json()["count"] == 2

    async def test_update_me(self, client: AsyncClient, seller_user: User) -> None:
        response = await client.put(
            f"{SELLERS}/me", json={"address": "7 New Road"}, headers=auth_headers(seller_user)
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["address"] == "7 New Road"
        assert data["name"] == "Alpha"

    async def test_unknown_id(self, client: AsyncClient, admin: User) -> None:
        response = await client.get(f"{SELLERS}/{uuid.uuid4()}", headers=auth_headers(admin))
        assert response.status_code == 404


# ---------------------------------------------------------------------------
# DELETE /sellers/{id|me} (demotion)
# ---------------------------------------------------------------------------


class TestDeleteSellerProfile:
    async def test_delete_me_demotes_and_removes_catalog(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        seller_user: User,
        category_factory: Any,
        product_factory: Any,
        business_factory: Any,
        media_client: FakeCloudinaryClient,
    ) -> None:
        seller_id = seller_user.seller_id
        category = await category_factory(seller_id=seller_id)
        await product_factory(
            seller_id=seller_id, category_id=category.id, images=[image_url("shoe")]
        )
        await business_factory(seller_id=seller_id)

        response = await client.delete(f"{SELLERS}/me", headers=auth_headers(seller_user))
        assert response.status_code == 200

        me = (await client.get("/api/v1/auth/me", headers=auth_headers(seller_user))).json()["data"]
        assert me["role"] == "visitor"
        assert me["seller_id"] is None
        assert me["seller"] is None

        assert await _count(db_session, Seller, id=seller_id) == 0
        assert await _count(db_session, Product, seller_id=seller_id) == 0
        assert await _count(db_session, Category, seller_id=seller_id) == 0
        assert await _count(db_session, Business, seller_id=seller_id) == 0
        assert media_client.destroyed == ["site-snap/shoe"]

    async def test_delete_without_profile(self, client: AsyncClient, visitor: User) -> None:
        response = await client.delete(f"{SELLERS}/me", headers=auth_headers(visitor))
        assert response.status_code == 404
        assert response.json()["error"] == "NoSellerProfile"

    async def test_cannot_delete_other_sellers_profile(
        self, client: AsyncClient, seller_user: User, other_seller_user: User
    ) -> None:
        response = await client.delete(
            f"{SELLERS}/{other_seller_user.seller_id}", headers=auth_headers(seller_user)
        )
        assert response.status_code == 403

    async def test_admin_delete_demotes_owner(
        self, client: AsyncClient, admin: User, seller_user: User
    ) -> None:
        response = await client.delete(
            f"{SELLERS}/{seller_user.seller_id}", headers=auth_headers(admin)
        )
        assert response.status_code == 200

        user = (
            await client.get(f"/api/v1/admin/users/{seller_user.id}", headers=auth_headers(admin))
        ).json()["data"]
        assert user["role"] == "visitor"
        assert user["seller_id"] is None

    async def test_media_failure_does_not_fail_request(
        self,
        client: AsyncClient,
        seller_user: User,
        product_factory: Any,
        media_client: FakeCloudinaryClient,
    ) -> None:
        await product_factory(seller_id=seller_user.seller_id, images=[image_url("hat")])
        media_client.fail_destroy = True

        response = await client.delete(f"{SELLERS}/me", headers=auth_headers(seller_user))
        assert response.status_code == 200

    async def test_promote_demote_round_trip(self, client: AsyncClient, visitor: User) -> None:
        headers = auth_headers(visitor)
        assert (await client.post(SELLERS, json=PROFILE, headers=headers)).status_code == 201
        assert (await client.delete(f"{SELLERS}/me", headers=headers)).status_code == 200
        assert (await client.post(SELLERS, json=PROFILE, headers=headers)).status_code == 201

        me = (await client.get("/api/v1/auth/me", headers=headers)).json()["data"]
        assert me["role"] == "seller"
        assert me["seller"]["name"] == "Corner Shop"


# ---------------------------------------------------------------------------
# self_or_admin_guard
# ---------------------------------------------------------------------------


class TestSelfOrAdminGuard:
    SELLER_ID = uuid.uuid4()

    def _user(self, role: UserRole, seller_id: uuid.UUID | None = None) -> User:
        return User(id=uuid.uuid4(), role=role, seller_id=seller_id)

    def test_me_resolves_to_own_profile(self) -> None:
        user = self._user(UserRole.SELLER, self.SELLER_ID)
        assert self_or_admin_guard(user, "me") == self.SELLER_ID

    def test_me_without_profile(self) -> None:
        with pytest.raises(NoSellerProfile):
            self_or_admin_guard(self._user(UserRole.VISITOR), "me")

    def test_own_id_allowed(self) -> None:
        user = self._user(UserRole.SELLER, self.SELLER_ID)
        assert self_or_admin_guard(user, str(self.SELLER_ID)) == self.SELLER_ID

    def test_other_id_forbidden(self) -> None:
        user = self._user(UserRole.SELLER, self.SELLER_ID)
        with pytest.raises(Forbidden):
            self_or_admin_guard(user, uuid.uuid4())

    def test_admin_any_id(self) -> None:
        target = uuid.uuid4()
        assert self_or_admin_guard(self._user(UserRole.ADMIN), target) == target

    def test_malformed_id(self) -> None:
        with pytest.raises(NotFound):
            self_or_admin_guard(self._user(UserRole.ADMIN), "not-a-uuid")
