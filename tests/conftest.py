"""Pytest configuration and fixtures for the Site Snap API test suite.

Provides:
- In-memory SQLite database (aiosqlite, one shared connection per test)
- Fake Redis (fakeredis)
- Recording email/SMS senders and a fake media host
- A fake Google token verifier
- Disabled rate limiting
- Model factories for users, sellers, catalog, storefront and content records
"""

import uuid
from collections.abc import AsyncGenerator, Callable
from typing import Any

import fakeredis.aioredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import build_engine, get_async_session
from app.core.deps import (
    get_email_service,
    get_media_service,
    get_oauth_verifier,
    get_redis,
    get_sms_service,
)
from app.core.exceptions import InvalidToken
from app.core.rate_limit import limiter
from app.core.security import create_access_token, hash_password
from app.integrations.cloudinary.client import CloudinaryError, UploadedAsset
from app.integrations.google.oauth import GoogleIdentity
from app.main import app
from app.models import (
    Analytics,
    Attribute,
    Base,
    Business,
    Category,
    HeroSlide,
    Product,
    Seller,
    Site,
    Story,
    StoryCard,
    User,
    UserRole,
)
from app.services.media_service import MediaService

TEST_PASSWORD = "secret123"
CLOUDINARY_URL = "https://res.cloudinary.com/demo/image/upload/v1700000000/site-snap/{name}.jpg"

# ---------------------------------------------------------------------------
# Disable rate limiting globally for tests
# ---------------------------------------------------------------------------
limiter.enabled = False


def image_url(name: str) -> str:
    return CLOUDINARY_URL.format(name=name)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    test_engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for test setup (factories) and assertions."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class RecordingEmailSender:
    """Stands in for EmailService and keeps every code it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    async def send_otp(self, to_email: str, code: str) -> str | None:
        self.sent.append((to_email, code))
        return f"email-{len(self.sent)}"

    def last_code(self, to_email: str) -> str:
        return next(code for email, code in reversed(self.sent) if email == to_email)


class RecordingSmsSender:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    async def send_otp(self, phone: str, code: str) -> str | None:
        self.sent.append((phone, code))
        return f"sms-{len(self.sent)}"

    def last_code(self, phone: str) -> str:
        return next(code for number, code in reversed(self.sent) if number == phone)


class FakeCloudinaryClient:
    """In-memory media host. Uploads named in ``fail_on`` are rejected."""

    folder = "site-snap"

    def __init__(self) -> None:
        self.uploaded: list[UploadedAsset] = []
        self.destroyed: list[str] = []
        self.fail_on: set[str] = set()
        self.fail_destroy = False

    async def upload(self, data: bytes, mime_type: str, filename: str = "file") -> UploadedAsset:
        if filename in self.fail_on:
            raise CloudinaryError(f"Upload rejected: {filename}")
        name = f"{filename.rsplit('.', 1)[0]}-{len(self.uploaded)}"
        asset = UploadedAsset(
            url=image_url(name),
            public_id=f"{self.folder}/{name}",
            resource_type="video" if mime_type.startswith("video/") else "image",
        )
        self.uploaded.append(asset)
        return asset

    async def destroy_any(self, public_id: str) -> str:
        if self.fail_destroy:
            raise CloudinaryError(f"Destroy request failed for {public_id}")
        self.destroyed.append(public_id)
        return "ok"


class FakeGoogleVerifier:
    """Accepts only the tokens registered in ``identities``."""

    def __init__(self) -> None:
        self.identities: dict[str, GoogleIdentity] = {}

    async def verify(self, token: str) -> GoogleIdentity:
        identity = self.identities.get(token)
        if identity is None:
            raise InvalidToken()
        return identity


@pytest.fixture
def fake_redis() -> fakeredis.aioredis.FakeRedis:
    """Provide a fresh fakeredis instance per test."""
    return fakeredis.aioredis.FakeRedis(decode_responses=True)


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def sms_sender() -> RecordingSmsSender:
    return RecordingSmsSender()


@pytest.fixture
def media_client() -> FakeCloudinaryClient:
    return FakeCloudinaryClient()


@pytest.fixture
def media(media_client: FakeCloudinaryClient) -> MediaService:
    return MediaService(media_client)  # type: ignore[arg-type]


@pytest.fixture
def google_verifier() -> FakeGoogleVerifier:
    return FakeGoogleVerifier()


# ---------------------------------------------------------------------------
# HTTP client (real bearer auth, faked outbound services)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    fake_redis: fakeredis.aioredis.FakeRedis,
    email_sender: RecordingEmailSender,
    sms_sender: RecordingSmsSender,
    media: MediaService,
    google_verifier: FakeGoogleVerifier,
) -> AsyncGenerator[AsyncClient, None]:
    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as s:
            yield s

    async def _override_redis() -> AsyncGenerator[fakeredis.aioredis.FakeRedis, None]:
        yield fake_redis

    app.dependency_overrides[get_async_session] = _override_session
    app.dependency_overrides[get_redis] = _override_redis
    app.dependency_overrides[get_email_service] = lambda: email_sender
    app.dependency_overrides[get_sms_service] = lambda: sms_sender
    app.dependency_overrides[get_media_service] = lambda: media
    app.dependency_overrides[get_oauth_verifier] = lambda: google_verifier

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


# ---------------------------------------------------------------------------
# Model Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def user_factory(db_session: AsyncSession) -> Callable[..., Any]:
    """Factory that creates User instances. ``with_seller`` links a profile."""

    async def _create(
        *,
        email: str | None = None,
        password: str | None = TEST_PASSWORD,
        role: UserRole = UserRole.VISITOR,
        email_verified: bool = True,
        phone: str | None = None,
        with_seller: bool = False,
        seller_name: str = "Test Seller",
    ) -> User:
        user = User(
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password) if password else None,
            role=role,
            email_verified=email_verified,
            phone=phone,
        )
        if with_seller:
            seller = Seller(
                name=seller_name,
                phone_number="+15550000001",
                whatsapp_number="+15550000002",
                address="1 Market Street",
            )
            db_session.add(seller)
            await db_session.flush()
            user.seller_id = seller.id
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create


@pytest_asyncio.fixture
async def visitor(user_factory: Callable[..., Any]) -> User:
    user: User = await user_factory(email="visitor@example.com")
    return user


@pytest_asyncio.fixture
async def seller_user(user_factory: Callable[..., Any]) -> User:
    user: User = await user_factory(
        email="seller@example.com", role=UserRole.SELLER, with_seller=True, seller_name="Alpha"
    )
    return user


@pytest_asyncio.fixture
async def other_seller_user(user_factory: Callable[..., Any]) -> User:
    user: User = await user_factory(
        email="other@example.com", role=UserRole.SELLER, with_seller=True, seller_name="Beta"
    )
    return user


@pytest_asyncio.fixture
async def admin(user_factory: Callable[..., Any]) -> User:
    user: User = await user_factory(email="admin@example.com", role=UserRole.ADMIN)
    return user


@pytest.fixture
def category_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, seller_id: uuid.UUID, name: str | None = None) -> Category:
        category = Category(
            category_name=name or f"Category {uuid.uuid4().hex[:6]}",
            seller_id=seller_id,
        )
        db_session.add(category)
        await db_session.commit()
        await db_session.refresh(category)
        return category

    return _create


@pytest.fixture
def attribute_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, name: str = "Size", options: list[str] | None = None) -> Attribute:
        attribute = Attribute(attribute_name=name, options=options or ["S", "M", "L"])
        db_session.add(attribute)
        await db_session.commit()
        await db_session.refresh(attribute)
        return attribute

    return _create


@pytest.fixture
def product_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(
        *,
        seller_id: uuid.UUID,
        category_id: uuid.UUID | None = None,
        name: str = "Test Product",
        price: float = 19.99,
        is_visible: bool = True,
        images: list[str] | None = None,
        attributes: list[Attribute] | None = None,
    ) -> Product:
        product = Product(
            seller_id=seller_id,
            category_id=category_id,
            product_name=name,
            price=price,
            is_visible=is_visible,
            images=images or [],
        )
        product.attributes = attributes or []
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product

    return _create


@pytest.fixture
def business_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(
        *,
        seller_id: uuid.UUID,
        name: str = "Test Business",
        site_id: uuid.UUID | None = None,
    ) -> Business:
        business = Business(
            business_name=name,
            business_email="shop@example.com",
            seller_id=seller_id,
            site_id=site_id,
        )
        db_session.add(business)
        await db_session.commit()
        await db_session.refresh(business)
        return business

    return _create


@pytest.fixture
def site_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, name: str = "Test Site") -> Site:
        site = Site(site_name=name, site_url=f"https://{uuid.uuid4().hex[:8]}.example.com")
        db_session.add(site)
        await db_session.commit()
        await db_session.refresh(site)
        return site

    return _create


@pytest.fixture
def analytics_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, business_id: uuid.UUID, views: int = 0, clicks: int = 0) -> Analytics:
        record = Analytics(business_id=business_id, views=views, clicks=clicks)
        db_session.add(record)
        await db_session.commit()
        await db_session.refresh(record)
        return record

    return _create


@pytest.fixture
def hero_slide_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, tagline: str = "Summer sale", image: str | None = None) -> HeroSlide:
        slide = HeroSlide(tagline=tagline, image=image or image_url("hero"))
        db_session.add(slide)
        await db_session.commit()
        await db_session.refresh(slide)
        return slide

    return _create


@pytest.fixture
def story_card_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, title: str = "Our roots", image: str | None = None) -> StoryCard:
        card = StoryCard(story_card_title=title, story_card_image=image or image_url("card"))
        db_session.add(card)
        await db_session.commit()
        await db_session.refresh(card)
        return card

    return _create


@pytest.fixture
def story_factory(db_session: AsyncSession) -> Callable[..., Any]:
    async def _create(*, title: str = "About us", is_visible: bool = True) -> Story:
        story = Story(story_title=title, is_visible=is_visible)
        db_session.add(story)
        await db_session.commit()
        await db_session.refresh(story)
        return story

    return _create
