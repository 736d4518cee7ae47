"""User model for every account: visitors, sellers and admins."""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base

if TYPE_CHECKING:
    from app.models.seller import Seller


class UserRole(str, enum.Enum):
    """Platform-wide user roles."""

    VISITOR = "visitor"
    SELLER = "seller"
    ADMIN = "admin"


class User(Base):
    """User identity record.

    An account is reachable through at least one of email, phone or Google
    subject id. A password is only stored for email/password accounts.
    """

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True, index=True)
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    phone_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        default=UserRole.VISITOR,
        nullable=False,
    )

    # Seller profile link, mutated only by the role transition service
    seller_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("sellers.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )

    # Pending one-time password and the channel it was sent to
    otp_code: Mapped[str | None] = mapped_column(String(6), nullable=True)
    otp_expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    otp_channel: Mapped[str | None] = mapped_column(String(16), nullable=True)

    # Relationships
    seller: Mapped["Seller | None"] = relationship(
        "Seller",
        back_populates="user",
        lazy="selectin",
    )

    @property
    def has_identity(self) -> bool:
        return bool(self.email or self.phone or self.google_id)

    @property
    def requires_password(self) -> bool:
        return not self.phone and not self.google_id

    def clear_otp(self) -> None:
        self.otp_code = None
        self.otp_expires_at = None
        self.otp_channel = None

    def __repr__(self) -> str:
        return f"<User {self.email or self.phone or self.id} ({self.role.value})>"
