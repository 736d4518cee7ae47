"""Upload batch model recording files pushed to the media host."""

import uuid
from typing import Any

from sqlalchemy import JSON, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Upload(Base):
    __tablename__ = "uploads"

    # [{"url": ..., "public_id": ..., "resource_type": ...}]
    files: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    uploaded_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Upload {self.id} ({len(self.files)} files)>"
