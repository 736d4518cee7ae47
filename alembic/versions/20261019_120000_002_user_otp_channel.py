"""Record which channel a pending OTP was sent to.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column("users", sa.Column("otp_channel", sa.String(16), nullable=True))
    # Codes in flight were issued without a channel and can no longer be matched
    op.execute("UPDATE users SET otp_code = NULL, otp_expires_at = NULL")


def downgrade() -> None:
    op.drop_column("users", "otp_channel")
