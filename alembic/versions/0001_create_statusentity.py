"""create status entity table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from status_service.core.config import settings


revision = "0001_create_statusentity"
down_revision = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None

TABLE = settings.status_table


def upgrade() -> None:
    op.create_table(
        TABLE,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("root_key", sa.String(length=64), nullable=False),
        sa.Column("status", sa.Integer, nullable=False),
        sa.Column("change_date", sa.DateTime(timezone=False), nullable=False),
    )
    op.create_index(f"ix_{TABLE}_change_date", TABLE, ["change_date"])
    op.create_index(f"ix_{TABLE}_root_change", TABLE, ["root_key", "change_date"])


def downgrade() -> None:
    op.drop_index(f"ix_{TABLE}_root_change", table_name=TABLE)
    op.drop_index(f"ix_{TABLE}_change_date", table_name=TABLE)
    op.drop_table(TABLE)
