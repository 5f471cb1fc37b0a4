"""create exchange_rates audit table

Revision ID: 3c1f9a2d7e40
Revises: 
Create Date: 2026-10-18 09:12:41.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a2d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "exchange_rates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("base_currency", sa.String(length=12), nullable=False),
        sa.Column("target_currency", sa.String(length=12), nullable=False),
        sa.Column("rate", sa.Float(), nullable=False),
        sa.Column("provider", sa.String(length=64), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("as_of", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "base_currency",
            "target_currency",
            "provider",
            "timestamp",
            name="uq_exchange_rates_observation",
        ),
    )
    op.create_index(
        "ix_exchange_rates_pair_timestamp_desc",
        "exchange_rates",
        [
            sa.column("base_currency"),
            sa.column("target_currency"),
            sa.text("timestamp DESC"),
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_exchange_rates_pair_timestamp_desc", table_name="exchange_rates")
    op.drop_table("exchange_rates")
