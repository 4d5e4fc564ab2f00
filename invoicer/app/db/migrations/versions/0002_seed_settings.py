"""seed the settings singleton row

Revision ID: 0002
Revises: 0001
Create Date: 2024-01-08 09:45:00.000000

"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

settings_table = sa.table(
    "settings",
    sa.column("id", sa.Integer),
    sa.column("your_name", sa.String),
    sa.column("business_name", sa.String),
    sa.column("business_address", sa.String),
    sa.column("default_hourly_rate", sa.Numeric(10, 2)),
    sa.column("ach_account", sa.String),
    sa.column("ach_routing", sa.String),
    sa.column("zelle_contact", sa.String),
    sa.column("created_at", sa.DateTime(timezone=True)),
    sa.column("updated_at", sa.DateTime(timezone=True)),
)


def upgrade() -> None:
    now = datetime.now(timezone.utc)
    op.bulk_insert(
        settings_table,
        [
            {
                "id": 1,
                "your_name": "",
                "business_name": "",
                "business_address": "",
                "default_hourly_rate": Decimal("150.00"),
                "ach_account": "",
                "ach_routing": "",
                "zelle_contact": "",
                "created_at": now,
                "updated_at": now,
            }
        ],
    )


def downgrade() -> None:
    op.execute(settings_table.delete().where(settings_table.c.id == 1))
