"""create service_specifications table

Revision ID: 001
Revises:
Create Date: 2025-09-01 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "service_specifications",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(), nullable=False, server_default=""),
        sa.Column(
            "spec_type",
            sa.String(length=128),
            nullable=False,
            server_default="CustomerFacingServiceSpecification",
        ),
        sa.Column("version", sa.String(length=32), nullable=False, server_default="1.0"),
        sa.Column("lifecycle_status", sa.String(length=64), nullable=False, server_default="Active"),
        sa.Column("spec_characteristic", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_service_specifications_id", "service_specifications", ["id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_service_specifications_id", table_name="service_specifications")
    op.drop_table("service_specifications")
