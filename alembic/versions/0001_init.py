"""init mix_data

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    mix_type_enum = postgresql.ENUM("interlock", "boards/tiir", name="mix_type_enum", create_type=False)

    bind = op.get_bind()
    mix_type_enum.create(bind, checkfirst=True)

    op.create_table(
        "mix_data",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("mix_type", mix_type_enum, nullable=False),
        sa.Column("measurements", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_by", sa.String(length=255), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
    )
    op.create_index("idx_mix_data_created_by", "mix_data", ["created_by"])
    op.create_index("idx_mix_data_timestamp", "mix_data", ["timestamp"])
    op.create_index("idx_mix_data_mix_type", "mix_data", ["mix_type"])

def downgrade() -> None:
    op.drop_index("idx_mix_data_mix_type", table_name="mix_data")
    op.drop_index("idx_mix_data_timestamp", table_name="mix_data")
    op.drop_index("idx_mix_data_created_by", table_name="mix_data")
    op.drop_table("mix_data")
    postgresql.ENUM(name="mix_type_enum").drop(op.get_bind(), checkfirst=True)
