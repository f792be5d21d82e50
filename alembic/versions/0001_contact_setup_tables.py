"""contact setup, pending email and contact token tables

Revision ID: 0001_contact_setup
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_contact_setup"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "setup_tokens",
        sa.Column("token", sa.String(64), primary_key=True),
        sa.Column("user_email", sa.String(320), nullable=False),
        sa.Column("contact_google_email", sa.String(320), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_setup_token_contact_status", "setup_tokens", ["contact_google_email", "status"])

    op.create_table(
        "pending_setups",
        sa.Column("token", sa.String(64), primary_key=True),
        sa.Column("user_email", sa.String(320), nullable=False),
        sa.Column("contact_google_email", sa.String(320), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "pending_emails",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("service_id", sa.String(100), nullable=False),
        sa.Column("template_id", sa.String(100), nullable=False),
        sa.Column("user_id", sa.String(100), nullable=False),
        sa.Column("template_params", sa.JSON(), nullable=False),
        sa.Column("contact_email", sa.String(320), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_pending_email_status_created", "pending_emails", ["status", "created_at"])

    op.create_table(
        "contact_tokens",
        sa.Column("contact_email", sa.String(320), primary_key=True),
        sa.Column("encrypted_token", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_used", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade():
    op.drop_table("contact_tokens")
    op.drop_index("ix_pending_email_status_created", table_name="pending_emails")
    op.drop_table("pending_emails")
    op.drop_table("pending_setups")
    op.drop_index("ix_setup_token_contact_status", table_name="setup_tokens")
    op.drop_table("setup_tokens")
