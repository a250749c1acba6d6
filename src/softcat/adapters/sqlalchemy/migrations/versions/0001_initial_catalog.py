"""Initial catalog schema

Revision ID: 0001
Revises:
Create Date: 2026-09-28 10:12:41.118204

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "source",
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column(
            "kind",
            sa.Enum("WIKIDATA", "HAL", "GITHUB", "GITLAB", name="sourcekind", native_enum=False),
            nullable=False,
        ),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("slug", name=op.f("pk_source")),
    )
    op.create_table(
        "software",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("license", sa.String(), nullable=False),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("keywords", sa.Text(), nullable=False),
        sa.Column("categories", sa.Text(), nullable=False),
        sa.Column("software_type", sa.Text(), nullable=True),
        sa.Column("custom_attributes", sa.Text(), nullable=False),
        sa.Column("referenced_since", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("dereferencing_reason", sa.Text(), nullable=True),
        sa.Column("dereferenced_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_recommended_version", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_software")),
    )
    op.create_index(
        "uq_software_active_name",
        "software",
        ["name"],
        unique=True,
        sqlite_where=sa.text("dereferenced_at IS NULL"),
        postgresql_where=sa.text("dereferenced_at IS NULL"),
    )
    op.create_table(
        "external_record",
        sa.Column("source_slug", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=False),
        sa.Column("software_id", sa.Uuid(), nullable=True),
        sa.Column("label", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_libre_software", sa.Boolean(), nullable=True),
        sa.Column("developers", sa.Text(), nullable=False),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("website_url", sa.String(), nullable=True),
        sa.Column("source_url", sa.String(), nullable=True),
        sa.Column("documentation_url", sa.String(), nullable=True),
        sa.Column("license", sa.String(), nullable=True),
        sa.Column("software_version", sa.String(), nullable=True),
        sa.Column("publication_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("keywords", sa.Text(), nullable=False),
        sa.Column("application_categories", sa.Text(), nullable=False),
        sa.Column("programming_languages", sa.Text(), nullable=False),
        sa.Column("identifiers", sa.Text(), nullable=False),
        sa.Column("last_fetch_time", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["source_slug"],
            ["source.slug"],
            name=op.f("fk_external_record_source_slug_source"),
        ),
        sa.ForeignKeyConstraint(
            ["software_id"],
            ["software.id"],
            name=op.f("fk_external_record_software_id_software"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("source_slug", "external_id", name=op.f("pk_external_record")),
    )
    op.create_index(
        op.f("ix_external_record_software_id"),
        "external_record",
        ["software_id"],
        unique=False,
    )
    op.create_table(
        "similar_software",
        sa.Column("software_id", sa.Uuid(), nullable=False),
        sa.Column("source_slug", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(
            ["software_id"],
            ["software.id"],
            name=op.f("fk_similar_software_software_id_software"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["source_slug", "external_id"],
            ["external_record.source_slug", "external_record.external_id"],
            name="fk_similar_software_external_record",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "software_id", "source_slug", "external_id", name=op.f("pk_similar_software")
        ),
    )


def downgrade() -> None:
    op.drop_table("similar_software")
    op.drop_index(op.f("ix_external_record_software_id"), table_name="external_record")
    op.drop_table("external_record")
    op.drop_index("uq_software_active_name", table_name="software")
    op.drop_table("software")
    op.drop_table("source")
