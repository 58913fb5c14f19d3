"""Initial schema - permission levels, subjects, resource types, resources, permissions.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

subject_type = sa.Enum("user", "group", name="subject_type")


def upgrade() -> None:
    op.create_table(
        "permission_levels",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("precedence", sa.Integer(), nullable=False),
    )
    op.create_index("ix_permission_levels_name", "permission_levels", ["name"], unique=True)
    op.create_index(
        "ix_permission_levels_precedence", "permission_levels", ["precedence"], unique=True
    )

    op.create_table(
        "subjects",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("subject_id", sa.String(64), nullable=False),
        sa.Column("subject_type", subject_type, nullable=False),
    )
    op.create_index(
        "ix_subjects_subject_id_type", "subjects", ["subject_id", "subject_type"], unique=True
    )

    op.create_table(
        "resource_types",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    # Names are unique after whitespace collapse and case folding.
    op.execute(r"""
        CREATE UNIQUE INDEX ix_resource_types_normalized_name ON resource_types
        (lower(trim(regexp_replace(name, '\s+', ' ', 'g'))))
    """)

    op.create_table(
        "resources",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "resource_type_id",
            sa.UUID(),
            sa.ForeignKey("resource_types.id", ondelete="RESTRICT"),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_resources_name_type", "resources", ["name", "resource_type_id"], unique=True
    )

    op.create_table(
        "permissions",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column(
            "subject_id",
            sa.UUID(),
            sa.ForeignKey("subjects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "resource_id",
            sa.UUID(),
            sa.ForeignKey("resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "permission_level_id",
            sa.UUID(),
            sa.ForeignKey("permission_levels.id"),
            nullable=False,
        ),
        sa.UniqueConstraint("subject_id", "resource_id", name="uq_permissions_subject_resource"),
    )
    op.create_index("ix_permissions_resource_id", "permissions", ["resource_id"])

    op.execute("""
        INSERT INTO permission_levels (id, name, precedence) VALUES
        (gen_random_uuid(), 'own', 0),
        (gen_random_uuid(), 'admin', 1),
        (gen_random_uuid(), 'write', 2),
        (gen_random_uuid(), 'read', 3)
    """)


def downgrade() -> None:
    op.drop_table("permissions")
    op.drop_table("resources")
    op.drop_table("resource_types")
    op.drop_table("subjects")
    op.drop_table("permission_levels")
    subject_type.drop(op.get_bind(), checkfirst=True)
