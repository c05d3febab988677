"""Initial schema: sections, passages

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-18 09:12:41.508213

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create section and passage tables."""
    op.create_table(
        "section",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "passage",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("content", sa.String(length=2000), nullable=False),
        sa.Column("section_id", sa.Integer(), nullable=False),
        sa.Column("from_ref", sa.String(length=255), nullable=True),
        sa.Column("to_ref", sa.String(length=255), nullable=True),
        sa.Column("type", sa.String(length=100), nullable=True),
        sa.Column("author", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["section_id"], ["section.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_passage_content", "passage", ["content"], unique=False)
    op.create_index("ix_passage_type", "passage", ["type"], unique=False)
    op.create_index("ix_passage_author", "passage", ["author"], unique=False)
    op.create_index("ix_passage_section_id", "passage", ["section_id"], unique=False)


def downgrade() -> None:
    """Drop passage and section tables."""
    op.drop_index("ix_passage_section_id", table_name="passage")
    op.drop_index("ix_passage_author", table_name="passage")
    op.drop_index("ix_passage_type", table_name="passage")
    op.drop_index("ix_passage_content", table_name="passage")
    op.drop_table("passage")
    op.drop_table("section")
