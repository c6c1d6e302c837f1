"""Create reviews table with movie/newest-first index.

Revision ID: 001_create_reviews
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_reviews"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, sa.Identity(always=False), primary_key=True),
        sa.Column("movie_id", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_reviews_movie_id_created_at",
        "reviews",
        ["movie_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("ix_reviews_movie_id_created_at", table_name="reviews")
    op.drop_table("reviews")
