"""create picks, standings and leagues tables

Revision ID: 3c9d1e7a2b40
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c9d1e7a2b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        *_base_columns(),
        sa.Column("user_id", sa.String(64), nullable=False, unique=True),
        sa.Column("username", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True, unique=True),
        sa.Column("is_premium", sa.Boolean(), server_default=sa.false()),
        sa.Column("premium_activated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("upgraded_by_admin", sa.Boolean(), server_default=sa.false()),
        sa.Column("payment_session_id", sa.String(255), nullable=True, unique=True),
    )
    op.create_table(
        "teams",
        *_base_columns(),
        sa.Column("external_id", sa.Integer(), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("short_name", sa.String(10), nullable=False),
        sa.Column("team_color", sa.String(20), nullable=True),
    )
    op.create_table(
        "gameweeks",
        *_base_columns(),
        sa.Column("number", sa.Integer(), nullable=False, unique=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_current", sa.Boolean(), server_default=sa.false()),
    )
    op.create_table(
        "fixtures",
        *_base_columns(),
        sa.Column("external_id", sa.Integer(), nullable=True, unique=True),
        sa.Column("gameweek_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("gameweeks.id"), nullable=False),
        sa.Column("home_team_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("away_team_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("kickoff_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), server_default="scheduled"),
        sa.Column("home_score", sa.SmallInteger(), nullable=True),
        sa.Column("away_score", sa.SmallInteger(), nullable=True),
        sa.Column("home_difficulty", sa.SmallInteger(), server_default="3"),
        sa.Column("away_difficulty", sa.SmallInteger(), server_default="3"),
    )
    op.create_table(
        "user_picks",
        *_base_columns(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("gameweek_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("gameweeks.id"), nullable=False),
        sa.Column("fixture_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("fixtures.id"), nullable=False),
        sa.Column("picked_team_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("teams.id"), nullable=False),
        sa.UniqueConstraint("user_id", "gameweek_id", name="uq_pick_user_gameweek"),
    )
    op.create_index("ix_user_picks_user_id", "user_picks", ["user_id"])
    op.create_table(
        "gameweek_scores",
        *_base_columns(),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("gameweek_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("gameweeks.id"), nullable=False),
        sa.Column("points", sa.Integer(), server_default="0"),
        sa.Column("is_correct", sa.Boolean(), server_default=sa.false()),
        sa.UniqueConstraint("user_id", "gameweek_id", name="uq_score_user_gameweek"),
    )
    op.create_table(
        "user_standings",
        *_base_columns(),
        sa.Column("user_id", sa.String(64), nullable=False, unique=True),
        sa.Column("total_points", sa.Integer(), server_default="0"),
        sa.Column("correct_picks", sa.Integer(), server_default="0"),
        sa.Column("total_picks", sa.Integer(), server_default="0"),
        sa.Column("current_rank", sa.Integer(), nullable=True),
    )
    op.create_table(
        "leagues",
        *_base_columns(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("invite_code", sa.String(6), nullable=False, unique=True),
        sa.Column("creator_id", sa.String(64), nullable=False),
        sa.Column("is_public", sa.Boolean(), server_default=sa.false()),
        sa.Column("max_members", sa.Integer(), nullable=True),
    )
    op.create_index("ix_leagues_creator_id", "leagues", ["creator_id"])
    op.create_table(
        "league_members",
        *_base_columns(),
        sa.Column("league_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("leagues.id"), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.UniqueConstraint("league_id", "user_id", name="uq_league_member"),
    )


def downgrade() -> None:
    op.drop_table("league_members")
    op.drop_index("ix_leagues_creator_id", table_name="leagues")
    op.drop_table("leagues")
    op.drop_table("user_standings")
    op.drop_table("gameweek_scores")
    op.drop_index("ix_user_picks_user_id", table_name="user_picks")
    op.drop_table("user_picks")
    op.drop_table("fixtures")
    op.drop_table("gameweeks")
    op.drop_table("teams")
    op.drop_table("profiles")
