"""create states, parties, constituencies, elections, candidates and results

Revision ID: 001
Revises:
Create Date: 2026-10-18

Normalised Lok Sabha results schema. Results is the fact table; every other
table is a dimension it references with cascading deletes.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer, primary_key=True, autoincrement=True)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        "states",
        _id(),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        _created_at(),
    )

    op.create_table(
        "parties",
        _id(),
        sa.Column("name", sa.String(300), nullable=False, unique=True),
        sa.Column("party_type_tcpd", sa.String(100), nullable=True),
        sa.Column("party_id", sa.String(50), nullable=True),
        _created_at(),
    )

    op.create_table(
        "constituencies",
        _id(),
        sa.Column("state_id", sa.Integer, sa.ForeignKey("states.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("constituency_no", sa.Integer, nullable=True),
        sa.Column("constituency_type", sa.String(20), nullable=True),
        sa.Column("sub_region", sa.String(200), nullable=True),
        sa.Column("assembly_no", sa.Integer, nullable=True),
        _created_at(),
        sa.UniqueConstraint("state_id", "name", "constituency_no", name="uq_constituency_state_name_no"),
    )
    op.create_index("idx_constituencies_state_id", "constituencies", ["state_id"])
    op.create_index("idx_constituencies_name", "constituencies", ["name"])

    op.create_table(
        "elections",
        _id(),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("month", sa.Integer, nullable=True),
        sa.Column("poll_no", sa.Integer, nullable=True),
        sa.Column("delimid", sa.Integer, nullable=True),
        sa.Column("election_type", sa.String(50), nullable=True),
        _created_at(),
        sa.UniqueConstraint("year", "month", "poll_no", "delimid", name="uq_election_year_month_poll_delim"),
    )
    op.create_index("idx_elections_year", "elections", ["year"])

    op.create_table(
        "candidates",
        _id(),
        sa.Column("name", sa.String(300), nullable=False),
        sa.Column("sex", sa.String(5), nullable=True),
        sa.Column("myneta_education", sa.String(200), nullable=True),
        sa.Column("tcpd_prof_main", sa.String(200), nullable=True),
        sa.Column("tcpd_prof_main_desc", sa.String(500), nullable=True),
        sa.Column("tcpd_prof_second", sa.String(200), nullable=True),
        sa.Column("tcpd_prof_second_desc", sa.String(500), nullable=True),
        sa.Column("pid", sa.String(100), nullable=True),
        _created_at(),
    )
    op.create_index("idx_candidates_name", "candidates", ["name"])

    op.create_table(
        "results",
        _id(),
        sa.Column("election_id", sa.Integer, sa.ForeignKey("elections.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "constituency_id",
            sa.Integer,
            sa.ForeignKey("constituencies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("candidate_id", sa.Integer, sa.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False),
        sa.Column("party_id", sa.Integer, sa.ForeignKey("parties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("position", sa.Integer, nullable=True),
        sa.Column("votes", sa.Float, nullable=True),
        sa.Column("candidate_type", sa.String(50), nullable=True),
        sa.Column("valid_votes", sa.Float, nullable=True),
        sa.Column("electors", sa.Float, nullable=True),
        sa.Column("n_cand", sa.Integer, nullable=True),
        sa.Column("turnout_percentage", sa.Float, nullable=True),
        sa.Column("vote_share_percentage", sa.Float, nullable=True),
        sa.Column("deposit_lost", sa.String(10), nullable=True),
        sa.Column("margin", sa.Float, nullable=True),
        sa.Column("margin_percentage", sa.Float, nullable=True),
        sa.Column("enop", sa.Float, nullable=True),
        sa.Column("last_poll", sa.Integer, nullable=True),
        sa.Column("contested", sa.Integer, nullable=True),
        sa.Column("last_party", sa.String(300), nullable=True),
        sa.Column("last_constituency_name", sa.String(200), nullable=True),
        sa.Column("same_constituency", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("same_party", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("no_terms", sa.Float, nullable=True),
        sa.Column("turncoat", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("incumbent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("recontest", sa.Boolean, nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_index("idx_results_election_id", "results", ["election_id"])
    op.create_index("idx_results_constituency_id", "results", ["constituency_id"])
    op.create_index("idx_results_party_id", "results", ["party_id"])
    op.create_index("idx_results_candidate_id", "results", ["candidate_id"])
    op.create_index("idx_results_position", "results", ["position"])
    op.create_index("idx_results_turnout", "results", ["turnout_percentage"])
    op.create_index("idx_results_vote_share", "results", ["vote_share_percentage"])
    op.create_index("idx_results_margin", "results", ["margin_percentage"])


def downgrade() -> None:
    op.drop_table("results")
    op.drop_table("candidates")
    op.drop_table("elections")
    op.drop_table("constituencies")
    op.drop_table("parties")
    op.drop_table("states")
