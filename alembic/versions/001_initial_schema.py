"""Initial schema: analyses, benchmarks and custom rules.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Industries and their per-framework benchmarks
    op.create_table(
        "industries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), unique=True, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "industry_benchmarks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "industry_id", sa.String(36),
            sa.ForeignKey("industries.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("framework_id", sa.String(50), nullable=False),
        sa.Column("area", sa.String(100), nullable=False),
        sa.Column("average_score", sa.Float, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_industry_benchmarks_industry_id", "industry_benchmarks", ["industry_id"])
    op.create_index("ix_industry_benchmarks_framework_id", "industry_benchmarks", ["framework_id"])

    # Analyses
    op.create_table(
        "analyses",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("submission_id", sa.String(36), nullable=False),
        sa.Column("risk_score", sa.Float, nullable=False),
        sa.Column("security_level", sa.String(20), nullable=False),
        sa.Column(
            "industry_id", sa.String(36),
            sa.ForeignKey("industries.id", ondelete="SET NULL"), nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_analyses_user_id", "analyses", ["user_id"])

    op.create_table(
        "area_scores",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "analysis_id", sa.String(36),
            sa.ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("area", sa.String(100), nullable=False),
        sa.Column("score", sa.Float, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("analysis_id", "area", name="uq_area_scores_analysis_area"),
    )
    op.create_index("ix_area_scores_analysis_id", "area_scores", ["analysis_id"])

    op.create_table(
        "recommendations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "analysis_id", sa.String(36),
            sa.ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("priority", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_recommendations_analysis_id", "recommendations", ["analysis_id"])

    op.create_table(
        "benchmark_comparisons",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "analysis_id", sa.String(36),
            sa.ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "benchmark_id", sa.String(36),
            sa.ForeignKey("industry_benchmarks.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("area", sa.String(100), nullable=False),
        sa.Column("score", sa.Float, nullable=False),
        sa.Column("benchmark_score", sa.Float, nullable=False),
        sa.Column("percentile", sa.Float, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_benchmark_comparisons_analysis_id", "benchmark_comparisons", ["analysis_id"])

    # Custom rules and their latest verdicts
    op.create_table(
        "custom_rules",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("severity", sa.Integer, nullable=False),
        sa.Column("criteria", sa.JSON, nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_custom_rules_user_id", "custom_rules", ["user_id"])

    op.create_table(
        "rule_results",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "analysis_id", sa.String(36),
            sa.ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "rule_id", sa.String(36),
            sa.ForeignKey("custom_rules.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("matched", sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_rule_results_analysis_id", "rule_results", ["analysis_id"])
    op.create_index("ix_rule_results_rule_id", "rule_results", ["rule_id"])


def downgrade() -> None:
    op.drop_table("rule_results")
    op.drop_table("custom_rules")
    op.drop_table("benchmark_comparisons")
    op.drop_table("recommendations")
    op.drop_table("area_scores")
    op.drop_table("analyses")
    op.drop_table("industry_benchmarks")
    op.drop_table("industries")
