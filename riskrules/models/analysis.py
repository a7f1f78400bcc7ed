"""Analysis models: scored questionnaire submissions."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from riskrules.models.base import Base


class Analysis(Base):
    """Risk analysis produced from one questionnaire submission."""

    __tablename__ = "analyses"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    submission_id: Mapped[str] = mapped_column(String(36), nullable=False)
    risk_score: Mapped[float] = mapped_column(Float, nullable=False)
    security_level: Mapped[str] = mapped_column(String(20), nullable=False)
    industry_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("industries.id", ondelete="SET NULL"), nullable=True
    )

    area_scores: Mapped[list["AreaScore"]] = relationship(
        back_populates="analysis", cascade="all, delete-orphan", passive_deletes=True
    )
    recommendations: Mapped[list["Recommendation"]] = relationship(
        back_populates="analysis", cascade="all, delete-orphan", passive_deletes=True
    )
    benchmark_comparisons: Mapped[list["BenchmarkComparison"]] = relationship(
        back_populates="analysis", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Analysis {self.id} risk={self.risk_score}>"


class AreaScore(Base):
    """Score for one security area; area names are unique per analysis."""

    __tablename__ = "area_scores"
    __table_args__ = (UniqueConstraint("analysis_id", "area", name="uq_area_scores_analysis_area"),)

    analysis_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    area: Mapped[str] = mapped_column(String(100), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)

    analysis: Mapped[Analysis] = relationship(back_populates="area_scores")


class Recommendation(Base):
    """Remediation advice attached to an analysis."""

    __tablename__ = "recommendations"

    analysis_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False)  # 1 (urgent) - 5

    analysis: Mapped[Analysis] = relationship(back_populates="recommendations")


class BenchmarkComparison(Base):
    """One area of an analysis compared against an industry benchmark."""

    __tablename__ = "benchmark_comparisons"

    analysis_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    benchmark_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("industry_benchmarks.id", ondelete="CASCADE"), nullable=False
    )
    area: Mapped[str] = mapped_column(String(100), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    benchmark_score: Mapped[float] = mapped_column(Float, nullable=False)
    percentile: Mapped[float] = mapped_column(Float, nullable=False)

    analysis: Mapped[Analysis] = relationship(back_populates="benchmark_comparisons")
