"""Industry benchmark models."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from riskrules.models.base import Base


class Industry(Base):
    """An industry sector with benchmark data."""

    __tablename__ = "industries"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Industry {self.name}>"


class IndustryBenchmark(Base):
    """Average area score for an industry under one compliance framework."""

    __tablename__ = "industry_benchmarks"

    industry_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("industries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    framework_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    area: Mapped[str] = mapped_column(String(100), nullable=False)
    average_score: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<IndustryBenchmark {self.framework_id} {self.area}>"
