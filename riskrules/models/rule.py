"""User-defined rules and the verdicts they produce."""

from __future__ import annotations

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from riskrules.models.base import Base


class CustomRule(Base):
    """A user-owned rule evaluated against that user's analyses."""

    __tablename__ = "custom_rules"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    severity: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-5
    criteria: Mapped[dict] = mapped_column(JSON, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    results: Mapped[list["RuleResult"]] = relationship(
        back_populates="rule", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<CustomRule {self.name}>"


class RuleResult(Base):
    """Verdict of one rule for one analysis in the latest evaluation run."""

    __tablename__ = "rule_results"

    analysis_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rule_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("custom_rules.id", ondelete="CASCADE"), nullable=False, index=True
    )
    matched: Mapped[bool] = mapped_column(Boolean, nullable=False)

    rule: Mapped[CustomRule] = relationship(back_populates="results")

    def __repr__(self) -> str:
        return f"<RuleResult rule={self.rule_id} matched={self.matched}>"
