"""SQLAlchemy ORM models for the exchange-rate audit trail."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Index, Integer, String, UniqueConstraint, desc
from sqlalchemy.orm import Mapped, mapped_column

from rate_engine.database import Base


class ExchangeRateRecord(Base):
    """Append-only record of a rate fetched from an upstream provider."""

    __tablename__ = "exchange_rates"
    __table_args__ = (
        UniqueConstraint(
            "base_currency",
            "target_currency",
            "provider",
            "timestamp",
            name="uq_exchange_rates_observation",
        ),
        Index(
            "ix_exchange_rates_pair_timestamp_desc",
            "base_currency",
            "target_currency",
            desc("timestamp"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    base_currency: Mapped[str] = mapped_column(String(12), nullable=False)
    target_currency: Mapped[str] = mapped_column(String(12), nullable=False)
    rate: Mapped[float] = mapped_column(Float, nullable=False)
    provider: Mapped[str] = mapped_column(String(64), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    as_of: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return (
            f"<ExchangeRateRecord {self.base_currency}->{self.target_currency} "
            f"{self.timestamp.isoformat()} rate={self.rate} provider={self.provider}>"
        )
