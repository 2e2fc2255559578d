from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fixture_insights.db.base import Base, TimestampMixin


class ProviderType(Base, TimestampMixin):
    """Local copy of one entry of the provider's type catalog (`/core/types`)."""

    __tablename__ = "provider_types"

    # Provider-assigned type id, not a surrogate key.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    code: Mapped[str | None] = mapped_column(String, nullable=True)
    developer_name: Mapped[str | None] = mapped_column(String, nullable=True)
    model_type: Mapped[str | None] = mapped_column(String, nullable=True)
    stat_group: Mapped[str | None] = mapped_column(String, nullable=True)
    parent_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_provider_types_code", "code"),
        Index("ix_provider_types_model_type", "model_type"),
    )
