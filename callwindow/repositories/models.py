from __future__ import annotations
from datetime import datetime
from sqlalchemy import String, Integer, DateTime, ForeignKey, Boolean, Text, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .db import Base


class Tenant(Base):
    __tablename__ = "tenants"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), unique=True)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True, default="Europe/London")
    is_paused: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    business_hours: Mapped[BusinessHours | None] = relationship(back_populates="tenant", uselist=False)  # type: ignore


class BusinessHours(Base):
    """Per-day windows stored as JSON text, e.g. '{"start": "09:00", "end": "17:00", "enabled": true}'.

    Columns are kept as raw text on purpose: decoding and fallback happen in the
    window resolver, so a bad row never breaks a read.
    """

    __tablename__ = "business_hours"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(ForeignKey("tenants.id"))
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sunday: Mapped[str | None] = mapped_column(Text, nullable=True)
    monday: Mapped[str | None] = mapped_column(Text, nullable=True)
    tuesday: Mapped[str | None] = mapped_column(Text, nullable=True)
    wednesday: Mapped[str | None] = mapped_column(Text, nullable=True)
    thursday: Mapped[str | None] = mapped_column(Text, nullable=True)
    friday: Mapped[str | None] = mapped_column(Text, nullable=True)
    saturday: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tenant: Mapped[Tenant] = relationship(back_populates="business_hours")

    __table_args__ = (
        Index("uix_business_hours_tenant", "tenant_id", unique=True),
    )
