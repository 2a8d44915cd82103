import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Base(DeclarativeBase):
    pass


class AgencyTemplate(Base):
    __tablename__ = "agency_templates"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    creator_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Selection keys
    stage: Mapped[str] = mapped_column(String(20), nullable=False)
    objective: Mapped[str] = mapped_column(String(40), nullable=False)
    intensity: Mapped[str] = mapped_column(String(20), nullable=False)
    playbook: Mapped[str] = mapped_column(String(20), default="GIRLFRIEND")
    language: Mapped[str] = mapped_column(String(16), default="es")
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Untyped payload: {openers, bridges, teases, ctas} (+ legacy aliases)
    blocks_json: Mapped[dict | None] = mapped_column(JSON)

    created_at: Mapped[str] = mapped_column(String(30), default=_now_iso)
    updated_at: Mapped[str] = mapped_column(String(30), default=_now_iso, onupdate=_now_iso)

    __table_args__ = (
        Index("ix_agency_templates_creator_active", "creator_id", "active"),
        Index("ix_agency_templates_stage", "stage"),
    )


class FanAgencyState(Base):
    __tablename__ = "fan_agency_states"

    fan_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    creator_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(200))

    # Agency meta
    stage: Mapped[str | None] = mapped_column(String(20))
    objective_code: Mapped[str | None] = mapped_column(String(40))
    intensity: Mapped[str | None] = mapped_column(String(20))

    # Segmentation
    segment: Mapped[str | None] = mapped_column(String(30))
    risk_level: Mapped[str | None] = mapped_column(String(20))
    is_new: Mapped[bool] = mapped_column(Boolean, default=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)
    is_blocked: Mapped[bool] = mapped_column(Boolean, default=False)

    # Activity (ISO timestamps)
    invite_created_at: Mapped[str | None] = mapped_column(String(30))
    invite_used_at: Mapped[str | None] = mapped_column(String(30))
    access_expires_at: Mapped[str | None] = mapped_column(String(30))
    last_message_at: Mapped[str | None] = mapped_column(String(30))
    last_creator_message_at: Mapped[str | None] = mapped_column(String(30))
    notes: Mapped[str | None] = mapped_column(Text)

    purchases: Mapped[list["FanPurchase"]] = relationship(
        back_populates="fan", cascade="all, delete-orphan", lazy="selectin"
    )

    __table_args__ = (
        Index("ix_fan_agency_states_creator", "creator_id"),
    )


class FanPurchase(Base):
    __tablename__ = "fan_purchases"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    fan_id: Mapped[str] = mapped_column(ForeignKey("fan_agency_states.fan_id"), nullable=False)
    amount: Mapped[float | None] = mapped_column(Float)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[str] = mapped_column(String(30), default=_now_iso)

    fan: Mapped["FanAgencyState"] = relationship(back_populates="purchases")

    __table_args__ = (
        Index("ix_fan_purchases_fan_created", "fan_id", "created_at"),
    )
