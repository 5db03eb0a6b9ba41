"""Brand ORM models — brand profile, contacts, and team invitations."""

import uuid
from datetime import datetime
from sqlalchemy import ARRAY, String, Boolean, DateTime, ForeignKey, Text, Enum as PgEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from api.db.database import Base


class Brand(Base):
    __tablename__ = "brands"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), unique=True, nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    industry: Mapped[str] = mapped_column(String(100), nullable=False)
    website_url: Mapped[str] = mapped_column(Text, nullable=False)
    company_size: Mapped[str] = mapped_column(String(20), nullable=False)
    annual_budget_range: Mapped[str] = mapped_column(String(20), nullable=False)
    preferred_niches: Mapped[list[str]] = mapped_column(ARRAY(String(100)), default=list)
    preferred_regions: Mapped[list[str]] = mapped_column(ARRAY(String(100)), default=list)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[str | None] = mapped_column(Text)
    primary_region: Mapped[str | None] = mapped_column(String(100))
    campaign_objective: Mapped[str | None] = mapped_column(String(100))
    product_service_type: Mapped[str | None] = mapped_column(String(100))
    preferred_contact_method: Mapped[str | None] = mapped_column(String(20))
    proactive_suggestions: Mapped[bool | None] = mapped_column(Boolean)
    stride_contact_name: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="brand")
    contacts = relationship("BrandContact", back_populates="brand", lazy="selectin")
    invitations = relationship("TeamInvitation", back_populates="brand", lazy="selectin")


class BrandContact(Base):
    __tablename__ = "brand_contacts"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    brand_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("brands.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30))
    role: Mapped[str] = mapped_column(String(100), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)

    brand = relationship("Brand", back_populates="contacts")


class TeamInvitation(Base):
    __tablename__ = "team_invitations"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    brand_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("brands.id"), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        PgEnum("PENDING", "ACCEPTED", "EXPIRED", name="invitation_status", create_type=False),
        default="PENDING",
    )
    invited_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)

    brand = relationship("Brand", back_populates="invitations")
