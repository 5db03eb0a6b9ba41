"""User ORM model."""

import uuid
from datetime import datetime
from sqlalchemy import String, BigInteger, Boolean, DateTime, Enum as PgEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from api.db.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    telegram_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False)
    telegram_username: Mapped[str | None] = mapped_column(String(255))
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        PgEnum("PENDING", "ACTIVE", "SUSPENDED", name="user_status", create_type=False),
        default="PENDING",
    )
    is_onboarded: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    brand = relationship("Brand", back_populates="user", uselist=False, lazy="selectin")
