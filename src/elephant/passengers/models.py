"""Passenger persistence model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import BigInteger, Date, String
from sqlalchemy.orm import Mapped, mapped_column

from src.elephant.core.database import Base, IdentityType


class PassengerModel(Base):
    """A traveller, optionally booked on a deal.

    ``deal_id`` is application-level: no foreign key, so passengers survive
    deal deletion.
    """

    __tablename__ = "passengers"

    id: Mapped[int] = mapped_column(IdentityType, primary_key=True, autoincrement=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    deal_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
