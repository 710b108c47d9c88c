"""Deal persistence model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.elephant.core.database import Base, IdentityType


class DealModel(Base):
    """A travel deal: destination, dates, price and remaining seats."""

    __tablename__ = "deals"

    id: Mapped[int] = mapped_column(IdentityType, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(300), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    destination: Mapped[str | None] = mapped_column(String(200), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    departure_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    seats_available: Mapped[int | None] = mapped_column(Integer, nullable=True)
