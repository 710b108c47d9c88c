"""Pydantic schema for the Deal resource."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from src.elephant.core.service import EntitySchema


class Deal(EntitySchema):
    """Deal as sent and received over the API. ``id`` is set by the server."""

    name: str | None = Field(default=None, max_length=300)
    description: str | None = None
    destination: str | None = Field(default=None, max_length=200)
    price: float | None = Field(default=None, ge=0)
    departure_date: date | None = None
    return_date: date | None = None
    seats_available: int | None = Field(default=None, ge=0, le=2**31 - 1)
