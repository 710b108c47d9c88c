"""Pydantic schema for the Passenger resource."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from src.elephant.core.service import MAX_ENTITY_ID, EntitySchema


class Passenger(EntitySchema):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=254)
    phone_number: str | None = Field(default=None, max_length=50)
    date_of_birth: date | None = None
    deal_id: int | None = Field(default=None, ge=1, le=MAX_ENTITY_ID)
