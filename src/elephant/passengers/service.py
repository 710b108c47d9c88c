"""Passenger persistence service."""

from __future__ import annotations

from src.elephant.core.service import SqlEntityService
from src.elephant.passengers.models import PassengerModel
from src.elephant.passengers.schemas import Passenger


class PassengerService(SqlEntityService[Passenger]):
    model = PassengerModel
    schema = Passenger
