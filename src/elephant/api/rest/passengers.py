"""REST resource for passengers: /api/passengers."""

from __future__ import annotations

from src.elephant.api.resource import CrudResource
from src.elephant.core.service import EntityService
from src.elephant.passengers.schemas import Passenger


def create_passenger_resource(service: EntityService[Passenger]) -> CrudResource[Passenger]:
    return CrudResource(entity_name="passenger", schema=Passenger, service=service)
