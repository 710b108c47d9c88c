"""REST API router -- aggregates the health routes and entity resources."""

from __future__ import annotations

from fastapi import APIRouter

from src.elephant.api.rest import health
from src.elephant.api.rest.deals import create_deal_resource
from src.elephant.api.rest.passengers import create_passenger_resource
from src.elephant.core.service import EntityService
from src.elephant.deals.schemas import Deal
from src.elephant.passengers.schemas import Passenger

API_PREFIX = "/api"


def build_router(
    deal_service: EntityService[Deal],
    passenger_service: EntityService[Passenger],
) -> APIRouter:
    """Build the application router with the given persistence services."""
    router = APIRouter()
    router.include_router(health.router)

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(create_deal_resource(deal_service).router)
    api.include_router(create_passenger_resource(passenger_service).router)
    router.include_router(api)
    return router
