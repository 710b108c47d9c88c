"""REST resource for deals: /api/deals."""

from __future__ import annotations

from src.elephant.api.resource import CrudResource
from src.elephant.core.service import EntityService
from src.elephant.deals.schemas import Deal


def create_deal_resource(service: EntityService[Deal]) -> CrudResource[Deal]:
    return CrudResource(entity_name="deal", schema=Deal, service=service)
