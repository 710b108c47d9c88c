"""Deal persistence service."""

from __future__ import annotations

from src.elephant.core.service import SqlEntityService
from src.elephant.deals.models import DealModel
from src.elephant.deals.schemas import Deal


class DealService(SqlEntityService[Deal]):
    model = DealModel
    schema = Deal
