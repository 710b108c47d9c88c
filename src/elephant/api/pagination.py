"""Pageable query parsing and pagination response headers.

``get_pageable`` is a FastAPI dependency reading ``page``, ``size`` and
repeated ``sort`` query parameters. Out-of-range values are corrected rather
than rejected: a negative page becomes 0, a non-positive size falls back to
the default and an oversized one is capped. A page index beyond
``MAX_PAGE_INDEX`` is a validation error.

``generate_pagination_headers`` produces ``X-Total-Count`` and an RFC 5988
``Link`` header with first/prev/next/last relations.
"""

from __future__ import annotations

from fastapi import Query
from starlette.datastructures import URL

from src.elephant.config import get_settings
from src.elephant.core.pagination import MAX_PAGE_INDEX, Page, Pageable, parse_sort


def get_pageable(
    page: int = Query(default=0, le=MAX_PAGE_INDEX, description="Zero-based page index"),
    size: int | None = Query(default=None, description="Page size"),
    sort: list[str] | None = Query(default=None, description="prop[,prop...][,asc|desc]"),
) -> Pageable:
    settings = get_settings()
    if size is None or size < 1:
        size = settings.DEFAULT_PAGE_SIZE
    size = min(size, settings.MAX_PAGE_SIZE)
    return Pageable(page=max(page, 0), size=size, sort=parse_sort(sort or []))


def _generate_uri(base_url: str, page: int, size: int) -> str:
    return str(URL(base_url).include_query_params(page=page, size=size))


def generate_pagination_headers(page: Page, base_url: str) -> dict[str, str]:
    """Build X-Total-Count and Link headers for one page of results."""
    links = []
    if page.has_next:
        links.append(f'<{_generate_uri(base_url, page.number + 1, page.size)}>; rel="next"')
    if page.has_previous:
        links.append(f'<{_generate_uri(base_url, page.number - 1, page.size)}>; rel="prev"')
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(f'<{_generate_uri(base_url, last_page, page.size)}>; rel="last"')
    links.append(f'<{_generate_uri(base_url, 0, page.size)}>; rel="first"')
    return {
        "X-Total-Count": str(page.total_elements),
        "Link": ",".join(links),
    }
