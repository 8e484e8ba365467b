"""Page/limit handling shared by every list endpoint."""

import math
from dataclasses import dataclass

from blog.schemas.pagination import Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps OFFSET inside a 64-bit integer for any limit.
MAX_PAGE = 2**31 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_request(page: int | None = None, limit: int | None = None) -> PageRequest:
    """Normalize raw query values: 1 <= page <= MAX_PAGE, 1 <= limit <= MAX_LIMIT, defaults 1/10."""
    page = DEFAULT_PAGE if page is None or page < 1 else min(page, MAX_PAGE)
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    return PageRequest(page=page, limit=min(limit, MAX_LIMIT))


def build_pagination(req: PageRequest, total_items: int) -> Pagination:
    total_pages = math.ceil(total_items / req.limit)
    return Pagination(
        current_page=req.page,
        total_pages=total_pages,
        total_items=total_items,
        has_next_page=req.page < total_pages,
        has_prev_page=req.page > 1,
    )
