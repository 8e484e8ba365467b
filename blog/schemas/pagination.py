"""Pagination envelope shared by every list endpoint."""

from pydantic import Field

from blog.schemas.base import CamelModel


class Pagination(CamelModel):
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)
    has_next_page: bool
    has_prev_page: bool
