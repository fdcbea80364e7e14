"""Pagination schemas for offset-based pagination."""

import math

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationMeta(BaseModel):
    """Page/limit pagination metadata returned alongside a page of results.

    ``pages`` is the number of pages needed to show ``total`` items at
    ``limit`` items per page.
    """

    page: int = Field(ge=1, description="1-based page number that was returned.")
    limit: int = Field(ge=1, le=MAX_PAGE_SIZE, description="Maximum items per page.")
    total: int = Field(ge=0, description="Number of matching items before pagination.")
    pages: int = Field(ge=0, description="Total number of pages.")

    @classmethod
    def for_page(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        """Build pagination metadata for a page.

        Args:
            page: The requested page number
            limit: The page size
            total: Number of matching items before pagination

        Returns:
            Pagination metadata with the page count filled in
        """
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
