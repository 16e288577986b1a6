"""
Standardized pagination parameters for list endpoints.

Scam report listings are page based (1-indexed) rather than offset based,
matching the infinite-scroll client.
"""

from typing import Annotated

from fastapi import Query

from services.scam_report_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

PaginationPage = Annotated[int, Query(ge=1, description="1-indexed page number")]
PaginationLimit = Annotated[
    int,
    Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of records per page"),
]

# Short widgets such as "recent reports" and "featured videos"
PaginationLimitSmall = Annotated[
    int, Query(ge=1, le=20, description="Maximum number of records to return")
]

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PaginationLimit",
    "PaginationLimitSmall",
    "PaginationPage",
]
