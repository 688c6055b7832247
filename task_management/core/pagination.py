"""
Paging parameters shared by the list endpoints.
"""
from typing import NamedTuple, Optional
from fastapi import Depends, Query

from .auth import get_app_settings
from .config import Settings


class Page(NamedTuple):
    skip: int
    limit: int


def get_page(
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: Optional[int] = Query(None, ge=1, description="Number of items to return"),
    settings: Settings = Depends(get_app_settings),
) -> Page:
    """Resolve skip/limit, defaulting and capping the limit from settings"""
    if limit is None:
        limit = settings.default_page_size
    return Page(skip=skip, limit=min(limit, settings.max_page_size))
