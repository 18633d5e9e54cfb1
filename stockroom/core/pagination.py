"""
Pagination bar layout.

Page numbers near the current page are listed; gaps toward the first and last
page collapse into an ellipsis.
"""
from __future__ import annotations

from typing import List, Mapping, Optional
from urllib.parse import urlencode

from ..data.models import ELLIPSIS, PageToken, PageWindow

DEFAULT_RADIUS = 2


def compute_window(current_page: int, total_pages: int, radius: int = DEFAULT_RADIUS) -> PageWindow:
    """Lay out the pagination bar for `current_page` of `total_pages`.

    Page numbers and total are clamped to at least 1 rather than rejected. A
    current page past the end is left as is; the bar then shows the first page,
    an ellipsis and the last page.
    """
    current_page = max(1, current_page)
    total_pages = max(1, total_pages)
    radius = max(0, radius)

    tokens: List[PageToken]
    if total_pages == 1:
        tokens = [1]
    else:
        tokens = [1]
        if current_page - radius > 2:
            tokens.append(ELLIPSIS)
        start = max(2, current_page - radius)
        end = min(total_pages - 1, current_page + radius)
        tokens.extend(range(start, end + 1))
        if current_page + radius < total_pages - 1:
            tokens.append(ELLIPSIS)
        tokens.append(total_pages)

    return PageWindow(
        tokens=tokens,
        current_page=current_page,
        total_pages=total_pages,
        has_previous=current_page > 1,
        has_next=current_page < total_pages,
    )


def page_url(base_url: str, params: Optional[Mapping[str, str]], page: int) -> str:
    """Link to `page`, keeping every other query parameter from `params`."""
    query = {k: v for k, v in (params or {}).items() if k != "page"}
    query["page"] = str(page)
    return f"{base_url}?{urlencode(query)}"
