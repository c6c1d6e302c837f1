"""Pagination — offset and page-count arithmetic shared by reviews and the proxy."""

import math


def page_offset(page: int, limit: int) -> int:
    """Rows to skip for a 1-based page."""
    return (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    """ceil(total / limit); 0 when there is nothing to page."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)
