"""
Paged reads from Supabase.

PostgREST caps every response at its max-rows setting (1000 by default), so a single
`.execute()` can silently return a partial table. Reads that must see every row go
through `fetch_all_rows`, which requests consecutive `.range()` pages until one comes
back empty.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

PAGE_SIZE: int = 1000


def fetch_all_rows(build_query: Callable[[], Any], what: str, page_size: int = PAGE_SIZE) -> List[Dict[str, Any]]:
    """
    Execute a query page by page and return every row.

    Args:
        build_query: Returns a fresh, fully filtered and ordered query builder per page
        what: Description used in the error message
        page_size: Rows requested per page

    Raises:
        RuntimeError: If Supabase reports an error on any page
    """

    all_rows: List[Dict[str, Any]] = []
    offset = 0

    while True:
        response = build_query().range(offset, offset + page_size - 1).execute()

        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to {what}: {error}")

        page_rows = getattr(response, "data", None) or []
        if not page_rows:
            break

        all_rows.extend(page_rows)
        # Advance by what the server returned; its cap may be below page_size
        offset += len(page_rows)

    return all_rows


__all__ = ["PAGE_SIZE", "fetch_all_rows"]
