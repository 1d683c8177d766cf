"""Deciding which pages of a document get converted."""

import logging
from typing import List, Optional

log = logging.getLogger(__name__)


def parse_page_argument(raw: Optional[str]) -> int:
    """Turn the CLI page argument into a 1-based page number, 0 meaning all pages.

    Anything that is not a positive integer is reported and treated as "all pages"
    rather than aborting the run.
    """
    if raw is None:
        return 0

    try:
        page = int(raw)
    except ValueError:
        page = 0

    if page < 1:
        log.warning(f"Invalid page number '{raw}', processing all pages")
        return 0

    log.info(f"Processing only page {page}")
    return page


def select_pages(requested_page: Optional[int], total_pages: int) -> List[int]:
    """Zero-based indices to convert for a document with total_pages pages."""
    if requested_page is None or requested_page == 0:
        return list(range(total_pages))

    if requested_page < 0:
        log.warning(f"Invalid page number {requested_page}, processing all pages")
        return list(range(total_pages))

    if requested_page > total_pages:
        log.warning(
            f"Page {requested_page} does not exist (PDF has only {total_pages} pages)"
        )
        return []

    return [requested_page - 1]
