"""Page-number pagination over Spark list resources.

Spark only offers ``page``/``per_page`` pagination, so a list resource is read
page by page until the first empty page. Joins need the whole collection, so a
collection is either returned complete or not at all.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..utils.logger import get_logger
from .transport import SparkAPIError, SparkResponseError

logger = get_logger(__name__)

PageFetcher = Callable[[str, int], Any]


@dataclass
class FetchResult:
    """Outcome of reading every page of a resource.

    ``items`` is empty whenever ``error`` is set.
    """

    resource: str
    items: List[Dict[str, Any]] = field(default_factory=list)
    pages: int = 0
    error: Optional[SparkAPIError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __len__(self) -> int:
        return len(self.items)


def fetch_all_pages(get_page: PageFetcher, resource: str) -> FetchResult:
    """Read ``resource`` from page 1 until an empty page comes back.

    Args:
        get_page: Callable issuing one GET for ``(resource, page)``
        resource: Resource path, optionally with a query string

    Returns:
        FetchResult with the concatenation of all pages, or the error that
        interrupted the loop (and no items)
    """
    items: List[Dict[str, Any]] = []
    page_number = 1

    while True:
        try:
            page = get_page(resource, page_number)
            if page and not isinstance(page, list):
                raise SparkResponseError(
                    f"Expected a list page from {resource}, got {type(page).__name__}"
                )
        except SparkAPIError as e:
            logger.warning(f"Fetching {resource} failed on page {page_number}: {e}")
            return FetchResult(resource=resource, pages=page_number - 1, error=e)

        if not page:
            break

        logger.debug(f"{resource}: page {page_number} returned {len(page)} records")
        items.extend(page)
        page_number += 1

    pages = page_number - 1
    logger.info(f"Fetched {len(items)} {resource} records in {pages} pages")
    return FetchResult(resource=resource, items=items, pages=pages)


def key_by_id(records: Iterable[Dict[str, Any]]) -> Dict[Any, Dict[str, Any]]:
    """Map each record's ``id`` to the record.

    Later records win over earlier ones with the same ``id``. Records without an
    ``id`` cannot be joined and are skipped.

    Args:
        records: Records in API order

    Returns:
        Dict of id to record
    """
    keyed: Dict[Any, Dict[str, Any]] = {}
    for record in records:
        if not isinstance(record, dict) or record.get("id") is None:
            logger.warning(f"Skipping record without id: {record!r}")
            continue
        keyed[record["id"]] = record
    return keyed
