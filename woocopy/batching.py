import asyncio
from typing import List


def page_ranges(first_page: int, last_page: int) -> List[int]:
    """Catalog pages to fetch, one request per page"""
    if first_page < 1:
        first_page = 1
    return list(range(first_page, last_page + 1))


class CancellationToken:
    """Cooperative stop signal checked between items of a batch"""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
