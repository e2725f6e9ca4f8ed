"""
Exceptions raised by the generation and publish pipeline
"""
from typing import Any, Optional


class WooCopyError(Exception):
    """Base class for pipeline errors"""


class CompletionError(WooCopyError):
    """Text generation call failed or returned nothing usable"""


class CatalogError(WooCopyError):
    """Store rejected a catalog request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RunCancelled(WooCopyError):
    """A batch or publish pass was cancelled between items

    `partial` holds whatever the pass had produced before the signal:
    the result mapping for generation, the outcome list for publishing.
    """

    def __init__(self, completed: int, total: int, partial: Any = None):
        super().__init__(f"Run cancelled after {completed} of {total} items")
        self.completed = completed
        self.total = total
        self.partial = partial
