from typing import Dict, List, Optional, Union

import pytest

from woocopy.models import BusinessProfile, CatalogItem, CatalogPage
from woocopy.services.errors import CatalogError, CompletionError


# -----------------------------
# Test doubles
# -----------------------------
class ScriptedCompletion:
    """Returns scripted responses in call order; exceptions in the script are raised"""

    def __init__(self, responses: List[Union[str, Exception]]):
        self._responses = list(responses)
        self.calls: List[Dict[str, str]] = []

    async def complete(self, system_instruction: str, user_instruction: str, credential: Optional[str]) -> str:
        self.calls.append({
            "system": system_instruction,
            "user": user_instruction,
            "credential": credential,
        })
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeCatalog:
    """In-memory store; ids in `failing` raise, ids in `rejecting` return False"""

    def __init__(self, items: Optional[List[CatalogItem]] = None, failing=(), rejecting=()):
        self.items = list(items or [])
        self.failing = set(failing)
        self.rejecting = set(rejecting)
        self.updates: List[str] = []
        self.configured = True

    async def list_items(self, page: int = 1, page_size: int = 20) -> CatalogPage:
        start = (page - 1) * page_size
        return CatalogPage(items=self.items[start:start + page_size], total_pages=1, total=len(self.items))

    async def update_item(self, item_id: str, long_description: str, short_description: str) -> bool:
        self.updates.append(item_id)
        if item_id in self.failing:
            raise CatalogError(f"WooCommerce returned HTTP 500 for PUT products/{item_id}", 500)
        return item_id not in self.rejecting


# -----------------------------
# Helpers
# -----------------------------
def make_item(item_id, name: str = "", category: str = "Adhesives", **attributes) -> CatalogItem:
    return CatalogItem(
        id=item_id,
        name=name or f"Product {item_id}",
        sku=f"SKU-{item_id}",
        categories=[{"id": 1, "name": category, "slug": category.lower()}] if category else [],
        attributes=attributes,
    )


def make_profile(**overrides) -> BusinessProfile:
    data = {
        "companyName": "Acme Supplies",
        "targetAudience": "trade buyers",
        "description": "Family-run supplier of industrial consumables since 1982.",
        "businessType": "wholesaler",
        "usps": ["Next-day delivery", "Bulk discounts"],
        "writingTone": "professional",
    }
    data.update(overrides)
    return BusinessProfile.model_validate(data)


VALID_PAYLOAD = '{"longDescription": "<h2>Overview</h2><p>Strong glue</p>", "shortDescription": "<ul><li>Strong</li></ul>"}'


@pytest.fixture
def profile() -> BusinessProfile:
    return make_profile()


@pytest.fixture
def items() -> List[CatalogItem]:
    return [make_item(1), make_item(2, category=""), make_item(3, Colour=["Red", "Blue"], Size="5L")]


@pytest.fixture
def completion_error() -> CompletionError:
    return CompletionError("Completion request failed: HTTP 503")
