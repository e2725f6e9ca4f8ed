"""
WooCommerce Catalog Client
REST API (wc/v3) access for listing and updating products
"""
import logging
from typing import Any, Dict, Optional

import httpx

from ..batching import page_ranges
from ..config import WOO_API_VERSION, WOO_TIMEOUT, DEFAULT_PAGE_SIZE
from ..models import CatalogItem, CatalogPage, ConnectionProfile
from .errors import CatalogError

logger = logging.getLogger(__name__)


def _attributes(raw: Any) -> Dict[str, Any]:
    """WooCommerce attribute list -> name: options mapping"""
    if isinstance(raw, dict):
        return raw

    attributes: Dict[str, Any] = {}
    for attr in raw or []:
        if not isinstance(attr, dict) or not attr.get("name"):
            continue
        if "options" in attr:
            attributes[attr["name"]] = list(attr.get("options") or [])
        elif "option" in attr:
            attributes[attr["name"]] = attr["option"]
    return attributes


def map_product(product: Dict[str, Any]) -> CatalogItem:
    """Build a catalog item from a WooCommerce product payload"""
    return CatalogItem(
        id=product["id"],
        name=product.get("name") or "",
        sku=product.get("sku") or "N/A",
        price=str(product.get("price") or ""),
        regular_price=str(product.get("regular_price") or ""),
        sale_price=str(product.get("sale_price") or ""),
        categories=product.get("categories") or [],
        attributes=_attributes(product.get("attributes")),
        images=product.get("images") or [],
        status=product.get("status") or "",
        permalink=product.get("permalink") or "",
        description=product.get("description") or "",
        short_description=product.get("short_description") or "",
    )


def _int_header(response: httpx.Response, name: str, default: int) -> int:
    try:
        return int(response.headers.get(name, default))
    except (TypeError, ValueError):
        return default


class WooCommerceClient:
    """Catalog collaborator. An unconfigured client works offline instead of raising."""

    def __init__(
        self,
        site_url: str = "",
        consumer_key: str = "",
        consumer_secret: str = "",
        version: str = WOO_API_VERSION,
        timeout: float = WOO_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.site_url = (site_url or "").rstrip("/")
        self.consumer_key = consumer_key or ""
        self.consumer_secret = consumer_secret or ""
        self.version = version
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_connection(cls, connection: ConnectionProfile, **kwargs) -> "WooCommerceClient":
        return cls(connection.site_url, connection.consumer_key, connection.consumer_secret, **kwargs)

    @property
    def configured(self) -> bool:
        return bool(self.site_url and self.consumer_key and self.consumer_secret)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self.site_url}/wp-json/{self.version}/",
            auth=(self.consumer_key, self.consumer_secret),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise CatalogError(f"WooCommerce returned HTTP {status} for {method} {path}", status) from e
        except httpx.HTTPError as e:
            raise CatalogError(f"WooCommerce request failed for {method} {path}: {e}") from e

    async def test_connection(self) -> bool:
        """Fetch one product to verify the credentials"""
        if not self.configured:
            raise CatalogError("WooCommerce API not initialized")

        response = await self._request("GET", "products", params={"per_page": 1})
        return response.status_code == 200

    async def list_items(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> CatalogPage:
        """
        Fetch one page of published products
        Args:
            page: 1-based page number
            page_size: Products per page
        Returns:
            CatalogPage with totals from the X-WP-TotalPages / X-WP-Total headers
        """
        if not self.configured:
            logger.info("WooCommerce not connected - returning empty product page")
            return CatalogPage()

        response = await self._request(
            "GET",
            "products",
            params={"page": page, "per_page": page_size, "status": "publish"},
        )
        data = response.json()
        items = [map_product(p) for p in data if isinstance(p, dict)] if isinstance(data, list) else []

        logger.info(f"Fetched {len(items)} products (page {page})")
        return CatalogPage(
            items=items,
            total_pages=_int_header(response, "x-wp-totalpages", 1),
            total=_int_header(response, "x-wp-total", 0),
        )

    async def fetch_pages(self, first_page: int, last_page: int, page_size: int = DEFAULT_PAGE_SIZE) -> CatalogPage:
        """Fetch a range of pages as one page, stopping at the store's last page"""
        merged = CatalogPage()
        for page in page_ranges(first_page, last_page):
            result = await self.list_items(page, page_size)
            merged = CatalogPage(
                items=[*merged.items, *result.items],
                total_pages=result.total_pages,
                total=result.total,
            )
            if page >= result.total_pages:
                break
        return merged

    async def update_item(self, item_id: str, long_description: str, short_description: str) -> bool:
        """
        Write descriptions back to one product
        Args:
            item_id: Product id
            long_description: HTML for the product description
            short_description: HTML for the short description
        Returns:
            True when the store accepted the update
        Raises:
            CatalogError: Transport or HTTP failure on a configured client
        """
        if not self.configured:
            logger.info(f"WooCommerce not connected - update for product {item_id} not sent")
            return True

        response = await self._request(
            "PUT",
            f"products/{item_id}",
            json={
                "description": long_description,
                "short_description": short_description,
            },
        )
        return response.status_code == 200
