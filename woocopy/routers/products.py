"""
Products Router
Catalog browsing, snapshot caching and selection
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import DEFAULT_PAGE_SIZE
from ..models import SelectionRequest
from ..services.errors import CatalogError
from .deps import Workspace, check_key, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"], dependencies=[Depends(check_key)])


def _selection_response(workspace: Workspace) -> dict:
    return {"selected": list(workspace.selection), "count": len(workspace.selection)}


@router.get("")
async def list_products(
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=100),
    last_page: Optional[int] = Query(default=None, ge=1),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Fetch one page of published products and cache it as the working snapshot

    Pages are not merged across requests: the cached snapshot is always the
    latest fetch. With last_page, pages page..last_page are fetched as one snapshot.
    """
    try:
        if last_page and last_page > page:
            result = await workspace.catalog.fetch_pages(page, last_page, per_page)
        else:
            result = await workspace.catalog.list_items(page, per_page)
    except CatalogError as e:
        logger.error(f"Failed to fetch products: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    workspace.store.save_products(result.items)
    recently_updated = set(workspace.controller.recently_updated)

    return {
        "products": [
            {**item.model_dump(by_alias=True), "recentlyUpdated": item.id in recently_updated}
            for item in result.items
        ],
        "totalPages": result.total_pages,
        "total": result.total,
        "page": page,
    }


@router.get("/cached")
async def cached_products(workspace: Workspace = Depends(get_workspace)):
    products = workspace.store.load_products()
    return {"products": [p.model_dump(by_alias=True) for p in products], "total": len(products)}


@router.put("/selection")
async def set_selection(request: SelectionRequest, workspace: Workspace = Depends(get_workspace)):
    # Keep first occurrence of each id
    workspace.selection = list(dict.fromkeys(request.ids))
    return _selection_response(workspace)


@router.post("/selection/all")
async def select_all(workspace: Workspace = Depends(get_workspace)):
    workspace.selection = [p.id for p in workspace.store.load_products()]
    return _selection_response(workspace)


@router.delete("/selection")
async def deselect_all(workspace: Workspace = Depends(get_workspace)):
    workspace.selection = []
    return _selection_response(workspace)


@router.post("/selection/{item_id}/toggle")
async def toggle_selection(item_id: str, workspace: Workspace = Depends(get_workspace)):
    selected = workspace.toggle(item_id)
    return {**_selection_response(workspace), "itemId": item_id, "isSelected": selected}
