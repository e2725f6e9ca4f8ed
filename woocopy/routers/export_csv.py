"""
CSV Export Router
Export generated descriptions to CSV
"""
import io
import logging

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from ..config import CSV_BOM, CSV_DEFAULT_HEADERS
from ..utils import sanitize_html, strip_html_tags
from .deps import Workspace, check_key, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Export"], dependencies=[Depends(check_key)])


@router.get("/export-csv")
async def export_csv(
    plain_text: bool = Query(default=False, alias="plainText"),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Export generated descriptions to a CSV file

    One row per generated description, joined with the cached product snapshot
    for sku and name. Descriptions stay HTML unless plainText=true.

    Returns: CSV file with UTF-8 BOM for Excel compatibility
    """
    results = workspace.controller.results
    if not results:
        raise HTTPException(status_code=400, detail="No descriptions to export")

    products = {p.id: p for p in workspace.store.load_products()}
    recently_updated = set(workspace.controller.recently_updated)
    clean = strip_html_tags if plain_text else sanitize_html

    rows = []
    for item_id, result in results.items():
        product = products.get(item_id)
        rows.append({
            "id": item_id,
            "sku": product.sku if product else "",
            "name": product.name if product else "",
            "shortDescription": clean(result.short_description),
            "longDescription": clean(result.long_description),
            "wordCount": result.word_count,
            "recentlyUpdated": item_id in recently_updated,
        })

    df = pd.DataFrame(rows, columns=CSV_DEFAULT_HEADERS)

    output = io.StringIO()
    output.write(CSV_BOM)
    df.to_csv(output, index=False)
    csv_content = output.getvalue()

    logger.info(f"Generated CSV with {len(rows)} rows, {len(df.columns)} columns")

    return StreamingResponse(
        io.BytesIO(csv_content.encode("utf-8")),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": "attachment; filename=woocopy_descriptions.csv",
            "Access-Control-Expose-Headers": "Content-Disposition",
        },
    )
