"""
Connection Router
Store credentials: save, test and inspect the WooCommerce connection
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..models import ConnectionProfile, ConnectionRequest
from ..services.errors import CatalogError
from ..services.woocommerce import WooCommerceClient
from .deps import Workspace, check_key, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Connection"], dependencies=[Depends(check_key)])


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "*" * len(secret)
    return "*" * (len(secret) - 4) + secret[-4:]


@router.get("/connection")
async def get_connection(workspace: Workspace = Depends(get_workspace)):
    """Stored connection with the secret masked"""
    connection = workspace.store.load_connection()
    data = connection.model_dump(by_alias=True)
    data["consumerSecret"] = _mask(connection.consumer_secret)
    return data


@router.post("/connection")
async def connect(request: ConnectionRequest, workspace: Workspace = Depends(get_workspace)):
    """
    Connect to a WooCommerce store

    All three fields are required. The credentials are tested with a one-product
    request before they are saved; a failed test stores the connection as disconnected.
    """
    if not request.site_url or not request.consumer_key or not request.consumer_secret:
        raise HTTPException(status_code=400, detail="Please fill in all fields")

    connection = ConnectionProfile(
        site_url=request.site_url.strip(),
        consumer_key=request.consumer_key.strip(),
        consumer_secret=request.consumer_secret.strip(),
    )
    client = WooCommerceClient.from_connection(connection)

    logger.info(f"Testing WooCommerce connection to {connection.site_url}")
    try:
        ok = await client.test_connection()
    except CatalogError as e:
        logger.warning(f"Connection test failed: {e}")
        workspace.store.save_connection(connection.model_copy(update={"is_connected": False}))
        raise HTTPException(status_code=502, detail=str(e))

    if not ok:
        workspace.store.save_connection(connection.model_copy(update={"is_connected": False}))
        raise HTTPException(status_code=502, detail="Failed to connect. Please check your credentials.")

    connection = connection.model_copy(update={"is_connected": True})
    workspace.store.save_connection(connection)
    workspace.connect(connection, client)
    logger.info("Successfully connected to WooCommerce")

    return {"success": True, "message": "Successfully connected to WooCommerce!"}
