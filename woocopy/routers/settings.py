"""
Settings Router
Generator API key, auto-push toggle and data reset
"""
import logging

from fastapi import APIRouter, Depends

from ..models import AutoPushRequest, GeneratorKeyRequest
from .deps import Workspace, check_key, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["Settings"], dependencies=[Depends(check_key)])


@router.put("/generator-key")
async def save_generator_key(request: GeneratorKeyRequest, workspace: Workspace = Depends(get_workspace)):
    """
    Save the Grok API key

    An empty key is ignored and the stored one is kept. Without any key,
    generation falls back to template copy.
    """
    api_key = request.api_key.strip()
    workspace.store.save_generator_key(api_key)
    if api_key:
        logger.info("Generator API key saved")
    return {"success": True, "configured": bool(workspace.store.load_generator_key())}


@router.put("/auto-push")
async def set_auto_push(request: AutoPushRequest, workspace: Workspace = Depends(get_workspace)):
    workspace.controller.auto_push = request.auto_push
    logger.info(f"Auto-push {'enabled' if request.auto_push else 'disabled'}")
    return {"success": True, "autoPush": workspace.controller.auto_push}


@router.delete("/data")
async def clear_data(workspace: Workspace = Depends(get_workspace)):
    """Clear connection, key, profile, cached products and generated descriptions"""
    workspace.clear()
    return {"success": True, "message": "All data cleared"}
