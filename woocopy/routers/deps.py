"""
Shared router dependencies
"""
from typing import Optional

from fastapi import Header, HTTPException

from ..config import settings
from ..services.workspace import Workspace, get_workspace


def check_key(x_api_key: Optional[str] = Header(default=None, alias="x-api-key")):
    """Validate API key if configured"""
    if settings.API_KEY and x_api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")


__all__ = ["check_key", "get_workspace", "Workspace"]
