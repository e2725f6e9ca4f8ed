"""
Business Profile Router
Company context used to personalise generated copy
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..models import BusinessProfile, USPRequest
from .deps import Workspace, check_key, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Business Profile"], dependencies=[Depends(check_key)])


def _profile_response(profile: BusinessProfile) -> dict:
    data = profile.model_dump(by_alias=True, mode="json")
    data["generationPermitted"] = profile.generation_permitted
    return data


@router.get("/business-profile")
async def get_business_profile(workspace: Workspace = Depends(get_workspace)):
    return _profile_response(workspace.store.load_profile())


@router.put("/business-profile")
async def update_business_profile(profile: BusinessProfile, workspace: Workspace = Depends(get_workspace)):
    workspace.store.save_profile(profile)
    logger.info(f"Saved business profile for {profile.company_name or 'unnamed company'}")
    return _profile_response(profile)


@router.post("/business-profile/usps")
async def add_usp(request: USPRequest, workspace: Workspace = Depends(get_workspace)):
    usp = request.usp.strip()
    if not usp:
        raise HTTPException(status_code=400, detail="USP must not be empty")

    profile = workspace.store.load_profile()
    profile = profile.model_copy(update={"usps": [*profile.usps, usp]})
    workspace.store.save_profile(profile)
    return _profile_response(profile)


@router.delete("/business-profile/usps/{index}")
async def remove_usp(index: int, workspace: Workspace = Depends(get_workspace)):
    profile = workspace.store.load_profile()
    if index < 0 or index >= len(profile.usps):
        raise HTTPException(status_code=404, detail=f"No USP at index {index}")

    usps = [u for i, u in enumerate(profile.usps) if i != index]
    profile = profile.model_copy(update={"usps": usps})
    workspace.store.save_profile(profile)
    return _profile_response(profile)
