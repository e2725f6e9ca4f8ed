"""
Generation Router
Generate descriptions for the selected products and push them to WooCommerce
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..models import GenerateRequest, RunStatusResponse
from ..services.run_controller import NOTHING_TO_PUSH, RUN_IN_PROGRESS, validation_message
from .deps import Workspace, check_key, get_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Generation"], dependencies=[Depends(check_key)])


@router.post("/generate")
async def generate_descriptions(
    request: Optional[GenerateRequest] = None,
    workspace: Workspace = Depends(get_workspace),
):
    """
    Generate descriptions for the current selection

    Uses the stored business profile and generator key. Without a key every
    product gets template copy. With auto-push on (request flag or workspace
    setting) the results are pushed to the store in the same run.

    Returns: RunSummary (count, pushed, succeeded, failed, per-item errors)
    """
    controller = workspace.controller
    if controller.busy:
        raise HTTPException(status_code=409, detail=RUN_IN_PROGRESS)

    profile = workspace.store.load_profile()
    items = workspace.selected_items()
    problem = validation_message(items, profile)
    if problem:
        raise HTTPException(status_code=400, detail=problem)

    credential = workspace.store.load_generator_key()
    auto_push = request.auto_push if request else None

    summary = await controller.generate(items, profile, credential, auto_push=auto_push)
    workspace.persist_run()
    return summary.model_dump(by_alias=True)


@router.post("/push")
async def push_descriptions(workspace: Workspace = Depends(get_workspace)):
    """Push stored, previously generated descriptions to WooCommerce"""
    controller = workspace.controller
    if controller.busy:
        raise HTTPException(status_code=409, detail=RUN_IN_PROGRESS)
    if not controller.can_push:
        raise HTTPException(status_code=400, detail=NOTHING_TO_PUSH)

    summary = await controller.push()
    workspace.persist_run()
    return summary.model_dump(by_alias=True)


@router.post("/run/cancel")
async def cancel_run(workspace: Workspace = Depends(get_workspace)):
    cancelled = workspace.controller.cancel()
    return {"success": cancelled, "message": "Cancellation requested" if cancelled else "No run in progress"}


@router.get("/run")
async def run_status(workspace: Workspace = Depends(get_workspace)):
    controller = workspace.controller
    status = RunStatusResponse(
        state=controller.state.value,
        last_state=controller.last_state.value,
        progress=controller.progress,
        can_push=controller.can_push,
        auto_push=controller.auto_push,
        recently_updated=list(controller.recently_updated),
        summary=controller.summary,
    )
    return status.model_dump(by_alias=True)


@router.get("/descriptions")
async def generated_descriptions(workspace: Workspace = Depends(get_workspace)):
    results = workspace.controller.results
    return {
        "descriptions": {item_id: r.model_dump(by_alias=True) for item_id, r in results.items()},
        "count": len(results),
    }
