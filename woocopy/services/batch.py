"""
Batch Orchestrator
Drives the description generator across the selected items, one at a time
"""
import logging
from typing import Callable, Dict, List, Optional

from ..batching import CancellationToken
from ..models import BatchRunState, BusinessProfile, CatalogItem, GenerationResult, ProgressEvent
from . import template_engine
from .errors import RunCancelled
from .generator import DescriptionGenerator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def _check_unique(items: List[CatalogItem]) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate item id in selection: {item.id}")
        seen.add(item.id)


async def run_batch(
    generator: DescriptionGenerator,
    items: List[CatalogItem],
    profile: BusinessProfile,
    credential: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    state: Optional[BatchRunState] = None,
    cancel: Optional[CancellationToken] = None,
) -> Dict[str, GenerationResult]:
    """
    Generate descriptions for every item, sequentially and in input order
    Args:
        generator: Description generator adapter
        items: Selected catalog items (ids must be unique)
        profile: Business profile
        credential: Generator API key, or None for template copy
        on_progress: Called after each item with a 1-based progress event
        state: Run state mutated once per item
        cancel: Checked before each item
    Returns:
        Mapping of item id to result, one entry per input item
    Raises:
        ValueError: Duplicate item ids
        RunCancelled: Cancel signal observed; carries the partial mapping
    """
    _check_unique(items)

    total = len(items)
    results: Dict[str, GenerationResult] = {}
    if state is not None:
        state.target_ids = [item.id for item in items]
        state.total = total
        state.index = 0
        state.results = results

    for idx, item in enumerate(items):
        if cancel is not None and cancel.cancelled:
            logger.warning(f"Batch cancelled after {idx}/{total} products")
            raise RunCancelled(idx, total, dict(results))

        logger.info(f"Processing product {idx + 1}/{total}: {item.name or item.id}")
        try:
            result = await generator.generate(item, profile, credential)
        except Exception as e:
            # The adapter absorbs its own failures; this guards the batch against anything else
            logger.error(f"Failed to process {item.name or item.id}: {e}", exc_info=True)
            if state is not None:
                state.last_error = str(e)
            result = template_engine.render(item, profile)

        results[item.id] = result
        if state is not None:
            state.index = idx + 1

        if on_progress:
            on_progress(ProgressEvent(phase="generate", current=idx + 1, total=total, item_label=item.name))

    logger.info(f"Generated descriptions for {len(results)} products")
    return results
