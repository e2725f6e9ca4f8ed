"""
Publish Orchestrator
Pushes generated descriptions back to the store, recording each outcome
"""
import logging
from typing import Callable, Dict, List, Optional

from ..batching import CancellationToken
from ..models import GenerationResult, ProgressEvent, PublishOutcome, PublishRunState, UpdateRecord
from .errors import RunCancelled
from .woocommerce import WooCommerceClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def build_updates(results: Dict[str, GenerationResult]) -> List[UpdateRecord]:
    """Update records in result-mapping order"""
    return [
        UpdateRecord(
            item_id=item_id,
            long_description=result.long_description,
            short_description=result.short_description,
        )
        for item_id, result in results.items()
    ]


async def run_publish(
    catalog: WooCommerceClient,
    updates: List[UpdateRecord],
    on_progress: Optional[ProgressCallback] = None,
    state: Optional[PublishRunState] = None,
    cancel: Optional[CancellationToken] = None,
) -> List[PublishOutcome]:
    """
    Push every update, sequentially and in input order
    Args:
        catalog: Store client exposing update_item()
        updates: Update records
        on_progress: Called after every attempt, success or failure
        state: Run state mutated once per update
        cancel: Checked before each update
    Returns:
        One outcome per update, in input order
    Raises:
        RunCancelled: Cancel signal observed; carries the outcomes so far
    """
    total = len(updates)
    outcomes: List[PublishOutcome] = []
    if state is not None:
        state.updates = list(updates)
        state.total = total
        state.index = 0
        state.outcomes = outcomes

    for idx, update in enumerate(updates):
        if cancel is not None and cancel.cancelled:
            logger.warning(f"Publish cancelled after {idx}/{total} updates")
            raise RunCancelled(idx, total, list(outcomes))

        try:
            accepted = await catalog.update_item(
                update.item_id,
                update.long_description,
                update.short_description,
            )
        except Exception as e:
            logger.error(f"Failed to update product {update.item_id}: {e}")
            outcomes.append(PublishOutcome(item_id=update.item_id, success=False, error=str(e) or type(e).__name__))
        else:
            if accepted:
                outcomes.append(PublishOutcome(item_id=update.item_id, success=True, result={"updated": True}))
            else:
                logger.warning(f"Store did not accept update for product {update.item_id}")
                outcomes.append(PublishOutcome(item_id=update.item_id, success=False, error="Store did not accept the update"))

        if state is not None:
            state.index = idx + 1

        if on_progress:
            on_progress(ProgressEvent(phase="publish", current=idx + 1, total=total))

    failed = sum(1 for o in outcomes if not o.success)
    logger.info(f"Publish finished: {total - failed}/{total} updated, {failed} failed")
    return outcomes
