"""
Run Controller
Ties generation and publishing into one operator-facing workflow
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..batching import CancellationToken
from ..models import (
    BatchRunState,
    BusinessProfile,
    CatalogItem,
    GenerationResult,
    ProgressEvent,
    PublishOutcome,
    PublishRunState,
    RunSummary,
)
from .batch import run_batch
from .errors import RunCancelled
from .generator import DescriptionGenerator
from .publish import build_updates, run_publish
from .woocommerce import WooCommerceClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]

PROFILE_REQUIRED = "Please complete your business context before generating descriptions"
SELECTION_REQUIRED = "Please select at least one product from the Products page"
NOTHING_TO_PUSH = "No descriptions to push"
RUN_IN_PROGRESS = "A run is already in progress"


def validation_message(items: List[CatalogItem], profile: BusinessProfile) -> Optional[str]:
    """Why a run may not start, or None"""
    if not profile.generation_permitted:
        return PROFILE_REQUIRED
    if not items:
        return SELECTION_REQUIRED
    return None


class RunState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATE_DONE = "generate_done"
    GENERATE_FAILED = "generate_failed"
    PUBLISHING = "publishing"
    PUBLISH_DONE = "publish_done"
    PUBLISH_FAILED = "publish_failed"


class RunController:
    """
    Generation and publish workflow for one operator session.

    Holds the latest result mapping and the recently-updated ids. Concurrent
    runs are not locked out: two overlapping generate() calls both write
    `results` and the later one wins.
    """

    def __init__(self, generator: DescriptionGenerator, catalog: WooCommerceClient, auto_push: bool = True):
        self.generator = generator
        self.catalog = catalog
        self.auto_push = auto_push
        self.state = RunState.IDLE
        self.last_state = RunState.IDLE
        self.results: Dict[str, GenerationResult] = {}
        self.recently_updated: List[str] = []
        self.progress: Optional[ProgressEvent] = None
        self.summary: Optional[RunSummary] = None
        self.batch_state: Optional[BatchRunState] = None
        self.publish_state: Optional[PublishRunState] = None
        self.outcomes: List[PublishOutcome] = []
        self._cancel: Optional[CancellationToken] = None

    @property
    def busy(self) -> bool:
        return self.state in (RunState.GENERATING, RunState.PUBLISHING)

    @property
    def can_push(self) -> bool:
        return bool(self.results) and not self.busy

    def mark_updated(self, item_id: str) -> None:
        """Idempotent set-add, insertion order kept"""
        if item_id not in self.recently_updated:
            self.recently_updated.append(item_id)

    def cancel(self) -> bool:
        """Signal the in-flight phase to stop before its next item"""
        if self._cancel is None or not self.busy:
            return False
        self._cancel.cancel()
        logger.info("Cancellation requested")
        return True

    def _transition(self, state: RunState) -> None:
        logger.debug(f"Run state {self.state.value} -> {state.value}")
        self.state = state
        if state != RunState.IDLE:
            self.last_state = state

    def _track(self, on_progress: Optional[ProgressCallback]) -> ProgressCallback:
        def callback(event: ProgressEvent) -> None:
            self.progress = event
            if on_progress:
                on_progress(event)
        return callback

    def _settle(self) -> None:
        """Return an interrupted phase to idle; ids already written to the store stay marked"""
        if not self.busy:
            return
        if self.state == RunState.PUBLISHING and self.publish_state is not None:
            for outcome in self.publish_state.outcomes:
                if outcome.success:
                    self.mark_updated(outcome.item_id)
            failed = RunState.PUBLISH_FAILED
        else:
            failed = RunState.GENERATE_FAILED
        logger.warning(f"Run interrupted while {self.state.value}")
        self.progress = None
        self._cancel = None
        self._transition(failed)
        self._transition(RunState.IDLE)

    def _finish(self, summary: RunSummary) -> RunSummary:
        self.summary = summary
        self.progress = None
        self._cancel = None
        self._transition(RunState.IDLE)
        return summary

    async def generate(
        self,
        items: List[CatalogItem],
        profile: BusinessProfile,
        credential: Optional[str] = None,
        auto_push: Optional[bool] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> RunSummary:
        """
        Generate descriptions for the selection, then optionally push them
        Args:
            items: Selected catalog items
            profile: Business profile
            credential: Generator API key, template copy when empty
            auto_push: Chain into publishing; defaults to the controller setting
            on_progress: Progress listener for both phases
            cancel: Cancellation token, a fresh one is created when omitted
        Returns:
            RunSummary for the run; validation problems come back with success=False
        """
        problem = validation_message(items, profile)
        if problem:
            logger.info(f"Generation rejected: {problem}")
            return RunSummary(success=False, message=problem)

        push_after = self.auto_push if auto_push is None else auto_push
        self._cancel = cancel or CancellationToken()
        self.summary = None
        self.progress = None
        self.batch_state = BatchRunState()
        self._transition(RunState.GENERATING)
        logger.info(f"Starting generation for {len(items)} products (auto-push: {push_after})")

        try:
            return await self._generate(items, profile, credential, push_after, on_progress)
        finally:
            self._settle()

    async def _generate(
        self,
        items: List[CatalogItem],
        profile: BusinessProfile,
        credential: Optional[str],
        push_after: bool,
        on_progress: Optional[ProgressCallback],
    ) -> RunSummary:
        try:
            results = await run_batch(
                self.generator,
                items,
                profile,
                credential,
                on_progress=self._track(on_progress),
                state=self.batch_state,
                cancel=self._cancel,
            )
        except RunCancelled as e:
            self.results = e.partial or {}
            self._transition(RunState.GENERATE_FAILED)
            return self._finish(RunSummary(
                success=False,
                count=len(self.results),
                cancelled=True,
                message=f"Generation cancelled after {e.completed} of {e.total} products",
            ))
        except Exception as e:
            logger.error(f"Generation failed: {e}", exc_info=True)
            self._transition(RunState.GENERATE_FAILED)
            return self._finish(RunSummary(success=False, message=str(e) or "Failed to generate descriptions"))

        self.results = results
        self._transition(RunState.GENERATE_DONE)

        if not push_after:
            return self._finish(RunSummary(success=True, count=len(results), pushed=False))

        return await self._publish(results, on_progress)

    async def push(
        self,
        on_progress: Optional[ProgressCallback] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> RunSummary:
        """Push previously generated but unpushed results"""
        if not self.results:
            return RunSummary(success=False, message=NOTHING_TO_PUSH)
        if self.busy:
            return RunSummary(success=False, message=RUN_IN_PROGRESS)

        self._cancel = cancel or CancellationToken()
        self.summary = None
        try:
            return await self._publish(self.results, on_progress)
        finally:
            self._settle()

    async def _publish(
        self,
        results: Dict[str, GenerationResult],
        on_progress: Optional[ProgressCallback],
    ) -> RunSummary:
        updates = build_updates(results)
        self.publish_state = PublishRunState()
        self._transition(RunState.PUBLISHING)
        logger.info(f"Pushing {len(updates)} descriptions to WooCommerce")

        cancelled = False
        try:
            outcomes = await run_publish(
                self.catalog,
                updates,
                on_progress=self._track(on_progress),
                state=self.publish_state,
                cancel=self._cancel,
            )
        except RunCancelled as e:
            outcomes = e.partial or []
            cancelled = True
        except Exception as e:
            logger.error(f"Publishing failed: {e}", exc_info=True)
            self._transition(RunState.PUBLISH_FAILED)
            return self._finish(RunSummary(
                success=False,
                count=len(results),
                message=str(e) or "Failed to push descriptions",
            ))

        self.outcomes = outcomes
        for outcome in outcomes:
            if outcome.success:
                self.mark_updated(outcome.item_id)

        succeeded = sum(1 for o in outcomes if o.success)
        errors = {o.item_id: o.error or "Update failed" for o in outcomes if not o.success}

        if cancelled:
            self._transition(RunState.PUBLISH_FAILED)
            message = f"Publishing cancelled after {len(outcomes)} of {len(updates)} products"
        else:
            self._transition(RunState.PUBLISH_DONE)
            if errors:
                message = f"Pushed {succeeded} of {len(updates)} descriptions; {len(errors)} failed"
            else:
                message = f"Pushed {succeeded} descriptions to WooCommerce"

        logger.info(message)
        return self._finish(RunSummary(
            success=not cancelled,
            count=len(results),
            pushed=True,
            succeeded=succeeded,
            failed=len(errors),
            errors=errors,
            message=message,
            cancelled=cancelled,
        ))
