import asyncio

import pytest
from conftest import VALID_PAYLOAD, ScriptedCompletion, make_item

from woocopy.batching import CancellationToken
from woocopy.models import BatchRunState
from woocopy.services import template_engine
from woocopy.services.batch import run_batch
from woocopy.services.errors import RunCancelled
from woocopy.services.generator import DescriptionGenerator


class ExplodingGenerator:
    """Raises for one item id, template copy for the rest"""

    def __init__(self, bad_id: str):
        self.bad_id = bad_id

    async def generate(self, item, profile, credential=None):
        if item.id == self.bad_id:
            raise RuntimeError("generator crashed")
        return template_engine.render(item, profile)


def test_progress_reported_in_order_without_credential(items, profile):
    events = []
    generator = DescriptionGenerator(ScriptedCompletion([]))

    results = asyncio.run(run_batch(generator, items, profile, None, on_progress=events.append))

    assert [(e.current, e.total) for e in events] == [(1, 3), (2, 3), (3, 3)]
    assert [e.item_label for e in events] == ["Product 1", "Product 2", "Product 3"]
    assert all(e.phase == "generate" for e in events)
    assert list(results) == ["1", "2", "3"]
    for item in items:
        assert results[item.id] == template_engine.render(item, profile)


def test_mixed_responses_still_cover_every_item(items, profile):
    fenced = '```json\n{"longDescription":"<p>x</p>","shortDescription":"<ul><li>y</li></ul>"}\n```'
    completion = ScriptedCompletion([VALID_PAYLOAD, fenced, "{not json"])
    generator = DescriptionGenerator(completion)

    results = asyncio.run(run_batch(generator, items, profile, "xai-key"))

    assert len(results) == len(items)
    assert set(results) == {item.id for item in items}
    assert results["2"].long_description == "<p>x</p>"
    assert results["2"].word_count == 1
    assert results["3"] == template_engine.render(items[2], profile)
    assert len(completion.calls) == 3


def test_state_tracks_run(items, profile):
    state = BatchRunState()
    generator = DescriptionGenerator(ScriptedCompletion([]))

    results = asyncio.run(run_batch(generator, items, profile, state=state))

    assert state.target_ids == ["1", "2", "3"]
    assert state.index == state.total == 3
    assert state.complete
    assert state.results == results
    assert state.last_error is None


def test_generator_crash_is_isolated(items, profile):
    state = BatchRunState()

    results = asyncio.run(run_batch(ExplodingGenerator("2"), items, profile, state=state))

    assert len(results) == 3
    assert results["2"] == template_engine.render(items[1], profile)
    assert state.last_error == "generator crashed"


def test_duplicate_ids_rejected(profile):
    generator = DescriptionGenerator(ScriptedCompletion([]))
    duplicated = [make_item(1), make_item(2), make_item(1, name="Again")]

    with pytest.raises(ValueError, match="Duplicate item id"):
        asyncio.run(run_batch(generator, duplicated, profile))


def test_cancel_stops_before_next_item(items, profile):
    generator = DescriptionGenerator(ScriptedCompletion([]))
    cancel = CancellationToken()
    events = []

    def on_progress(event):
        events.append(event)
        if event.current == 1:
            cancel.cancel()

    with pytest.raises(RunCancelled) as exc_info:
        asyncio.run(run_batch(generator, items, profile, on_progress=on_progress, cancel=cancel))

    assert exc_info.value.completed == 1
    assert exc_info.value.total == 3
    assert list(exc_info.value.partial) == ["1"]
    assert len(events) == 1
