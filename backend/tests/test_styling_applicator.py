"""Tests for deck-level styling: caching, coalescing, abandonment and write-back."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from conftest import REMOTE_ANSWER, InMemoryDeckStore, ScriptedRemote, make_deck, tech_deck

from pitchstyle.core.classifier import Classifier
from pitchstyle.core.exceptions import StylingAbandonedError, StylingPersistenceError
from pitchstyle.core.styling_applicator import (
    RESERVED_CONTENT_KEYS,
    StylingApplicator,
    apply_theme,
)
from pitchstyle.schemas.deck import Deck, Slide
from pitchstyle.schemas.styling import Industry, StylingStatus


def applicator(remote=None, write_retries=1):
    return StylingApplicator(Classifier(remote=remote, timeout=5), write_retries=write_retries)


class TestApplyStyling:
    @pytest.mark.asyncio
    async def test_styles_every_slide(self):
        result = await applicator().apply_styling(tech_deck())
        cover, product = result.deck.slides
        assert result.status is StylingStatus.complete
        assert result.analysis.industry is Industry.technology
        assert cover.content["layout"] == "fullWidthImage"
        assert product.content["layout"] == "splitContent"
        for slide in (cover, product):
            assert slide.content["color_theme"] == "gradient"
            assert slide.content["design_style"] == "innovative"
            assert slide.content["industry"] == "technology"
            assert slide.content["business_tone"] == "modern"
            assert slide.content["font_style"] == "sans-serif"
            assert slide.content["ai_styling"] is True
            assert set(slide.content["custom_design"]) == {
                "style", "layout", "fontImports", "css", "decorativeElements", "animations",
            }

    @pytest.mark.asyncio
    async def test_technology_deck_decorations(self):
        result = await applicator().apply_styling(tech_deck())
        decorations = result.deck.slides[0].content["decorativeElements"]
        assert [d["type"] for d in decorations] == ["shape", "shape", "gradient"]
        assert [d.get("shape") for d in decorations[:2]] == ["rectangle", "rectangle"]
        assert [d["color"] for d in decorations[:2]] == ["#6366F1", "#1E40AF"]
        assert decorations[2] == {
            "type": "gradient", "colors": ["#6366F1", "#4338CA"],
            "position": "corner", "opacity": 0.1, "zIndex": 0,
        }
        assert result.deck.slides[0].content["custom_design"]["decorativeElements"] == decorations

    @pytest.mark.asyncio
    async def test_unrelated_fields_are_kept(self, deck):
        result = await applicator().apply_styling(deck)
        problem = result.deck.slides[1]
        assert problem.content["notes"] == "keep me"
        assert problem.content["bullets"] == ["Slow", "Manual"]
        assert result.deck.slides[0].content["headline"] == "Welcome"

    @pytest.mark.asyncio
    async def test_input_deck_is_not_mutated(self, deck):
        snapshot = deck.model_copy(deep=True)
        result = await applicator().apply_styling(deck)
        assert deck == snapshot
        result.deck.slides[1].content["bullets"].append("Extra")
        assert deck.slides[1].content["bullets"] == ["Slow", "Manual"]

    @pytest.mark.asyncio
    async def test_restyling_a_styled_deck_is_stable(self):
        first = await applicator().apply_styling(tech_deck())
        second = await applicator().apply_styling(first.deck)
        assert second.analysis == first.analysis
        assert [s.content for s in second.deck.slides] == [s.content for s in first.deck.slides]

    @pytest.mark.asyncio
    async def test_empty_deck(self):
        result = await applicator().apply_styling(Deck(id="empty"))
        assert result.deck.slides == []
        assert result.analysis.industry is Industry.default

    @pytest.mark.asyncio
    async def test_deck_without_id_is_not_tracked(self):
        store = InMemoryDeckStore()
        styler = applicator()
        deck = make_deck(deck_id=None)
        result = await styler.apply_styling(deck, store=store)
        assert result.status is StylingStatus.complete
        assert store.writes == []
        assert styler._analyses == {}
        assert styler._status == {}


class TestCaching:
    @pytest.mark.asyncio
    async def test_second_call_reuses_analysis(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER))
        styler = applicator(remote)
        first = await styler.apply_styling(deck)
        second = await styler.apply_styling(deck)
        assert remote.calls == 1
        assert second.analysis is first.analysis

    @pytest.mark.asyncio
    async def test_restyle_classifies_again(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER))
        styler = applicator(remote)
        await styler.apply_styling(deck)
        await styler.apply_styling(deck, restyle=True)
        assert remote.calls == 2

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_classification(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER), delay=0.05)
        styler = applicator(remote)
        first, second = await asyncio.gather(styler.apply_styling(deck), styler.apply_styling(deck))
        assert remote.calls == 1
        assert first.analysis is second.analysis
        assert first.analysis.industry is Industry.finance

    @pytest.mark.asyncio
    async def test_analyze_prewarms_without_status_change(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER))
        styler = applicator(remote)
        analysis = await styler.analyze(deck)
        assert styler.get_status(deck.id) is StylingStatus.not_started
        assert styler.get_cached_analysis(deck.id) is analysis
        await styler.apply_styling(deck)
        assert remote.calls == 1

    @pytest.mark.asyncio
    async def test_clear(self, deck):
        styler = applicator()
        await styler.apply_styling(deck)
        styler.clear(deck.id)
        assert styler.get_cached_analysis(deck.id) is None
        assert styler.get_status(deck.id) is StylingStatus.not_started


class TestStatus:
    @pytest.mark.asyncio
    async def test_transitions(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER), delay=0.05)
        styler = applicator(remote)
        assert styler.get_status(deck.id) is StylingStatus.not_started

        task = asyncio.create_task(styler.apply_styling(deck))
        await remote.started.wait()
        assert styler.get_status(deck.id) is StylingStatus.in_progress
        await task
        assert styler.get_status(deck.id) is StylingStatus.complete

    @pytest.mark.asyncio
    async def test_cancelled_run_restores_status(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER), delay=0.05)
        styler = applicator(remote)

        task = asyncio.create_task(styler.apply_styling(deck))
        await remote.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert styler.get_status(deck.id) is StylingStatus.not_started

        await asyncio.sleep(0.1)
        assert styler.get_status(deck.id) is StylingStatus.not_started
        assert styler.get_cached_analysis(deck.id) is not None
        await styler.apply_styling(deck)
        assert remote.calls == 1

    @pytest.mark.asyncio
    async def test_cancelled_restyle_keeps_complete(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER), delay=0.05)
        styler = applicator(remote)
        await styler.apply_styling(deck)

        remote.started.clear()
        task = asyncio.create_task(styler.apply_styling(deck, restyle=True))
        await remote.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert styler.get_status(deck.id) is StylingStatus.complete

    @pytest.mark.asyncio
    async def test_unexpected_error_restores_status(self, deck):
        styler = applicator()
        styler.classifier.classify = AsyncMock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            await styler.apply_styling(deck)
        assert styler.get_status(deck.id) is StylingStatus.not_started

    @pytest.mark.asyncio
    async def test_restyle_goes_back_to_in_progress(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER), delay=0.05)
        styler = applicator(remote)
        await styler.apply_styling(deck)

        remote.started.clear()
        task = asyncio.create_task(styler.apply_styling(deck, restyle=True))
        await remote.started.wait()
        assert styler.get_status(deck.id) is StylingStatus.in_progress
        await task
        assert styler.get_status(deck.id) is StylingStatus.complete


class TestAbandon:
    @pytest.mark.asyncio
    async def test_late_result_is_discarded(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER), delay=0.05)
        store = InMemoryDeckStore(deck)
        styler = applicator(remote)

        task = asyncio.create_task(styler.apply_styling(deck, store=store))
        await remote.started.wait()
        styler.abandon(deck.id)

        with pytest.raises(StylingAbandonedError):
            await task
        assert store.writes == []
        assert styler.get_cached_analysis(deck.id) is None
        assert styler.get_status(deck.id) is StylingStatus.not_started

    @pytest.mark.asyncio
    async def test_deck_can_be_styled_again_after_abandon(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER))
        styler = applicator(remote)
        await styler.apply_styling(deck)
        styler.abandon(deck.id)
        result = await styler.apply_styling(deck)
        assert remote.calls == 2
        assert result.status is StylingStatus.complete

    @pytest.mark.asyncio
    async def test_other_decks_are_unaffected(self):
        styler = applicator()
        kept = await styler.apply_styling(make_deck(deck_id="keep"))
        await styler.apply_styling(make_deck(deck_id="drop"))
        styler.abandon("drop")
        assert styler.get_cached_analysis("keep") is kept.analysis
        assert styler.get_status("keep") is StylingStatus.complete


class TestWriteBack:
    @pytest.mark.asyncio
    async def test_writes_reserved_keys_for_every_slide(self, deck):
        store = InMemoryDeckStore(deck)
        await applicator().apply_styling(deck, store=store)
        assert [slide_id for slide_id, _ in store.writes] == ["s1", "s2", "s3"]
        for _, partial in store.writes:
            assert set(partial) == set(RESERVED_CONTENT_KEYS)
        assert store.decks[deck.id].slides[1].content["notes"] == "keep me"

    @pytest.mark.asyncio
    async def test_slides_without_id_are_not_written(self):
        deck = make_deck(slides=[Slide(id=None, title="Draft", content={}), Slide(id="s9", title="Saved", content={})])
        store = InMemoryDeckStore(deck)
        await applicator().apply_styling(deck, store=store)
        assert [slide_id for slide_id, _ in store.writes] == ["s9"]

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, deck):
        store = InMemoryDeckStore(deck, failures=1)
        result = await applicator(write_retries=1).apply_styling(deck, store=store)
        assert result.status is StylingStatus.complete
        assert len(store.writes) == 3

    @pytest.mark.asyncio
    async def test_persistent_failure_raises(self, deck):
        remote = ScriptedRemote(response=dict(REMOTE_ANSWER))
        store = InMemoryDeckStore(deck, failures=5)
        styler = applicator(remote, write_retries=1)

        with pytest.raises(StylingPersistenceError) as excinfo:
            await styler.apply_styling(deck, store=store)

        assert excinfo.value.deck_id == deck.id
        assert excinfo.value.slide_id is None
        assert isinstance(excinfo.value.cause, ConnectionError)
        assert styler.get_status(deck.id) is StylingStatus.not_started
        assert styler.get_cached_analysis(deck.id) is not None

        store.failures = 0
        await styler.apply_styling(deck, store=store)
        assert remote.calls == 1
        assert styler.get_status(deck.id) is StylingStatus.complete


    @pytest.mark.asyncio
    async def test_failed_slide_leaves_whole_deck_unstyled(self, deck):
        store = InMemoryDeckStore(deck, fail_on="s2")
        with pytest.raises(StylingPersistenceError):
            await applicator(write_retries=0).apply_styling(deck, store=store)
        assert store.writes == []
        assert ["css" in s.content for s in store.decks[deck.id].slides] == [False, False, False]

    @pytest.mark.asyncio
    async def test_single_batch_per_attempt(self, deck):
        store = InMemoryDeckStore(deck)
        store.update_slides_content = AsyncMock(wraps=store.update_slides_content)
        await applicator().apply_styling(deck, store=store)
        store.update_slides_content.assert_awaited_once()
        deck_id, updates = store.update_slides_content.await_args.args
        assert deck_id == deck.id
        assert list(updates) == ["s1", "s2", "s3"]


class TestApplyTheme:
    def test_manual_theme(self, deck):
        themed = apply_theme(deck, "dark")
        for slide in themed.slides:
            assert slide.content["color_theme"] == "dark"
            assert slide.content["ai_styling"] is False
            assert "--background-color: #111827;" in slide.content["css"]
        assert themed.slides[0].content["layout"] == "fullWidthImage"
        assert themed.slides[1].content["notes"] == "keep me"

    def test_unknown_theme_falls_back_to_light(self, deck):
        assert apply_theme(deck, "neon").slides[0].content["color_theme"] == "light"

    def test_input_deck_is_not_mutated(self, deck):
        snapshot = deck.model_copy(deep=True)
        apply_theme(deck, "forest")
        assert deck == snapshot
