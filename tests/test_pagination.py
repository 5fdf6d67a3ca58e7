"""Tests for fetch state transitions and the pagination controller."""

import asyncio

import pytest

from kigaers.exceptions import FetchError
from kigaers.feed import pagination as p
from kigaers.feed.pagination import FetchPhase, FetchState, PaginationController
from kigaers.feed.results import ResultSet

from tests.conftest import FakeFetcher, build_page


class TestTransitions:
    def test_search_from_idle_or_exhausted(self):
        assert p.begin_search(FetchState(), " q ").phase is FetchPhase.FETCHING_INITIAL
        assert p.begin_search(FetchState(), " q ").query == "q"
        assert p.begin_search(FetchState(phase=FetchPhase.EXHAUSTED), "q") is not None

    @pytest.mark.parametrize("phase", [FetchPhase.FETCHING_INITIAL, FetchPhase.FETCHING_MORE])
    def test_nothing_starts_while_in_flight(self, phase):
        state = FetchState(phase=phase)
        assert p.begin_search(state, "q") is None
        assert p.begin_more(state) is None

    def test_no_more_after_exhausted(self):
        assert p.begin_more(FetchState(phase=FetchPhase.EXHAUSTED)) is None

    def test_short_page_exhausts(self):
        state = FetchState(phase=FetchPhase.FETCHING_MORE)
        assert p.complete(state, 4, 10).phase is FetchPhase.EXHAUSTED
        assert p.complete(state, 10, 10).phase is FetchPhase.IDLE

    def test_failure_message_only_for_initial(self):
        initial = p.fail(FetchState(phase=FetchPhase.FETCHING_INITIAL), "boom")
        more = p.fail(FetchState(phase=FetchPhase.FETCHING_MORE), "boom")
        assert initial.phase is more.phase is FetchPhase.EXHAUSTED
        assert initial.error == "boom"
        assert more.error is None


def make_controller(responses, page_size=10):
    fetcher = FakeFetcher(responses)
    results = ResultSet()
    return PaginationController(fetcher, results, page_size=page_size), fetcher, results


class TestPaginationController:
    @pytest.mark.asyncio
    async def test_initial_full_page(self):
        controller, fetcher, results = make_controller([build_page(0, 10)])

        assert await controller.search("") is True

        assert fetcher.calls == [("", 0, 10)]
        assert results.real_count == 10
        assert results.cursor == 0
        assert controller.state.phase is FetchPhase.IDLE
        assert not results.has_placeholder

    @pytest.mark.asyncio
    async def test_short_page_exhausts_and_closes(self):
        controller, fetcher, results = make_controller([build_page(0, 10), build_page(10, 4)])
        await controller.search("")

        await controller.fetch_more()

        assert fetcher.calls[-1] == ("", 10, 10)
        assert results.real_count == 14
        assert results.has_placeholder
        assert controller.state.exhausted
        assert await controller.fetch_more() is False
        assert len(fetcher.calls) == 2

    @pytest.mark.asyncio
    async def test_empty_result_has_no_placeholder(self):
        controller, _, results = make_controller([[]])
        await controller.search("nothing matches")

        assert controller.state.exhausted
        assert len(results) == 0

    @pytest.mark.asyncio
    async def test_new_search_replaces_results(self):
        controller, fetcher, results = make_controller([build_page(0, 10), build_page(50, 10)])
        await controller.search("")
        results.advance()
        results.advance()

        await controller.search("quantum")

        assert fetcher.calls[-1] == ("quantum", 0, 10)
        assert results.cursor == 0
        assert [x.id for x in results.papers] == [x.id for x in build_page(50, 10)]

    @pytest.mark.asyncio
    async def test_initial_failure_clears_and_reports(self, fetch_error):
        controller, _, results = make_controller([build_page(0, 10), fetch_error])
        await controller.search("")

        await controller.search("quantum")

        assert len(results) == 0
        assert controller.state.error.startswith("Failed to load papers:")
        assert controller.state.exhausted

    @pytest.mark.asyncio
    async def test_more_failure_keeps_results(self, fetch_error):
        controller, _, results = make_controller([build_page(0, 10), fetch_error])
        await controller.search("")

        await controller.fetch_more()

        assert results.real_count == 10
        assert controller.state.exhausted
        assert controller.state.error is None

    @pytest.mark.asyncio
    async def test_offset_counts_unique_real_papers(self):
        controller, fetcher, results = make_controller(
            [build_page(0, 10), build_page(5, 10), build_page(15, 10)]
        )
        await controller.search("")
        await controller.fetch_more()
        assert results.real_count == 15

        await controller.fetch_more()
        assert fetcher.calls[-1][1] == 15

    @pytest.mark.asyncio
    async def test_needs_more_near_end(self):
        controller, _, results = make_controller([build_page(0, 10)])
        await controller.search("")

        for _ in range(7):
            results.advance()
        assert controller.needs_more() is False
        results.advance()
        assert controller.needs_more() is True

    @pytest.mark.asyncio
    async def test_requests_dropped_while_in_flight(self):
        gate = asyncio.Event()

        class SlowFetcher(FakeFetcher):
            async def fetch_papers(self, query, offset, page_size):
                await gate.wait()
                return await super().fetch_papers(query, offset, page_size)

        fetcher = SlowFetcher([build_page(0, 10)])
        controller = PaginationController(fetcher, ResultSet())

        first = asyncio.ensure_future(controller.search(""))
        await asyncio.sleep(0)
        assert controller.state.in_flight

        assert await controller.search("quantum") is False
        assert await controller.fetch_more() is False

        gate.set()
        assert await first is True
        assert fetcher.calls == [("", 0, 10)]

    @pytest.mark.asyncio
    async def test_detached_controller_ignores_late_results(self):
        controller, _, results = make_controller([build_page(0, 10)])
        controller.detach()

        await controller.search("")
        assert len(results) == 0

    def test_rejects_bad_sizes(self):
        with pytest.raises(ValueError):
            PaginationController(FakeFetcher(), ResultSet(), page_size=0)
