"""Tests for the summary and chat requesters."""

import asyncio

import pytest

from kigaers.exceptions import GenerationError
from kigaers.feed.liked import LikedPaperStore
from kigaers.feed.requesters import AI_ROLE, USER_ROLE, ChatMessage, ChatRequester, SummaryRequester
from kigaers.schemas.paper import make_end_of_feed_card

from tests.conftest import FakeTransport


class TestSummaryRequester:
    @pytest.mark.asyncio
    async def test_pdf_summary_updates_paper_and_store(self, make_paper):
        liked = LikedPaperStore()
        paper = make_paper("a", title="Title")
        liked.add(paper)
        transport = FakeTransport(summary="Summary.")

        result = await SummaryRequester(transport, liked).summarize(paper)

        assert result == "Summary."
        assert paper.ai_summary == "Summary."
        assert liked.get("a").ai_summary == "Summary."
        assert transport.summarize_calls == [{"text": None, "pdf_url": paper.pdf_link, "title": "Title"}]

    @pytest.mark.asyncio
    async def test_abstract_summary(self, make_paper):
        transport = FakeTransport()
        paper = make_paper(abstract="An abstract.")

        await SummaryRequester(transport).summarize(paper, source="abstract")

        assert transport.summarize_calls[0]["text"] == "An abstract."
        assert transport.summarize_calls[0]["pdf_url"] is None

    @pytest.mark.asyncio
    async def test_falls_back_to_abstract_without_pdf_link(self, make_paper):
        transport = FakeTransport()

        await SummaryRequester(transport).summarize(make_paper(pdf_link="", abstract="Only this."))

        assert transport.summarize_calls[0]["text"] == "Only this."

    @pytest.mark.asyncio
    async def test_nothing_to_summarize_fails_fast(self, make_paper):
        transport = FakeTransport()

        with pytest.raises(GenerationError, match="has no PDF link"):
            await SummaryRequester(transport).summarize(make_paper(pdf_link="", abstract="  "))
        assert transport.summarize_calls == []

    @pytest.mark.asyncio
    async def test_missing_pdf_link_fails_fast(self, make_paper):
        transport = FakeTransport()

        with pytest.raises(GenerationError, match="has no PDF link"):
            await SummaryRequester(transport).summarize(make_paper(pdf_link=""), source="pdf")
        assert transport.summarize_calls == []

    @pytest.mark.asyncio
    async def test_placeholder_fails_fast(self):
        with pytest.raises(GenerationError):
            await SummaryRequester(FakeTransport()).summarize(make_end_of_feed_card(""))

    @pytest.mark.asyncio
    async def test_failure_leaves_summary_unset(self, make_paper):
        requester = SummaryRequester(FakeTransport(error=GenerationError("boom")))
        paper = make_paper()

        with pytest.raises(GenerationError):
            await requester.summarize(paper)

        assert paper.ai_summary is None
        assert not requester.in_progress(paper.id)

    @pytest.mark.asyncio
    async def test_second_request_while_pending_is_ignored(self, make_paper):
        gate = asyncio.Event()

        class SlowTransport(FakeTransport):
            async def summarize(self, **kwargs):
                await gate.wait()
                return await super().summarize(**kwargs)

        transport = SlowTransport()
        requester = SummaryRequester(transport)
        paper = make_paper()

        first = asyncio.ensure_future(requester.summarize(paper))
        await asyncio.sleep(0)
        assert requester.in_progress(paper.id)
        assert await requester.summarize(paper) is None

        gate.set()
        assert await first == "A short summary."
        assert len(transport.summarize_calls) == 1


class TestChatRequester:
    @pytest.mark.asyncio
    async def test_records_history(self, make_paper):
        paper = make_paper("a")
        chat = ChatRequester(FakeTransport(answer="Because."))

        assert await chat.ask(paper, "  Why?  ") == "Because."
        assert chat.history("a") == [ChatMessage(USER_ROLE, "Why?"), ChatMessage(AI_ROLE, "Because.")]

    @pytest.mark.asyncio
    async def test_failure_is_recorded_and_raised(self, make_paper):
        paper = make_paper("a")
        chat = ChatRequester(FakeTransport(error=GenerationError("LLM down")))

        with pytest.raises(GenerationError):
            await chat.ask(paper, "Why?")

        assert chat.history("a")[-1] == ChatMessage(AI_ROLE, "Error: LLM down")

    @pytest.mark.asyncio
    async def test_blank_question_fails_fast(self, make_paper):
        transport = FakeTransport()
        with pytest.raises(GenerationError):
            await ChatRequester(transport).ask(make_paper(), "   ")
        assert transport.ask_calls == []

    @pytest.mark.asyncio
    async def test_missing_pdf_link_fails_fast(self, make_paper):
        transport = FakeTransport()
        with pytest.raises(GenerationError, match="has no PDF link"):
            await ChatRequester(transport).ask(make_paper(pdf_link=""), "Why?")
        assert transport.ask_calls == []

    @pytest.mark.asyncio
    async def test_histories_are_per_paper(self, make_paper):
        chat = ChatRequester(FakeTransport())
        await chat.ask(make_paper("a"), "Q1")
        await chat.ask(make_paper("b"), "Q2")

        assert len(chat.history("a")) == 2
        chat.clear("a")
        assert chat.history("a") == []
        assert len(chat.history("b")) == 2
