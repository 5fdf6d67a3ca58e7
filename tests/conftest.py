"""Shared fixtures for Kiga-ers tests."""

from typing import List, Optional

import pytest

from kigaers.exceptions import FetchError
from kigaers.schemas.paper import Paper


def build_paper(
    paper_id: str = "2401.00001",
    title: str = "Test Paper",
    abstract: str = "Test abstract content.",
    authors: Optional[List[str]] = None,
    pdf_link: Optional[str] = None,
    categories: Optional[List[str]] = None,
) -> Paper:
    if pdf_link is None:
        pdf_link = f"http://arxiv.org/pdf/{paper_id}v1.pdf"
    return Paper(
        id=paper_id,
        title=title,
        abstract=abstract,
        authors=authors if authors is not None else ["Test Author"],
        published="2024-01-15T00:00:00Z",
        updated="2024-01-15T00:00:00Z",
        pdf_link=pdf_link,
        categories=categories if categories is not None else ["cs.AI"],
    )


def build_page(start: int, count: int) -> List[Paper]:
    return [build_paper(f"2401.{i:05d}", title=f"Paper {i}") for i in range(start, start + count)]


class FakeFetcher:
    """Records every fetch and answers from a queue of pages or errors."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    async def fetch_papers(self, query: str, offset: int, page_size: int) -> List[Paper]:
        self.calls.append((query, offset, page_size))
        if not self.responses:
            return []
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeTransport:
    """Stands in for the backend client in requester tests."""

    def __init__(self, summary: str = "A short summary.", answer: str = "An answer.", error=None):
        self.summary = summary
        self.answer = answer
        self.error = error
        self.summarize_calls = []
        self.ask_calls = []

    async def summarize(self, *, text=None, pdf_url=None, title=None) -> str:
        self.summarize_calls.append({"text": text, "pdf_url": pdf_url, "title": title})
        if self.error:
            raise self.error
        return self.summary

    async def ask(self, pdf_url, question, title=None) -> str:
        self.ask_calls.append((pdf_url, question, title))
        if self.error:
            raise self.error
        return self.answer


@pytest.fixture
def make_paper():
    """Factory fixture for Paper instances with sensible defaults."""
    return build_paper


@pytest.fixture
def make_page():
    return build_page


@pytest.fixture
def fetch_error():
    return FetchError("Failed to fetch papers. Status: 503.", status_code=503)
