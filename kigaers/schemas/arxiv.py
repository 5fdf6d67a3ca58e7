"""Explicit schema for one Atom ``<entry>`` of the arXiv search API."""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from kigaers.schemas.paper import Paper

_ABS_ID_PATTERN = re.compile(r"/abs/(.+?)(?:v\d+)?$")


class ArxivLink(BaseModel):
    href: Optional[str] = None
    rel: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None


class ArxivEntry(BaseModel):
    """Raw entry fields. ``id`` and ``title`` are required, the rest optional."""

    id: str = Field(..., min_length=1)
    title: str
    summary: Optional[str] = None
    published: Optional[str] = None
    updated: Optional[str] = None
    authors: List[str] = Field(default_factory=list)
    links: List[ArxivLink] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)

    @field_validator("authors", "categories")
    @classmethod
    def _drop_blank(cls, values: List[str]) -> List[str]:
        return [v.strip() for v in values if v and v.strip()]

    @property
    def arxiv_id(self) -> Optional[str]:
        """Identifier between ``/abs/`` and the version suffix, if any."""
        match = _ABS_ID_PATTERN.search(self.id.strip())
        return match.group(1) if match else None

    @property
    def pdf_link(self) -> str:
        for link in self.links:
            if link.title == "pdf" and link.href:
                return link.href
        if "/abs/" in self.id:
            derived = self.id.replace("/abs/", "/pdf/") + ".pdf"
            if derived.startswith(("http://", "https://")):
                return derived
        return ""

    def to_paper(self) -> Paper:
        arxiv_id = self.arxiv_id
        if not arxiv_id:
            raise ValueError(f"Could not extract an arXiv id from {self.id!r}")
        title = " ".join(self.title.split()) or "Untitled"
        abstract = " ".join((self.summary or "").split()) or "No abstract."
        return Paper(
            id=arxiv_id,
            title=title,
            abstract=abstract,
            authors=self.authors,
            published=self.published or "",
            updated=self.updated or "",
            pdf_link=self.pdf_link,
            categories=self.categories,
        )
