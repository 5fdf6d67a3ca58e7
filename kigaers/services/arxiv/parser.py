"""Parse arXiv Atom feeds into validated ``Paper`` records."""

import logging
import xml.etree.ElementTree as ET
from typing import List

from pydantic import ValidationError

from kigaers.exceptions import ArxivParseError
from kigaers.schemas.arxiv import ArxivEntry, ArxivLink
from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)

ATOM_NS = {"atom": "http://www.w3.org/2005/Atom", "arxiv": "http://arxiv.org/schemas/atom"}


def _text(node: ET.Element, path: str) -> str | None:
    found = node.find(path, ATOM_NS)
    if found is None or found.text is None:
        return None
    return found.text.strip()


def _entry_fields(entry: ET.Element) -> dict:
    return {
        "id": _text(entry, "atom:id") or "",
        "title": _text(entry, "atom:title") or "",
        "summary": _text(entry, "atom:summary"),
        "published": _text(entry, "atom:published"),
        "updated": _text(entry, "atom:updated"),
        "authors": [
            " ".join(name.text.split())
            for name in entry.findall("atom:author/atom:name", ATOM_NS)
            if name.text
        ],
        "links": [
            ArxivLink(
                href=link.get("href"),
                rel=link.get("rel"),
                title=link.get("title"),
                type=link.get("type"),
            )
            for link in entry.findall("atom:link", ATOM_NS)
        ],
        "categories": [c.get("term") or "" for c in entry.findall("atom:category", ATOM_NS)],
    }


def parse_feed(xml_text: str) -> List[Paper]:
    """Turn a search response into papers, skipping entries that fail validation.

    Raises ArxivParseError when the document itself is not a usable feed.
    """
    if not xml_text.strip():
        raise ArxivParseError("Empty response from arXiv")

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ArxivParseError(f"Invalid arXiv XML response: {e}") from e

    if root.tag != f"{{{ATOM_NS['atom']}}}feed":
        raise ArxivParseError(f"Unexpected root element {root.tag!r}")

    papers: List[Paper] = []
    seen: set[str] = set()
    for entry in root.findall("atom:entry", ATOM_NS):
        fields = _entry_fields(entry)
        try:
            paper = ArxivEntry.model_validate(fields).to_paper()
        except (ValidationError, ValueError) as e:
            logger.warning(f"Skipping arXiv entry {fields.get('id') or 'N/A'}: {e}")
            continue
        if paper.id in seen:
            continue
        seen.add(paper.id)
        if not paper.pdf_link:
            logger.warning(f"No PDF link for arXiv entry {paper.id}")
        papers.append(paper)

    return papers
