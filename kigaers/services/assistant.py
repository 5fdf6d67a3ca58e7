import asyncio
import logging
from typing import Optional

from kigaers.services.llm.client import LLMClient
from kigaers.services.llm.prompts import question_prompt, summary_prompt
from kigaers.services.pdf.extractor import PDFTextExtractor

logger = logging.getLogger(__name__)


class PaperAssistant:
    """Summaries and question answering over a paper's abstract or PDF."""

    def __init__(self, llm: LLMClient, pdf_extractor: PDFTextExtractor):
        self.llm = llm
        self.pdf = pdf_extractor

    async def _generate(self, prompt: str) -> str:
        # The OpenAI client is synchronous; keep the event loop free.
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.llm.generate, prompt)

    async def summarize_text(self, text: str, title: Optional[str] = None) -> str:
        logger.info(f"Summarizing text ({len(text)} chars)")
        return await self._generate(summary_prompt(text.strip(), title))

    async def summarize_pdf(self, pdf_url: str, title: Optional[str] = None) -> str:
        logger.info(f"Summarizing PDF {pdf_url} (title: {title})")
        content = await self.pdf.fetch_text(pdf_url)
        summary = await self._generate(summary_prompt(content, title))
        logger.info(f"Summary generated (first 100 chars): {summary[:100]}")
        return summary

    async def ask(self, pdf_url: str, question: str, title: Optional[str] = None) -> str:
        logger.info(f"Answering question {question!r} for PDF {pdf_url}")
        content = await self.pdf.fetch_text(pdf_url)
        return await self._generate(question_prompt(content, question, title))
