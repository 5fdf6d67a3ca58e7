import logging
from typing import Optional

import fitz  # PyMuPDF
import httpx

from kigaers.exceptions import PDFDownloadError

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """Download a PDF into memory and pull out its plain text."""

    def __init__(
        self,
        timeout: float = 60.0,
        max_chars: int = 60000,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout = timeout
        self.max_chars = max_chars
        self._http = http_client

    async def download(self, url: str) -> bytes:
        logger.info(f"Downloading PDF from {url}")
        try:
            if self._http is not None:
                response = await self._http.get(url, timeout=self.timeout, follow_redirects=True)
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise PDFDownloadError(f"Failed to download file: {e}") from e

        if response.is_error:
            logger.error(f"PDF download failed ({response.status_code}) for {url}")
            raise PDFDownloadError(
                f"Failed to download file: {response.status_code} {response.reason_phrase}"
            )
        return response.content

    def extract_text(self, data: bytes) -> str:
        """Concatenate page text, truncated to ``max_chars``."""
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                parts = []
                total = 0
                for page in doc:
                    text = page.get_text()
                    parts.append(text)
                    total += len(text)
                    if total >= self.max_chars:
                        break
        except (RuntimeError, ValueError) as e:
            raise PDFDownloadError(f"Could not read PDF: {e}") from e

        text = "\n".join(parts).strip()
        if not text:
            raise PDFDownloadError("PDF contains no extractable text")
        if len(text) > self.max_chars:
            logger.info(f"Truncating PDF text from {len(text)} to {self.max_chars} chars")
            text = text[: self.max_chars]
        return text

    async def fetch_text(self, url: str) -> str:
        data = await self.download(url)
        return self.extract_text(data)
