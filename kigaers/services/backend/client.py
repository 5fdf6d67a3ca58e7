import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from kigaers.exceptions import FetchError, GenerationError
from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the remote-provided message out of an error payload, if any."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:300]
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("error")
        if isinstance(detail, list):
            # FastAPI validation errors
            return "; ".join(str(item.get("msg", item)) for item in detail if isinstance(item, dict))
        if detail:
            return str(detail)
    return ""


class BackendClient:
    """Async client the frontend uses to reach the Kiga-ers API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 180.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._http is not None:
            return await self._http.request(method, url, timeout=self.timeout, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.request(method, url, timeout=self.timeout, **kwargs)

    async def fetch_papers(self, query: str, offset: int, page_size: int) -> List[Paper]:
        """One page of papers. Empty list means no more data.

        :raises FetchError: with the HTTP status and remote message on failure
        """
        params = {"start": offset, "max_results": page_size}
        if query.strip():
            params["query"] = query.strip()
        try:
            response = await self._request("GET", "/papers", params=params)
        except httpx.HTTPError as e:
            raise FetchError(f"Could not reach the paper service: {e}") from e

        if response.is_error:
            message = _error_message(response)
            raise FetchError(
                f"Failed to fetch papers. Status: {response.status_code}. {message}".strip(),
                status_code=response.status_code,
            )
        try:
            return [Paper.model_validate(item) for item in response.json()]
        except (ValueError, TypeError, ValidationError) as e:
            raise FetchError(f"Malformed paper list from the paper service: {e}") from e

    async def _generate(self, path: str, payload: dict, field: str) -> str:
        try:
            response = await self._request("POST", path, json=payload)
        except httpx.HTTPError as e:
            raise GenerationError(f"Could not reach the AI service: {e}") from e

        if response.is_error:
            message = _error_message(response) or f"Status: {response.status_code}"
            raise GenerationError(message)
        try:
            text = response.json().get(field)
        except (ValueError, AttributeError) as e:
            raise GenerationError(f"Malformed response from the AI service: {e}") from e
        if not text:
            raise GenerationError("The AI service returned an empty response")
        return text

    async def summarize(
        self,
        *,
        text: Optional[str] = None,
        pdf_url: Optional[str] = None,
        title: Optional[str] = None,
    ) -> str:
        payload = {"paperTitle": title}
        if pdf_url:
            payload["pdfUrl"] = pdf_url
        else:
            payload["textToSummarize"] = text
        return await self._generate("/summarize", payload, "summary")

    async def ask(self, pdf_url: str, question: str, title: Optional[str] = None) -> str:
        payload = {"question": question, "pdfUrl": pdf_url, "paperTitle": title}
        return await self._generate("/ask", payload, "answer")
