from typing import Optional


class KigaersError(Exception):
    """Base class for all application errors."""


class FetchError(KigaersError):
    """The paper search API was unreachable, returned non-2xx, or sent garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class ArxivParseError(FetchError):
    """The search API answered, but the Atom feed could not be parsed."""


class GenerationError(KigaersError):
    """Summarization or question answering failed or produced nothing."""


class LLMConnectionError(GenerationError):
    pass


class LLMTimeoutError(GenerationError):
    pass


class PDFDownloadError(GenerationError):
    """The paper's PDF could not be downloaded or read."""


class PersistenceError(KigaersError):
    """Reading or writing the liked-paper store failed."""
