from functools import lru_cache

from kigaers.config import get_settings
from kigaers.services.pdf.extractor import PDFTextExtractor


@lru_cache(maxsize=1)
def make_pdf_extractor() -> PDFTextExtractor:
    settings = get_settings()
    return PDFTextExtractor(timeout=settings.pdf_timeout, max_chars=settings.pdf_max_chars)
