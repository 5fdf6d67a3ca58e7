import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from kigaers.dependencies import ArxivDep, SettingsDep
from kigaers.exceptions import FetchError
from kigaers.schemas.paper import Paper

router = APIRouter(prefix="/papers", tags=["papers"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Paper], response_model_exclude_none=True)
async def list_papers(
    arxiv: ArxivDep,
    settings: SettingsDep,
    query: str = Query("", description="Free-text search; empty browses the default category"),
    start: int = Query(0, ge=0, description="Offset of the first result"),
    max_results: Optional[int] = Query(None, ge=1, le=50, description="Page size"),
):
    """Fetch one page of papers from arXiv, converted from Atom XML to JSON."""
    page_size = max_results or settings.arxiv_page_size
    try:
        return await arxiv.fetch(query=query, offset=start, page_size=page_size)
    except HTTPException:
        raise
    except FetchError as e:
        logger.error(f"Failed to fetch papers: {e}")
        code = e.status_code if e.status_code and e.status_code >= 400 else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=e.message)
    except Exception as e:
        logger.error(f"Unhandled error in /papers: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process request: {e}",
        )
