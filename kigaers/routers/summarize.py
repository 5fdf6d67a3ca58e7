import logging

from fastapi import APIRouter, HTTPException, status

from kigaers.dependencies import AssistantDep
from kigaers.exceptions import GenerationError, LLMTimeoutError
from kigaers.schemas.api.summarize import SummarizeRequest, SummarizeResponse

router = APIRouter(prefix="/summarize", tags=["generation"])
logger = logging.getLogger(__name__)


@router.post("", response_model=SummarizeResponse)
async def summarize(request: SummarizeRequest, assistant: AssistantDep):
    """Summarize a paper from its PDF when a link is given, otherwise from raw text."""
    try:
        if request.pdf_url:
            summary = await assistant.summarize_pdf(request.pdf_url, request.paper_title)
        else:
            summary = await assistant.summarize_text(request.text, request.paper_title)
        return SummarizeResponse(summary=summary)
    except HTTPException:
        raise
    except LLMTimeoutError as e:
        logger.error(f"Summary generation timed out: {e}")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    except GenerationError as e:
        logger.error(f"Summary generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate summary: {e}",
        )
    except Exception as e:
        logger.error(f"Unhandled error in /summarize: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to generate summary",
        )
