import logging

from fastapi import APIRouter, HTTPException, status

from kigaers.dependencies import AssistantDep
from kigaers.exceptions import GenerationError, LLMTimeoutError
from kigaers.schemas.api.ask import AskRequest, AskResponse

router = APIRouter(prefix="/ask", tags=["generation"])
logger = logging.getLogger(__name__)


@router.post("", response_model=AskResponse)
async def ask(request: AskRequest, assistant: AssistantDep):
    """Answer a question using the content of one paper's PDF."""
    try:
        answer = await assistant.ask(request.pdf_url, request.question, request.paper_title)
        return AskResponse(answer=answer)
    except HTTPException:
        raise
    except LLMTimeoutError as e:
        logger.error(f"Answer generation timed out: {e}")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    except GenerationError as e:
        logger.error(f"Answer generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to answer question: {e}",
        )
    except Exception as e:
        logger.error(f"Unhandled error in /ask: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to answer question",
        )
