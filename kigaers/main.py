import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from kigaers.config import get_settings
from kigaers.db.redis.redis import close_redis_pool
from kigaers.middlewares import request_logging_middleware
from kigaers.routers import ask, papers, ping, summarize
from kigaers.services.arxiv.factory import make_arxiv_client
from kigaers.services.assistant import PaperAssistant
from kigaers.services.llm.factory import make_llm_client
from kigaers.services.pdf.factory import make_pdf_extractor

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan for the API.
    """
    logger.info("Starting Kiga-ers API...")

    settings = get_settings()
    app.state.settings = settings

    app.state.arxiv_client = make_arxiv_client()
    app.state.llm_client = make_llm_client()
    app.state.paper_assistant = PaperAssistant(
        llm=app.state.llm_client,
        pdf_extractor=make_pdf_extractor(),
    )
    cache_state = "enabled" if app.state.arxiv_client.cache is not None else "disabled"
    logger.info(f"Services initialized: arXiv client (page cache {cache_state}), LLM client, PDF extractor")

    logger.info("API ready")
    yield

    await app.state.arxiv_client.aclose()
    await close_redis_pool()
    logger.info("API shutdown complete")


app = FastAPI(
    title="Kiga-ers",
    description="Swipe through arXiv papers, save the ones you like, and ask an AI about them.",
    version=get_settings().app_version,
    lifespan=lifespan,
)

app.middleware("http")(request_logging_middleware)

app.include_router(ping.router, prefix="/api/v1")
app.include_router(papers.router, prefix="/api/v1")
app.include_router(summarize.router, prefix="/api/v1")
app.include_router(ask.router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(app, port=8000, host="0.0.0.0")
