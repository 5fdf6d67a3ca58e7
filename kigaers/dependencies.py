from typing import Annotated

from fastapi import Depends, Request

from kigaers.config import Settings, get_settings
from kigaers.services.arxiv.client import ArxivClient
from kigaers.services.assistant import PaperAssistant
from kigaers.services.llm.client import LLMClient


def get_arxiv_client(request: Request) -> ArxivClient:
    return request.app.state.arxiv_client


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client


def get_paper_assistant(request: Request) -> PaperAssistant:
    return request.app.state.paper_assistant


SettingsDep = Annotated[Settings, Depends(get_settings)]
ArxivDep = Annotated[ArxivClient, Depends(get_arxiv_client)]
LLMDep = Annotated[LLMClient, Depends(get_llm_client)]
AssistantDep = Annotated[PaperAssistant, Depends(get_paper_assistant)]
