import asyncio
from typing import Coroutine, TypeVar

import streamlit as st

from config import FLY_OUT_MS
from kigaers.config import get_settings
from kigaers.feed.gesture import SwipeConfig
from kigaers.feed.liked import LikedPaperStore
from kigaers.feed.requesters import ChatRequester, SummaryRequester
from kigaers.feed.session import FeedSession
from kigaers.services.backend.factory import make_backend_client

T = TypeVar("T")


def run(coro: Coroutine[None, None, T]) -> T:
    """Streamlit scripts are synchronous; each backend call gets its own event loop."""
    return asyncio.run(coro)


def get_liked_store() -> LikedPaperStore:
    if "liked_store" not in st.session_state:
        store = LikedPaperStore(get_settings().liked_store_path)
        store.load()
        st.session_state["liked_store"] = store
    return st.session_state["liked_store"]


def get_summary_requester() -> SummaryRequester:
    if "summary_requester" not in st.session_state:
        st.session_state["summary_requester"] = SummaryRequester(
            make_backend_client(), liked=get_liked_store()
        )
    return st.session_state["summary_requester"]


def get_chat_requester() -> ChatRequester:
    if "chat_requester" not in st.session_state:
        st.session_state["chat_requester"] = ChatRequester(make_backend_client())
    return st.session_state["chat_requester"]


def get_feed_session() -> FeedSession:
    """The reader's feed, created and started on first use."""
    if "feed_session" not in st.session_state:
        settings = get_settings()
        session = FeedSession(
            make_backend_client(),
            liked=get_liked_store(),
            page_size=settings.arxiv_page_size,
            config=SwipeConfig(fly_out_ms=FLY_OUT_MS),
            summaries=get_summary_requester(),
        )
        run(session.start())
        st.session_state["feed_session"] = session
    return st.session_state["feed_session"]
