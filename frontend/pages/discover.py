from dataclasses import replace

import streamlit as st
from api import get_feed_session, run
from config import CARD_WIDTH_PX, DRAG_RANGE_PX
from ui.paper_card import render_deck, render_paper_details

from kigaers.exceptions import GenerationError
from kigaers.feed import gesture as gestures
from kigaers.feed.gesture import Direction

st.title("🃏 Discover")

session = get_feed_session()


def clear_search_button(key: str):
    if session.can_clear_search and st.button("✖ Clear search", key=key):
        with st.spinner("Loading the latest papers..."):
            run(session.clear_search())
        st.rerun()


# ======================
# Sidebar search
# ======================
with st.sidebar.form("paper_search_form"):
    st.header("Search")
    term = st.text_input(
        "Keywords",
        value=session.pagination.state.query,
        placeholder="e.g. quantum, diffusion models",
        help="Leave empty for the newest papers in cs.AI",
    )
    submitted = st.form_submit_button("🔍 Search")

if submitted:
    with st.spinner("Searching..."):
        if not run(session.search(term)):
            st.toast("Still loading the previous request, try again in a moment.")
    st.rerun()

st.sidebar.markdown("---")
st.sidebar.caption(f"Saved papers: {len(session.liked)}")


# ======================
# Status
# ======================
state = session.pagination.state
if state.error:
    st.error(state.error)
    if st.button("🔁 Retry"):
        with st.spinner("Retrying..."):
            run(session.retry())
        st.rerun()
    clear_search_button("clear_search_error")
    st.stop()

view = session.stack()

if view.is_empty:
    if view.preparing_next:
        with st.spinner("Preparing the next papers..."):
            fetched = run(session.pagination.maybe_fetch_more())
        if fetched:
            st.rerun()
    if view.finished:
        st.info("You have reached the end of the results. Try another search.")
    else:
        st.info(session.message or "No papers to show.")
    clear_search_button("clear_search_empty")
    st.stop()


# ======================
# Drag preview
# ======================
# A slider stands in for the pointer: its value is the horizontal displacement.
dx = st.slider(
    "Drag the card",
    min_value=-DRAG_RANGE_PX,
    max_value=DRAG_RANGE_PX,
    value=0,
    key=f"drag_{session.results.cursor}",
    help="Past the threshold on release, the card is saved (right) or skipped (left).",
)

preview = gestures.drag(
    gestures.press(gestures.NEUTRAL, 0, 0, CARD_WIDTH_PX), dx, 0, session.config
)
top = view.top
cards = view.cards
if dx:
    cards = (replace(top, transform=preview.transform),) + cards[1:]

render_deck(cards, feedback=preview.feedback.value, hint=view.end_of_feed_hint)
if top.paper.is_end_of_feed:
    clear_search_button("clear_search_end")


# ======================
# Controls
# ======================
skip_col, release_col, save_col = st.columns([1, 1, 1])

with skip_col:
    if st.button("✗ Skip", use_container_width=True):
        run(session.swipe(Direction.REJECT))
        st.rerun()

with release_col:
    if st.button("Release", use_container_width=True, disabled=dx == 0):
        session.press(0, 0, CARD_WIDTH_PX)
        session.drag(dx, 0)
        direction = run(session.end_drag())
        if direction is None:
            st.toast("Not far enough, the card snapped back.")
        st.rerun()

with save_col:
    if st.button("♥ Save", use_container_width=True, type="primary"):
        run(session.swipe(Direction.ACCEPT))
        st.rerun()


# ======================
# Details of the top card
# ======================
paper = top.paper
if not paper.is_end_of_feed:
    st.markdown("---")
    render_paper_details(paper)

    summaries = session.summaries
    busy = summaries is not None and summaries.in_progress(paper.id)
    if not paper.ai_summary and st.button("✨ Summarize abstract", disabled=busy):
        with st.spinner("Summarizing..."):
            try:
                run(session.summarize_current(source="abstract"))
                st.rerun()
            except GenerationError as e:
                st.error(f"Failed to summarize: {e}")
