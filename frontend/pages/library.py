import streamlit as st
from api import get_liked_store, get_summary_requester, run
from ui.paper_card import render_paper_details

from kigaers.exceptions import GenerationError

st.title("📚 Library")
st.caption("Papers you saved while swiping")

liked = get_liked_store()
summaries = get_summary_requester()
papers = liked.list()

if not papers:
    st.info("No saved papers yet. Swipe right on a paper in **Discover** to keep it here.")
    st.stop()

with st.sidebar:
    st.markdown(f"**{len(papers)}** saved papers")
    if st.button("🗑️ Clear library"):
        st.session_state["confirm_clear"] = True
    if st.session_state.get("confirm_clear"):
        st.warning("Remove every saved paper?")
        yes_col, no_col = st.columns(2)
        with yes_col:
            if st.button("Yes", key="clear_yes"):
                liked.clear()
                st.session_state["confirm_clear"] = False
                st.rerun()
        with no_col:
            if st.button("No", key="clear_no"):
                st.session_state["confirm_clear"] = False
                st.rerun()


for paper in papers:
    with st.container(border=True):
        render_paper_details(paper)

        action_cols = st.columns([1, 1, 1])

        with action_cols[0]:
            label = "🔄 Regenerate summary" if paper.ai_summary else "✨ Summarize PDF"
            if st.button(
                label,
                key=f"sum_{paper.id}",
                use_container_width=True,
                disabled=not paper.pdf_link or summaries.in_progress(paper.id),
            ):
                with st.spinner("Reading the PDF and summarizing..."):
                    try:
                        run(summaries.summarize(paper, source="pdf"))
                        st.rerun()
                    except GenerationError as e:
                        st.error(f"Failed to summarize: {e}")

        with action_cols[1]:
            if st.button("💬 Ask", key=f"ask_{paper.id}", use_container_width=True):
                st.session_state["chat_paper_id"] = paper.id
                st.switch_page("pages/chat.py")

        with action_cols[2]:
            if st.button("Remove", key=f"rm_{paper.id}", use_container_width=True):
                liked.remove(paper.id)
                st.rerun()
