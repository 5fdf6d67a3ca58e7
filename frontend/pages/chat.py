import streamlit as st
from api import get_chat_requester, get_liked_store, run

from kigaers.exceptions import GenerationError
from kigaers.feed.requesters import USER_ROLE

st.title("💬 Ask a Paper")
st.caption("Questions are answered from the full text of the paper's PDF")

liked = get_liked_store()
chat = get_chat_requester()
papers = [p for p in liked.list() if p.pdf_link]

if not papers:
    st.info("Save a paper with a PDF in **Discover** first.")
    st.stop()

# ----------------------
# Sidebar – paper choice
# ----------------------
ids = [p.id for p in papers]
selected = st.session_state.get("chat_paper_id")
with st.sidebar:
    st.header("Paper")
    paper_id = st.selectbox(
        "Ask about",
        options=ids,
        index=ids.index(selected) if selected in ids else 0,
        format_func=lambda pid: liked.get(pid).title,
    )
    st.session_state["chat_paper_id"] = paper_id

    if st.button("Clear conversation"):
        chat.clear(paper_id)
        st.rerun()

paper = liked.get(paper_id)
st.markdown(f"**{paper.title}**")

# ----------------------
# Render chat history
# ----------------------
for msg in chat.history(paper.id):
    with st.chat_message("user" if msg.role == USER_ROLE else "assistant"):
        st.write(msg.content)

# ----------------------
# Chat input
# ----------------------
question = st.chat_input("Ask a question about this paper...", disabled=chat.in_progress(paper.id))

if question:
    with st.chat_message("user"):
        st.write(question)

    with st.chat_message("assistant"):
        with st.spinner("Thinking..."):
            try:
                answer = run(chat.ask(paper, question))
                st.write(answer)
            except GenerationError as e:
                st.error(f"Failed to get answer: {e}")
