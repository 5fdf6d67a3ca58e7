import streamlit as st
from config import APP_TAGLINE, APP_TITLE

st.set_page_config(
    page_title=APP_TITLE,
    layout="wide",
)

# -------------------------
# Header
# -------------------------
st.title(APP_TITLE)
st.caption(APP_TAGLINE)

st.markdown("---")

# -------------------------
# How it works
# -------------------------
st.markdown(
    """
### 🃏 How it works

**Kiga-ers** shows recent arXiv papers one card at a time:
- swipe right (or press **♥ Save**) to keep a paper in your library
- swipe left (or press **✗ Skip**) to move on
- search by keyword to swap the newest `cs.AI` feed for relevance-ranked results

More papers are fetched in the background as you get close to the end of the deck.
"""
)

col1, col2 = st.columns(2)

with col1:
    st.markdown(
        """
**📚 Library**
- Every saved paper, stored on this machine
- Generate an AI summary from the full PDF
- Remove papers you are done with
"""
    )

with col2:
    st.markdown(
        """
**💬 Ask a paper**
- Ask questions about a saved paper
- Answers come from the paper's PDF text
- One conversation per paper
"""
    )

st.markdown("---")

st.info(
    "👉 Use the **sidebar navigation** to start.\n\n"
    "Open **Discover** to begin swiping."
)

# -------------------------
# Sidebar branding
# -------------------------
st.sidebar.markdown("---")
st.sidebar.caption("Kiga-ers • Paper discovery")
