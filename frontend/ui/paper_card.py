import html

import streamlit as st

from kigaers.feed.stack import END_HINT, StackCard
from kigaers.schemas.paper import Paper

CARD_CSS = """
<style>
.kg-deck {
    position: relative;
    height: 460px;
    margin: 0 auto 1rem auto;
    max-width: 460px;
}
.kg-card {
    position: absolute;
    inset: 0;
    padding: 1.25rem;
    border-radius: 16px;
    border: 1px solid #e6e6e6;
    background: #ffffff;
    box-shadow: 0 4px 18px rgba(0, 0, 0, 0.08);
    overflow: hidden;
}
.kg-title {
    font-size: 1.1rem;
    font-weight: 600;
    margin-bottom: 0.4rem;
}
.kg-authors {
    font-size: 0.85rem;
    color: #555;
    margin-bottom: 0.4rem;
}
.kg-meta {
    font-size: 0.8rem;
    color: #777;
    margin-bottom: 0.6rem;
}
.kg-abstract {
    font-size: 0.9rem;
    color: #333;
    max-height: 280px;
    overflow: hidden;
}
.kg-notice {
    display: flex;
    align-items: center;
    justify-content: center;
    text-align: center;
    font-size: 1.05rem;
    color: #444;
    height: 100%;
}
.kg-feedback-accept { border-color: #16a34a; }
.kg-feedback-reject { border-color: #dc2626; }
</style>
"""


def _card_style(card: StackCard) -> str:
    if card.position == 0:
        transform = card.transform or "none"
        return f"z-index: 10; transform: {transform};"
    return (
        f"z-index: {10 - card.position}; opacity: {card.opacity}; "
        f"transform: translateY({card.offset_y:g}px) scale({card.scale}) rotate({card.rotation_deg:g}deg);"
    )


def _card_body(paper: Paper, hint: str) -> str:
    if paper.is_end_of_feed:
        message = html.escape(paper.end_of_feed_message or paper.abstract)
        return f'<div class="kg-notice">{message}<br/>{html.escape(hint)}</div>'

    authors = ", ".join(paper.authors[:6])
    if len(paper.authors) > 6:
        authors += " et al."
    meta = " • ".join(filter(None, [paper.published[:10], " ".join(paper.categories[:3])]))
    return (
        f'<div class="kg-title">{html.escape(paper.title)}</div>'
        f'<div class="kg-authors">{html.escape(authors)}</div>'
        f'<div class="kg-meta">{html.escape(meta)}</div>'
        f'<div class="kg-abstract">{html.escape(paper.abstract)}</div>'
    )


def render_deck(cards, feedback: str = "none", hint: str = END_HINT):
    """Draw the visible cards, bottom card first so the top one ends up on top."""
    st.markdown(CARD_CSS, unsafe_allow_html=True)
    parts = []
    for card in reversed(cards):
        extra = f" kg-feedback-{feedback}" if card.position == 0 and feedback != "none" else ""
        parts.append(
            f'<div class="kg-card{extra}" style="{_card_style(card)}">{_card_body(card.paper, hint)}</div>'
        )
    st.markdown(f'<div class="kg-deck">{"".join(parts)}</div>', unsafe_allow_html=True)


def render_paper_details(paper: Paper, expanded: bool = False):
    st.subheader(paper.title)

    if paper.authors:
        st.caption(", ".join(paper.authors))

    if paper.categories:
        st.markdown("**Categories:** " + ", ".join(paper.categories))

    if paper.published:
        st.markdown(f"**Published:** {paper.published[:10]}")

    if paper.pdf_link:
        st.markdown(f"[Open PDF]({paper.pdf_link})")

    with st.expander("Abstract", expanded=expanded):
        st.write(paper.abstract)

    if paper.ai_summary:
        with st.expander("AI Summary", expanded=True):
            st.markdown(paper.ai_summary)
