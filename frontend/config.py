APP_TITLE = "Kiga-ers"
APP_TAGLINE = "Swipe through new arXiv papers. Keep the ones worth reading."

# Streamlit cannot animate a card leaving the screen, so the fly-out is instant.
FLY_OUT_MS = 0
CARD_WIDTH_PX = 420
DRAG_RANGE_PX = 150
