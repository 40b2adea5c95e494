"""
vnbook - Visual Novel Reader

Streamlit application that reads a book of pages from a content file,
turns button clicks into named inputs, and shows the scoreboard of past
playthroughs when the book ends.

Usage:
    streamlit run app.py
    VNBOOK_CONTENT=data/other_book.yaml streamlit run app.py
"""

import logging
import os

import streamlit as st

from vnbook.reader import (
    BookLoader,
    ContentParseError,
    Navigator,
    ReaderMode,
)
from vnbook.utils import load_config
from vnbook.viewer import (
    get_page_css,
    render_page,
    render_scoreboard,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

logging.basicConfig(
    level=os.getenv("VNBOOK_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="vnbook",
    page_icon="📖",
    layout="centered",
    initial_sidebar_state="collapsed",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "config" not in st.session_state:
        st.session_state.config = load_config()

    if "navigator" not in st.session_state:
        st.session_state.navigator = Navigator(st.session_state.config)

    if "book_loader" not in st.session_state:
        st.session_state.book_loader = BookLoader(st.session_state.config.content_path)


def poll_content():
    """Load the book into the navigator once the content file is available."""
    nav = st.session_state.navigator
    if nav.book is not None:
        return

    book = st.session_state.book_loader.poll()
    if book is not None:
        nav.load(book)


def send_input(input_name: str):
    """Forward a named input to the navigator and redraw."""
    event = st.session_state.navigator.handle_input(input_name)
    if event is not None:
        logger.debug(f"Input '{input_name}' -> {event.kind.value}")
    st.rerun()


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render run information in the sidebar."""
    nav = st.session_state.navigator
    st.sidebar.title("📖 vnbook")
    st.sidebar.markdown(f"**Content:** `{st.session_state.config.content_path}`")

    if nav.mode == ReaderMode.READING:
        st.sidebar.markdown(f"**Pages read:** {nav.pages_read}")

    best = nav.leaderboard.best()
    if best:
        st.sidebar.markdown(f"**Best run:** {best.pages_read} pages")


# -----------------------------------------------------------------------------
# Main Content
# -----------------------------------------------------------------------------

def render_reading_view():
    """Render the active page and its buttons."""
    nav = st.session_state.navigator
    config = st.session_state.config

    page = nav.active_page()
    buttons = nav.active_buttons()

    st.markdown(get_page_css(), unsafe_allow_html=True)
    st.markdown(render_page(page, nav.book, buttons, config), unsafe_allow_html=True)

    if not buttons:
        return

    cols = st.columns(len(buttons))
    for col, (key, button) in zip(cols, buttons):
        with col:
            if st.button(button.text, key=f"button_{key}", use_container_width=True):
                send_input(key)


def render_scoreboard_view():
    """Render the ranked scores and the restart button."""
    nav = st.session_state.navigator
    config = st.session_state.config

    st.markdown(get_page_css(), unsafe_allow_html=True)
    st.markdown(render_scoreboard(nav.ranked_scores(), config), unsafe_allow_html=True)

    if st.button("Play again", type="primary", use_container_width=True):
        send_input(config.confirm_input)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    try:
        poll_content()
    except ContentParseError as e:
        st.error(f"Could not read book content: {e}")
        for location, message in e.details:
            st.markdown(f"- `{location}`: {message}")
        st.stop()

    nav = st.session_state.navigator
    if nav.book is None:
        st.error(f"Book content not found: {st.session_state.config.content_path}")
        st.info("Set VNBOOK_CONTENT to the path of a book JSON or YAML file.")
        return

    render_sidebar()

    if nav.mode == ReaderMode.SCOREBOARD:
        render_scoreboard_view()
    else:
        render_reading_view()


if __name__ == "__main__":
    main()
