"""
Streamlit page for Songsmith.

How to Run:
    uvicorn backend.main:app --port 8000
    streamlit run frontend/streamlit_app.py

Set SONGSMITH_API_URL to point the page at another backend.
"""

import os

import streamlit as st

from backend.submitter import DEFAULT_ENDPOINT, PromptSubmitter

st.set_page_config(page_title="Songsmith", page_icon="🎵")


def get_submitter() -> PromptSubmitter:
    """One submitter per browser session, kept across reruns."""
    if "submitter" not in st.session_state:
        endpoint = os.environ.get("SONGSMITH_API_URL", DEFAULT_ENDPOINT)
        st.session_state.submitter = PromptSubmitter(endpoint=endpoint)
    return st.session_state.submitter


def main():
    submitter = get_submitter()

    st.title("🎵 Songsmith")
    st.caption("Describe a song and let the AI compose it.")

    submitter.prompt = st.text_input(
        "Prompt",
        value=submitter.prompt,
        placeholder="e.g. a calm lo-fi beat for a rainy afternoon",
    )

    # Enter the loading state and rerun first so the button is drawn disabled
    # for the whole round trip.
    if st.button("Generate song", disabled=submitter.is_loading, type="primary"):
        if submitter.start():
            st.rerun()

    if submitter.is_loading:
        with st.spinner("Composing... this can take a few minutes."):
            submitter.send()
        st.rerun()

    if submitter.music:
        st.audio(submitter.music)


main()
