from __future__ import annotations

import asyncio
import streamlit as st
import streamlit.components.v1 as components

from app.core.config import ExtractionConfig
from app.core.errors import ValidationError
from app.core.logging import setup_logging
from app.knowledge_graph.export import EXPORT_FILENAME
from app.knowledge_graph.extraction.client import ExtractionClient
from app.knowledge_graph.visualization.pyvis_visualizer import PyvisRenderSink
from app.pipelines.graph_session import GraphSession, SessionState


def _new_session() -> GraphSession:
    cfg = ExtractionConfig()
    return GraphSession(
        ExtractionClient.from_config(cfg),
        cfg,
        render_sink=PyvisRenderSink(height="750px"),
    )


def run_app():
    setup_logging()
    st.set_page_config(
        page_title="Knowledge Graph Generator",
        page_icon="🕸️",
        layout="wide",
    )

    # ---------- Session state ----------
    if "session" not in st.session_state:
        st.session_state.session = _new_session()
    session: GraphSession = st.session_state.session

    # ---------------- Custom CSS ----------------
    st.markdown("""
        <style>
        .stButton>button {
            width: 100%; border-radius: 8px; height: 3em;
            background-color: #4b6cb7; color: white; font-weight: 600; border: none;
        }
        .stButton>button:disabled { background-color: #9aa5bd; }
        h2 { font-family: 'Inter', sans-serif; font-weight: 700; }
        </style>
    """, unsafe_allow_html=True)

    col_input, col_graph = st.columns([1, 2])

    # ---------------- Input ----------------
    with col_input:
        st.markdown("## Knowledge Graph Generator")
        text = st.text_area(
            "Input text",
            value=session.text,
            height=400,
            placeholder="Type or paste your text here...",
            label_visibility="collapsed",
            key="input_text",
        )
        session.edit_text(text)

        if session.state is SessionState.WARMING_UP:
            st.button("Run Model", disabled=True, key="run_model_warming")
            with st.spinner(session.status_message):
                asyncio.run(session.warm_up())
            st.rerun()

        if st.button("Run Model", disabled=not session.can_submit, key="run_model"):
            with st.spinner("Extracting triplets..."):
                try:
                    asyncio.run(session.submit())
                except ValidationError as e:
                    st.warning(e.message)

        # ---------------- Status ----------------
        if session.state is SessionState.FAILED:
            st.error(f"❌ {session.status_message}")
        elif session.state is SessionState.READY:
            st.success(session.status_message)
        else:
            st.caption(session.status_message)

        if session.has_triplets:
            st.download_button(
                "📥 Download Triplets (JSON)",
                data=session.export_triplets(),
                file_name=EXPORT_FILENAME,
                mime="application/json",
            )

    # ---------------- Graph ----------------
    with col_graph:
        if session.graph_created:
            components.html(session.render_sink.to_html(), height=780, scrolling=False)
        else:
            st.info("👈 Enter some text and click **Run Model** to build the graph.")


if __name__ == "__main__":
    run_app()
