# app/pipelines/graph_session.py
from __future__ import annotations

import os
import asyncio
import logging
from enum import Enum
from typing import List, Optional, Tuple

from app.core.config import ExtractionConfig
from app.core.errors import KnowledgeGraphError, RequestConstructionError, ValidationError
from app.knowledge_graph.export import export_triplets_json
from app.knowledge_graph.extraction.client import Empty, ExtractionClient, Failure, Ok
from app.knowledge_graph.extraction.prompts import DEFAULT_TEXT, WARMUP_TEXT
from app.knowledge_graph.extraction.scheduler import compute_parameters, warmup_parameters
from app.knowledge_graph.extraction.schema import Triplet
from app.knowledge_graph.graph.builder import GraphModel, build_graph
from app.knowledge_graph.visualization.pyvis_visualizer import PyvisRenderSink, RenderSink


LOGGER = logging.getLogger("kggen")


OUTPUT_DIR = os.path.join("outputs", "graphs")
DEFAULT_HTML = os.path.join(OUTPUT_DIR, "knowledge_graph.html")


class SessionState(str, Enum):
    WARMING_UP = "warming_up"
    IDLE = "idle"
    SUBMITTING = "submitting"
    READY = "ready"
    FAILED = "failed"


SUBMITTABLE = {SessionState.IDLE, SessionState.READY, SessionState.FAILED}


class GraphSession:
    """Request lifecycle of one user session.

    Starts in WARMING_UP, moves to IDLE once the warm-up call is done
    (whatever its outcome), and then cycles through SUBMITTING into
    READY or FAILED. Only one extraction call is ever in flight: submit
    actions that arrive while warming up or submitting are dropped.

    A response is applied to whatever the session looks like when it
    lands, even if the text was edited in the meantime.
    """

    def __init__(
        self,
        client: ExtractionClient,
        cfg: Optional[ExtractionConfig] = None,
        *,
        render_sink: Optional[RenderSink] = None,
        text: str = DEFAULT_TEXT,
    ):
        self.client = client
        self.cfg = cfg or ExtractionConfig()
        self.render_sink = render_sink

        self.state = SessionState.WARMING_UP
        self.text = text
        self.triplets: List[Triplet] = []
        self.graph: Optional[GraphModel] = None
        self.last_error: Optional[KnowledgeGraphError] = None
        self.graph_created = False
        self._warmup_task: Optional[asyncio.Task] = None

    # ---------- text ----------
    def edit_text(self, text: str) -> None:
        self.text = text or ""

    @property
    def can_submit(self) -> bool:
        return self.state in SUBMITTABLE

    @property
    def has_triplets(self) -> bool:
        return bool(self.triplets)

    @property
    def status_message(self) -> str:
        if self.state is SessionState.WARMING_UP:
            return "Warming up the model..."
        if self.state is SessionState.SUBMITTING:
            return "Extracting triplets..."
        if self.state is SessionState.FAILED:
            if self.last_error is not None:
                return self.last_error.message
            return "Extraction failed."
        if self.state is SessionState.READY:
            if not self.triplets:
                return "No triplets were found in this text."
            return f"Extracted {len(self.triplets)} triplets ({len(self.graph.nodes)} nodes)."
        return "Ready."

    # ---------- warm-up ----------
    async def warm_up(self) -> None:
        if self.state is not SessionState.WARMING_UP:
            return
        try:
            result = await self.client.submit(WARMUP_TEXT, warmup_parameters(self.cfg))
            if isinstance(result, Failure):
                LOGGER.warning("Warm-up failed (%s): %s", result.kind.value, result.message)
            else:
                LOGGER.info("Warm-up done")
        except Exception as e:
            LOGGER.warning("Warm-up failed: %s", e)
        finally:
            self.state = SessionState.IDLE

    def start_warm_up(self) -> asyncio.Task:
        """Fire the warm-up once; later calls get the same task back."""
        if self._warmup_task is None:
            self._warmup_task = asyncio.create_task(self.warm_up())
        return self._warmup_task

    # ---------- submit ----------
    async def submit(self) -> bool:
        """Run one extraction for the current text.

        Returns False when the action was dropped because a call is
        already running (or warm-up is not done). Raises ValidationError
        for blank text without touching the state.
        """
        if not self.can_submit:
            LOGGER.info("Submit ignored while %s", self.state.value)
            return False

        text = self.text
        if not text.strip():
            self.last_error = ValidationError("Please enter some text.")
            raise self.last_error

        self.state = SessionState.SUBMITTING
        params = compute_parameters(text, self.cfg)
        LOGGER.info("Submitting %d chars with %s", len(text), params.to_gen_kwargs())

        try:
            result = await self.client.submit(text, params)
        except Exception as e:
            self.last_error = RequestConstructionError(f"Extraction failed unexpectedly: {e}")
            self.state = SessionState.FAILED
            raise

        self._apply(result)
        return True

    def _apply(self, result) -> None:
        if isinstance(result, Failure):
            LOGGER.warning("Extraction failed (%s): %s", result.kind.value, result.message)
            self.last_error = result.error
            self.state = SessionState.FAILED
            return

        triplets = result.triplets if isinstance(result, Ok) else []
        graph = build_graph(triplets)
        self.triplets = list(triplets)
        self.graph = graph
        self.last_error = None
        self.state = SessionState.READY
        LOGGER.info("Extracted %d triplets | Nodes: %d | Edges: %d",
                    len(triplets), len(graph.nodes), len(graph.edges))
        self._render(graph)

    def _render(self, graph: GraphModel) -> None:
        if self.render_sink is None:
            return
        if self.graph_created:
            self.render_sink.replace(graph)
        elif not graph.is_empty:
            self.render_sink.create(graph)
            self.graph_created = True

    # ---------- export ----------
    def export_triplets(self) -> str:
        return export_triplets_json(self.triplets)


async def generate_knowledge_graph(
    text: str,
    *,
    cfg: Optional[ExtractionConfig] = None,
    client: Optional[ExtractionClient] = None,
    html_path: str = DEFAULT_HTML,
) -> Tuple[Optional[str], GraphSession]:
    """
    One-shot run without a UI.
    Returns: (html_path or None, session)
    """
    cfg = cfg or ExtractionConfig()
    client = client or ExtractionClient.from_config(cfg)
    sink = PyvisRenderSink()
    session = GraphSession(client, cfg, render_sink=sink, text=text)

    await session.warm_up()
    await session.submit()

    if session.state is SessionState.FAILED:
        return None, session
    if not session.graph_created:
        LOGGER.warning("No triplets extracted, no graph written.")
        return None, session
    return sink.save(html_path), session
