from __future__ import annotations
import os
import logging
from typing import Optional, Protocol
from pyvis.network import Network

from app.knowledge_graph.graph.builder import GraphModel

LOGGER = logging.getLogger("kggen")

VIS_OPTIONS = """
{
  "layout": { "improvedLayout": true },
  "edges": {
    "color": "#000000",
    "smooth": { "type": "continuous" }
  },
  "nodes": {
    "shape": "dot",
    "size": 16,
    "font": { "size": 14, "color": "#000000" },
    "borderWidth": 2
  },
  "physics": {
    "enabled": true,
    "barnesHut": {
      "gravitationalConstant": -8000,
      "springLength": 250
    }
  },
  "interaction": {
    "navigationButtons": true,
    "keyboard": true,
    "hover": true,
    "zoomView": true
  }
}
"""


class RenderSink(Protocol):
    def create(self, model: GraphModel) -> None: ...

    def replace(self, model: GraphModel) -> None: ...


class PyvisRenderSink:
    """Graph-drawing surface backed by a single pyvis ``Network``.

    ``create`` builds the network once; ``replace`` swaps its nodes and
    edges while keeping the options.
    """

    def __init__(self, height: str = "750px", width: str = "100%"):
        self.height = height
        self.width = width
        self.network: Optional[Network] = None

    @property
    def created(self) -> bool:
        return self.network is not None

    def create(self, model: GraphModel) -> None:
        net = Network(
            height=self.height, width=self.width, directed=True,
            bgcolor="#ffffff", font_color="#000000", cdn_resources="remote",
        )
        net.set_options(VIS_OPTIONS)
        self.network = net
        self._load(model)

    def replace(self, model: GraphModel) -> None:
        if self.network is None:
            raise RuntimeError("replace() called before create()")
        net = self.network
        net.nodes = []
        net.edges = []
        net.node_ids = []
        net.node_map = {}
        self._load(model)

    def _load(self, model: GraphModel) -> None:
        net = self.network
        data = model.to_vis()
        for node in data["nodes"]:
            net.add_node(node["id"], label=node["label"], title=node["label"])
        # directed network, so pyvis keeps parallel edges
        for edge in data["edges"]:
            net.add_edge(edge["from"], edge["to"], label=edge["label"], title=edge["label"], arrows=edge["arrows"])
        LOGGER.debug("Render sink loaded %d nodes, %d edges", len(model.nodes), len(model.edges))

    def to_html(self) -> str:
        if self.network is None:
            raise RuntimeError("nothing to render yet")
        return self.network.generate_html()

    def save(self, output_file: str) -> str:
        if self.network is None:
            raise RuntimeError("nothing to render yet")
        out_dir = os.path.dirname(output_file)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        self.network.save_graph(output_file)
        return output_file
