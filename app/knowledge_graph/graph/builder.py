from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from app.knowledge_graph.extraction.schema import Triplet


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    label: str

    def to_vis(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target, "label": self.label, "arrows": "to"}


@dataclass
class GraphModel:
    """Nodes keyed by label text, in first-seen order; one edge per triplet."""

    nodes: List[str] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def node_set(self) -> Set[str]:
        return set(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def to_vis(self) -> Dict[str, List[dict]]:
        return {
            "nodes": [{"id": n, "label": n} for n in self.nodes],
            "edges": [e.to_vis() for e in self.edges],
        }


def build_graph(triplets: Iterable[Triplet]) -> GraphModel:
    # exact string identity: "Obama" and "obama " are two different nodes
    seen: Dict[str, None] = {}
    edges: List[Edge] = []

    for t in triplets:
        seen.setdefault(t.head, None)
        seen.setdefault(t.tail, None)
        # duplicate (head, relation, tail) rows stay parallel edges
        edges.append(Edge(source=t.head, target=t.tail, label=t.relation))

    return GraphModel(nodes=list(seen), edges=edges)
