from __future__ import annotations

import json
from typing import Sequence

from app.core.errors import ValidationError
from app.knowledge_graph.extraction.schema import Triplet

EXPORT_FILENAME = "knowledge_graph_triplets.json"


def export_triplets_json(triplets: Sequence[Triplet]) -> str:
    """Triplets in the service's own shape (head/type/tail), 2-space indented."""
    if not triplets:
        raise ValidationError("No triplets to download yet.")
    return json.dumps([t.model_dump(by_alias=True) for t in triplets], indent=2, ensure_ascii=False)
