import os
import sys
import asyncio
import logging

from app.core.errors import ValidationError
from app.core.logging import setup_logging
from app.knowledge_graph.export import EXPORT_FILENAME
from app.knowledge_graph.extraction.prompts import DEFAULT_TEXT
from app.pipelines.graph_session import OUTPUT_DIR, generate_knowledge_graph

LOGGER = logging.getLogger("kggen")


def _read_text(argv) -> str:
    if len(argv) < 2:
        return DEFAULT_TEXT
    with open(argv[1], "rb") as f:
        raw = f.read()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        LOGGER.warning("%s is not valid UTF-8, reading it as latin-1", argv[1])
        return raw.decode("latin-1")


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    setup_logging()
    try:
        html_path, session = asyncio.run(generate_knowledge_graph(_read_text(argv)))
    except ValidationError as e:
        print("Error:", e.message)
        return 2

    if session.last_error is not None:
        print(f"Error ({session.last_error.kind.value}):", session.last_error.message)
        return 1

    print("HTML:", html_path)
    print("Nodes:", len(session.graph.nodes))
    print("Rels:", len(session.graph.edges))
    if session.has_triplets:
        json_path = os.path.join(OUTPUT_DIR, EXPORT_FILENAME)
        with open(json_path, "w", encoding="utf-8") as f:
            f.write(session.export_triplets())
        print("JSON:", json_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
