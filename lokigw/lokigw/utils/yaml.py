"""YAML helpers for reading manifests and writing generated files."""

from pathlib import Path
from typing import Any

import yaml

from lokigw import __version__


def dump_yaml_with_header(data: Any, kind: str, stack: str) -> str:
    """Serialize a document (or a list of documents) with a generated-by header."""
    header = (
        f"# {kind} for LokiStack {stack!r}\n"
        f"# Generated by lokigw {__version__}\n"
    )
    if isinstance(data, list):
        body = yaml.safe_dump_all(data, default_flow_style=False, sort_keys=False)
    else:
        body = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    return header + body


def load_documents(path: str | Path) -> list[dict]:
    """Load every non-empty mapping document from a multi-document YAML file."""
    with open(path) as f:
        return [doc for doc in yaml.safe_load_all(f) if doc and isinstance(doc, dict)]


def index_by_kind(documents: list[dict]) -> dict[str, list[dict]]:
    manifests: dict[str, list[dict]] = {}
    for doc in documents:
        manifests.setdefault(doc.get("kind", "Unknown"), []).append(doc)
    return manifests
