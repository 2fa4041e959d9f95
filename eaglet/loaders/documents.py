import json
from pathlib import Path
from typing import Any, Dict, Iterator

from eaglet.registry import loaders
from eaglet.types import Correction, Document, Marking


def marking_from_dict(data: Dict[str, Any]) -> Marking:
    """Build a marking from `start` and either `length` or `end`."""
    start = int(data["start"])
    if "length" in data:
        length = int(data["length"])
    elif "end" in data:
        length = int(data["end"]) - start
    else:
        raise ValueError(f"Marking at {start} has neither 'length' nor 'end'.")
    return Marking(
        start=start,
        length=length,
        uri=data.get("uri"),
        correction=Correction(data.get("correction", Correction.KEEP.value)),
    )


def document_from_dict(data: Dict[str, Any], default_id: str, source: str) -> Document:
    known = {"id", "text", "markings"}
    return Document(
        id=data.get("id") or default_id,
        text=data.get("text", ""),
        markings=[marking_from_dict(m) for m in data.get("markings", [])],
        meta={"source": source, **{k: v for k, v in data.items() if k not in known}},
    )


@loaders.register("jsonl")
class JSONLLoader:
    """Loads JSONL where each line holds `text` and `markings`."""

    def load(self, path: str) -> Iterator[Document]:
        with Path(path).open(encoding="utf-8") as f:
            for i, line in enumerate(f):
                if not line.strip():
                    continue
                yield document_from_dict(json.loads(line), f"{Path(path).stem}-{i}", path)


@loaders.register("json")
class JSONLoader:
    """Loads a JSON array (or a single object) of documents."""

    def load(self, path: str) -> Iterator[Document]:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = [data]
        for i, item in enumerate(data):
            yield document_from_dict(item, f"{Path(path).stem}-{i}", path)
