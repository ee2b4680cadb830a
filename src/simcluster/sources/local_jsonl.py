"""Local JSONL document source.

Each line is a JSON object with at least an id and a publication timestamp,
plus either a precomputed fingerprint or text to fingerprint:

    {"id": "a1", "published_at": "2024-05-01T10:00:00Z", "fingerprint": "ffffffffffffffff"}
    {"id": "a2", "published_at": 1714557600, "text": "Breaking news: ..."}

Supported dataset specs:
- Single file: "path/to/file.jsonl"
- Multiple files: ["path/to/file1.jsonl", "path/to/file2.jsonl"]
- Directory: "path/to/directory/" (all .jsonl files, recursive)
- Glob pattern: "path/to/*.jsonl" or "path/to/**/*.jsonl"

Malformed lines (invalid UTF-8, bad JSON, missing id/timestamp, non-string
text, bad fingerprint) are logged and skipped; one bad record does not abort a batch read.
"""

from __future__ import annotations
import glob
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..config import SourceSpec
from ..errors import DocumentFormatError, SimClusterError
from ..fingerprints.schema import ClusterDocument
from ..fingerprints.simhash import compute_fingerprint

log = logging.getLogger("simcluster.sources.local_jsonl")


def resolve_files(dataset: Union[str, List[str]]) -> List[str]:
    """Resolve a dataset spec to a list of file paths."""
    if isinstance(dataset, list):
        files: List[str] = []
        for item in dataset:
            files.extend(resolve_files(item))
        return files

    dataset = str(dataset)
    if any(c in dataset for c in "*?["):
        return sorted(f for f in glob.glob(dataset, recursive=True) if os.path.isfile(f) and f.endswith(".jsonl"))

    path = Path(dataset)
    if path.is_dir():
        return sorted({str(f) for f in path.rglob("*.jsonl") if f.is_file()})
    # Single file (missing files are reported by stream())
    return [dataset]


class LocalJSONLSource:
    kind = "local_jsonl"

    def __init__(self, spec: SourceSpec, max_tokens: Optional[int] = None, recompute: bool = False):
        self.spec = spec
        self.name = spec.name
        self.max_tokens = max_tokens
        self.recompute = recompute
        self.files = resolve_files(spec.dataset)
        self.skipped = 0

    def metadata(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "files": self.files,
            "file_count": len(self.files),
            "total_size_bytes": sum(os.path.getsize(f) for f in self.files if os.path.exists(f)),
        }

    def _to_record(self, ex: Dict[str, Any]) -> Dict[str, Any]:
        s = self.spec
        fp = None if self.recompute else ex.get(s.fingerprint_field)
        text = ex.get(s.text_field)
        if text is not None and not isinstance(text, str):
            raise DocumentFormatError(f"Field {s.text_field!r} must be a string, got {type(text).__name__}")
        if fp is None:
            fp = compute_fingerprint(text or "", max_tokens=self.max_tokens)
        source = ex.get(s.source_field) if s.source_field else None
        return {
            **ex,
            "id": ex.get(s.id_field),
            "fingerprint": fp,
            "published_at": ex.get(s.published_field),
            "source": source or s.name,
            "text": text,
        }

    def stream(self) -> Iterable[ClusterDocument]:
        for file_path in self.files:
            if not os.path.exists(file_path):
                log.warning(f"File not found: {file_path}, skipping")
                continue
            # Binary read: a line with invalid UTF-8 is skipped, not fatal to the file.
            with open(file_path, "rb") as f:
                for line_num, raw in enumerate(f, start=1):
                    try:
                        line = raw.decode("utf-8").strip()
                        if not line:
                            continue
                        ex = json.loads(line)
                        if not isinstance(ex, dict):
                            raise ValueError("record is not a JSON object")
                        doc = ClusterDocument.from_dict(self._to_record(ex))
                    except (SimClusterError, ValueError) as e:
                        self.skipped += 1
                        log.warning(f"Skipping {file_path}:{line_num}: {e}")
                        continue
                    yield doc

    def read(self) -> List[ClusterDocument]:
        return list(self.stream())
