"""Document sources."""

from .local_jsonl import LocalJSONLSource, resolve_files

__all__ = ["LocalJSONLSource", "resolve_files"]
