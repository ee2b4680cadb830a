"""Run configuration.

Runs are configured with a YAML file (see `configs/cluster.yaml`):

    run:
      run_id: news_batch_01          # optional; auto-generated when absent
      out_dir: storage/{run_id}
    sources:
      - name: wire
        dataset: data/wire/*.jsonl
    fingerprint:
      max_tokens: null
      recompute: false
    clustering:
      threshold: 3
      validate: true
      partition_by: null             # null | source | window
      window_hours: 24
    outputs: [jsonl, parquet]
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union
import yaml


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class SourceSpec:
    name: str
    dataset: Union[str, List[str]]  # file, list of files, directory, or glob
    kind: str = "local_jsonl"
    id_field: str = "id"
    text_field: str = "text"
    fingerprint_field: str = "fingerprint"
    published_field: str = "published_at"
    source_field: Optional[str] = None  # when unset, every doc gets `name` as its source


@dataclass
class FingerprintConfig:
    max_tokens: Optional[int] = None
    recompute: bool = False  # ignore stored fingerprints and recompute from text


@dataclass
class ClusteringConfig:
    threshold: int = 3
    validate: bool = True
    partition_by: Optional[str] = None  # source | window
    window_hours: float = 24.0

    @property
    def window(self) -> timedelta:
        return timedelta(hours=self.window_hours)


@dataclass
class ClusterConfig:
    run_id: str
    out_dir: str
    sources: List[SourceSpec] = field(default_factory=list)
    fingerprint: FingerprintConfig = field(default_factory=FingerprintConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    outputs: List[str] = field(default_factory=lambda: ["jsonl"])
    log_dir: Optional[str] = None


def resolve_run_id(cfg: Dict[str, Any]) -> str:
    """Return run_id: explicit run.run_id, or cluster_<UTC YYYYMMDDHHMMSS>."""
    run = cfg.get("run") or {}
    explicit = run.get("run_id")
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()
    return "cluster_" + datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")


def resolve_out_dir(cfg: Dict[str, Any], run_id: str) -> str:
    """Return out_dir with {run_id} placeholder replaced by the resolved run_id."""
    run = cfg.get("run") or {}
    out_dir = run.get("out_dir") or "storage/{run_id}"
    return out_dir.replace("{run_id}", run_id)


def parse_config(cfg: Dict[str, Any]) -> ClusterConfig:
    """Validate a raw config dict into a ClusterConfig. Raises ValueError naming the bad key."""
    run_id = resolve_run_id(cfg)
    out_dir = resolve_out_dir(cfg, run_id)

    sources = []
    for i, s in enumerate(cfg.get("sources") or []):
        if not isinstance(s, dict) or "name" not in s or "dataset" not in s:
            raise ValueError(f"sources[{i}]: 'name' and 'dataset' are required")
        try:
            sources.append(SourceSpec(**s))
        except TypeError as e:
            raise ValueError(f"sources[{i}]: {e}") from e
        if sources[-1].kind != "local_jsonl":
            raise ValueError(f"sources[{i}].kind: unsupported source kind {sources[-1].kind!r}")

    fp_raw = cfg.get("fingerprint") or {}
    max_tokens = fp_raw.get("max_tokens")
    if max_tokens is not None and int(max_tokens) <= 0:
        raise ValueError("fingerprint.max_tokens must be positive")
    fingerprint = FingerprintConfig(
        max_tokens=int(max_tokens) if max_tokens is not None else None,
        recompute=bool(fp_raw.get("recompute", False)),
    )

    cl_raw = cfg.get("clustering") or {}
    threshold = int(cl_raw.get("threshold", 3))
    if not 0 <= threshold <= 64:
        raise ValueError(f"clustering.threshold must be in [0, 64], got {threshold}")
    partition_by = cl_raw.get("partition_by")
    if partition_by not in (None, "source", "window"):
        raise ValueError(f"clustering.partition_by must be null, 'source' or 'window', got {partition_by!r}")
    window_hours = float(cl_raw.get("window_hours", 24.0))
    if window_hours <= 0:
        raise ValueError("clustering.window_hours must be positive")
    clustering = ClusteringConfig(
        threshold=threshold,
        validate=bool(cl_raw.get("validate", True)),
        partition_by=partition_by,
        window_hours=window_hours,
    )

    outputs = cfg.get("outputs") or ["jsonl"]
    if isinstance(outputs, str):
        outputs = [outputs]

    return ClusterConfig(
        run_id=run_id,
        out_dir=out_dir,
        sources=sources,
        fingerprint=fingerprint,
        clustering=clustering,
        outputs=list(outputs),
        log_dir=(cfg.get("run") or {}).get("log_dir"),
    )


def load_config(path: str) -> ClusterConfig:
    return parse_config(load_yaml(path))
