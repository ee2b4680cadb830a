"""CLI entrypoint.

Commands:
- `simcluster fingerprint "some text" ...` or `simcluster fingerprint --file docs.txt`
- `simcluster compare <fp_a> <fp_b>`
- `simcluster cluster --config configs/cluster.yaml`
"""

from __future__ import annotations
import argparse
import json
import sys
from typing import List, Optional

from .errors import FingerprintFormatError
from .fingerprints.simhash import compute_fingerprint
from .fingerprints.similarity import classify_match, hamming_distance_validated, similarity_from_distance
from .logging_ import setup_logging


def _threshold(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if not 0 <= n <= 64:
        raise argparse.ArgumentTypeError(f"threshold must be in [0, 64], got {n}")
    return n


def _cmd_fingerprint(args: argparse.Namespace) -> int:
    texts: List[str] = list(args.text)
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            texts.extend(line.rstrip("\n") for line in f)
    for t in texts:
        print(compute_fingerprint(t, max_tokens=args.max_tokens))
    return 0


def _cmd_compare(args: argparse.Namespace) -> int:
    try:
        distance = hamming_distance_validated(args.a, args.b)
    except FingerprintFormatError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(json.dumps({
        "distance": distance,
        "similarity": similarity_from_distance(distance),
        "match_type": classify_match(distance).value,
    }))
    return 0


def _cmd_cluster(args: argparse.Namespace) -> int:
    from .config import load_config
    from .pipeline.build import run_clustering

    cfg = load_config(args.config)
    if args.threshold is not None:
        cfg.clustering.threshold = args.threshold
    setup_logging(out_dir=cfg.out_dir, run_id=cfg.run_id, log_dir=cfg.log_dir, level=args.log_level)
    result = run_clustering(cfg)
    print(f"{result.metrics.total_documents} documents -> {result.metrics.total_clusters} clusters ({result.out_dir})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="simcluster")
    sub = p.add_subparsers(dest="cmd", required=True)

    pf = sub.add_parser("fingerprint", help="Print the SimHash fingerprint of each text")
    pf.add_argument("text", nargs="*", default=[])
    pf.add_argument("--file", help="Fingerprint each line of a text file")
    pf.add_argument("--max-tokens", type=int, default=None)

    pc = sub.add_parser("compare", help="Compare two fingerprints")
    pc.add_argument("a")
    pc.add_argument("b")

    pb = sub.add_parser("cluster", help="Cluster a batch of documents")
    pb.add_argument("--config", required=True)
    pb.add_argument("--threshold", type=_threshold, default=None, help="Override clustering.threshold")
    pb.add_argument("--log-level", default="INFO")

    args = p.parse_args(argv)

    if args.cmd == "fingerprint":
        return _cmd_fingerprint(args)
    if args.cmd == "compare":
        return _cmd_compare(args)
    return _cmd_cluster(args)


if __name__ == "__main__":
    sys.exit(main())
