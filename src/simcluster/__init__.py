"""simcluster

SimHash fingerprinting and greedy near-duplicate clustering for news-style
document batches.

Public API surface:
- simcluster.fingerprints : hash primitive, fingerprint generator, comparator
- simcluster.clustering : cluster builder + batch metrics
- simcluster.text : shared tokenizer
- simcluster.pipeline.build.run_clustering : config-driven batch run
- simcluster.cli.main : CLI entrypoint

Everything in the engine is pure and synchronous. Batches are independent, so
callers can fan out work per source or time window.
"""
__all__ = ["__version__"]
__version__ = "0.2.0"
