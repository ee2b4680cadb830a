"""Output writers.

A ClusterWriter persists one batch's clusters under the run's output
directory and returns the paths it wrote. Writers never mutate clusters.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence
from ..fingerprints.schema import Cluster


class ClusterWriter(ABC):
    """Writes clusters in a chosen format."""
    name: str

    @abstractmethod
    def write(self, clusters: Sequence[Cluster], *, out_dir: str) -> List[str]:
        """Write clusters and return the output paths."""
        raise NotImplementedError
