"""Failure ledger: per (source, candidate) counts of failed gossip contacts.

The ledger is owned by the caller and passed into each run. Counts only
ever grow; nothing is decayed or removed, so a ledger carried across runs
accumulates the full failure history of every adaptive policy that used it.
"""

import numpy as np


class FailureLedger:
    """Monotone record of failed contact attempts per (node, peer) pair."""

    def __init__(self) -> None:
        self._counts: dict[int, dict[int, int]] = {}

    def record_failure(self, node: int, peer: int) -> int:
        """Increment the failure count for (node, peer) and return it."""
        row = self._counts.setdefault(node, {})
        row[peer] = row.get(peer, 0) + 1
        return row[peer]

    def get_failures(self, node: int, peer: int) -> int:
        return self._counts.get(node, {}).get(peer, 0)

    def failure_row(self, node: int, n: int) -> np.ndarray:
        """Dense failure counts from node toward every candidate id in [0, n)."""
        out = np.zeros(n, dtype=np.int64)
        for peer, count in self._counts.get(node, {}).items():
            if peer < n:
                out[peer] = count
        return out

    def total_failures(self) -> int:
        return sum(sum(row.values()) for row in self._counts.values())

    def snapshot(self) -> dict[int, dict[int, int]]:
        """Plain nested-dict copy, for reporting."""
        return {node: dict(row) for node, row in self._counts.items()}

    def __len__(self) -> int:
        return sum(len(row) for row in self._counts.values())
