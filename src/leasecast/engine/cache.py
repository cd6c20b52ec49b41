# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
In-process result cache keyed by input fingerprint.

Entries are immutable CalculationEngineOutput objects, so a hit can be shared
between callers without copying. Eviction is least-recently-used once the
capacity is reached. `get_or_compute` serializes concurrent computations of
the same fingerprint so identical requests run the engine once.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Set

from .results import CalculationEngineOutput

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    max_entries: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


@dataclass
class _KeyLock:
    """Per-fingerprint computation lock with the number of callers using it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    waiters: int = 0


class CalculationCache:
    """Thread-safe LRU of completed runs."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, CalculationEngineOutput]" = OrderedDict()
        self._by_proposal: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()
        self._key_locks: Dict[str, _KeyLock] = {}
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, fingerprint: str) -> Optional[CalculationEngineOutput]:
        with self._lock:
            output = self._entries.get(fingerprint)
            if output is None:
                self._misses += 1
                return None
            self._entries.move_to_end(fingerprint)
            self._hits += 1
            return output

    def set(
        self,
        fingerprint: str,
        output: CalculationEngineOutput,
        proposal_id: Optional[str] = None,
    ) -> None:
        with self._lock:
            self._entries[fingerprint] = output
            self._entries.move_to_end(fingerprint)
            if proposal_id is not None:
                self._by_proposal.setdefault(proposal_id, set()).add(fingerprint)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._forget(evicted)
                logger.debug(f"Evicted cached run {evicted}")

    def invalidate(self, proposal_id: str) -> int:
        """Drop every entry recorded for a proposal; returns the number removed."""
        with self._lock:
            fingerprints = self._by_proposal.pop(proposal_id, set())
            removed = 0
            for fingerprint in fingerprints:
                if self._entries.pop(fingerprint, None) is not None:
                    removed += 1
        if removed:
            logger.info(f"Invalidated {removed} cached runs for proposal {proposal_id}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._by_proposal.clear()
            self._hits = 0
            self._misses = 0

    def get_or_compute(
        self,
        fingerprint: str,
        compute: Callable[[], CalculationEngineOutput],
        proposal_id: Optional[str] = None,
    ) -> CalculationEngineOutput:
        """
        Return the cached run or compute, store and return it.

        Concurrent callers with the same fingerprint wait on one computation.
        Exceptions from `compute` propagate and nothing is stored.
        """
        cached = self.get(fingerprint)
        if cached is not None:
            return cached

        with self._lock:
            key_lock = self._key_locks.get(fingerprint)
            if key_lock is None:
                key_lock = self._key_locks[fingerprint] = _KeyLock()
            key_lock.waiters += 1
        try:
            with key_lock.lock:
                with self._lock:
                    output = self._entries.get(fingerprint)
                    if output is not None:
                        self._entries.move_to_end(fingerprint)
                        self._hits += 1
                        return output
                output = compute()
                self.set(fingerprint, output, proposal_id=proposal_id)
                return output
        finally:
            with self._lock:
                key_lock.waiters -= 1
                # Only the last holder or waiter removes the lock
                if key_lock.waiters == 0:
                    self._key_locks.pop(fingerprint, None)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                max_entries=self.max_entries,
            )

    def _forget(self, fingerprint: str) -> None:
        for proposal_id in list(self._by_proposal):
            fingerprints = self._by_proposal[proposal_id]
            fingerprints.discard(fingerprint)
            if not fingerprints:
                del self._by_proposal[proposal_id]
