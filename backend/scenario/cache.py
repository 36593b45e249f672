"""
Bounded LRU cache of compiled scenarios keyed by scenario string.
Owned by the request layer; compilation is deterministic, so a cache miss only costs a recompute.
Thread-safe: concurrent misses for the same key may both compile, first writer wins.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Dict, Optional

from .compiler import compile_scenario, normalize_scenario
from .model import CompiledScenario

DEFAULT_MAXSIZE = 256


class ScenarioCache:
    """LRU mapping scenario -> CompiledScenario. maxsize 0 disables storage (always recompiles)."""

    def __init__(
        self,
        maxsize: int = DEFAULT_MAXSIZE,
        compile_fn: Callable[[str], CompiledScenario] = compile_scenario,
        on_compile: Optional[Callable[[CompiledScenario], None]] = None,
        on_hit: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.maxsize = max(0, int(maxsize))
        self._compile = compile_fn
        self._on_compile = on_compile
        self._on_hit = on_hit
        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, CompiledScenario]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get_or_compile(self, scenario_path: Optional[str]) -> CompiledScenario:
        key = normalize_scenario(scenario_path)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self._hits += 1
        if cached is not None:
            if self._on_hit is not None:
                self._on_hit(key)
            return cached

        # Compile outside the lock; recomputation is side-effect free.
        compiled = self._compile(key)
        with self._lock:
            self._misses += 1
            if self.maxsize > 0:
                existing = self._entries.get(key)
                if existing is not None:
                    compiled = existing
                else:
                    self._entries[key] = compiled
                    while len(self._entries) > self.maxsize:
                        self._entries.popitem(last=False)
        if self._on_compile is not None:
            self._on_compile(compiled)
        return compiled

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, scenario_path: object) -> bool:
        if not isinstance(scenario_path, str):
            return False
        with self._lock:
            return normalize_scenario(scenario_path) in self._entries

    def clear(self) -> None:
        """Drop all entries and reset counters (for tests)."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "maxsize": self.maxsize,
                "hits": self._hits,
                "misses": self._misses,
            }
