"""Lightweight benchmarks for kernel operations."""

import itertools
import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Benchmark:
    """A single timed run of an operation."""

    group: str
    name: str
    start: float
    stop: float | None = None

    @property
    def duration(self) -> float:
        """Elapsed seconds, or 0.0 while still running."""
        return self.stop - self.start if self.stop is not None else 0.0


@dataclass
class Profiler:
    """Collects benchmarks grouped by (group, name)."""

    benchmarks: dict[int, Benchmark] = field(default_factory=dict)
    _ids: itertools.count = field(default_factory=itertools.count, repr=False)

    def start(self, group: str, name: str) -> int:
        """Start a benchmark and return its token."""
        token = next(self._ids)
        self.benchmarks[token] = Benchmark(group, name, time.perf_counter())
        return token

    def stop(self, token: int) -> None:
        """Stop a running benchmark."""
        self.benchmarks[token].stop = time.perf_counter()

    def stats(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Summarize finished benchmarks as group -> name -> figures."""
        durations: dict[tuple[str, str], list[float]] = {}
        for b in self.benchmarks.values():
            if b.stop is not None:
                durations.setdefault((b.group, b.name), []).append(b.duration)

        stats: dict[str, dict[str, dict[str, Any]]] = {}
        for (group, name), values in sorted(durations.items()):
            stats.setdefault(group, {})[name] = {
                "count": len(values),
                "total": sum(values),
                "min": min(values),
                "max": max(values),
                "average": sum(values) / len(values),
            }
        return stats

    def write_report(self, path: str | Path) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {"timestamp": time.time(), "benchmarks": len(self.benchmarks)},
            "stats": self.stats(),
        }
        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")
