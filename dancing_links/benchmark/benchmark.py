"""Benchmarking framework for the reversible list structures."""

from __future__ import annotations
import json
import os
import time
import tracemalloc
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from ..core.items import Items
from ..core.link import ListHeader


@dataclass
class BenchmarkConfig:
    """Workload parameters for a benchmark run."""
    sizes: List[int] = field(default_factory=lambda: [10, 100, 1000])
    repeats: int = 5
    structures: List[str] = field(default_factory=lambda: ["items", "linked"])
    seed: Optional[int] = 42
    timeout_seconds: float = 60.0

    def __post_init__(self):
        if not self.sizes or any(size < 0 for size in self.sizes):
            raise ValueError(f"Sizes must be non-negative, got {self.sizes}")
        if self.repeats < 1:
            raise ValueError(f"Repeats must be at least 1, got {self.repeats}")
        unknown = [s for s in self.structures if s not in Benchmark.STRUCTURES]
        if unknown or not self.structures:
            raise ValueError(
                f"Structures must be among {sorted(Benchmark.STRUCTURES)}, got {self.structures}"
            )

    @classmethod
    def from_file(cls, path: str, **overrides: Any) -> BenchmarkConfig:
        """
        Load a configuration from a JSON file.

        Args:
            path: JSON object whose keys are BenchmarkConfig fields.
            overrides: Values taking precedence over the file (None is ignored).
        """
        with open(path, "r") as f:
            data = json.load(f)

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown benchmark settings in {path}: {sorted(unknown)}")

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BenchmarkResult:
    """Results from a single descent/backtrack cycle."""
    structure: str
    size: int
    repeat: int
    restored: bool
    time_seconds: float
    memory_bytes: int
    operations: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def ops_per_second(self) -> float:
        if self.time_seconds <= 0:
            return 0.0
        return self.operations / self.time_seconds

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "structure": self.structure,
            "size": self.size,
            "repeat": self.repeat,
            "restored": self.restored,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "operations": self.operations,
            "ops_per_second": self.ops_per_second,
            **self.extra
        }


def _cycle_items(size: int, order: np.ndarray) -> bool:
    """Remove every item in ``order``, reinsert in reverse, compare."""
    ring = Items(size)
    before = ring.snapshot()

    for index in order:
        ring.item(int(index)).remove()
    if len(ring) != 0:
        return False
    for index in order[::-1]:
        ring.item(int(index)).reinsert()

    return before.tolist() == ring.snapshot().tolist() and len(ring) == size


def _cycle_linked(size: int, order: np.ndarray) -> bool:
    """Same workload as ``_cycle_items`` on a header-counted linked list."""
    header = ListHeader()
    nodes = [header.prepend(value) for value in range(1, size + 1)]
    before = [(node.previous, node.next) for node in nodes]

    for index in order:
        nodes[index - 1].remove()
    if len(header) != 0 or not header.is_empty():
        return False
    for index in order[::-1]:
        nodes[index - 1].reinsert()

    after = [(node.previous, node.next) for node in nodes]
    return (
        len(header) == size
        and header.values() == list(range(1, size + 1))
        and all(a[0] is b[0] and a[1] is b[1] for a, b in zip(before, after))
    )


class Benchmark:
    """
    Benchmark comparing the array-indexed item ring with the reference-linked list.

    Each run removes all items in a random order and reinserts them in reverse,
    timing the cycle and checking that the structure is restored exactly.
    """

    STRUCTURES: Dict[str, Callable[[int, np.ndarray], bool]] = {
        "items": _cycle_items,
        "linked": _cycle_linked,
    }

    def __init__(self, config: Optional[BenchmarkConfig] = None, **kwargs: Any):
        """
        Initialize the benchmark.

        Args:
            config: Workload parameters. Keyword arguments build one when omitted.
            kwargs: BenchmarkConfig fields (sizes, repeats, structures, seed,
                timeout_seconds).
        """
        self.config = config if config is not None else BenchmarkConfig(**kwargs)
        self.results: List[BenchmarkResult] = []

    def _removal_orders(self) -> Dict[int, List[np.ndarray]]:
        rng = np.random.default_rng(self.config.seed)
        return {
            size: [rng.permutation(np.arange(1, size + 1)) for _ in range(self.config.repeats)]
            for size in self.config.sizes
        }

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        orders = self._removal_orders()
        self.results = []

        total_runs = (
            len(self.config.structures) *
            len(self.config.sizes) *
            self.config.repeats
        )
        pbar = tqdm(total=total_runs, desc="Benchmarking", disable=not show_progress)

        for structure in self.config.structures:
            for size in self.config.sizes:
                for repeat, order in enumerate(orders[size]):
                    self.results.append(self._run_single(structure, size, repeat, order))
                    pbar.update(1)

        pbar.close()
        return self.results

    def _measure(self, structure: str, size: int, order: np.ndarray) -> Dict[str, Any]:
        cycle = self.STRUCTURES[structure]

        tracemalloc.start()
        start_time = time.perf_counter()
        try:
            restored = cycle(size, order)
        finally:
            elapsed = time.perf_counter() - start_time
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()

        return {"restored": restored, "time_seconds": elapsed, "memory_bytes": peak}

    def _run_single(
        self,
        structure: str,
        size: int,
        repeat: int,
        order: np.ndarray
    ) -> BenchmarkResult:
        """Run one descent/backtrack cycle, enforcing the timeout."""
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(self._measure, structure, size, order)
            try:
                measured = future.result(timeout=self.config.timeout_seconds)
                return BenchmarkResult(
                    structure=structure,
                    size=size,
                    repeat=repeat,
                    operations=2 * size,
                    **measured
                )
            except TimeoutError:
                return BenchmarkResult(
                    structure=structure,
                    size=size,
                    repeat=repeat,
                    restored=False,
                    time_seconds=self.config.timeout_seconds,
                    memory_bytes=0,
                    operations=0,
                    extra={"error": "Timeout"}
                )
            except Exception as e:
                return BenchmarkResult(
                    structure=structure,
                    size=size,
                    repeat=repeat,
                    restored=False,
                    time_seconds=0.0,
                    memory_bytes=0,
                    operations=0,
                    extra={"error": str(e)}
                )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "config": self.config.to_dict(),
            "total_runs": len(self.results),
            "results_by_structure": {},
            "results_by_size": {}
        }

        for structure in self.config.structures:
            runs = [r for r in self.results if r.structure == structure]
            if runs:
                times = [r.time_seconds for r in runs]
                memory = [r.memory_bytes for r in runs]
                summary["results_by_structure"][structure] = {
                    "restored_rate": sum(r.restored for r in runs) / len(runs) * 100,
                    "avg_time_seconds": float(np.mean(times)),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": float(np.mean(memory)) / (1024 * 1024),
                    "avg_ops_per_second": float(np.mean([r.ops_per_second for r in runs])),
                    "total_restored": sum(r.restored for r in runs),
                    "total_runs": len(runs)
                }

        for size in self.config.sizes:
            size_runs = [r for r in self.results if r.size == size]
            if size_runs:
                summary["results_by_size"][str(size)] = {}
                for structure in self.config.structures:
                    runs = [r for r in size_runs if r.structure == structure]
                    if runs:
                        summary["results_by_size"][str(size)][structure] = {
                            "avg_time_seconds": float(np.mean([r.time_seconds for r in runs])),
                            "restored": sum(r.restored for r in runs),
                            "runs": len(runs)
                        }

        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """Save raw results and the summary as JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        print(f"Results saved to {output_dir}")
        return [results_file, summary_file]

    def to_dataframe(self):
        """Convert results to pandas DataFrame (requires pandas)."""
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("pandas is required for DataFrame conversion")
        return pd.DataFrame([r.to_dict() for r in self.results])
