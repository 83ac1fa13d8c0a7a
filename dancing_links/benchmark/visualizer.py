"""Visualization utilities for benchmark results and item rings."""

from __future__ import annotations
import os
from typing import List, Optional

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..core.items import Items, SENTINEL


class Visualizer:
    """
    Chart generator for benchmark results.

    Creates charts comparing the list structures across sizes.
    """

    # Color palette for structures
    COLORS = {
        "items": "#9b59b6",   # Purple
        "linked": "#3498db",  # Blue
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _structures(self) -> List[str]:
        return sorted(set(r.structure for r in self.results))

    def _sizes(self) -> List[int]:
        return sorted(set(r.size for r in self.results))

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_by_size(),
            self.plot_ops_per_second(),
            self.plot_memory_comparison(),
        ]

    def plot_time_by_size(self) -> str:
        """Line chart of mean cycle time against ring size, one line per structure."""
        fig, ax = plt.subplots(figsize=(10, 6))

        for structure in self._structures():
            sizes, means, stds = [], [], []
            for size in self._sizes():
                times = [
                    r.time_seconds for r in self.results
                    if r.structure == structure and r.size == size
                ]
                if times:
                    sizes.append(size)
                    means.append(np.mean(times))
                    stds.append(np.std(times))

            color = self.COLORS.get(structure, "#95a5a6")
            ax.errorbar(sizes, means, yerr=stds, label=structure, color=color,
                        marker='o', capsize=4, linewidth=1.5)

        ax.set_xlabel('Items (n)', fontsize=12)
        ax.set_ylabel('Remove + Reinsert Cycle (seconds)', fontsize=12)
        ax.set_title('Cycle Time by Ring Size', fontsize=14, fontweight='bold')
        if len(self._sizes()) > 1 and min(self._sizes()) > 0:
            ax.set_xscale('log')
        ax.legend(title='Structure')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "time_by_size.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_ops_per_second(self) -> str:
        """Grouped bar chart of throughput by size and structure."""
        fig, ax = plt.subplots(figsize=(12, 6))

        structures = self._structures()
        sizes = self._sizes()

        x = np.arange(len(sizes))
        width = 0.8 / max(len(structures), 1)

        for i, structure in enumerate(structures):
            rates = []
            for size in sizes:
                runs = [
                    r.ops_per_second for r in self.results
                    if r.structure == structure and r.size == size
                ]
                rates.append(np.mean(runs) if runs else 0)

            offset = (i - len(structures) / 2 + 0.5) * width
            ax.bar(x + offset, rates, width,
                   label=structure,
                   color=self.COLORS.get(structure, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Items (n)', fontsize=12)
        ax.set_ylabel('Operations per Second', fontsize=12)
        ax.set_title('Throughput by Ring Size and Structure', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([str(s) for s in sizes])
        ax.legend(title='Structure')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "ops_per_second.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_memory_comparison(self) -> str:
        """Bar chart of mean peak memory per structure."""
        fig, ax = plt.subplots(figsize=(10, 6))

        structures = self._structures()
        avg_memory = []
        colors = []

        for structure in structures:
            memory = [r.memory_bytes / 1024 for r in self.results if r.structure == structure]
            avg_memory.append(np.mean(memory))
            colors.append(self.COLORS.get(structure, "#95a5a6"))

        bars = ax.bar(structures, avg_memory, color=colors, edgecolor='black', linewidth=0.5)

        for bar, mem in zip(bars, avg_memory):
            height = bar.get_height()
            ax.annotate(f'{mem:.1f} KB',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Structure', fontsize=12)
        ax.set_ylabel('Average Peak Memory (KB)', fontsize=12)
        ax.set_title('Memory Usage by Structure', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "memory_comparison.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def generate_summary_table(self) -> str:
        """Write a markdown table of per-structure, per-size averages."""
        lines = [
            "# Benchmark Summary",
            "",
            "| Structure | n | Runs | Restored | Avg Time (s) | Ops/s | Peak Memory (KB) |",
            "|-----------|---|------|----------|--------------|-------|------------------|",
        ]

        for structure in self._structures():
            for size in self._sizes():
                runs = [
                    r for r in self.results
                    if r.structure == structure and r.size == size
                ]
                if not runs:
                    continue
                restored = sum(1 for r in runs if r.restored)
                lines.append(
                    f"| {structure} | {size} | {len(runs)} | {restored}/{len(runs)} "
                    f"| {np.mean([r.time_seconds for r in runs]):.6f} "
                    f"| {np.mean([r.ops_per_second for r in runs]):,.0f} "
                    f"| {np.mean([r.memory_bytes for r in runs]) / 1024:.1f} |"
                )

        path = os.path.join(self.output_dir, "summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines) + "\n")

        return path

    @staticmethod
    def plot_ring(items: Items, path: str, title: Optional[str] = None) -> str:
        """
        Draw an item ring on a circle.

        Live items are joined along their ``next`` links; removed items are
        greyed out with a dashed arrow to the neighbours they still record.

        Args:
            items: The ring to draw.
            path: Output image file.
            title: Optional chart title (defaults to the live order).
        """
        slots = items.capacity + 1
        angles = np.pi / 2 - 2 * np.pi * np.arange(slots) / slots
        xs, ys = np.cos(angles), np.sin(angles)
        live = set(items.order())

        fig, ax = plt.subplots(figsize=(6, 6))

        current = SENTINEL
        for _ in range(len(live) + 1):
            following = items[current].next
            ax.annotate("", xy=(xs[following], ys[following]), xytext=(xs[current], ys[current]),
                        arrowprops=dict(arrowstyle="->", color="#2c3e50", lw=1.5,
                                        shrinkA=14, shrinkB=14))
            current = following

        for index in items.removed:
            node = items[index]
            for neighbour in (node.previous, node.next):
                ax.annotate("", xy=(xs[neighbour], ys[neighbour]), xytext=(xs[index], ys[index]),
                            arrowprops=dict(arrowstyle="->", color="#95a5a6", lw=1,
                                            linestyle="--", shrinkA=14, shrinkB=14))

        for index in range(slots):
            if index == SENTINEL:
                color = "#f39c12"
            elif index in live:
                color = "#9b59b6"
            else:
                color = "#ecf0f1"
            ax.scatter(xs[index], ys[index], s=600, color=color, edgecolors='black', zorder=3)
            ax.text(xs[index], ys[index], "H" if index == SENTINEL else str(index),
                    ha='center', va='center', fontsize=10, zorder=4)

        ax.set_title(title or f"Live items: {items}", fontsize=12, fontweight='bold')
        ax.set_xlim(-1.3, 1.3)
        ax.set_ylim(-1.3, 1.3)
        ax.set_aspect('equal')
        ax.axis('off')

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        plt.tight_layout()
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path
