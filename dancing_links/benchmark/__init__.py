"""Benchmark module for comparing the reversible list structures."""

from .benchmark import Benchmark, BenchmarkConfig, BenchmarkResult
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkConfig", "BenchmarkResult", "Visualizer"]
