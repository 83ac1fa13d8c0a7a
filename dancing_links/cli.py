"""Command-line interface for the dancing links structures."""

import argparse
import sys
from typing import List, Optional

from .benchmark import Benchmark, BenchmarkConfig
from .benchmark.visualizer import Visualizer
from .core.errors import DancingLinksError
from .core.items import Items


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Reversible linked lists for dancing links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Remove items 1 and 2 from a ring of 7, then reinsert them
  python -m dancing_links.cli demo --size 7 --remove 1 2

  # Save a diagram of the ring after the removals
  python -m dancing_links.cli demo --size 12 --remove 3 4 9 --plot ring.png

  # Benchmark both list structures
  python -m dancing_links.cli benchmark --sizes 10 100 1000 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo", help="Remove and reinsert items, printing the ring after each step"
    )
    demo_parser.add_argument(
        "--size", "-n", type=int, default=7,
        help="Number of items in the ring (default: 7)"
    )
    demo_parser.add_argument(
        "--remove", "-r", type=int, nargs="+", default=[1, 2],
        help="Item indices to remove, in order (default: 1 2)"
    )
    demo_parser.add_argument(
        "--plot", "-p", type=str, default=None,
        help="Save a diagram of the ring after the removals to this file"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark the list structures")
    bench_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with benchmark settings (flags override it)"
    )
    bench_parser.add_argument(
        "--sizes", "-n", type=int, nargs="+", default=None,
        help="Ring sizes to test (default: 10 100 1000)"
    )
    bench_parser.add_argument(
        "--repeats", "-r", type=int, default=None,
        help="Cycles per size and structure (default: 5)"
    )
    bench_parser.add_argument(
        "--structures", choices=sorted(Benchmark.STRUCTURES), nargs="+", default=None,
        help="Structures to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for removal orders (default: 42)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def cmd_demo(args):
    """Handle the demo command."""
    try:
        ring = Items(args.size)
        print(f"Initial ring ({len(ring)} items): {ring}")

        for index in args.remove:
            ring.item(index).remove()
            print(f"Remove {index:>3} -> {len(ring)} items: {ring}")

        if args.plot:
            Visualizer.plot_ring(ring, args.plot)
            print(f"Ring diagram saved to {args.plot}")

        for index in reversed(args.remove):
            ring.item(index).reinsert()
            print(f"Reinsert {index:>3} -> {len(ring)} items: {ring}")
    except (DancingLinksError, IndexError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_benchmark(args):
    """Handle the benchmark command."""
    overrides = {
        "sizes": args.sizes,
        "repeats": args.repeats,
        "structures": args.structures,
        "seed": args.seed,
    }
    try:
        if args.config:
            config = BenchmarkConfig.from_file(args.config, **overrides)
        else:
            config = BenchmarkConfig(**{k: v for k, v in overrides.items() if v is not None})
    except (OSError, ValueError) as e:
        print(f"Error loading benchmark settings: {e}")
        sys.exit(1)

    print("=" * 60)
    print("DANCING LINKS BENCHMARK")
    print("=" * 60)
    print(f"Structures: {', '.join(config.structures)}")
    print(f"Sizes: {config.sizes}")
    print(f"Repeats: {config.repeats}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(config)
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for structure, stats in summary["results_by_structure"].items():
        print(f"\n{structure}:")
        print(f"  Restored: {stats['restored_rate']:.1f}% ({stats['total_restored']}/{stats['total_runs']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.6f}s")
        print(f"  Avg Throughput: {stats['avg_ops_per_second']:,.0f} ops/s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.3f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        charts.append(visualizer.generate_summary_table())
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
